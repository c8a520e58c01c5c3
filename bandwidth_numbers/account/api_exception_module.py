class BandwidthAccountAPIException(Exception):
    """
    Error returned by the account (dashboard) API, or an order that
    ended in a status other than COMPLETE.

    :type status: int or str
    :param status: http status code, or the order status string
    :type message: str
    :param message: error description
    :type code: str
    :param code: Bandwidth error code when the server returned one
    """

    def __init__(self, status, message, **kwargs):
        super(BandwidthAccountAPIException, self).__init__(status, message)
        self.status = status
        self.message = message
        self.code = kwargs.get('code')

    def __str__(self):
        if self.code is not None:
            return 'Error {} ({}): {}'.format(self.status, self.code, self.message)
        return 'Error {}: {}'.format(self.status, self.message)


class BandwidthOrderPendingException(Exception):
    """
    Raised when an order is still being processed after all poll attempts.
    The order may still complete, check it later with Client.check_order.
    """

    def __init__(self, order_id):
        super(BandwidthOrderPendingException, self).__init__(order_id)
        self.order_id = order_id

    def __str__(self):
        return 'Order {} is still pending'.format(self.order_id)
