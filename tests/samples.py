class DummyResponse:
    def __init__(self, text='', status_code=200, reason='OK', headers=None):
        self.text = text
        self.content = text.encode('utf-8')
        self.status_code = status_code
        self.reason = reason
        self.headers = headers or {'content-type': 'application/xml'}


def tns_page(numbers, next_link=None):
    items = ''.join(
        '<SipPeerTelephoneNumber><FullNumber>{}</FullNumber></SipPeerTelephoneNumber>'.format(n)
        for n in numbers)
    links = '<first>Link=&lt;https://dashboard.bandwidth.com/api/accounts/9900000/sites/2297/sippeers/500709/tns?page=1&amp;size=2&gt;;rel="first";</first>'
    if next_link:
        links += '<next>Link=&lt;{}&gt;;rel="next";</next>'.format(next_link.replace('&', '&amp;'))
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<SipPeerTelephoneNumbersResponse>'
        '<SipPeerTelephoneNumbersCount>{count}</SipPeerTelephoneNumbersCount>'
        '<Links>{links}</Links>'
        '<SipPeerTelephoneNumbers>{items}</SipPeerTelephoneNumbers>'
        '</SipPeerTelephoneNumbersResponse>').format(count=len(numbers), links=links, items=items)


def order_response(status='RECEIVED', order_id='ord-1'):
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<OrderResponse><Order>'
        '<id>{id}</id><SiteId>2297</SiteId><PeerId>500709</PeerId>'
        '<CitySearchAndOrderType><City>RALEIGH</City><State>NC</State><Quantity>2</Quantity></CitySearchAndOrderType>'
        '</Order><OrderStatus>{status}</OrderStatus></OrderResponse>').format(id=order_id, status=status)


def check_order_response(status='COMPLETE', numbers=(), summary='2 numbers ordered in (919)', errors=''):
    completed = ''.join(
        '<TelephoneNumber><FullNumber>{}</FullNumber></TelephoneNumber>'.format(n) for n in numbers)
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<OrderResponse>'
        '<CompletedQuantity>{qty}</CompletedQuantity>'
        '<Order><id>ord-1</id><PeerId>500709</PeerId><SiteId>2297</SiteId></Order>'
        '<OrderStatus>{status}</OrderStatus>'
        '<CompletedNumbers>{completed}</CompletedNumbers>'
        '<Summary>{summary}</Summary>'
        '{errors}'
        '</OrderResponse>').format(qty=len(numbers), status=status, completed=completed,
                                   summary=summary, errors=errors)


def disconnect_response(status='RECEIVED', numbers=()):
    disconnected = ''.join('<TelephoneNumber>{}</TelephoneNumber>'.format(n) for n in numbers)
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<DisconnectTelephoneNumberOrderResponse>'
        '<orderRequest><id>dis-1</id><CustomerOrderId>my-order</CustomerOrderId></orderRequest>'
        '<DisconnectedTelephoneNumberList>{numbers}</DisconnectedTelephoneNumberList>'
        '<OrderStatus>{status}</OrderStatus>'
        '</DisconnectTelephoneNumberOrderResponse>').format(numbers=disconnected, status=status)
