bw_error_codes = {
    400: 'Bad request, check request parameters',
    401: 'Invalid credentials',
    403: 'Account is not allowed to perform this operation',
    404: 'Resource not found',
    405: 'Method not allowed',
    409: 'Conflict with the current state of the resource',
    429: 'Too many requests, slow down',
    500: 'Bandwidth internal server error',
    502: 'Bad gateway',
    503: 'Bandwidth service unavailable',
    504: 'Gateway timeout',
}

# account client imports bw_error_codes from here
from bandwidth_numbers.version import __version__
from bandwidth_numbers.account import Client
from bandwidth_numbers.account import BandwidthAccountAPIException
from bandwidth_numbers.account import BandwidthOrderPendingException


def client(login, password, account_id, site_id, **other_options):
    """
    Create a number provisioning client.

    Example::

        api = bandwidth_numbers.client('LOGIN', 'PASSWORD', 'ACCOUNT_ID', 'SITE_ID', sippeer_id='PEER_ID')
    """
    return Client(login, password, account_id, site_id, **other_options)
