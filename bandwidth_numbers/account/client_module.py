import logging
import time
from xml.parsers.expat import ExpatError

import dicttoxml
import requests
import xmltodict
from requests.auth import HTTPBasicAuth

from bandwidth_numbers import bw_error_codes
from bandwidth_numbers.lazy_enumerable import get_lazy_enumerator
from bandwidth_numbers.lazy_enumerable import get_page_enumerator
from bandwidth_numbers.version import __version__ as version

from .api_exception_module import BandwidthAccountAPIException
from .api_exception_module import BandwidthOrderPendingException
from .response_module import CheckOrderResponse
from .response_module import DisconnectOrderResponse
from .response_module import OrderResponse
from .response_module import RequestContext
from .response_module import SipPeerNumbersPage
from .response_module import UnifiedResponse

DEFAULT_API_ENDPOINT = 'https://dashboard.bandwidth.com/api'
DEFAULT_PAGE_SIZE = 100
MAX_POLL_TRIES = 8  # number of times to check for an order
POLL_INTERVAL = 1.0  # seconds before the first order check
POLL_BACKOFF = 1.5
FINAL_ORDER_STATUSES = ('COMPLETE', 'FAILED', 'PARTIAL', 'BACKORDERED')


class Client:

    """
    Number provisioning (dashboard) API client
    """

    def __init__(self, login=None, password=None, account_id=None, site_id=None,
                 sippeer_id=None, **other_options):
        """
        Initialize the client.
        :type login: str
        :param login: dashboard login
        :type password: str
        :param password: dashboard password
        :type account_id: str
        :param account_id: Bandwidth account id
        :type site_id: str
        :param site_id: site (sub-account) id numbers are provisioned under
        :type sippeer_id: str
        :param sippeer_id: SIP peer (location) id, used for orders and listings
        :type page_size: int
        :param page_size: size of page to request numbers with (optional, default value is 100)
        :type api_endpoint: str
        :param api_endpoint: api endpoint (optional, default value is https://dashboard.bandwidth.com/api)

        :rtype: bandwidth_numbers.account.Client
        :returns: account client

        Init the client::

            api = bandwidth_numbers.account.Client('LOGIN', 'PASSWORD', 'ACCOUNT_ID', 'SITE_ID', sippeer_id='PEER_ID')
            # or
            api = bandwidth_numbers.client('LOGIN', 'PASSWORD', 'ACCOUNT_ID', 'SITE_ID', sippeer_id='PEER_ID')
        """
        if not all((login, password, account_id, site_id)):
            raise ValueError('Arguments login, password, account_id and site_id are required. '
                             'Use bandwidth_numbers.client("LOGIN", "PASSWORD", "ACCOUNT-ID", "SITE-ID")')
        self._account_id = account_id
        self._site_id = site_id
        self._sippeer_id = sippeer_id
        self._base_url = other_options.get('api_endpoint', DEFAULT_API_ENDPOINT).rstrip('/')
        self._page_size = int(other_options.get('page_size', DEFAULT_PAGE_SIZE))
        self._poll_interval = other_options.get('poll_interval', POLL_INTERVAL)
        self._poll_backoff = other_options.get('poll_backoff', POLL_BACKOFF)
        self._max_poll_tries = other_options.get('max_poll_tries', MAX_POLL_TRIES)

        self.auth = HTTPBasicAuth(login, password)
        self._headers = {
            'Content-Type': 'application/xml',
            'User-Agent': 'PythonSDK_' + version,
        }

        self.DEBUG = other_options.get('DEBUG', False)

    @property
    def account_id(self):
        return self._account_id

    @property
    def site_id(self):
        return self._site_id

    @property
    def sippeer_id(self):
        return self._sippeer_id

    @property
    def base_url(self):
        return self._base_url

    @property
    def page_size(self):
        return self._page_size

    @property
    def headers(self):
        return dict(self._headers)

    @property
    def context(self):
        """
           request context handed to every response object
        """
        return RequestContext(self._account_id, self._site_id, self._sippeer_id,
                              self.headers, self._base_url, self._page_size)

    def get_error_details(self, resp):
        """
           parses response in case of error and
           returns error code and decription
        """
        _error_resp = resp.get('ErrorList') or {}
        error_resp = _error_resp.get('Error') or {}
        if isinstance(error_resp, list):
            error_resp = error_resp[0]
        if not error_resp:
            # some endpoints report errors in ResponseStatus instead
            status = resp.get('ResponseStatus') or {}
            return status.get('ErrorCode', 'NA'), status.get('Description', 'NA')
        return error_resp.get('Code', 'NA'), error_resp.get('Description', 'NA')

    def _request(self, method, url, *args, **kwargs):
        if url.startswith('/'):
            # relative url
            url = '{}{}'.format(self._base_url, url)

        if self.DEBUG:
            logging.info('{} to {}, args: {}, kwargs: {}'.
                         format(method, url, args, kwargs))
        return requests.request(method, url, auth=self.auth,
                                headers=self.headers, *args, **kwargs)

    def _check_response(self, response):
        if response.status_code >= 400:
            content_type = response.headers.get('content-type')
            error_msg = response.reason or bw_error_codes.get(response.status_code, '')
            if self.DEBUG:
                logging.info('Error with request, error code: {}'.
                             format(response.status_code))
            if content_type and 'xml' in content_type and response.content:
                try:
                    data = xmltodict.parse(response.content)
                except ExpatError:
                    error_desc = response.content.decode('utf-8')
                    if self.DEBUG:
                        logging.info('Error parsing XML response, Error Desc {}'.
                                     format(error_desc))
                    raise BandwidthAccountAPIException(
                        response.status_code, error_desc or error_msg)

                if self.DEBUG:
                    logging.info('XML type - Error: {}'.format(data))
                # error element sits under a response specific root
                root = next(iter(data.values()), None)
                if not isinstance(root, dict):
                    root = {}
                error_code, error_desc = self.get_error_details(root)
                if error_desc == 'NA':
                    raise BandwidthAccountAPIException(response.status_code, error_msg)
                raise BandwidthAccountAPIException(
                    response.status_code, error_desc, code=error_code)
            else:
                # if non-descriptive error message isnt available
                # build more details and pass to Exception API
                msg = error_msg
                if not msg:
                    msg = response.content.decode('utf-8')
                if self.DEBUG:
                    logging.info('Unknown type - Error: {}'.format(msg))
                raise BandwidthAccountAPIException(response.status_code, msg)

    def _make_request(self, method, url, *args, **kwargs):
        response = self._request(method, url, *args, **kwargs)
        self._check_response(response)
        myid = None
        location = response.headers.get('location')
        if location is not None:
            myid = location.split('/')[-1]

        if self.DEBUG:
            logging.info('Done with request, Response: {}, Body: {}'.format(response, response.text))
        return (response.text, response, myid)

    """
    Phone numbers API
    """

    def _get_sippeer_id(self, sippeer_id):
        sippeer_id = sippeer_id or self._sippeer_id
        if not sippeer_id:
            raise ValueError('Argument sippeer_id is required')
        return sippeer_id

    def get_sip_peer_numbers(self, sippeer_id=None):
        """
        Get the first page of telephone numbers of a SIP peer (location)

        :param str sippeer_id: SIP peer id (default is the client's sippeer_id)

        :rtype: bandwidth_numbers.account.response_module.SipPeerNumbersPage
        :returns: first page of numbers

        Example::

            page = api.get_sip_peer_numbers('500709')
            print(page.numbers)
            ## ['9195551234', '9195551235']
            print(page.next_link)
            ## https://dashboard.bandwidth.com/api/accounts/9900000/sites/2297/sippeers/500709/tns?page=2&size=100
        """
        sippeer_id = self._get_sippeer_id(sippeer_id)
        url = '/accounts/{}/sites/{}/sippeers/{}/tns'.format(
            self._account_id, self._site_id, sippeer_id)
        params = {'page': 1, 'size': self._page_size}
        text, response, _ = self._make_request('get', url, params=params)
        return SipPeerNumbersPage(text, self.context._replace(sippeer_id=sippeer_id))

    def iter_sip_peer_number_pages(self, sippeer_id=None):
        """
        Get all pages of telephone numbers of a SIP peer

        :param str sippeer_id: SIP peer id (default is the client's sippeer_id)

        :rtype: types.GeneratorType
        :returns: pages, next page is requested only when needed

        Example::

            for page in api.iter_sip_peer_number_pages():
                print(page.numbers)
        """
        sippeer_id = self._get_sippeer_id(sippeer_id)
        return get_page_enumerator(self, lambda: self.get_sip_peer_numbers(sippeer_id))

    def list_sip_peer_numbers(self, sippeer_id=None):
        """
        Get telephone numbers of a SIP peer

        :param str sippeer_id: SIP peer id (default is the client's sippeer_id)

        :rtype: types.GeneratorType
        :returns: list of numbers across all pages

        Example::

            numbers = api.list_sip_peer_numbers()
            print(next(numbers))
            ## 9195551234
        """
        sippeer_id = self._get_sippeer_id(sippeer_id)
        return get_lazy_enumerator(self, lambda: self.get_sip_peer_numbers(sippeer_id))

    def get_sip_peer_numbers_all(self, sippeer_id=None):
        """
        Get all telephone numbers of a SIP peer, fetching every page

        :rtype: list
        :returns: list of numbers
        """
        return list(self.list_sip_peer_numbers(sippeer_id))

    def search_and_order_numbers(self,
                                 area_code=None,
                                 city=None,
                                 state=None,
                                 quantity=1,
                                 name=None):
        """
        Searches and orders local numbers, by area code or by city and state.

        :param str area_code: A 3-digit telephone area code
        :param str city: A city name
        :param str state: A two-letter US state abbreviation
        :param int quantity: The number of numbers to order (default 1)
        :param str name: order name

        :rtype: bandwidth_numbers.account.response_module.OrderResponse
        :returns: order, usually in RECEIVED status

        Example: order two numbers in Raleigh::

            order = api.search_and_order_numbers(city='RALEIGH', state='NC', quantity=2)
            print(order.id, order.status)
            ## 6c4b7ea1-2f2e-4bb5-8a5a-b3e3a54c3a3f RECEIVED
        """
        try:
            quantity = int(quantity)
        except (TypeError, ValueError):
            quantity = 1
        if quantity <= 0:
            raise ValueError("Quantity of phone numbers must be 1 or greater, passed: {}".format(quantity))

        kwargs = {'SiteId': self._site_id}
        if self._sippeer_id: kwargs['PeerId'] = self._sippeer_id
        if name: kwargs['Name'] = name

        if city and state:
            kwargs['CitySearchAndOrderType'] = {
                'City': city,
                'State': state,
                'Quantity': quantity
            }
        elif area_code:
            kwargs['AreaCodeSearchAndOrderType'] = {
                'AreaCode': area_code,
                'Quantity': quantity
            }
        else:
            raise ValueError('Not enough parameters')

        xml_data = dicttoxml.dicttoxml(kwargs, custom_root='Order', attr_type=False)
        url = '/accounts/{}/orders'.format(self._account_id)
        text, response, _ = self._make_request('post', url, data=xml_data)
        return OrderResponse(text, self.context)

    def check_order(self, order_id):
        """
        Retreives order information with number details

        :param str order_id: order id

        :rtype: bandwidth_numbers.account.response_module.CheckOrderResponse
        :returns: order details

        Example::

            check = api.check_order(order.id)
            print(check.status, check.numbers)
            ## COMPLETE ['+19195551234']
        """
        if not order_id:
            raise ValueError('Argument order_id is required')
        url = '/accounts/{}/orders/{}'.format(self._account_id, order_id)
        text, response, _ = self._make_request('get', url, params={'tndetail': 'true'})
        return CheckOrderResponse(text, self.context)

    def allocate(self,
                 area_code=None,
                 city=None,
                 state=None,
                 quantity=1,
                 max_attempts=None,
                 interval=None,
                 backoff=None):
        """
        Orders numbers and waits for the order to complete.

        Order status is checked up to max_attempts times, sleeping before each
        check. The delay starts at interval seconds and is multiplied by
        backoff after every check.

        :param str area_code: A 3-digit telephone area code
        :param str city: A city name
        :param str state: A two-letter US state abbreviation
        :param int quantity: The number of numbers to order (default 1)
        :param int max_attempts: order checks before giving up (default 8)
        :param float interval: seconds to wait before the first check (default 1)
        :param float backoff: delay multiplier between checks (default 1.5)

        :rtype: dict
        :returns: allocated numbers

        Example::

            result = api.allocate(city='RALEIGH', state='NC', quantity=2)
            print(result)
            ## {   'dids': [   {   'areaCode': '919',
            ##                     'countryCodeA3': 'USA',
            ##                     'didId': '6c4b7ea1-2f2e-4bb5-8a5a-b3e3a54c3a3f',
            ##                     'e164': '+19195551234',
            ##                     'peerId': '500709'},
            ##                 ...],
            ##     'resultCount': 2}
        """
        max_attempts = self._max_poll_tries if max_attempts is None else max_attempts
        delay = self._poll_interval if interval is None else interval
        backoff = self._poll_backoff if backoff is None else backoff

        order = self.search_and_order_numbers(area_code=area_code, city=city,
                                              state=state, quantity=quantity)
        order_id = order.id
        order_status = order.status
        check = None
        num_tries = 0
        error_desc = ''
        while num_tries < max_attempts and order_status not in FINAL_ORDER_STATUSES:
            # order did not go through yet - wait and try again
            time.sleep(delay)
            check = self.check_order(order_id)
            order_status = check.status
            num_tries += 1
            delay *= backoff
            if self.DEBUG:
                logging.info('Allocate numbers, order id: {}, try: {}, order status: {}'.
                             format(order_id, num_tries, order_status))

        if order_status not in FINAL_ORDER_STATUSES:
            raise BandwidthOrderPendingException(order_id)

        if order_status != 'COMPLETE':
            if check is not None:
                error_code, error_desc = check.error_details
            raise BandwidthAccountAPIException(order_status, 'Unable to procure number, Error: {}, Attempts: {}'.
                                               format(error_desc, num_tries))

        if check is None:
            # completed on submit, fetch number details
            check = self.check_order(order_id)

        if len(check.numbers) == 0:
            logging.error("Bandwidth returned completed order {} without numbers".format(order_id))
        return UnifiedResponse(check, order_id).response

    def disconnect(self, order_id, numbers):
        """
        Disconnects (releases) phone numbers

        :param str order_id: customer order id for the disconnect order
        :param list numbers: numbers to disconnect

        :rtype: bandwidth_numbers.account.response_module.DisconnectOrderResponse
        :returns: disconnect order

        Example::

            api.disconnect('my-order-1', ['9195551234', '9195551235'])
        """
        if not order_id:
            raise ValueError('Argument order_id is required')
        if isinstance(numbers, str):
            numbers = [numbers]
        if not isinstance(numbers, (list, tuple)) or not numbers:
            raise ValueError('Expecting non empty list of phone numbers to disconnect, passed: {}'.format(numbers))

        kwargs = {
            'CustomerOrderId': order_id,
            'DisconnectTelephoneNumberOrderType': {
                'TelephoneNumberList': list(numbers),
            }
        }
        xml_data = dicttoxml.dicttoxml(kwargs,
                                       custom_root='DisconnectTelephoneNumberOrder',
                                       attr_type=False,
                                       item_func=lambda x: 'TelephoneNumber')
        url = '/accounts/{}/disconnects'.format(self._account_id)
        text, response, _ = self._make_request('post', url, data=xml_data)
        return DisconnectOrderResponse(text, self.context)

    def get_disconnect_order(self, order_id):
        """
        Retreives disconnect order information

        :param str order_id: disconnect order id

        :rtype: bandwidth_numbers.account.response_module.DisconnectOrderResponse
        :returns: disconnect order
        """
        if not order_id:
            raise ValueError('Argument order_id is required')
        url = '/accounts/{}/disconnects/{}'.format(self._account_id, order_id)
        text, response, _ = self._make_request('get', url)
        return DisconnectOrderResponse(text, self.context)
