import collections
import logging
import re

import xmltodict

from .api_exception_module import BandwidthAccountAPIException

COUNTRY_CODE_A3 = 'USA'
E164_PREFIX = '+1'

RequestContext = collections.namedtuple(
    'RequestContext',
    ['account_id', 'site_id', 'sippeer_id', 'headers', 'base_url', 'page_size'])

_LINK_RE = re.compile(r'<(.+)>')


def _as_list(value):
    """
    Bandwidth returns a single child element without a surrounding list,
    normalize to a list.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _text(node):
    # element with attributes parses into {'@attr': .., '#text': ..}
    if isinstance(node, dict):
        return node.get('#text')
    return node


def _full_numbers(items, count=None):
    """
       FullNumber of every item, entries without one are skipped
    """
    number_list = []
    for item in items:
        full_number = _text(item.get('FullNumber')) if isinstance(item, dict) else None
        if full_number:
            number_list.append(full_number)
        else:
            logging.error('Bandwidth returned phone number response inconsistent. '
                          'Check dashboard for orphaned numbers')

    if count is not None and count != len(items):
        logging.error('Invalid response from Bandwidth.... received '
                      'count: {}, and list length: {}'.
                      format(count, len(items)))
    return number_list


class XmlBody:
    """
    Raw XML text returned by the API plus its lazily parsed dictionary.
    The parse is dropped whenever the text is replaced.
    """

    def __init__(self, text, context=None):
        self.context = context
        self.text = text

    @property
    def text(self):
        return self._text

    @text.setter
    def text(self, text):
        if isinstance(text, bytes):
            text = text.decode('utf-8')
        self._text = text
        self._parsed = None

    def to_dict(self):
        """
        :rtype: dict
        :returns: parsed body, None for an empty body
        """
        if not self._text:
            return None
        if self._parsed is None:
            self._parsed = xmltodict.parse(self._text)
        return self._parsed

    def to_xml(self):
        return self._text

    def with_text(self, text):
        """
        Returns a new object of the same type sharing this one's request context.
        """
        return type(self)(text, self.context)

    def _root(self, name):
        data = self.to_dict() or {}
        return data.get(name) or {}

    def __str__(self):
        return self._text or ''

    def __repr__(self):
        return '<{} {!r}>'.format(type(self).__name__, self._text)


def _error_details(order_response):
    """
       returns error code and description from an ErrorList
    """
    errors = _as_list((order_response.get('ErrorList') or {}).get('Error'))
    if not errors:
        return 'NA', 'NA'
    return errors[0].get('Code', 'NA'), errors[0].get('Description', 'NA')


class SipPeerNumbersPage(XmlBody):
    """
    One page of telephone numbers assigned to a SIP peer.
    """

    def _body(self):
        return self._root('SipPeerTelephoneNumbersResponse')

    @property
    def numbers(self):
        tel_obj = self._body().get('SipPeerTelephoneNumbers') or {}
        return _full_numbers(_as_list(tel_obj.get('SipPeerTelephoneNumber')))

    @property
    def total_count(self):
        count = self._body().get('SipPeerTelephoneNumbersCount')
        return int(count) if count else None

    @property
    def next_link(self):
        """
            cleaned up next page url, None on the last page.
            The raw value looks like: Link=<https://...>;rel="next";
        """
        links = self._body().get('Links') or {}
        next_link = _text(links.get('next'))
        if not next_link:
            return None

        match = _LINK_RE.search(next_link)
        if match:
            return match.group(1)

        link = next_link.strip()
        if link.startswith('Link='):
            link = link[len('Link='):]
        link = link.split(';')[0].strip()
        if link.startswith('http'):
            return link

        logging.error('Unable to parse next page link: {}'.format(next_link))
        raise BandwidthAccountAPIException(0, 'Unable to parse next page link: {}'.format(next_link))


class OrderResponse(XmlBody):

    def _body(self):
        return self._root('OrderResponse')

    @property
    def order(self):
        return self._body().get('Order') or {}

    @property
    def id(self):
        return self.order.get('id')

    @property
    def status(self):
        return self._body().get('OrderStatus')


class CheckOrderResponse(XmlBody):
    """
    Order details fetched with tndetail=true.
    """

    def _body(self):
        return self._root('OrderResponse')

    @property
    def status(self):
        return self._body().get('OrderStatus')

    @property
    def id(self):
        return (self._body().get('Order') or {}).get('id')

    @property
    def peer_id(self):
        return (self._body().get('Order') or {}).get('PeerId')

    @property
    def summary(self):
        return self._body().get('Summary')

    @property
    def completed_numbers(self):
        completed = self._body().get('CompletedNumbers') or {}
        quantity = self._body().get('CompletedQuantity')
        return _full_numbers(_as_list(completed.get('TelephoneNumber')),
                             int(quantity) if quantity else None)

    @property
    def numbers(self):
        return [E164_PREFIX + number for number in self.completed_numbers]

    @property
    def error_details(self):
        return _error_details(self._body())


class DisconnectOrderResponse(XmlBody):

    def _body(self):
        return self._root('DisconnectTelephoneNumberOrderResponse')

    @property
    def status(self):
        return self._body().get('OrderStatus')

    @property
    def id(self):
        order_request = self._body().get('orderRequest') or {}
        return order_request.get('id')

    @property
    def numbers(self):
        numbers = self._body().get('DisconnectedTelephoneNumberList') or {}
        return _as_list(numbers.get('TelephoneNumber'))

    @property
    def error_details(self):
        return _error_details(self._body())


def parse_area_code(summary):
    """
    area code between the first pair of parentheses, e.g. '2 numbers in (919)'
    """
    if not summary:
        return None
    start = summary.find('(')
    end = summary.find(')')
    if start > -1 and end > -1:
        return summary[start + 1:end]
    return None


class UnifiedResponse:
    """
    Flattened view of a completed order: one did per completed number.
    """

    def __init__(self, check, order_id):
        self.check = check
        self.order_id = order_id

    @property
    def response(self):
        peer_id = self.check.peer_id
        area_code = parse_area_code(self.check.summary)
        dids = [{
            'peerId': peer_id,
            'didId': self.order_id,
            'e164': number,
            'countryCodeA3': COUNTRY_CODE_A3,
            'areaCode': area_code,
        } for number in self.check.numbers]
        return {'dids': dids, 'resultCount': len(dids)}
