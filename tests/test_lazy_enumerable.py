import pytest

from bandwidth_numbers.account.response_module import SipPeerNumbersPage
from bandwidth_numbers.lazy_enumerable import get_lazy_enumerator
from bandwidth_numbers.lazy_enumerable import get_page_enumerator

from samples import tns_page

PAGE_2 = 'https://dashboard.bandwidth.com/api/tns?page=2'
PAGE_3 = 'https://dashboard.bandwidth.com/api/tns?page=3'


class DummyClient:
    def __init__(self, pages):
        self.pages = pages
        self.requested = []

    def _make_request(self, method, url):
        self.requested.append((method, url))
        return self.pages[url], None, None


@pytest.fixture
def client():
    return DummyClient({
        PAGE_2: tns_page(['9195550003', '9195550004'], next_link=PAGE_3),
        PAGE_3: tns_page(['9195550005']),
    })


def first_page():
    return SipPeerNumbersPage(tns_page(['9195550001', '9195550002'], next_link=PAGE_2))


def test_pages_until_no_next_link(client):
    pages = list(get_page_enumerator(client, first_page))
    assert [p.numbers for p in pages] == [
        ['9195550001', '9195550002'],
        ['9195550003', '9195550004'],
        ['9195550005'],
    ]
    assert client.requested == [('get', PAGE_2), ('get', PAGE_3)]
    assert len(set(id(p) for p in pages)) == 3


def test_next_page_is_fetched_on_demand(client):
    pages = get_page_enumerator(client, first_page)
    next(pages)
    assert client.requested == []
    next(pages)
    assert client.requested == [('get', PAGE_2)]


def test_single_page(client):
    pages = list(get_page_enumerator(client, lambda: SipPeerNumbersPage(tns_page(['9195550001']))))
    assert len(pages) == 1
    assert client.requested == []


def test_items_across_pages(client):
    assert list(get_lazy_enumerator(client, first_page)) == [
        '9195550001', '9195550002', '9195550003', '9195550004', '9195550005']


def test_custom_item_parser(client):
    items = get_lazy_enumerator(client, first_page, item_parser=lambda page: [len(page.numbers)])
    assert list(items) == [2, 2, 1]
