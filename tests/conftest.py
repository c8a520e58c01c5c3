import pytest

from bandwidth_numbers.account import client_module
from bandwidth_numbers.account.client_module import Client


class DummyRequests:
    """Records requests and answers them from a queue of DummyResponse."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def request(self, method, url, *args, **kwargs):
        self.calls.append({'method': method, 'url': url, 'args': args, 'kwargs': kwargs})
        if not self.responses:
            raise AssertionError('Unexpected request: {} {}'.format(method, url))
        return self.responses.pop(0)


@pytest.fixture
def http(monkeypatch):
    dummy = DummyRequests()
    monkeypatch.setattr(client_module.requests, 'request', dummy.request)
    return dummy


@pytest.fixture
def sleeps(monkeypatch):
    delays = []
    monkeypatch.setattr(client_module.time, 'sleep', delays.append)
    return delays


@pytest.fixture
def api():
    return Client('login', 'secret', '9900000', '2297', sippeer_id='500709')
