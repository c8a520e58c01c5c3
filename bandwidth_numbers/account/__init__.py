from .client_module import Client
from .api_exception_module import BandwidthAccountAPIException
from .api_exception_module import BandwidthOrderPendingException
