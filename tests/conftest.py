import pytest

from fetcher import build_client
from models import ScanConfig

from support import make_transport

@pytest.fixture
def client_for():
    def factory(pages, config=None):
        return build_client(config or ScanConfig(), transport=make_transport(pages))
    return factory
