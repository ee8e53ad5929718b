import httpx
import pytest
import pytest_asyncio

from storefront.infrastructure.http.client import ApiClient
from storefront.infrastructure.storage.key_value import MemoryKeyValueStore
from storefront.infrastructure.storage.token_store import TokenStore
from tests.utils.fakes import BASE_URL, FakeStorefrontBackend


@pytest.fixture
def memory_store():
    return MemoryKeyValueStore()


@pytest.fixture
def token_store(memory_store):
    return TokenStore(memory_store)


@pytest.fixture
def backend():
    return FakeStorefrontBackend()


@pytest_asyncio.fixture
async def api_client(backend, token_store):
    client = ApiClient(BASE_URL, token_store=token_store, transport=httpx.MockTransport(backend))
    try:
        yield client
    finally:
        await client.aclose()
