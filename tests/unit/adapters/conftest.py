import pytest_asyncio

from storefront.domain.value_objects.credentials import CredentialPair


@pytest_asyncio.fixture
async def signed_in(token_store):
    await token_store.set(CredentialPair(access_token="t2", refresh_token="r2"))
    return token_store
