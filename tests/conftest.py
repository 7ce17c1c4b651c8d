import pytest
import pytest_asyncio
from nacl.signing import SigningKey

from core.config import Settings
from server.services.aggregator import StatsAggregator
from server.services.pubg import PubgClient, create_http_client
from server.services.storage import PlayerStore
from tests.helpers import FakePubgApi


@pytest.fixture
def signing_key() -> SigningKey:
    return SigningKey.generate()


@pytest.fixture
def settings(tmp_path, signing_key) -> Settings:
    return Settings(
        _env_file=None,
        discord_app_id="123456789",
        discord_public_key=signing_key.verify_key.encode().hex(),
        discord_bot_token="bot-token",
        pubg_api_key="test-key",
        pubg_base_url="https://api.pubg.test",
        storage_path=tmp_path / "data" / "users.json",
    )


@pytest.fixture
def store(settings) -> PlayerStore:
    return PlayerStore(settings.storage_path)


@pytest.fixture
def fake_api() -> FakePubgApi:
    return FakePubgApi()


@pytest_asyncio.fixture
async def pubg_client(settings, fake_api):
    http = create_http_client(settings, transport=fake_api.transport)
    yield PubgClient(http, api_key=settings.pubg_api_key, default_shard="steam")
    await http.aclose()


@pytest.fixture
def aggregator(pubg_client) -> StatsAggregator:
    return StatsAggregator(pubg_client)
