from functools import lru_cache
from pathlib import Path

from fastapi.templating import Jinja2Templates

from jobbersync.config import settings
from jobbersync.core.card_sync.service import CardSyncService
from jobbersync.core.oauth.token_store import TokenStore
from jobbersync.integrations.base import BaseIntegration
from jobbersync.integrations.jobber import JobberClient
from jobbersync.integrations.trello import TrelloClient

BASE_DIR = Path(__file__).resolve().parent.parent

templates = Jinja2Templates(directory=BASE_DIR / "templates")


@lru_cache(maxsize=1)
def get_token_store() -> TokenStore:
    return TokenStore(settings.JOBBER_ACCESS_TOKEN)


@lru_cache(maxsize=1)
def get_trello_client() -> TrelloClient:
    return TrelloClient()


@lru_cache(maxsize=1)
def get_sync_service() -> CardSyncService:
    # One instance per process so the per-card locks are shared by all requests
    return CardSyncService(get_trello_client())


def get_jobber_client() -> JobberClient:
    return JobberClient()


def get_integrations() -> list[BaseIntegration]:
    return [get_trello_client(), get_jobber_client()]
