"""Remote API clients for Trello and Jobber."""

from jobbersync.integrations.base import BaseIntegration
from jobbersync.integrations.jobber import JobberClient
from jobbersync.integrations.trello import TrelloClient

__all__ = [
    "BaseIntegration",
    "JobberClient",
    "TrelloClient",
]
