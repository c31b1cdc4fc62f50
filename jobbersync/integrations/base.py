from abc import ABC, abstractmethod

from jobbersync.common.logging import get_logger


class BaseIntegration(ABC):
    """Base class for the remote API clients.

    Each client reports whether its credentials are present and exposes a
    health check used by ``/health/integrations``.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = get_logger(f"integrations.{name}")

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Return True when the credentials this client needs are set."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True when the integration is reachable and functional."""
        ...
