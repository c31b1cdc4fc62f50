"""Jobber integration client.

Handles the OAuth authorization-code flow and webhook subscription against
the Jobber API. The resulting access token is not kept here; callers hold it
in a ``TokenStore``.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

import httpx

from jobbersync.common.exceptions import OAuthError
from jobbersync.config import settings
from jobbersync.integrations.base import BaseIntegration


class JobberClient(BaseIntegration):
    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        api_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__("jobber")
        self.client_id = settings.JOBBER_CLIENT_ID if client_id is None else client_id
        self.client_secret = settings.JOBBER_CLIENT_SECRET if client_secret is None else client_secret
        self.api_url = (api_url or settings.JOBBER_API_URL).rstrip("/")
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    async def health_check(self) -> bool:
        if not self.is_configured:
            self.logger.warning("Jobber health check: client credentials not configured")
        return self.is_configured

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        query = urlencode({
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "state": state,
        })
        return f"{self.api_url}/oauth/authorize?{query}"

    async def exchange_code(self, code: str, redirect_uri: str) -> str:
        payload = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(f"{self.api_url}/oauth/token", data=payload)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            self.logger.error("Jobber token exchange failed: %s", e)
            raise OAuthError("token exchange", str(e)) from e

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            raise OAuthError("token exchange", "response did not include an access token")
        self.logger.info("Obtained Jobber access token")
        return token

    async def create_webhook(self, access_token: str, url: str, topics: list[str]) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {access_token}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(
                    f"{self.api_url}/webhooks", json={"url": url, "topics": topics}, headers=headers,
                )
                resp.raise_for_status()
                webhook = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            self.logger.error("Jobber webhook subscription failed: %s", e)
            raise OAuthError("webhook subscription", str(e)) from e

        self.logger.info("Registered Jobber webhook for %s (%d topics)", url, len(topics))
        return webhook
