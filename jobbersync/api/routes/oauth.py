"""Operator-facing Jobber OAuth setup.

``/jobber-auth`` sends the operator to Jobber's consent screen,
``/oauth-callback`` trades the returned code for an access token, and
``/setup-webhook`` registers this service's webhook URL using that token.
Every failure drops the token and offers a link back to ``/jobber-auth``.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from jobbersync.api.deps import get_jobber_client, get_token_store, templates
from jobbersync.common.exceptions import OAuthError
from jobbersync.common.logging import get_logger
from jobbersync.config import settings
from jobbersync.core.oauth.token_store import TokenStore
from jobbersync.integrations.jobber import JobberClient

router = APIRouter(tags=["OAuth"])
logger = get_logger("api.oauth")

RETRY_PATH = "/jobber-auth"


def _failure_page(request: Request, title: str, detail: str, status_code: int):
    return templates.TemplateResponse(
        request,
        "oauth_failure.html",
        {"title": title, "detail": detail, "retry_url": RETRY_PATH},
        status_code=status_code,
    )


@router.get("/jobber-auth")
async def jobber_auth(
    jobber: JobberClient = Depends(get_jobber_client),
    store: TokenStore = Depends(get_token_store),
):
    if not jobber.is_configured:
        return PlainTextResponse(
            "JOBBER_CLIENT_ID and JOBBER_CLIENT_SECRET must be set", status_code=status.HTTP_400_BAD_REQUEST,
        )

    state = await store.begin_authorization()
    logger.info("Starting Jobber authorization")
    return RedirectResponse(
        jobber.authorization_url(settings.oauth_redirect_uri, state),
        status_code=status.HTTP_302_FOUND,
    )


@router.get("/oauth-callback")
async def oauth_callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    jobber: JobberClient = Depends(get_jobber_client),
    store: TokenStore = Depends(get_token_store),
):
    if not code:
        return PlainTextResponse("Missing authorization code", status_code=status.HTTP_400_BAD_REQUEST)

    if not store.verify_state(state):
        logger.warning("OAuth callback state mismatch")
        await store.clear()
        return _failure_page(
            request, "Authorization failed", "The authorization request could not be verified.",
            status.HTTP_400_BAD_REQUEST,
        )

    try:
        token = await jobber.exchange_code(code, settings.oauth_redirect_uri)
    except OAuthError as e:
        await store.clear()
        return _failure_page(request, "Authorization failed", e.detail, status.HTTP_502_BAD_GATEWAY)

    await store.set_token(token)
    logger.info("Jobber authorization complete")
    return templates.TemplateResponse(request, "oauth_success.html", {"setup_url": "/setup-webhook"})


@router.get("/setup-webhook")
async def setup_webhook(
    request: Request,
    jobber: JobberClient = Depends(get_jobber_client),
    store: TokenStore = Depends(get_token_store),
):
    token = store.access_token
    if not token:
        return _failure_page(
            request, "Not authorized", "Connect to Jobber before registering the webhook.",
            status.HTTP_401_UNAUTHORIZED,
        )

    try:
        webhook = await jobber.create_webhook(token, settings.webhook_url, settings.webhook_topics)
    except OAuthError as e:
        await store.clear()
        return _failure_page(request, "Webhook setup failed", e.detail, status.HTTP_502_BAD_GATEWAY)

    return templates.TemplateResponse(
        request,
        "webhook_setup.html",
        {"webhook_url": settings.webhook_url, "topics": settings.webhook_topics, "webhook": webhook},
    )
