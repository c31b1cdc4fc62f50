import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from jobbersync.api.deps import get_sync_service
from jobbersync.common.exceptions import BadRequestError, CardUpdateError
from jobbersync.common.logging import get_logger
from jobbersync.config import settings
from jobbersync.core.card_sync.payload import extract_event, verify_signature
from jobbersync.core.card_sync.service import CardSyncService

router = APIRouter(tags=["Webhooks"])
logger = get_logger("api.webhooks")

SIGNATURE_HEADER = "x-jobber-hmac-sha256"
TEST_DEAL_ID = "745"
TEST_NOTE = "Test update: Client approved premium package!"


@router.post("/webhook/jobber", response_class=PlainTextResponse)
async def jobber_webhook(request: Request, service: CardSyncService = Depends(get_sync_service)):
    body = await request.body()

    signature = request.headers.get(SIGNATURE_HEADER)
    if signature and settings.JOBBER_CLIENT_SECRET:
        if not verify_signature(body, signature, settings.JOBBER_CLIENT_SECRET):
            raise BadRequestError("Invalid webhook signature")

    try:
        payload = json.loads(body)
    except ValueError:
        raise BadRequestError("Invalid JSON payload")

    event = extract_event(payload)
    logger.info("Jobber webhook received: deal=%s topic=%s", event.deal_id, event.topic)
    logger.debug("Jobber webhook payload: %s", payload)

    try:
        result = await service.sync_note(event.deal_id, event.note, comment_prefix="Jobber update")
    except CardUpdateError as e:
        logger.error("Error processing webhook for deal %s: %s", event.deal_id, e)
        return PlainTextResponse("Error processing webhook", status_code=500)

    if not result.matched:
        logger.info("No Trello card found with deal id %s", event.deal_id)
        return PlainTextResponse("No matching card found")

    return PlainTextResponse("Success")


@router.get("/test", response_class=PlainTextResponse)
async def test_sync(service: CardSyncService = Depends(get_sync_service)):
    logger.info("Running test sync for deal %s", TEST_DEAL_ID)

    try:
        result = await service.sync_note(TEST_DEAL_ID, TEST_NOTE, comment_prefix="Test update")
    except CardUpdateError as e:
        logger.error("Test sync failed: %s", e)
        return PlainTextResponse("Test failed", status_code=500)

    if not result.matched:
        return PlainTextResponse(f"No Trello card found with Deal ID: {TEST_DEAL_ID}")

    return PlainTextResponse("Test successful! Check your Trello card.")
