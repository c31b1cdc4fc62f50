from jobbersync.common.logging import get_logger
from jobbersync.core.card_sync.schemas import Card
from jobbersync.integrations.trello import TrelloClient

logger = get_logger("card_sync.correlation")


def deal_id_text(deal_id: str | int | float) -> str:
    if isinstance(deal_id, float) and deal_id.is_integer():
        return str(int(deal_id))
    return str(deal_id)


async def find_card_by_deal_id(client: TrelloClient, board_id: str, deal_id: str | int | float) -> Card | None:
    """Return the first card on ``board_id`` with a custom field equal to ``deal_id``.

    Cards are scanned in the order Trello returns them. Any failure while
    listing cards is logged and treated as no match.
    """
    wanted = deal_id_text(deal_id)
    logger.info("Looking for card with deal id %s", wanted)

    if not board_id:
        logger.warning("No Trello board configured, skipping lookup for deal id %s", wanted)
        return None

    try:
        cards = await client.list_cards_with_custom_fields(board_id)
    except Exception as e:
        logger.error("Error listing cards on board %s: %s", board_id, e)
        return None

    for card in cards:
        for item in card.custom_field_items:
            if item.text == wanted:
                logger.info("Match found for deal id %s: %s (%s)", wanted, card.name, card.id)
                return card

    logger.info("No card on board %s matches deal id %s", board_id, wanted)
    return None
