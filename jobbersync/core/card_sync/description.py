from datetime import datetime

SEPARATOR = "\n\n---\n\n"
TIMESTAMP_FORMAT = "%m/%d/%Y, %I:%M:%S %p"


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT)


def merge_description(current: str | None, note: str, now: datetime | None = None) -> str:
    """Prepend a timestamped ``note`` to a card description.

    The newest entry always comes first and earlier content is kept verbatim
    below a horizontal rule. An empty or whitespace-only description is
    replaced by the entry alone. History is never trimmed, so descriptions
    grow for the life of the card.
    """
    entry = f"[{format_timestamp(now or datetime.now())}] {note}"
    if current and current.strip():
        return f"{entry}{SEPARATOR}{current}"
    return entry
