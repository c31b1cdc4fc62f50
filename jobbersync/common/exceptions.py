from fastapi import HTTPException, status


class JobberSyncException(HTTPException):
    def __init__(self, detail: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(status_code=status_code, detail=detail)


class BadRequestError(JobberSyncException):
    def __init__(self, detail: str):
        super().__init__(detail=detail, status_code=status.HTTP_400_BAD_REQUEST)


class CardUpdateError(Exception):
    """A write against a matched card failed.

    ``step`` is ``"description"`` or ``"comment"``. When the comment step
    fails the description has already been overwritten.
    """

    def __init__(self, step: str, card_id: str, cause: Exception | None = None):
        self.step = step
        self.card_id = card_id
        self.cause = cause
        super().__init__(f"Failed to update {step} on card {card_id}: {cause}")


class OAuthError(Exception):
    def __init__(self, step: str, detail: str):
        self.step = step
        self.detail = detail
        super().__init__(f"Jobber OAuth {step} failed: {detail}")
