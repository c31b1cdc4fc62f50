from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Trello
    TRELLO_API_KEY: str = ""
    TRELLO_TOKEN: str = ""
    TRELLO_BOARD_ID: str = ""
    TRELLO_API_URL: str = "https://api.trello.com/1"

    # Jobber
    JOBBER_CLIENT_ID: str = ""
    JOBBER_CLIENT_SECRET: str = ""
    JOBBER_ACCESS_TOKEN: str = ""
    JOBBER_API_URL: str = "https://api.getjobber.com/api"
    JOBBER_WEBHOOK_TOPICS: str = "QUOTE_CREATE,QUOTE_UPDATE,QUOTE_APPROVED,JOB_CREATE,JOB_UPDATE"

    # Sync
    DEFAULT_NOTE: str = "Test note update from Jobber"
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # App
    APP_URL: str = "http://localhost:10000"
    PORT: int = 10000
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def webhook_topics(self) -> list[str]:
        return [t.strip() for t in self.JOBBER_WEBHOOK_TOPICS.split(",") if t.strip()]

    @property
    def oauth_redirect_uri(self) -> str:
        return f"{self.APP_URL.rstrip('/')}/oauth-callback"

    @property
    def webhook_url(self) -> str:
        return f"{self.APP_URL.rstrip('/')}/webhook/jobber"


settings = Settings()
