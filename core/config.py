import os
from logging.config import dictConfig

from dotenv import load_dotenv

load_dotenv()


class Settings:
    def __init__(self):
        # Tokens for the repository holding the keys and the trigger issue
        self.READ_KEYS: str | None = os.getenv("READ_KEYS")
        self.ISSUE_COMMENT: str | None = os.getenv("ISSUE_COMMENT")

        # GitHub endpoints
        self.KEYS_URL: str = os.getenv(
            "KEYS_URL",
            "https://api.github.com/repos/Just-Some-Plugins/AutoRepo/actions/variables",
        )
        self.COMMENT_URL: str = os.getenv(
            "COMMENT_URL",
            "https://api.github.com/repos/Just-Some-Plugins/AutoRepo/issues/1/comments",
        )
        self.USER_AGENT: str = os.getenv("USER_AGENT", "AutoRepo-Worker")
        self.GITHUB_API_VERSION: str = os.getenv("GITHUB_API_VERSION", "2022-11-28")
        self.REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "10"))

        # Worker
        self.WORKER_VERSION: str = os.getenv("WORKER_VERSION", "0.0.2 aequalis")
        self.WEBHOOK_USER_AGENT_PREFIX: str = os.getenv("WEBHOOK_USER_AGENT_PREFIX", "GitHub-Hookshot")

        # Server
        self.PORT: int = int(os.getenv("PORT", "8080"))
        self.HOST: str = os.getenv("HOST", "0.0.0.0")

        # Logging
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def validate_settings(self):
        if not self.READ_KEYS:
            raise ValueError("READ_KEYS environment variable not set.")
        if not self.ISSUE_COMMENT:
            raise ValueError("ISSUE_COMMENT environment variable not set.")


settings = Settings()

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "()": "uvicorn.logging.DefaultFormatter",
            "fmt": "%(levelprefix)s %(asctime)s - %(name)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "default": {
            "formatter": "default",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "autorepo_worker": {"handlers": ["default"], "level": settings.LOG_LEVEL, "propagate": False},
        "uvicorn.error": {"level": "INFO"},
        "uvicorn.access": {"handlers": ["default"], "level": "INFO", "propagate": False},
    },
}

def setup_logging():
    settings.validate_settings()
    dictConfig(LOGGING_CONFIG)
