from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, ValidationError
from functools import lru_cache
from typing import List

from .errors import BotFailure

class Settings(BaseSettings):
    SLACK_BOT_TOKEN: str = Field(..., min_length=1, description="Slack Bot User OAuth Token")
    SLACK_APP_TOKEN: str = Field(..., min_length=1, description="Slack App-Level Token (for Socket Mode)")
    GITHUB_TOKEN: str = Field(..., min_length=1, description="GitHub token allowed to create issues")
    GITHUB_OWNER: str = Field(..., min_length=1, description="Owner of the repository issues are filed in")
    GITHUB_REPO: str = Field(..., min_length=1, description="Repository issues are filed in")
    AMBASSADOR_ROLE_NAME: str = Field(..., min_length=1, description="Slack user group allowed to save links")

    SAVE_LINK_COMMAND: str = "/save-link"
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_ISSUE_LABELS: str = Field("", description="Comma separated labels added to new issues")
    FETCH_TIMEOUT_SECONDS: float = 10.0
    LOG_LEVEL: str = "INFO"

    # MLflow settings
    MLFLOW_TRACKING_URI: str = Field("http://127.0.0.1:5000", description="MLflow tracking server URI")
    MLFLOW_ENABLE_TRACING: bool = Field(False, description="Enable MLflow tracing")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def issue_labels(self) -> List[str]:
        return [label.strip() for label in self.GITHUB_ISSUE_LABELS.split(",") if label.strip()]


# Empty values count as missing, same as absent ones
MISSING_ERROR_TYPES = ("missing", "string_too_short")


def missing_variables(error: ValidationError) -> List[str]:
    """Names of required fields that were absent or empty, in declaration order."""
    missing = {
        str(err["loc"][0])
        for err in error.errors()
        if err.get("type") in MISSING_ERROR_TYPES and err.get("loc")
    }
    return [name for name in Settings.model_fields if name in missing]


def load_settings(**overrides) -> Settings:
    """
    Build Settings from the environment.
    Raises a CONFIGURATION BotFailure naming every missing variable.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        missing = missing_variables(e)
        if missing:
            raise BotFailure.configuration(
                f"Missing required environment variables: {', '.join(missing)}"
            ) from e
        raise BotFailure.configuration(f"Invalid configuration: {e}") from e

@lru_cache()
def get_settings() -> Settings:
    return load_settings()
