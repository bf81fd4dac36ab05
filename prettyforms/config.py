"""
Engine configuration using Pydantic Settings.

Supports environment variables (``PRETTYFORMS_`` prefix) and .env files.
"""

from functools import lru_cache
import json

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Substitution slot used by rule messages and HTML templates
PLACEHOLDER = "{%}"


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    # Submission
    failsafe_seconds: float = Field(default=10.0, gt=0)
    request_timeout: float = Field(default=30.0, gt=0)

    # Rules
    password_field: str = "password"
    rule_messages: dict[str, str] = Field(default_factory=dict)

    # Messages
    server_error_message: str = (
        "Something went wrong on the server and your data could not be processed. "
        "We will try to fix it as soon as possible. Please try again later."
    )
    confirm_message: str = "Do you really want to perform this action?"
    fix_and_retry_message: str = "Please fix the errors in the form and submit it again."

    # HTML templates
    message_template: str = (
        '<p><span class="glyphicon glyphicon-exclamation-sign" aria-hidden="true">'
        "</span>&nbsp;{%}</p>"
    )

    @field_validator("rule_messages", mode="before")
    @classmethod
    def parse_rule_messages(cls, v):
        if isinstance(v, str):
            value = v.strip()
            if not value:
                return {}
            return json.loads(value)
        return v

    @field_validator("message_template")
    @classmethod
    def check_message_template(cls, v: str) -> str:
        if PLACEHOLDER not in v:
            raise ValueError(f"message_template must contain {PLACEHOLDER}")
        return v

    def render_message(self, text: str) -> str:
        """Wrap a single message into the configured HTML template."""
        return self.message_template.replace(PLACEHOLDER, text, 1)

    model_config = {
        "env_prefix": "PRETTYFORMS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
