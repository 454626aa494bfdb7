"""Runtime configuration."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class VerdictSettings(BaseSettings):
    """Settings for constraint evaluation.

    Loads from environment variables prefixed with ``VERDICT_``:
        VERDICT_DEFAULT_REQUIREMENT_TEXT, VERDICT_TRACE_CHECKS
    """

    default_requirement_text: str = Field(
        default="There is an error",
        description="Text of the requirement reported by predicates that do not supply their own",
    )
    trace_checks: bool = Field(default=True, description="Open tracing spans around combinator checks")

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="VERDICT_",
    )

    @field_validator("default_requirement_text")
    @classmethod
    def _text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("default_requirement_text must not be white space")
        return v


@lru_cache(maxsize=1)
def get_settings() -> VerdictSettings:
    """Return the process-wide settings, read from the environment once."""
    return VerdictSettings()


def reset_settings() -> None:
    """Forget the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
