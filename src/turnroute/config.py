"""Application configuration and settings management."""

from typing import Any, Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

EXACT_STRATEGIES: tuple[str, ...] = ("heap", "fixed_endpoints", "backtracking", "pruned")
GREEDY_STRATEGIES: tuple[str, ...] = ("nearest", "multi_start", "paired", "prefix")


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TURNROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    exact_max_points: int = Field(
        default=20,
        ge=0,
        description="Largest instance size solved with an exact strategy; bigger ones go greedy.",
    )
    exact_strategy: str = Field(default="pruned", description="Strategy key used for small instances.")
    greedy_strategy: str = Field(default="paired", description="Strategy key used for large instances.")
    prefix_size: int = Field(
        default=3,
        ge=2,
        description="Length of the enumerated start prefixes for the 'prefix' strategy.",
    )
    time_limit_seconds: Optional[float] = Field(
        default=None,
        gt=0.0,
        description="Abort a search after this many seconds. Unlimited when unset.",
    )
    turn_tolerance: float = Field(
        default=0.0,
        ge=0.0,
        description="Accept a turn when the leg dot product is <= this value. 0.0 is the exact test.",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("time_limit_seconds", mode="before")
    @classmethod
    def _parse_optional_limit(cls, value: Any) -> Any:
        """Treat empty strings and 'none' from the environment as no limit."""
        if isinstance(value, str) and value.strip().lower() in {"", "none", "null"}:
            return None
        return value

    @model_validator(mode="after")
    def _check_strategy_keys(self) -> "Settings":
        if self.exact_strategy not in EXACT_STRATEGIES:
            raise ValueError(
                f"exact_strategy must be one of {', '.join(EXACT_STRATEGIES)}; got '{self.exact_strategy}'."
            )
        if self.greedy_strategy not in GREEDY_STRATEGIES:
            raise ValueError(
                f"greedy_strategy must be one of {', '.join(GREEDY_STRATEGIES)}; got '{self.greedy_strategy}'."
            )
        if self.greedy_strategy == "prefix" and self.exact_max_points < self.prefix_size - 1:
            raise ValueError(
                f"exact_max_points must be at least prefix_size - 1 ({self.prefix_size - 1}) "
                f"when greedy_strategy is 'prefix'; got {self.exact_max_points}."
            )
        return self


settings = Settings()
