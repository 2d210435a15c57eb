"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - PREBREAK / POSTBREAK count as set when present with any value, including ""
    - get_settings() is cached (lru_cache): single instance per process
    - FaultSwitches are frozen once derived; nothing writes them after startup

Design Decisions:
    - pydantic-settings over raw os.environ: validation, .env file support (ADR: developer UX)
    - Switches passed into the app by value instead of module globals: no writer
      exists after create_app(), so no synchronization is needed
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class FaultSwitches:
    """Fault-injection toggles, read-only for the process lifetime."""
    pre_break: bool = False
    post_break: bool = False


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Fault injection (presence only, value ignored)
    prebreak: str | None = None
    postbreak: str | None = None

    # Server
    host: str = "0.0.0.0"
    default_port: int = 3000

    # Observability
    log_level: str | None = None
    log_format: Literal["json", "text"] = "json"

    def fault_switches(self) -> FaultSwitches:
        return FaultSwitches(
            pre_break=self.prebreak is not None,
            post_break=self.postbreak is not None,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
