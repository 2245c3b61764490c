import logging
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from recitations.core.errors import ConfigurationError

DEFAULT_TIMEZONE = "Africa/Mogadishu"

# Component label used in lifecycle log lines
MONGODB = "MONGODB"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongo_url: str = Field(default="127.0.0.1:27017", min_length=1)
    mongo_db: str = Field(default="tabsera", min_length=1)
    days_ago_to_report: int = Field(default=1, ge=1)

    report_timezone: str = DEFAULT_TIMEZONE
    report_output_dir: Path = Path("files")

    server_selection_timeout_ms: int = Field(default=5000, ge=1)
    report_max_workers: int = Field(default=4, ge=1)
    log_level: str = "INFO"

    @field_validator("report_timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
            raise ValueError(f"unknown timezone: {value!r}") from exc
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value!r}")
        return level

    @property
    def mongo_uri(self) -> str:
        # direct connection: no replica-set discovery
        return f"mongodb://{self.mongo_url}/{self.mongo_db}?directConnection=true"

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.report_timezone)


def load_settings(**overrides) -> Settings:
    """Build settings from env/.env plus explicit overrides (e.g. CLI flags).

    Raises ConfigurationError instead of pydantic's ValidationError so callers
    only deal with one error family.
    """
    values = {k: v for k, v in overrides.items() if v is not None}
    try:
        return Settings(**values)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc
