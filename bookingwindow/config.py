"""
Configuration management using Pydantic models loaded from YAML.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Any, List, Optional, Union

import pendulum
import yaml
from pendulum import DateTime
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .domain.dates import parse_calendar_value
from .domain.models import PeriodConfig, PeriodType, TimezoneFrame


def _validate_timezone_name(value: str) -> str:
    try:
        pendulum.timezone(value)
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {value}") from exc
    return value


class PeriodSettings(BaseModel):
    """Booking horizon settings of an event type, as stored in records."""
    model_config = ConfigDict(populate_by_name=True)

    period_type: PeriodType = Field(default=PeriodType.UNLIMITED, alias="periodType")
    period_days: int = Field(default=0, ge=0, alias="periodDays")
    period_count_calendar_days: bool = Field(default=False, alias="periodCountCalendarDays")
    period_start_date: Optional[Union[datetime, date]] = Field(default=None, alias="periodStartDate")
    period_end_date: Optional[Union[datetime, date]] = Field(default=None, alias="periodEndDate")

    @field_validator("period_type", mode="before")
    @classmethod
    def coerce_period_type(cls, value: Any) -> PeriodType:
        """Unknown or missing period types mean no future limit."""
        return PeriodType.coerce(value)

    @field_validator("period_days", mode="before")
    @classmethod
    def default_period_days(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("period_count_calendar_days", mode="before")
    @classmethod
    def default_count_calendar_days(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("period_start_date", "period_end_date", mode="before")
    @classmethod
    def parse_period_date(cls, value: Any) -> Any:
        """Accept ISO strings; a bare day stays a calendar date."""
        return parse_calendar_value(value)

    @model_validator(mode="after")
    def validate_range(self) -> "PeriodSettings":
        """Ensure RANGE periods carry an ordered pair of dates."""
        self.to_period_config()
        return self

    def to_period_config(self) -> PeriodConfig:
        """Convert to the domain value."""
        return PeriodConfig(
            period_type=self.period_type,
            period_days=self.period_days,
            period_count_calendar_days=self.period_count_calendar_days,
            period_start_date=self.period_start_date,
            period_end_date=self.period_end_date,
        )


class EventTypeConfig(BaseModel):
    """Event type configuration."""
    slug: str
    title: str = ""
    minimum_booking_notice: int = Field(default=0, ge=0)  # minutes
    timezone: Optional[str] = None  # Falls back to AppConfig.timezone
    period: PeriodSettings = Field(default_factory=PeriodSettings)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _validate_timezone_name(value)

    def display_name(self) -> str:
        """Get display name."""
        return self.title or self.slug


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Europe/Berlin"
    booker_timezone: Optional[str] = None
    log_level: str = "WARNING"
    exclude_days: List[int] = Field(default_factory=lambda: [5, 6])  # Saturday, Sunday
    availability_file: Optional[Path] = None
    event_types: List[EventTypeConfig] = Field(default_factory=list)

    @field_validator("timezone", "booker_timezone")
    @classmethod
    def validate_timezones(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _validate_timezone_name(value)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("exclude_days")
    @classmethod
    def validate_exclude_days(cls, value: List[int]) -> List[int]:
        """Ensure weekdays are in valid range and deduplicated."""
        invalid_days = [day for day in value if day not in range(7)]
        if invalid_days:
            raise ValueError(f"exclude_days must be between 0 and 6, got {invalid_days}")
        # Preserve order while removing duplicates
        seen: set[int] = set()
        deduped: List[int] = []
        for day in value:
            if day not in seen:
                deduped.append(day)
                seen.add(day)
        return deduped

    @field_validator("event_types")
    @classmethod
    def validate_event_types(cls, value: List[EventTypeConfig]) -> List[EventTypeConfig]:
        """Ensure event type slugs are unique."""
        seen_slugs: set[str] = set()
        for event_type in value:
            slug_key = event_type.slug.lower()
            if slug_key in seen_slugs:
                raise ValueError(f"Duplicate event type slug detected: {event_type.slug}")
            seen_slugs.add(slug_key)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)

    def find_event_type(self, slug: str) -> EventTypeConfig | None:
        """Find an event type by its slug."""
        for event_type in self.event_types:
            if event_type.slug.lower() == slug.lower():
                return event_type
        return None

    def get_event_type(self, slug: str) -> EventTypeConfig:
        """
        Resolve an event type by slug.

        Raises:
            ValueError: If no event type has that slug
        """
        event_type = self.find_event_type(slug)
        if event_type is None:
            raise ValueError(
                f"Unknown event type: '{slug}'. "
                f"Configured event types: {', '.join(e.slug for e in self.event_types) or '-'}"
            )
        return event_type

    def event_timezone(self, event_type: EventTypeConfig) -> str:
        """Timezone the organizer of the event type works in."""
        return event_type.timezone or self.timezone

    def resolve_booker_timezone(self, override: Optional[str] = None) -> str:
        """Timezone of the booker, falling back to the configured defaults."""
        if override:
            return _validate_timezone_name(override)
        return self.booker_timezone or self.timezone

    def timezone_frame(
        self,
        event_type: EventTypeConfig,
        booker_timezone: Optional[str] = None,
        at: Optional[DateTime] = None,
    ) -> TimezoneFrame:
        """Build the offset frame for an event type and booker."""
        return TimezoneFrame.from_timezones(
            event_timezone=self.event_timezone(event_type),
            booker_timezone=self.resolve_booker_timezone(booker_timezone),
            at=at,
        )


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
