"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .adapters.zone_converter import ZoneConverter
from .domain.models import Location, WorkingHourRange


_converter = ZoneConverter()


def _validate_hour(value: Optional[int]) -> Optional[int]:
    if value is not None and not 0 <= value <= 23:
        raise ValueError(f"Hour must be between 0 and 23, got {value}")
    return value


class DefaultsConfig(BaseModel):
    """Default working hours."""
    start_hour: int = 9
    end_hour: int = 18

    @field_validator("start_hour", "end_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        return _validate_hour(v)

    @model_validator(mode="after")
    def validate_hours_differ(self) -> "DefaultsConfig":
        """An empty window is not a working day; end before start spans midnight."""
        if self.start_hour == self.end_hour:
            raise ValueError("start_hour and end_hour must differ")
        return self

    def working_hours(self) -> WorkingHourRange:
        return WorkingHourRange(start=self.start_hour, end=self.end_hour)


class LocationConfig(BaseModel):
    """A named location with optional working-hour overrides."""
    name: str  # Used as alias
    timezone: str
    country: str = ""
    start_hour: Optional[int] = None
    end_hour: Optional[int] = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        if not _converter.is_valid_zone(value):
            raise ValueError(f"Unknown timezone identifier: {value}")
        return value

    @field_validator("start_hour", "end_hour")
    @classmethod
    def validate_hour(cls, v: Optional[int]) -> Optional[int]:
        return _validate_hour(v)

    def to_location(self) -> Location:
        return Location(name=self.name, timezone=self.timezone, country=self.country)


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    locations: List[LocationConfig] = Field(default_factory=list)

    @field_validator("locations")
    @classmethod
    def validate_locations(cls, value: List[LocationConfig]) -> List[LocationConfig]:
        """Ensure location aliases are unique."""
        seen_names: set[str] = set()
        for location in value:
            name_key = location.name.lower()
            if name_key in seen_names:
                raise ValueError(f"Duplicate location name detected: {location.name}")
            seen_names.add(name_key)
        return value

    @model_validator(mode="after")
    def validate_location_hours(self) -> "AppConfig":
        """
        Ensure each location's hours, merged with the defaults, form a working day.

        A single override may move the range past midnight, e.g. start_hour 20
        with the default end_hour 18 means 20:00 - 18:00 the next day.
        """
        for location in self.locations:
            hours = self.working_hours_for(location.name)
            if hours.start == hours.end:
                raise ValueError(
                    f"Working hours for {location.name} start and end at {hours.start}:00"
                )
        return self

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

    def find_location(self, name: str) -> LocationConfig | None:
        """Find a location by its name (alias)."""
        for location in self.locations:
            if location.name.lower() == name.lower():
                return location
        return None

    def resolve_location(self, identifier: str) -> Location:
        """
        Resolve a location identifier (name/alias or timezone) to a Location.

        Args:
            identifier: Configured name or IANA timezone identifier

        Returns:
            Location

        Raises:
            ValueError: If identifier cannot be resolved
        """
        configured = self.find_location(identifier)
        if configured:
            return configured.to_location()

        if _converter.is_valid_zone(identifier):
            return Location.from_zone(identifier)

        raise ValueError(
            f"Unknown location identifier: '{identifier}'. "
            f"Use a timezone such as 'Europe/London' or a configured name."
        )

    def working_hours_for(self, identifier: str) -> WorkingHourRange:
        """
        Working hours for a location, falling back to the defaults for any
        bound the location does not override.
        """
        defaults = self.defaults.working_hours()
        configured = self.find_location(identifier)
        if configured is None:
            return defaults

        return WorkingHourRange(
            start=configured.start_hour if configured.start_hour is not None else defaults.start,
            end=configured.end_hour if configured.end_hour is not None else defaults.end,
        )


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of tzoverlap/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
