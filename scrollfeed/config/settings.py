"""
ScrollFeed Settings Management
Loads and validates settings from settings.yml using Pydantic
"""

import logging
import re
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger("ScrollFeed.Settings")

_SIZE_PATTERN = re.compile(r"^\d+(\.\d+)?(px|em|rem|pt|%)$")


class IndicatorSettings(BaseModel):
    """Loading indicator settings"""
    model_config = ConfigDict(frozen=True)

    active: bool = Field(
        default=False,
        description="Show a loading indicator while a segment is fetched"
    )
    color: str = Field(default="lightgray", description="CSS color of the indicator")
    size: str = Field(
        default="0.7em",
        description="Number plus unit, e.g. '20px' or '0.7em'"
    )
    type: int = Field(
        default=1,
        ge=0,
        le=2,
        description="0 = custom markup, 1 = circle spinner, 2 = horizontal dots"
    )
    html: str = Field(
        default="",
        description="Custom indicator markup, used only when type is 0"
    )

    @field_validator('size')
    @classmethod
    def validate_size(cls, v: str) -> str:
        """Ensure size is a number followed by a CSS unit"""
        v = v.strip()
        if not _SIZE_PATTERN.match(v):
            raise ValueError(f"size must be a number with a unit, got {v!r}")
        return v

    @field_validator('color')
    @classmethod
    def validate_color(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("color cannot be empty")
        return v.strip()


class ScrollSettings(BaseModel):
    """Segment loading settings"""
    model_config = ConfigDict(frozen=True)

    segment: int = Field(default=1, ge=1, description="Segment the page starts on")
    segment_param: str = Field(
        default="segment",
        description="Query parameter carrying the requested segment"
    )
    route: str = Field(default="", description="URL the segments are fetched from")
    payload_shape: Literal["json", "html"] = Field(
        default="json",
        description="How response bodies are decoded"
    )
    offset: int = Field(
        default=100,
        ge=0,
        le=10000,
        description="Remaining scroll distance (px) that triggers a fetch"
    )
    auto_fill: bool = Field(
        default=True,
        description="Keep fetching until the viewport is filled"
    )
    auto_scroll: bool = Field(
        default=False,
        description="Scroll to the latest content after the initial fetch"
    )
    fetch_on_initiate: bool = Field(
        default=False,
        description="Fetch every segment up to 'segment' when the engine starts"
    )
    lock_infinite_scroll: bool = Field(
        default=False,
        description="Start locked, scrolling will not trigger fetches"
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Timeout of a single segment request"
    )
    indicator: IndicatorSettings = Field(default_factory=IndicatorSettings)

    @field_validator('segment_param')
    @classmethod
    def validate_segment_param(cls, v: str) -> str:
        """Ensure the parameter name is usable in a query string"""
        v = v.strip()
        if not v:
            raise ValueError("segment_param cannot be empty")
        if any(c in v for c in "&=?#"):
            raise ValueError(f"segment_param contains reserved characters: {v!r}")
        return v


class Settings(BaseModel):
    """Main settings model"""
    scroll: ScrollSettings = Field(default_factory=ScrollSettings)


class SettingsManager:
    """Manages loading and accessing settings"""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize settings manager

        Args:
            config_path: Path to settings.yml file. Defaults to ./settings.yml
        """
        if config_path is None:
            config_path = Path("settings.yml")

        self.config_path = Path(config_path)
        self.settings = self._load_settings()

    def _load_settings(self) -> Settings:
        """Load and validate settings from YAML file"""
        if not self.config_path.exists():
            logger.info(f"Settings file not found at {self.config_path}, using defaults")
            return Settings()

        try:
            with open(self.config_path, "r") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.warning(f"Error parsing settings YAML: {e}. Using default settings")
            return Settings()

        if config_data is None:
            logger.info("Settings file is empty, using defaults")
            return Settings()

        if not isinstance(config_data, dict):
            logger.warning("Settings file must contain a mapping, using defaults")
            return Settings()

        try:
            settings = Settings(**config_data)
        except ValidationError as e:
            logger.warning(f"Invalid settings in {self.config_path}: {e}. Using default settings")
            return Settings()

        logger.info(f"Loaded settings from {self.config_path}")
        logger.debug(f"  - Route: {settings.scroll.route or '<unset>'}")
        return settings

    def reload(self):
        """Reload settings from file"""
        self.settings = self._load_settings()

    @property
    def scroll(self) -> ScrollSettings:
        return self.settings.scroll

    @property
    def indicator(self) -> IndicatorSettings:
        return self.settings.scroll.indicator
