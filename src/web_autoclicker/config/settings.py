"""
Settings - Pydantic models for type-safe configuration.

This module defines all configuration settings as Pydantic models,
providing validation, type hints, and automatic environment variable loading.

Example:
    >>> from web_autoclicker.config import Settings, load_config
    >>> settings = load_config()  # Loads from env, yaml, and defaults
    >>> print(settings.replay.speed)
    1.0
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Playback speed multipliers accepted by the replay engine
PLAYBACK_SPEEDS = (0.5, 1.0, 1.5, 2.0)


class BrowserSettings(BaseModel):
    """
    Browser automation settings.
    
    Attributes:
        browser_type: Playwright browser engine
        headless: Run browser in headless mode
        timeout_ms: Default timeout for browser operations
        viewport_width: Browser viewport width in pixels
        viewport_height: Browser viewport height in pixels
        slow_mo: Slow down operations by this amount (ms) - useful for debugging
    """
    browser_type: Literal["chromium", "firefox", "webkit"] = "chromium"
    channel: Optional[str] = None  # chrome, msedge, ...
    headless: bool = True
    timeout_ms: int = Field(default=30000, ge=1000, le=300000)
    viewport_width: int = Field(default=1280, ge=320, le=3840)
    viewport_height: int = Field(default=720, ge=240, le=2160)
    slow_mo: int = Field(default=0, ge=0, le=5000)


class ResolverSettings(BaseModel):
    """
    Element resolver settings.
    
    Attributes:
        cache_size: Maximum number of cached descriptor -> element entries
    """
    cache_size: int = Field(default=500, ge=1, le=100000)


class RecorderSettings(BaseModel):
    """
    Interaction recorder settings.
    
    The thresholds are empirical defaults, not hard invariants.
    
    Attributes:
        dedup_window_ms: Identical consecutive actions closer than this are dropped
        scroll_throttle_ms: Minimum time between two recorded scrolls
        scroll_min_delta: Minimum displacement (on one axis) for a new scroll
        max_actions: Upper bound on a single recording
        ignore_attribute: Elements inside a node carrying this attribute are ignored
    """
    dedup_window_ms: int = Field(default=1000, ge=0, le=60000)
    scroll_throttle_ms: int = Field(default=100, ge=0, le=10000)
    scroll_min_delta: int = Field(default=10, ge=0, le=10000)
    max_actions: int = Field(default=1000, ge=1, le=100000)
    ignore_attribute: str = "data-ai-recorder-ignore"


class ReplaySettings(BaseModel):
    """
    Replay engine defaults and pacing.
    
    Attributes:
        speed: Default playback speed multiplier
        timeout_ms: Default per-action timeout
        stop_on_error: Abort the sequence on the first failed action
        retry_count: Retries for actions the element rejected
        retry_delay_ms: Delay before the first retry
        backoff_multiplier: Multiplier for exponential backoff between retries
        settle_before_ms: Pause before each interaction (divided by speed)
        settle_after_ms: Pause after each interaction (divided by speed)
        visibility_wait_ms: Wait after scrolling a hidden element into view
        pause_poll_ms: Poll interval while paused
        max_actions: Longest sequence accepted by replay()
    """
    speed: float = 1.0
    timeout_ms: int = Field(default=30000, ge=5000, le=600000)
    stop_on_error: bool = False
    retry_count: int = Field(default=3, ge=0, le=10)
    retry_delay_ms: int = Field(default=500, ge=0, le=30000)
    backoff_multiplier: float = Field(default=2.0, ge=1.0, le=10.0)
    settle_before_ms: int = Field(default=100, ge=0, le=10000)
    settle_after_ms: int = Field(default=200, ge=0, le=10000)
    visibility_wait_ms: int = Field(default=500, ge=0, le=10000)
    pause_poll_ms: int = Field(default=100, ge=10, le=5000)
    max_actions: int = Field(default=1000, ge=1, le=100000)
    
    @field_validator("speed")
    @classmethod
    def _check_speed(cls, value: float) -> float:
        if value not in PLAYBACK_SPEEDS:
            raise ValueError(f"speed must be one of {', '.join(str(s) for s in PLAYBACK_SPEEDS)}")
        return value


class StorageSettings(BaseModel):
    """
    Recording storage settings.
    
    Attributes:
        recordings_dir: Directory holding saved recordings
    """
    recordings_dir: str = "./recordings"


class LoggingSettings(BaseModel):
    """
    Logging configuration.
    
    Attributes:
        level: Log level
        file: Log file path (None for console only)
        json_format: Use JSON format for file logs
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: Optional[str] = None
    json_format: bool = False


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.
    
    Settings are loaded in this priority order (highest to lowest):
    1. Explicit values passed to constructor
    2. Environment variables (prefixed with WEB_AUTOCLICKER__)
    3. Config file (YAML)
    4. Default values
    
    Example:
        >>> settings = Settings()  # Load from env vars
        >>> settings = Settings(replay=ReplaySettings(speed=2.0))  # Override
    """
    
    model_config = SettingsConfigDict(
        env_prefix="WEB_AUTOCLICKER__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )
    
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    resolver: ResolverSettings = Field(default_factory=ResolverSettings)
    recorder: RecorderSettings = Field(default_factory=RecorderSettings)
    replay: ReplaySettings = Field(default_factory=ReplaySettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    
    debug: bool = False
    
    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.
        
        Args:
            overrides: Dictionary of values to override
            
        Returns:
            New Settings instance with overrides applied
        """
        current = self.model_dump()
        
        def deep_merge(base: dict, updates: dict) -> dict:
            for key, value in updates.items():
                if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                    deep_merge(base[key], value)
                else:
                    base[key] = value
            return base
        
        merged = deep_merge(current, overrides)
        return Settings(**merged)
