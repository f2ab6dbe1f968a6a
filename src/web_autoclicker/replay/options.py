"""
Replay options - validated before a job starts.
"""

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from web_autoclicker.config.settings import PLAYBACK_SPEEDS, ReplaySettings
from web_autoclicker.exceptions import ReplayOptionsError

MIN_TIMEOUT_MS = 5000
MAX_TIMEOUT_MS = 600000


class ReplayOptions(BaseModel):
    """
    Per-job replay options.

    Attributes:
        speed: Pacing multiplier, one of 0.5, 1, 1.5, 2
        timeout_ms: Wall-clock bound for a single action
        stop_on_error: Abort the job on the first failed action
        retry_count: Retries for actions the element rejected
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    speed: float = 1.0
    timeout_ms: int = Field(default=30000, ge=MIN_TIMEOUT_MS, le=MAX_TIMEOUT_MS)
    stop_on_error: bool = False
    retry_count: int = Field(default=3, ge=0, le=10)

    @field_validator("speed")
    @classmethod
    def _check_speed(cls, value: float) -> float:
        if value not in PLAYBACK_SPEEDS:
            raise ValueError(f"speed must be one of {', '.join(str(s) for s in PLAYBACK_SPEEDS)}")
        return float(value)

    @field_validator("stop_on_error", mode="before")
    @classmethod
    def _strict_bool(cls, value: Any) -> Any:
        if not isinstance(value, bool):
            raise ValueError("stop_on_error must be a boolean")
        return value

    @classmethod
    def from_settings(cls, settings: ReplaySettings, **overrides: Any) -> "ReplayOptions":
        """Options with the configured defaults underneath the overrides."""
        return parse_options(overrides, defaults=settings)


def parse_options(
    options: Optional[Union["ReplayOptions", Mapping[str, Any]]],
    defaults: Optional[ReplaySettings] = None,
) -> ReplayOptions:
    """
    Validate replay options.

    Args:
        options: ReplayOptions, a mapping of option values, or None
        defaults: Settings supplying values the mapping leaves out

    Returns:
        Validated ReplayOptions

    Raises:
        ReplayOptionsError: unknown option, out-of-range or wrongly typed value
    """
    if isinstance(options, ReplayOptions):
        return options
    if options is not None and not isinstance(options, Mapping):
        raise ReplayOptionsError(f"Options must be a mapping, got {type(options).__name__}")

    values: Dict[str, Any] = {}
    if defaults is not None:
        values.update(
            speed=defaults.speed,
            timeout_ms=defaults.timeout_ms,
            stop_on_error=defaults.stop_on_error,
            retry_count=defaults.retry_count,
        )
    values.update(options or {})

    try:
        return ReplayOptions(**values)
    except ValidationError as e:
        errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise ReplayOptionsError(f"Invalid replay options: {'; '.join(errors)}", errors=errors) from e
