"""Model settings for generation turns.

Settings are read-only input to a generation turn. Out-of-range values are
clamped into range rather than rejected, both on construction and on
assignment.
"""

import math
import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import (
    DEFAULT_BACKEND_TIMEOUT_SECONDS,
    ENV_BACKEND_TIMEOUT,
    ENV_MAX_TOKENS,
    ENV_SIMULATED,
    ENV_TEMPERATURE,
    ENV_TOP_P,
)

TEMPERATURE_RANGE = (0.0, 2.0)
MAX_TOKENS_RANGE = (10, 2048)
TOP_P_RANGE = (0.0, 1.0)

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


def _clamp(value: float, low: float, high: float) -> float:
    if math.isnan(value):
        return low
    return min(max(value, low), high)


class ModelSettings(BaseModel):
    """Generation parameters and backend selection."""

    model_config = ConfigDict(validate_assignment=True)

    temperature: float = Field(
        default=0.7,
        description="Sampling temperature (0 = focused, 2 = creative)"
    )
    max_tokens: int = Field(
        default=150,
        description="Maximum tokens to generate"
    )
    top_p: float = Field(
        default=0.9,
        description="Nucleus sampling probability mass"
    )
    use_simulated_responses: bool = Field(
        default=True,
        description="Use the simulated producer instead of the local model"
    )
    backend_timeout: float | None = Field(
        default=DEFAULT_BACKEND_TIMEOUT_SECONDS,
        description="Seconds to wait for a backend response (None waits forever)"
    )

    @field_validator("temperature")
    @classmethod
    def _clamp_temperature(cls, value: float) -> float:
        return _clamp(value, *TEMPERATURE_RANGE)

    @field_validator("max_tokens", mode="before")
    @classmethod
    def _clamp_max_tokens(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, float):
            if math.isnan(value):
                return MAX_TOKENS_RANGE[0]
            value = int(_clamp(value, *MAX_TOKENS_RANGE))
        if isinstance(value, int):
            return int(_clamp(value, *MAX_TOKENS_RANGE))
        return value

    @field_validator("max_tokens")
    @classmethod
    def _clamp_parsed_max_tokens(cls, value: int) -> int:
        # Strings such as "5000" are only parsed after the "before" pass
        return int(_clamp(value, *MAX_TOKENS_RANGE))

    @field_validator("top_p")
    @classmethod
    def _clamp_top_p(cls, value: float) -> float:
        return _clamp(value, *TOP_P_RANGE)

    @field_validator("backend_timeout")
    @classmethod
    def _normalize_timeout(cls, value: float | None) -> float | None:
        if value is None or not math.isfinite(value) or value <= 0:
            return None
        return value

    @property
    def mode_label(self) -> str:
        """Human-readable name of the selected backend."""
        return "Simulated" if self.use_simulated_responses else "Local model"

    @classmethod
    def from_env(cls, **overrides: Any) -> "ModelSettings":
        """Build settings from environment variables.

        Unparseable values fall back to the defaults; out-of-range values
        are clamped. Keyword overrides that are not None win over the
        environment.

        Environment variables:
            CORECHAT_TEMPERATURE: Sampling temperature
            CORECHAT_MAX_TOKENS: Maximum tokens to generate
            CORECHAT_TOP_P: Top-p
            CORECHAT_SIMULATED: true/false, selects the simulated producer
            CORECHAT_BACKEND_TIMEOUT: Backend timeout in seconds
        """
        values: dict[str, Any] = {}

        temperature = _parse_float(os.getenv(ENV_TEMPERATURE))
        if temperature is not None:
            values["temperature"] = temperature

        max_tokens = _parse_float(os.getenv(ENV_MAX_TOKENS))
        if max_tokens is not None:
            values["max_tokens"] = max_tokens

        top_p = _parse_float(os.getenv(ENV_TOP_P))
        if top_p is not None:
            values["top_p"] = top_p

        simulated = _parse_bool(os.getenv(ENV_SIMULATED))
        if simulated is not None:
            values["use_simulated_responses"] = simulated

        timeout = _parse_float(os.getenv(ENV_BACKEND_TIMEOUT))
        if timeout is not None:
            values["backend_timeout"] = timeout

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def _parse_float(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _parse_bool(raw: str | None) -> bool | None:
    if raw is None:
        return None
    lowered = raw.strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    return None
