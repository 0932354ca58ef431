"""Target brightness and color temperature for circadian zones.

This module holds the interpolation rules and the per-mode target strategies.
Every stored value and every change comparison goes through ``round2`` so
that values move in whole percentage points only.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state_machine import ZoneConfig


def round2(value: float) -> float:
    """Round a fraction to two decimals, halves rounding up."""
    return math.floor(value * 100 + 0.5) / 100


def percent_to_fraction(value: float) -> float:
    """Convert an integer-percentage setting (0-100) to a fraction."""
    return math.floor(float(value) + 0.5) / 100


@dataclass(frozen=True)
class LightTargets:
    """Brightness and color temperature as fractions (0.0-1.0)."""

    brightness: float
    temperature: float

    def as_percentages(self) -> dict[str, int]:
        """Return both values as whole percentages."""
        return {
            "brightness": round(self.brightness * 100),
            "temperature": round(self.temperature * 100),
        }


def brightness_for_percentage(config: ZoneConfig, percentage: float) -> float:
    """Brightness rises from min to max as the day progresses."""
    if percentage > 0:
        delta = config.max_brightness - config.min_brightness
        return round2(config.min_brightness + delta * percentage)
    return round2(config.min_brightness)


def temperature_for_percentage(config: ZoneConfig, percentage: float) -> float:
    """Temperature falls from sunset to noon as the day progresses."""
    if percentage > 0:
        delta = config.sunset_temperature - config.noon_temperature
        return round2(config.noon_temperature + delta * (1 - percentage))
    return round2(config.sunset_temperature)


class TargetStrategy(ABC):
    """Abstract base class for per-mode target selection."""

    @abstractmethod
    def get_targets(self, config: ZoneConfig, percentage: float) -> LightTargets:
        """Return the targets a zone should converge to."""


class AdaptiveTargetStrategy(TargetStrategy):
    """Track the day-progress percentage between the configured bounds."""

    def get_targets(self, config: ZoneConfig, percentage: float) -> LightTargets:
        return LightTargets(
            brightness=brightness_for_percentage(config, percentage),
            temperature=temperature_for_percentage(config, percentage),
        )


class NightTargetStrategy(TargetStrategy):
    """Fixed night targets regardless of time of day."""

    def get_targets(self, config: ZoneConfig, percentage: float) -> LightTargets:
        return LightTargets(
            brightness=round2(config.night_brightness),
            temperature=round2(config.night_temperature),
        )
