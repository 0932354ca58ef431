"""Mode state machine for circadian zones.

This module holds the zone model and the transitions between the adaptive,
night and manual modes as pure functions. Each function takes the current
state and configuration and returns a ``ZoneTransition`` describing the new
state, which persisted keys changed, and the values-changed notification to
emit (if any). The controller applies persistence and notification side
effects on top of these.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping

from .const import (
    CONF_MAX_BRIGHTNESS,
    CONF_MIN_BRIGHTNESS,
    CONF_NIGHT_BRIGHTNESS,
    CONF_NIGHT_TEMP,
    CONF_NOON_TEMP,
    CONF_SUNSET_TEMP,
    DEFAULT_SETTINGS,
    KEY_BRIGHTNESS,
    KEY_MODE,
    KEY_TEMPERATURE,
    MODE_ADAPTIVE,
    MODE_MANUAL,
    MODE_NIGHT,
    MODES,
)
from .light_targets import (
    AdaptiveTargetStrategy,
    LightTargets,
    NightTargetStrategy,
    TargetStrategy,
    percent_to_fraction,
    round2,
)

_LOGGER = logging.getLogger(__name__)

# Modes that recompute their values; manual values stand until overridden
STRATEGIES: dict[str, TargetStrategy] = {
    MODE_ADAPTIVE: AdaptiveTargetStrategy(),
    MODE_NIGHT: NightTargetStrategy(),
}


class ZoneEvent(Enum):
    """Events that can change a zone's state."""

    MODE_SELECTED = "mode_selected"
    VALUES_OVERRIDDEN = "values_overridden"
    PERCENTAGE_UPDATED = "percentage_updated"
    NIGHT_MODE_REFRESH = "night_mode_refresh"
    REFRESH = "refresh"


@dataclass(frozen=True)
class ZoneConfig:
    """Configured bounds and targets of a zone, as fractions."""

    sunset_temperature: float
    noon_temperature: float
    min_brightness: float
    max_brightness: float
    night_brightness: float
    night_temperature: float

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> ZoneConfig:
        """Build a config from integer-percentage settings, with defaults."""

        def _fraction(key: str) -> float:
            value = settings.get(key)
            if value is None:
                value = DEFAULT_SETTINGS[key]
            return percent_to_fraction(value)

        return cls(
            sunset_temperature=_fraction(CONF_SUNSET_TEMP),
            noon_temperature=_fraction(CONF_NOON_TEMP),
            min_brightness=_fraction(CONF_MIN_BRIGHTNESS),
            max_brightness=_fraction(CONF_MAX_BRIGHTNESS),
            night_brightness=_fraction(CONF_NIGHT_BRIGHTNESS),
            night_temperature=_fraction(CONF_NIGHT_TEMP),
        )

    def as_dict(self) -> dict[str, float]:
        """Return the configuration for diagnostics."""
        return {
            "sunset_temperature": self.sunset_temperature,
            "noon_temperature": self.noon_temperature,
            "min_brightness": self.min_brightness,
            "max_brightness": self.max_brightness,
            "night_brightness": self.night_brightness,
            "night_temperature": self.night_temperature,
        }


@dataclass(frozen=True)
class ZoneState:
    """Runtime state of a zone."""

    mode: str
    brightness: float
    temperature: float

    @property
    def targets(self) -> LightTargets:
        return LightTargets(self.brightness, self.temperature)


@dataclass(frozen=True)
class ZoneTransition:
    """Result of applying an event to a zone."""

    state: ZoneState
    event: ZoneEvent
    changed: tuple[str, ...] = ()
    notification: LightTargets | None = None

    @property
    def is_noop(self) -> bool:
        return not self.changed and self.notification is None


def _noop(state: ZoneState, event: ZoneEvent) -> ZoneTransition:
    return ZoneTransition(state=state, event=event)


def _converge(
    state: ZoneState, targets: LightTargets, event: ZoneEvent
) -> ZoneTransition:
    """Move each axis that differs to its target, notifying once."""
    changed: list[str] = []
    brightness = state.brightness
    temperature = state.temperature

    if targets.brightness != brightness:
        brightness = targets.brightness
        changed.append(KEY_BRIGHTNESS)
    if targets.temperature != temperature:
        temperature = targets.temperature
        changed.append(KEY_TEMPERATURE)

    if not changed:
        return _noop(state, event)

    new_state = replace(state, brightness=brightness, temperature=temperature)
    return ZoneTransition(
        state=new_state,
        event=event,
        changed=tuple(changed),
        notification=new_state.targets,
    )


def update_from_percentage(
    state: ZoneState, config: ZoneConfig, percentage: float | None
) -> ZoneTransition:
    """Recompute an adaptive zone from the day-progress percentage.

    Pushes that arrive while the zone is not adaptive are ignored. With no
    known percentage (None) the current values are kept.
    """
    if state.mode != MODE_ADAPTIVE:
        _LOGGER.debug(
            "Ignoring percentage %s, zone is not adaptive (%s)",
            percentage,
            state.mode,
        )
        return _noop(state, ZoneEvent.PERCENTAGE_UPDATED)
    if percentage is None:
        _LOGGER.debug("No percentage known yet, keeping current values")
        return _noop(state, ZoneEvent.PERCENTAGE_UPDATED)

    targets = STRATEGIES[MODE_ADAPTIVE].get_targets(config, percentage)
    _LOGGER.debug(
        "Percentage %.2f -> brightness %.2f in [%.2f, %.2f], "
        "temperature %.2f in [%.2f, %.2f]",
        percentage,
        targets.brightness,
        config.min_brightness,
        config.max_brightness,
        targets.temperature,
        config.noon_temperature,
        config.sunset_temperature,
    )
    return _converge(state, targets, ZoneEvent.PERCENTAGE_UPDATED)


def update_from_night_mode(state: ZoneState, config: ZoneConfig) -> ZoneTransition:
    """Move a zone to its night targets; idempotent once reached."""
    targets = STRATEGIES[MODE_NIGHT].get_targets(config, 0.0)
    return _converge(state, targets, ZoneEvent.NIGHT_MODE_REFRESH)


def refresh(
    state: ZoneState, config: ZoneConfig, percentage: float | None
) -> ZoneTransition:
    """Recompute a zone according to its current mode."""
    if state.mode == MODE_ADAPTIVE:
        return update_from_percentage(state, config, percentage)
    if state.mode == MODE_NIGHT:
        return update_from_night_mode(state, config)
    return _noop(state, ZoneEvent.REFRESH)


def select_mode(
    state: ZoneState,
    config: ZoneConfig,
    new_mode: str,
    percentage: float | None,
) -> ZoneTransition:
    """Switch mode, recomputing immediately for adaptive and night."""
    if new_mode not in MODES:
        raise ValueError(f"Unknown zone mode: {new_mode}")

    if new_mode == state.mode:
        return _noop(state, ZoneEvent.MODE_SELECTED)

    new_state = replace(state, mode=new_mode)
    if new_mode == MODE_MANUAL:
        return ZoneTransition(
            state=new_state, event=ZoneEvent.MODE_SELECTED, changed=(KEY_MODE,)
        )

    refreshed = refresh(new_state, config, percentage)
    return ZoneTransition(
        state=refreshed.state,
        event=ZoneEvent.MODE_SELECTED,
        changed=(KEY_MODE, *refreshed.changed),
        notification=refreshed.notification,
    )


def override_values(
    state: ZoneState,
    brightness: float | None = None,
    temperature: float | None = None,
) -> ZoneTransition:
    """Apply a manual brightness and/or temperature override.

    ``None`` leaves that axis untouched. Any actual change switches the zone
    to manual mode.
    """
    changed: list[str] = []
    new_brightness = state.brightness
    new_temperature = state.temperature

    if brightness is not None and round2(brightness) != state.brightness:
        new_brightness = round2(brightness)
        changed.append(KEY_BRIGHTNESS)
    if temperature is not None and round2(temperature) != state.temperature:
        new_temperature = round2(temperature)
        changed.append(KEY_TEMPERATURE)

    if not changed:
        return _noop(state, ZoneEvent.VALUES_OVERRIDDEN)

    mode = state.mode
    if mode != MODE_MANUAL:
        mode = MODE_MANUAL
        changed.insert(0, KEY_MODE)

    new_state = ZoneState(
        mode=mode, brightness=new_brightness, temperature=new_temperature
    )
    return ZoneTransition(
        state=new_state,
        event=ZoneEvent.VALUES_OVERRIDDEN,
        changed=tuple(changed),
        notification=new_state.targets,
    )
