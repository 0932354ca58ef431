"""Circadian zone controller."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Mapping

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import Context, HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from .config_flow import InvalidTemperatureRange, validate_settings
from .const import (
    DEFAULT_MODE,
    DOMAIN,
    KEY_BRIGHTNESS,
    KEY_MODE,
    KEY_TEMPERATURE,
    MODES,
    SETTINGS_KEYS,
)
from .percentage_source import PercentageSource
from .state_machine import (
    ZoneConfig,
    ZoneState,
    ZoneTransition,
    override_values,
    refresh,
    select_mode,
    update_from_percentage,
)
from .zone_store import ZoneStore

_LOGGER = logging.getLogger(__name__)


def settings_from_entry(config_entry: ConfigEntry) -> dict[str, Any]:
    """Merge initial settings from entry data with later options."""
    settings = {
        key: config_entry.data[key] for key in SETTINGS_KEYS if key in config_entry.data
    }
    settings.update(
        {
            key: config_entry.options[key]
            for key in SETTINGS_KEYS
            if key in config_entry.options
        }
    )
    return settings


class ZoneController(DataUpdateCoordinator[dict[str, Any]]):
    """Owns one zone's state and applies its transitions.

    Decisions are made by the pure functions in ``state_machine``; this class
    assigns the resulting state, persists changed values, fires the
    values-changed event and keeps a short event history for diagnostics.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        source: PercentageSource,
        store: ZoneStore | None = None,
    ) -> None:
        """Initialize the zone controller."""
        super().__init__(
            hass,
            _LOGGER,
            name=config_entry.title or DOMAIN,
            update_interval=None,
            config_entry=config_entry,
        )

        self.source = source
        self.store = store or ZoneStore(hass, config_entry.entry_id)
        self.config = ZoneConfig.from_settings(settings_from_entry(config_entry))

        # Placeholder until async_setup loads persisted values
        self._state = ZoneState(
            mode=DEFAULT_MODE,
            brightness=self.config.max_brightness,
            temperature=self.config.noon_temperature,
        )

        self._unsubscribers: list[Callable[[], None]] = []
        self.data = {}

        # Event tracking for diagnostics
        self._events: list[dict[str, Any]] = []
        self._max_events = 100
        self._last_transition_reason: str | None = None
        self._last_transition_time: datetime | None = None

    async def async_setup(self) -> None:
        """Restore persisted values, refresh, then register for pushes."""
        stored = await self.store.async_load()

        mode = stored.get(KEY_MODE) or DEFAULT_MODE
        if mode not in MODES:
            _LOGGER.warning(
                "Ignoring unknown persisted mode '%s' for %s, using %s",
                mode,
                self.name,
                DEFAULT_MODE,
            )
            mode = DEFAULT_MODE

        brightness = stored.get(KEY_BRIGHTNESS)
        temperature = stored.get(KEY_TEMPERATURE)
        self._state = ZoneState(
            mode=mode,
            brightness=(
                self.config.max_brightness if brightness is None else brightness
            ),
            temperature=(
                self.config.noon_temperature if temperature is None else temperature
            ),
        )

        await self.store.async_set_value(KEY_MODE, self._state.mode)
        await self.store.async_set_value(KEY_TEMPERATURE, self._state.temperature)
        await self.store.async_set_value(KEY_BRIGHTNESS, self._state.brightness)

        self._log_event("setup", {"mode": self.mode})
        await self.async_refresh_zone()

        self._unsubscribers.append(self.source.register_zone(self))

        _LOGGER.info(
            "Circadian zone %s initialized: mode=%s brightness=%.2f temperature=%.2f",
            self.name,
            self.mode,
            self.brightness,
            self.temperature,
        )
        self._update_data()

    # ========================================================================
    # Operations
    # ========================================================================

    async def async_set_mode(
        self, mode: str, context: Context | None = None
    ) -> None:
        """Switch the zone mode (no-op if already active)."""
        _LOGGER.debug("Mode %s requested for %s", mode, self.name)
        transition = select_mode(self._state, self.config, mode, self.source.percentage)
        if transition.is_noop:
            _LOGGER.debug("Mode of %s not changed", self.name)
            return
        await self._async_apply(transition, context)

    async def async_override_values(
        self,
        brightness: float | None = None,
        temperature: float | None = None,
        context: Context | None = None,
    ) -> None:
        """Override brightness and/or temperature, switching to manual."""
        _LOGGER.info(
            "Override on %s: brightness=%s temperature=%s",
            self.name,
            brightness,
            temperature,
        )
        transition = override_values(self._state, brightness, temperature)
        if transition.is_noop:
            _LOGGER.debug("Override on %s changed nothing", self.name)
            return
        await self._async_apply(transition, context)

    async def async_refresh_zone(self, context: Context | None = None) -> None:
        """Recompute the zone according to its mode."""
        transition = refresh(self._state, self.config, self.source.percentage)
        if transition.is_noop:
            _LOGGER.debug("No changes for %s in mode %s", self.name, self.mode)
            return
        await self._async_apply(transition, context)

    async def async_update_from_percentage(self, percentage: float) -> None:
        """Recompute from a pushed percentage (ignored unless adaptive)."""
        transition = update_from_percentage(self._state, self.config, percentage)
        if transition.is_noop:
            _LOGGER.debug(
                "No changes for %s from percentage %.2f", self.name, percentage
            )
            return
        await self._async_apply(transition)

    async def async_update_settings(self, settings: Mapping[str, Any]) -> str | None:
        """Replace the zone configuration and refresh.

        Returns a user-facing message if the settings are rejected, in which
        case nothing changes.
        """
        try:
            validate_settings(settings)
        except InvalidTemperatureRange as err:
            _LOGGER.warning("Rejected settings for %s: %s", self.name, err)
            self._log_event("settings_rejected", {"reason": str(err)})
            return str(err)

        self.config = ZoneConfig.from_settings(settings)
        _LOGGER.info("Settings of %s changed: %s", self.name, self.config.as_dict())
        self._log_event("settings_updated", self.config.as_dict())
        await self.async_refresh_zone()
        self._update_data()
        return None

    async def _async_apply(
        self, transition: ZoneTransition, context: Context | None = None
    ) -> None:
        """Assign the new state, then persist and notify."""
        old_state = self._state
        self._state = transition.state

        for key in transition.changed:
            await self.store.async_set_value(key, self._persisted_value(key))

        if transition.notification is not None:
            self.source.notify_values_changed(
                self, transition.notification, context=context
            )

        if old_state.mode != self._state.mode:
            _LOGGER.info(
                "Mode of %s changed from %s to %s",
                self.name,
                old_state.mode,
                self._state.mode,
            )
            self._log_transition(
                old_state.mode, self._state.mode, transition.event.value
            )
        self._log_event(
            transition.event.value,
            {
                "changed": list(transition.changed),
                "brightness": self._state.brightness,
                "temperature": self._state.temperature,
            },
        )
        self._update_data()

    def _persisted_value(self, key: str) -> Any:
        if key == KEY_MODE:
            return self._state.mode
        if key == KEY_BRIGHTNESS:
            return self._state.brightness
        return self._state.temperature

    # ========================================================================
    # Event Tracking (for diagnostics)
    # ========================================================================

    def _log_event(self, event_type: str, details: dict[str, Any]) -> None:
        """Log an event for diagnostics."""
        event = {
            "timestamp": datetime.now().isoformat(),
            "type": event_type,
            **details,
        }
        self._events.append(event)

        # Keep only last N events
        if len(self._events) > self._max_events:
            self._events.pop(0)

        _LOGGER.debug("Event logged: %s - %s", event_type, details)

    def _log_transition(self, from_mode: str, to_mode: str, reason: str) -> None:
        """Log a mode transition."""
        self._last_transition_reason = reason
        self._last_transition_time = datetime.now()
        self._log_event(
            "mode_transition",
            {
                "from_mode": from_mode,
                "to_mode": to_mode,
                "reason": reason,
            },
        )

    def get_diagnostic_data(self) -> dict[str, Any]:
        """Get diagnostic data for sensor."""
        return {
            "mode": self._state.mode,
            "brightness": self._state.brightness,
            "temperature": self._state.temperature,
            "percentage": self.source.percentage,
            "config": self.config.as_dict(),
            "recent_events": list(self._events),
            "last_event_type": self._events[-1]["type"] if self._events else None,
            "last_transition_reason": self._last_transition_reason,
            "last_transition_time": (
                self._last_transition_time.isoformat()
                if self._last_transition_time
                else None
            ),
        }

    # ========================================================================
    # Data Update
    # ========================================================================

    def _update_data(self) -> None:
        """Update coordinator data and notify entities."""
        self.data = {
            "mode": self._state.mode,
            "brightness": self._state.brightness,
            "temperature": self._state.temperature,
        }
        self.async_update_listeners()

    def async_cleanup_listeners(self) -> None:
        """Clean up listeners."""
        for unsub in self._unsubscribers:
            unsub()
        self._unsubscribers.clear()

    # ========================================================================
    # Properties
    # ========================================================================

    @property
    def state(self) -> ZoneState:
        return self._state

    @property
    def mode(self) -> str:
        return self._state.mode

    @property
    def brightness(self) -> float:
        return self._state.brightness

    @property
    def temperature(self) -> float:
        return self._state.temperature
