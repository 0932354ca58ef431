"""Sensor platform for Circadian Zones integration.

This module exposes a single diagnostic sensor per zone:

Core Status:
- Last event (setup, mode_selected, percentage_updated, values_overridden, ...)
- Current mode, brightness and temperature
- Last pushed day-progress percentage

Debugging Info:
- Configured bounds and night targets
- Last mode transition and its reason
- Recent event history
"""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import SensorEntity, SensorEntityDescription
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .entity import CircadianZoneEntity

SENSOR_DESCRIPTION = SensorEntityDescription(
    key="circadian_status",
    name="Circadian status",
    icon="mdi:sun-clock",
    entity_category=EntityCategory.DIAGNOSTIC,
)


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up sensor entities."""
    coordinator = config_entry.runtime_data

    async_add_entities(
        [
            ZoneDiagnosticSensor(
                coordinator=coordinator,
                config_entry=config_entry,
                entity_description=SENSOR_DESCRIPTION,
            ),
        ]
    )


class ZoneDiagnosticSensor(CircadianZoneEntity, SensorEntity):
    """Diagnostic sensor with the zone's event history and configuration."""

    @property
    def native_value(self) -> str:
        """Return the last event type as the sensor state."""
        diagnostic_data = self._coordinator.get_diagnostic_data()
        return diagnostic_data.get("last_event_type") or "unknown"

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return diagnostic data with event history and internal state."""
        diagnostic_data = self._coordinator.get_diagnostic_data()
        config = diagnostic_data.get("config", {})

        return {
            # Current state
            "mode": diagnostic_data.get("mode"),
            "brightness": diagnostic_data.get("brightness"),
            "temperature": diagnostic_data.get("temperature"),
            "percentage": diagnostic_data.get("percentage"),
            "last_transition_reason": diagnostic_data.get("last_transition_reason"),
            "last_transition_time": diagnostic_data.get("last_transition_time"),
            # Configuration
            "min_brightness": config.get("min_brightness"),
            "max_brightness": config.get("max_brightness"),
            "noon_temperature": config.get("noon_temperature"),
            "sunset_temperature": config.get("sunset_temperature"),
            "night_brightness": config.get("night_brightness"),
            "night_temperature": config.get("night_temperature"),
            # Event log (most recent events)
            "recent_events": diagnostic_data.get("recent_events", [])[-10:],
        }
