"""Process-wide day-progress percentage shared by all circadian zones.

The percentage itself is computed elsewhere (a scheduler, an automation or
the ``set_percentage`` service) and pushed in here. The source remembers the
last value across restarts and fans it out to every zone that is in adaptive
mode. It also owns the values-changed bus event that downstream automations
trigger on.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Callable

from homeassistant.core import Context, HomeAssistant, callback
from homeassistant.helpers.storage import Store

from .const import (
    ATTR_BRIGHTNESS,
    ATTR_ENTRY_ID,
    ATTR_PERCENTAGE,
    ATTR_TEMPERATURE,
    DOMAIN,
    EVENT_VALUES_CHANGED,
    MODE_ADAPTIVE,
    PERCENTAGE_STORAGE_KEY,
    STORAGE_VERSION,
)
from .light_targets import LightTargets

if TYPE_CHECKING:
    from .zone_controller import ZoneController

_LOGGER = logging.getLogger(__name__)


class PercentageSource:
    """Holds the current percentage and the zones listening to it."""

    def __init__(
        self, hass: HomeAssistant, percentage: float | None = None
    ) -> None:
        self.hass = hass
        self.store: Store[dict[str, float]] = Store(
            hass, STORAGE_VERSION, PERCENTAGE_STORAGE_KEY
        )
        self._percentage = percentage
        self._zones: dict[str, ZoneController] = {}

    async def async_load(self) -> None:
        """Restore the last pushed percentage."""
        data = await self.store.async_load() or {}
        if (percentage := data.get(ATTR_PERCENTAGE)) is not None:
            self._percentage = percentage
        _LOGGER.debug("Loaded percentage: %s", self._percentage)

    @property
    def percentage(self) -> float | None:
        """Last pushed percentage, or None if none was ever pushed."""
        return self._percentage

    @property
    def zones(self) -> list[ZoneController]:
        return list(self._zones.values())

    @callback
    def register_zone(self, zone: ZoneController) -> Callable[[], None]:
        """Register a zone for percentage pushes; returns the unsubscriber."""
        entry_id = zone.config_entry.entry_id
        self._zones[entry_id] = zone
        _LOGGER.debug("Registered zone %s (%d total)", zone.name, len(self._zones))

        @callback
        def _unregister() -> None:
            if self._zones.get(entry_id) is zone:
                del self._zones[entry_id]
                _LOGGER.debug("Unregistered zone %s", zone.name)

        return _unregister

    async def async_set_percentage(self, percentage: float) -> None:
        """Store a new percentage and push it to every adaptive zone."""
        percentage = min(1.0, max(0.0, float(percentage)))
        self._percentage = percentage

        zones = [zone for zone in self._zones.values() if zone.mode == MODE_ADAPTIVE]
        _LOGGER.debug(
            "Percentage updated to %.2f, pushing to %d adaptive zone(s)",
            percentage,
            len(zones),
        )
        if zones:
            results = await asyncio.gather(
                *(zone.async_update_from_percentage(percentage) for zone in zones),
                return_exceptions=True,
            )
            for zone, result in zip(zones, results):
                if isinstance(result, Exception):
                    _LOGGER.error(
                        "Error updating zone %s from percentage: %s",
                        zone.name,
                        result,
                    )

        await self.store.async_save({ATTR_PERCENTAGE: percentage})

    @callback
    def notify_values_changed(
        self,
        zone: ZoneController,
        targets: LightTargets,
        context: Context | None = None,
    ) -> None:
        """Fire the values-changed event for a zone."""
        _LOGGER.debug(
            "Values changed for %s: brightness %.2f, temperature %.2f",
            zone.name,
            targets.brightness,
            targets.temperature,
        )
        event_data: dict[str, Any] = {
            ATTR_ENTRY_ID: zone.config_entry.entry_id,
            "name": zone.name,
            ATTR_BRIGHTNESS: targets.brightness,
            ATTR_TEMPERATURE: targets.temperature,
        }
        self.hass.bus.async_fire(EVENT_VALUES_CHANGED, event_data, context=context)


@callback
def async_get_percentage_source(hass: HomeAssistant) -> PercentageSource:
    """Return the shared percentage source, creating it on first use."""
    if (source := hass.data.get(DOMAIN)) is None:
        source = hass.data[DOMAIN] = PercentageSource(hass)
    return source
