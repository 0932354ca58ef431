"""Brightness and color temperature numbers for circadian zones.

Both numbers show the zone's current value as a whole percentage. Setting
either one is a manual override of that axis only and switches the zone to
manual mode.
"""

from __future__ import annotations

from dataclasses import dataclass

from homeassistant.components.number import (
    NumberEntity,
    NumberEntityDescription,
    NumberMode,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import PERCENTAGE
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import KEY_BRIGHTNESS, KEY_TEMPERATURE
from .entity import CircadianZoneEntity


@dataclass(frozen=True, kw_only=True)
class ZoneNumberEntityDescription(NumberEntityDescription):
    """Describes a zone level number."""

    axis: str


NUMBER_DESCRIPTIONS: tuple[ZoneNumberEntityDescription, ...] = (
    ZoneNumberEntityDescription(
        key=KEY_BRIGHTNESS,
        axis="brightness",
        name="Brightness",
        icon="mdi:brightness-6",
        native_min_value=0,
        native_max_value=100,
        native_step=1,
        native_unit_of_measurement=PERCENTAGE,
        mode=NumberMode.SLIDER,
    ),
    ZoneNumberEntityDescription(
        key=KEY_TEMPERATURE,
        axis="temperature",
        name="Color temperature",
        icon="mdi:thermometer-lines",
        native_min_value=0,
        native_max_value=100,
        native_step=1,
        native_unit_of_measurement=PERCENTAGE,
        mode=NumberMode.SLIDER,
    ),
)


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the zone level numbers."""
    coordinator = config_entry.runtime_data

    async_add_entities(
        ZoneLevelNumber(
            coordinator=coordinator,
            config_entry=config_entry,
            entity_description=description,
        )
        for description in NUMBER_DESCRIPTIONS
    )


class ZoneLevelNumber(CircadianZoneEntity, NumberEntity):
    """Current brightness or temperature of a zone, settable as an override."""

    entity_description: ZoneNumberEntityDescription

    @property
    def native_value(self) -> float:
        targets = self._coordinator.state.targets
        return targets.as_percentages()[self.entity_description.axis]

    async def async_set_native_value(self, value: float) -> None:
        await self._coordinator.async_override_values(
            **{self.entity_description.axis: value / 100},
            context=self._context,
        )
