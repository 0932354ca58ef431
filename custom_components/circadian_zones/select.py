"""Mode select for circadian zones."""

from __future__ import annotations

from homeassistant.components.select import SelectEntity, SelectEntityDescription
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import MODES
from .entity import CircadianZoneEntity

MODE_DESCRIPTION = SelectEntityDescription(
    key="adaptive_mode",
    name="Mode",
    icon="mdi:theme-light-dark",
    options=MODES,
)


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the mode select."""
    coordinator = config_entry.runtime_data

    async_add_entities(
        [
            ZoneModeSelect(
                coordinator=coordinator,
                config_entry=config_entry,
                entity_description=MODE_DESCRIPTION,
            )
        ]
    )


class ZoneModeSelect(CircadianZoneEntity, SelectEntity):
    """Selects between adaptive, night and manual mode."""

    @property
    def current_option(self) -> str:
        return self._coordinator.mode

    async def async_select_option(self, option: str) -> None:
        await self._coordinator.async_set_mode(option, context=self._context)
