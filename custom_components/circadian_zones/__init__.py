"""The Circadian Zones integration."""

from __future__ import annotations

import logging

import voluptuous as vol
from homeassistant.config_entries import SOURCE_IMPORT, ConfigEntry
from homeassistant.const import CONF_NAME, Platform
from homeassistant.core import HomeAssistant, ServiceCall
from homeassistant.exceptions import ServiceValidationError
from homeassistant.helpers import config_validation as cv

from .const import (
    ATTR_PERCENTAGE,
    CONF_MAX_BRIGHTNESS,
    CONF_MIN_BRIGHTNESS,
    CONF_NIGHT_BRIGHTNESS,
    CONF_NIGHT_TEMP,
    CONF_NOON_TEMP,
    CONF_SUNSET_TEMP,
    DEFAULT_MAX_BRIGHTNESS,
    DEFAULT_MIN_BRIGHTNESS,
    DEFAULT_NIGHT_BRIGHTNESS,
    DEFAULT_NIGHT_TEMP,
    DEFAULT_NOON_TEMP,
    DEFAULT_SUNSET_TEMP,
    DOMAIN,
    SERVICE_REFRESH_ZONE,
    SERVICE_SET_PERCENTAGE,
)
from .percentage_source import async_get_percentage_source
from .zone_controller import ZoneController, settings_from_entry
from .zone_store import ZoneStore

_LOGGER = logging.getLogger(__name__)

_PLATFORMS: list[Platform] = [Platform.NUMBER, Platform.SELECT, Platform.SENSOR]

_PERCENT = vol.All(vol.Coerce(int), vol.Range(min=0, max=100))

# YAML configuration schema
ZONE_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_NAME): cv.string,
        vol.Optional(CONF_SUNSET_TEMP, default=DEFAULT_SUNSET_TEMP): _PERCENT,
        vol.Optional(CONF_NOON_TEMP, default=DEFAULT_NOON_TEMP): _PERCENT,
        vol.Optional(CONF_MIN_BRIGHTNESS, default=DEFAULT_MIN_BRIGHTNESS): _PERCENT,
        vol.Optional(CONF_MAX_BRIGHTNESS, default=DEFAULT_MAX_BRIGHTNESS): _PERCENT,
        vol.Optional(CONF_NIGHT_TEMP, default=DEFAULT_NIGHT_TEMP): _PERCENT,
        vol.Optional(
            CONF_NIGHT_BRIGHTNESS, default=DEFAULT_NIGHT_BRIGHTNESS
        ): _PERCENT,
    }
)

CONFIG_SCHEMA = vol.Schema(
    {DOMAIN: vol.All(cv.ensure_list, [ZONE_SCHEMA])},
    extra=vol.ALLOW_EXTRA,
)

SERVICE_SET_PERCENTAGE_SCHEMA = vol.Schema(
    {
        vol.Required(ATTR_PERCENTAGE): vol.All(
            vol.Coerce(float), vol.Range(min=0, max=1)
        ),
    }
)

SERVICE_REFRESH_ZONE_SCHEMA = vol.Schema(
    {
        vol.Required("config_entry_id"): cv.string,
    }
)


async def async_setup(hass: HomeAssistant, config: dict) -> bool:
    """Set up Circadian Zones: shared percentage source, services, YAML."""
    source = async_get_percentage_source(hass)
    await source.async_load()

    async def handle_set_percentage(call: ServiceCall) -> None:
        """Push a new day-progress percentage to all zones."""
        await source.async_set_percentage(call.data[ATTR_PERCENTAGE])

    async def handle_refresh_zone(call: ServiceCall) -> None:
        """Recompute a single zone."""
        config_entry_id = call.data["config_entry_id"]
        entry = hass.config_entries.async_get_entry(config_entry_id)
        if entry is None or entry.domain != DOMAIN or not getattr(
            entry, "runtime_data", None
        ):
            raise ServiceValidationError(
                f"Circadian zone {config_entry_id} is not loaded"
            )
        await entry.runtime_data.async_refresh_zone(context=call.context)

    hass.services.async_register(
        DOMAIN,
        SERVICE_SET_PERCENTAGE,
        handle_set_percentage,
        schema=SERVICE_SET_PERCENTAGE_SCHEMA,
    )
    hass.services.async_register(
        DOMAIN,
        SERVICE_REFRESH_ZONE,
        handle_refresh_zone,
        schema=SERVICE_REFRESH_ZONE_SCHEMA,
    )

    if DOMAIN not in config:
        return True

    for zone_config in config[DOMAIN]:
        name = zone_config[CONF_NAME]

        # Check if this zone already exists (by name)
        existing_entries = hass.config_entries.async_entries(DOMAIN)
        if any(entry.title == name for entry in existing_entries):
            _LOGGER.info(
                "Circadian zone '%s' already exists, skipping YAML import", name
            )
            continue

        _LOGGER.info("Importing circadian zone '%s' from YAML", name)
        hass.async_create_task(
            hass.config_entries.flow.async_init(
                DOMAIN,
                context={"source": SOURCE_IMPORT},
                data=dict(zone_config),
            )
        )

    return True


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up a circadian zone from a config entry."""
    source = async_get_percentage_source(hass)
    zone_controller = ZoneController(
        hass, entry, source, ZoneStore(hass, entry.entry_id)
    )

    # Store controller in runtime_data
    entry.runtime_data = zone_controller

    await zone_controller.async_setup()

    await hass.config_entries.async_forward_entry_setups(entry, _PLATFORMS)

    entry.async_on_unload(entry.add_update_listener(async_update_options))

    return True


async def async_update_options(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Apply updated zone settings."""
    message = await entry.runtime_data.async_update_settings(
        settings_from_entry(entry)
    )
    if message:
        _LOGGER.warning("Settings for %s were not applied: %s", entry.title, message)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    # Clean up controller (only if it was set up)
    if hasattr(entry, "runtime_data") and entry.runtime_data:
        entry.runtime_data.async_cleanup_listeners()

    return await hass.config_entries.async_unload_platforms(entry, _PLATFORMS)


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Delete persisted values when a zone is removed."""
    await ZoneStore(hass, entry.entry_id).async_remove()
