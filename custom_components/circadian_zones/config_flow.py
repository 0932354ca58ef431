"""Config flow for the Circadian Zones integration."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import voluptuous as vol

from homeassistant.config_entries import (
    ConfigEntry,
    ConfigFlow,
    ConfigFlowResult,
    OptionsFlow,
)
from homeassistant.const import CONF_NAME
from homeassistant.core import callback
from homeassistant.exceptions import HomeAssistantError

from .const import (
    CONF_MAX_BRIGHTNESS,
    CONF_MIN_BRIGHTNESS,
    CONF_NIGHT_BRIGHTNESS,
    CONF_NIGHT_TEMP,
    CONF_NOON_TEMP,
    CONF_SUNSET_TEMP,
    DEFAULT_SETTINGS,
    DOMAIN,
    SETTINGS_KEYS,
)
from .light_targets import percent_to_fraction

_LOGGER = logging.getLogger(__name__)

PERCENT = vol.All(vol.Coerce(int), vol.Range(min=0, max=100))


def get_settings_schema(data: Mapping[str, Any] | None = None) -> dict:
    """Get the zone settings fields with optional default values."""

    def _default(key: str) -> Any:
        if data and data.get(key) is not None:
            return data[key]
        return DEFAULT_SETTINGS[key]

    return {
        vol.Optional(CONF_SUNSET_TEMP, default=_default(CONF_SUNSET_TEMP)): PERCENT,
        vol.Optional(CONF_NOON_TEMP, default=_default(CONF_NOON_TEMP)): PERCENT,
        vol.Optional(
            CONF_MIN_BRIGHTNESS, default=_default(CONF_MIN_BRIGHTNESS)
        ): PERCENT,
        vol.Optional(
            CONF_MAX_BRIGHTNESS, default=_default(CONF_MAX_BRIGHTNESS)
        ): PERCENT,
        vol.Optional(CONF_NIGHT_TEMP, default=_default(CONF_NIGHT_TEMP)): PERCENT,
        vol.Optional(
            CONF_NIGHT_BRIGHTNESS, default=_default(CONF_NIGHT_BRIGHTNESS)
        ): PERCENT,
    }


def get_user_schema(data: Mapping[str, Any] | None = None) -> vol.Schema:
    """Get the user step schema: zone name plus settings."""
    if data and data.get(CONF_NAME):
        name_key = vol.Required(CONF_NAME, default=data[CONF_NAME])
    else:
        name_key = vol.Required(CONF_NAME)
    return vol.Schema({name_key: str, **get_settings_schema(data)})


def validate_settings(settings: Mapping[str, Any]) -> None:
    """Validate zone settings.

    Only the temperature ordering is checked: the sunset temperature must be
    warmer (higher) than the noon temperature after conversion to fractions.
    """
    sunset = settings.get(CONF_SUNSET_TEMP)
    if sunset is None:
        sunset = DEFAULT_SETTINGS[CONF_SUNSET_TEMP]
    noon = settings.get(CONF_NOON_TEMP)
    if noon is None:
        noon = DEFAULT_SETTINGS[CONF_NOON_TEMP]

    if not percent_to_fraction(sunset) > percent_to_fraction(noon):
        raise InvalidTemperatureRange(
            f"Sunset temperature ({sunset}%) must be higher than "
            f"noon temperature ({noon}%)"
        )


class CircadianZonesConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for a circadian zone."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Handle the initial step."""
        errors: dict[str, str] = {}
        if user_input is not None:
            try:
                validate_settings(user_input)
            except InvalidTemperatureRange:
                errors["base"] = "temperature_error"
            else:
                name = user_input[CONF_NAME]
                await self.async_set_unique_id(name.strip().lower())
                self._abort_if_unique_id_configured()
                return self.async_create_entry(title=name, data=user_input)

        return self.async_show_form(
            step_id="user",
            data_schema=get_user_schema(user_input),
            errors=errors,
        )

    async def async_step_import(
        self, import_config: dict[str, Any]
    ) -> ConfigFlowResult:
        """Handle import from configuration.yaml."""
        try:
            validate_settings(import_config)
        except InvalidTemperatureRange as err:
            _LOGGER.error(
                "Cannot import circadian zone '%s': %s",
                import_config.get(CONF_NAME),
                err,
            )
            return self.async_abort(reason="temperature_error")

        name = import_config[CONF_NAME]
        await self.async_set_unique_id(name.strip().lower())
        self._abort_if_unique_id_configured()
        return self.async_create_entry(title=name, data=import_config)

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> CircadianZonesOptionsFlow:
        """Get the options flow for this handler."""
        return CircadianZonesOptionsFlow()


class CircadianZonesOptionsFlow(OptionsFlow):
    """Handle zone settings updates."""

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Manage the zone settings."""
        errors: dict[str, str] = {}
        if user_input is not None:
            try:
                validate_settings(user_input)
            except InvalidTemperatureRange:
                errors["base"] = "temperature_error"
            else:
                return self.async_create_entry(title="", data=user_input)

        current = {
            key: self.config_entry.options.get(
                key, self.config_entry.data.get(key)
            )
            for key in SETTINGS_KEYS
        }
        return self.async_show_form(
            step_id="init",
            data_schema=vol.Schema(get_settings_schema(user_input or current)),
            errors=errors,
        )


class InvalidTemperatureRange(HomeAssistantError):
    """Error to indicate the sunset temperature is not above noon."""
