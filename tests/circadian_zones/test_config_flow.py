"""Tests for the Circadian Zones config and options flows."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
from homeassistant.config_entries import SOURCE_IMPORT, SOURCE_USER
from homeassistant.const import CONF_NAME
from homeassistant.core import HomeAssistant
from homeassistant.data_entry_flow import FlowResultType
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.circadian_zones.config_flow import (
    InvalidTemperatureRange,
    validate_settings,
)
from custom_components.circadian_zones.const import (
    CONF_MIN_BRIGHTNESS,
    CONF_NIGHT_BRIGHTNESS,
    CONF_NOON_TEMP,
    CONF_SUNSET_TEMP,
    DEFAULT_SETTINGS,
    DOMAIN,
)


@pytest.fixture
def mock_setup_entry() -> Generator[AsyncMock]:
    """Skip entry setup."""
    with patch(
        "custom_components.circadian_zones.async_setup_entry",
        return_value=True,
    ) as mock_setup:
        yield mock_setup


class TestValidateSettings:
    """Test settings validation."""

    def test_valid(self, mock_config_data: dict[str, Any]) -> None:
        """Default-like settings pass."""
        validate_settings(mock_config_data)

    @pytest.mark.parametrize(("sunset", "noon"), [(40, 60), (50, 50)])
    def test_sunset_not_above_noon(self, sunset: int, noon: int) -> None:
        """Sunset must be strictly warmer than noon."""
        with pytest.raises(InvalidTemperatureRange):
            validate_settings({CONF_SUNSET_TEMP: sunset, CONF_NOON_TEMP: noon})

    def test_missing_keys_use_defaults(self) -> None:
        """Missing temperatures fall back to defaults."""
        validate_settings({})
        with pytest.raises(InvalidTemperatureRange):
            validate_settings({CONF_SUNSET_TEMP: 30})

    def test_brightness_not_checked(self) -> None:
        """Brightness bounds are accepted as given."""
        validate_settings({CONF_MIN_BRIGHTNESS: 90, "max_brightness": 10})


@pytest.mark.usefixtures("mock_setup_entry")
class TestUserFlow:
    """Test the user step."""

    async def test_create_entry(self, hass: HomeAssistant) -> None:
        """A name alone creates a zone with default settings."""
        result = await hass.config_entries.flow.async_init(
            DOMAIN, context={"source": SOURCE_USER}
        )
        assert result["type"] is FlowResultType.FORM
        assert result["step_id"] == "user"
        assert result["errors"] == {}

        result = await hass.config_entries.flow.async_configure(
            result["flow_id"], {CONF_NAME: "Kitchen"}
        )

        assert result["type"] is FlowResultType.CREATE_ENTRY
        assert result["title"] == "Kitchen"
        assert result["data"] == {CONF_NAME: "Kitchen", **DEFAULT_SETTINGS}
        assert result["result"].unique_id == "kitchen"

    async def test_temperature_error(self, hass: HomeAssistant) -> None:
        """Inverted temperatures show an error and keep the form."""
        result = await hass.config_entries.flow.async_init(
            DOMAIN, context={"source": SOURCE_USER}
        )
        result = await hass.config_entries.flow.async_configure(
            result["flow_id"],
            {CONF_NAME: "Kitchen", CONF_SUNSET_TEMP: 40, CONF_NOON_TEMP: 60},
        )

        assert result["type"] is FlowResultType.FORM
        assert result["errors"] == {"base": "temperature_error"}

        result = await hass.config_entries.flow.async_configure(
            result["flow_id"],
            {CONF_NAME: "Kitchen", CONF_SUNSET_TEMP: 90, CONF_NOON_TEMP: 60},
        )
        assert result["type"] is FlowResultType.CREATE_ENTRY
        assert result["data"][CONF_SUNSET_TEMP] == 90

    async def test_duplicate_name(
        self, hass: HomeAssistant, mock_config_entry: MockConfigEntry
    ) -> None:
        """Zone names are unique regardless of case."""
        mock_config_entry.add_to_hass(hass)

        result = await hass.config_entries.flow.async_init(
            DOMAIN, context={"source": SOURCE_USER}
        )
        result = await hass.config_entries.flow.async_configure(
            result["flow_id"], {CONF_NAME: " living ROOM "}
        )

        assert result["type"] is FlowResultType.ABORT
        assert result["reason"] == "already_configured"


@pytest.mark.usefixtures("mock_setup_entry")
class TestImportFlow:
    """Test importing from configuration.yaml."""

    async def test_import(
        self, hass: HomeAssistant, mock_config_data: dict[str, Any]
    ) -> None:
        """YAML zones become config entries."""
        result = await hass.config_entries.flow.async_init(
            DOMAIN, context={"source": SOURCE_IMPORT}, data=mock_config_data
        )

        assert result["type"] is FlowResultType.CREATE_ENTRY
        assert result["title"] == "Living Room"
        assert result["data"] == mock_config_data

    async def test_import_invalid(
        self, hass: HomeAssistant, mock_config_data: dict[str, Any]
    ) -> None:
        """Invalid YAML zones are not imported."""
        result = await hass.config_entries.flow.async_init(
            DOMAIN,
            context={"source": SOURCE_IMPORT},
            data={**mock_config_data, CONF_NOON_TEMP: 100},
        )

        assert result["type"] is FlowResultType.ABORT
        assert result["reason"] == "temperature_error"
        assert hass.config_entries.async_entries(DOMAIN) == []


@pytest.mark.usefixtures("mock_setup_entry")
class TestOptionsFlow:
    """Test the options flow."""

    async def test_update_settings(
        self, hass: HomeAssistant, mock_config_entry: MockConfigEntry
    ) -> None:
        """Valid settings are stored as options."""
        mock_config_entry.add_to_hass(hass)

        result = await hass.config_entries.options.async_init(
            mock_config_entry.entry_id
        )
        assert result["type"] is FlowResultType.FORM
        assert result["step_id"] == "init"

        result = await hass.config_entries.options.async_configure(
            result["flow_id"], {CONF_NIGHT_BRIGHTNESS: 20}
        )

        assert result["type"] is FlowResultType.CREATE_ENTRY
        assert mock_config_entry.options[CONF_NIGHT_BRIGHTNESS] == 20
        assert mock_config_entry.options[CONF_NOON_TEMP] == 40

    async def test_rejects_inverted_temperatures(
        self, hass: HomeAssistant, mock_config_entry: MockConfigEntry
    ) -> None:
        """Inverted temperatures are rejected and options stay unchanged."""
        mock_config_entry.add_to_hass(hass)

        result = await hass.config_entries.options.async_init(
            mock_config_entry.entry_id
        )
        result = await hass.config_entries.options.async_configure(
            result["flow_id"], {CONF_SUNSET_TEMP: 40, CONF_NOON_TEMP: 60}
        )

        assert result["type"] is FlowResultType.FORM
        assert result["errors"] == {"base": "temperature_error"}
        assert mock_config_entry.options == {}
