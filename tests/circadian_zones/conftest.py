"""Fixtures for Circadian Zones integration tests."""

from __future__ import annotations

from typing import Any

import pytest
from homeassistant.const import CONF_NAME
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.circadian_zones.const import (
    CONF_MAX_BRIGHTNESS,
    CONF_MIN_BRIGHTNESS,
    CONF_NIGHT_BRIGHTNESS,
    CONF_NIGHT_TEMP,
    CONF_NOON_TEMP,
    CONF_SUNSET_TEMP,
    DOMAIN,
    STORAGE_VERSION,
)
from custom_components.circadian_zones.percentage_source import PercentageSource
from custom_components.circadian_zones.state_machine import ZoneConfig
from custom_components.circadian_zones.zone_controller import ZoneController

ENTRY_ID = "test_entry_id"
STORAGE_KEY = f"{DOMAIN}.{ENTRY_ID}"


@pytest.fixture
def mock_config_data() -> dict[str, Any]:
    """Return mock zone settings."""
    return {
        CONF_NAME: "Living Room",
        CONF_SUNSET_TEMP: 100,
        CONF_NOON_TEMP: 40,
        CONF_MIN_BRIGHTNESS: 10,
        CONF_MAX_BRIGHTNESS: 100,
        CONF_NIGHT_TEMP: 100,
        CONF_NIGHT_BRIGHTNESS: 10,
    }


@pytest.fixture
def zone_config(mock_config_data: dict[str, Any]) -> ZoneConfig:
    """Return the zone config matching mock_config_data."""
    return ZoneConfig.from_settings(mock_config_data)


@pytest.fixture
def mock_config_entry(mock_config_data: dict[str, Any]) -> MockConfigEntry:
    """Return a mocked config entry."""
    return MockConfigEntry(
        domain=DOMAIN,
        title=mock_config_data[CONF_NAME],
        data=mock_config_data,
        options={},
        entry_id=ENTRY_ID,
        unique_id="living room",
    )


@pytest.fixture
def stored_values() -> dict[str, Any] | None:
    """Persisted capability values present before setup (none by default)."""
    return None


@pytest.fixture
def hass_with_zone_storage(
    hass: HomeAssistant, hass_storage: dict[str, Any], stored_values
) -> HomeAssistant:
    """Preload the zone store with stored_values."""
    if stored_values is not None:
        hass_storage[STORAGE_KEY] = {
            "version": STORAGE_VERSION,
            "minor_version": 1,
            "key": STORAGE_KEY,
            "data": stored_values,
        }
    return hass


@pytest.fixture
def source(hass: HomeAssistant) -> PercentageSource:
    """Return a standalone percentage source at sunset."""
    return PercentageSource(hass, percentage=0.0)


@pytest.fixture
async def controller(
    hass_with_zone_storage: HomeAssistant,
    mock_config_entry: MockConfigEntry,
    source: PercentageSource,
) -> ZoneController:
    """Return a zone controller that has completed setup."""
    mock_config_entry.add_to_hass(hass_with_zone_storage)
    zone = ZoneController(hass_with_zone_storage, mock_config_entry, source)
    await zone.async_setup()
    await hass_with_zone_storage.async_block_till_done()
    return zone


@pytest.fixture
async def init_integration(
    hass_with_zone_storage: HomeAssistant,
    mock_config_entry: MockConfigEntry,
) -> MockConfigEntry:
    """Set up the integration with one zone."""
    mock_config_entry.add_to_hass(hass_with_zone_storage)
    assert await hass_with_zone_storage.config_entries.async_setup(
        mock_config_entry.entry_id
    )
    await hass_with_zone_storage.async_block_till_done()
    return mock_config_entry
