"""Persisted capability values for a circadian zone."""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.core import HomeAssistant
from homeassistant.helpers.storage import Store

from .const import DOMAIN, STORAGE_VERSION

_LOGGER = logging.getLogger(__name__)


class ZoneStore:
    """Key/value store for one zone's mode, brightness and temperature.

    Values are kept in memory and the whole document is written on every
    ``async_set_value``. Write failures propagate to the caller.
    """

    def __init__(self, hass: HomeAssistant, entry_id: str) -> None:
        self._store: Store[dict[str, Any]] = Store(
            hass, STORAGE_VERSION, f"{DOMAIN}.{entry_id}"
        )
        self._data: dict[str, Any] = {}

    async def async_load(self) -> dict[str, Any]:
        """Load persisted values (empty on first run)."""
        self._data = await self._store.async_load() or {}
        _LOGGER.debug("Loaded zone values: %s", self._data)
        return dict(self._data)

    async def async_set_value(self, key: str, value: Any) -> None:
        """Persist a single value."""
        self._data[key] = value
        await self._store.async_save(self._data)

    async def async_remove(self) -> None:
        """Delete the persisted document."""
        self._data = {}
        await self._store.async_remove()
