# File: managers/system_manager.py
"""System Manager for GamblingDen lobby settings.

Holds the persisted settings record ({"sound": bool}). Malformed stored
settings fall back to defaults.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from ..events import SettingsChanged
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..coordinator import GamblingDenCoordinator
    from ..type_defs import SettingsData


class SystemManager(BaseManager):
    """Settings owner."""

    def __init__(self, coordinator: GamblingDenCoordinator) -> None:
        """Initialize with default settings."""
        super().__init__(coordinator)
        self._settings: SettingsData = {
            const.DATA_SETTINGS_SOUND: const.DEFAULT_SOUND_ENABLED
        }

    def load(self) -> None:
        """Rehydrate settings."""
        raw = self.store.load_json(const.STORAGE_KEY_SETTINGS, {})
        if not isinstance(raw, dict):
            const.LOGGER.warning(
                "WARNING: Stored settings %r are not an object. Using defaults", raw
            )
            return
        sound = raw.get(const.DATA_SETTINGS_SOUND, const.DEFAULT_SOUND_ENABLED)
        if isinstance(sound, bool):
            self._settings[const.DATA_SETTINGS_SOUND] = sound

    def setup(self) -> None:
        """No subscriptions."""

    def get_settings(self) -> SettingsData:
        """Return a copy of the settings record."""
        return {const.DATA_SETTINGS_SOUND: self.is_sound_enabled()}

    def is_sound_enabled(self) -> bool:
        """Return True if sound effects are enabled."""
        return self._settings[const.DATA_SETTINGS_SOUND]

    def set_sound_enabled(self, enabled: bool) -> None:
        """Persist the sound flag and publish SettingsChanged."""
        self._settings[const.DATA_SETTINGS_SOUND] = bool(enabled)
        self.store.save_json(const.STORAGE_KEY_SETTINGS, self._settings)
        const.LOGGER.debug("DEBUG: Sound enabled set to %s", bool(enabled))
        self.emit(SettingsChanged(sound_enabled=bool(enabled)))
