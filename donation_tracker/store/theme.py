"""
Theme Preference

A process-wide dark/light flag stored as "dark" or "light" under the
"theme" key. Loaded once at startup, then only changed by toggle().
"""

from typing import Optional

from donation_tracker.audit import AuditLogger
from donation_tracker.models.theme import ThemeMode, ThemePalette, palette_for
from donation_tracker.services.storage import KeyValueStorageInterface, StorageError


THEME_KEY = "theme"


class ThemePreference:
    """Holds the current theme and persists changes to it."""

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._is_dark = False

    @property
    def is_dark(self) -> bool:
        return self._is_dark

    @property
    def mode(self) -> ThemeMode:
        return ThemeMode.from_flag(self._is_dark)

    @property
    def palette(self) -> ThemePalette:
        return palette_for(self._is_dark)

    async def load(self) -> bool:
        """
        Read the stored theme.

        Missing, unknown or unreadable values all mean light.
        """
        try:
            stored = await self._storage.get_item(THEME_KEY)
        except StorageError as e:
            await self._audit_logger.log_theme_load_failed(str(e))
            self._is_dark = False
            return self._is_dark

        self._is_dark = ThemeMode.from_stored(stored) == ThemeMode.DARK
        await self._audit_logger.log_theme_loaded(self.mode.value)
        return self._is_dark

    async def toggle(self) -> bool:
        """
        Flip the theme and persist it.

        The flipped value is kept even if the write fails.
        """
        self._is_dark = not self._is_dark
        mode = self.mode.value
        await self._audit_logger.log_theme_toggled(mode)

        try:
            await self._storage.set_item(THEME_KEY, mode)
        except StorageError as e:
            await self._audit_logger.log_theme_save_failed(str(e), mode)

        return self._is_dark
