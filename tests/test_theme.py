"""Tests for the persisted theme preference."""

import pytest

from donation_tracker.models.theme import DARK_PALETTE, LIGHT_PALETTE, ThemeMode
from donation_tracker.store import THEME_KEY


class TestThemeLoad:

    def test_absent_means_light(self, run, theme):
        assert run(theme.load()) is False
        assert theme.mode == ThemeMode.LIGHT
        assert theme.palette is LIGHT_PALETTE

    def test_stored_dark(self, run, storage, theme):
        storage.data[THEME_KEY] = "dark"

        assert run(theme.load()) is True
        assert theme.palette is DARK_PALETTE

    @pytest.mark.parametrize("stored", ["light", "blue", "DARK", ""])
    def test_anything_else_means_light(self, run, storage, theme, stored):
        storage.data[THEME_KEY] = stored
        assert run(theme.load()) is False

    def test_read_failure_means_light(self, run, storage, theme, audit_logger):
        storage.data[THEME_KEY] = "dark"
        storage.fail_reads = True

        assert run(theme.load()) is False
        assert "theme_load_failed" in audit_logger.types()


class TestThemeToggle:

    def test_toggle_persists_each_flip(self, run, storage, theme):
        run(theme.load())

        assert run(theme.toggle()) is True
        assert storage.data[THEME_KEY] == "dark"

        assert run(theme.toggle()) is False
        assert storage.data[THEME_KEY] == "light"

    def test_toggle_write_failure_keeps_flip(self, run, storage, theme, audit_logger):
        run(theme.load())
        storage.fail_writes = True

        assert run(theme.toggle()) is True
        assert theme.is_dark is True
        assert THEME_KEY not in storage.data
        assert "theme_save_failed" in audit_logger.types()
