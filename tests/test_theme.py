"""Tests for the theme context and its preference store."""

from __future__ import annotations

import json

import pytest

from processos_search.config import THEME_STORAGE_KEY
from processos_search.theme import (
    DARK,
    LIGHT,
    THEMES,
    SystemThemePreference,
    ThemeContext,
    ThemePreferenceStore,
)


@pytest.fixture
def store(tmp_path) -> ThemePreferenceStore:
    return ThemePreferenceStore(tmp_path / "prefs.json")


class TestSystemThemePreference:
    @pytest.mark.parametrize(
        "env, expected",
        [
            ({}, LIGHT),
            ({"PROCESSOS_THEME_SYSTEM": "dark"}, DARK),
            ({"COLORFGBG": "15;0"}, DARK),
            ({"COLORFGBG": "0;15"}, LIGHT),
            ({"COLORFGBG": "garbage"}, LIGHT),
        ],
    )
    def test_current(self, env, expected):
        assert SystemThemePreference(env).current() == expected


class TestThemePreferenceStore:
    def test_missing_file(self, store):
        assert store.load() is None

    def test_save_and_load(self, store):
        store.save(DARK)
        assert store.load() == DARK
        assert json.loads(store.path.read_text()) == {THEME_STORAGE_KEY: DARK}

    def test_invalid_content_ignored(self, store):
        store.path.write_text("{not json")
        assert store.load() is None
        store.path.write_text(json.dumps({THEME_STORAGE_KEY: "sepia"}))
        assert store.load() is None

    def test_clear(self, store):
        store.save(LIGHT)
        store.clear()
        assert store.load() is None


class TestThemeContext:
    def test_follows_system_without_saved_preference(self, store):
        system = SystemThemePreference({"PROCESSOS_THEME_SYSTEM": "dark"})
        with ThemeContext(store, system) as ctx:
            assert ctx.mode == DARK
            assert not ctx.is_user_preference
            system.notify(LIGHT)
            assert ctx.mode == LIGHT
        assert not store.path.exists()

    def test_saved_preference_wins(self, store):
        store.save(DARK)
        system = SystemThemePreference({})
        with ThemeContext(store, system) as ctx:
            assert ctx.mode == DARK
            system.notify(LIGHT)
            assert ctx.mode == DARK

    def test_toggle_persists(self, store):
        with ThemeContext(store, SystemThemePreference({})) as ctx:
            assert ctx.toggle() == DARK
            assert ctx.is_user_preference
            assert ctx.theme is THEMES[DARK]
        assert store.load() == DARK

    def test_set_mode_rejects_unknown(self, store):
        with ThemeContext(store, SystemThemePreference({})) as ctx:
            with pytest.raises(ValueError):
                ctx.set_mode("sepia")

    def test_close_removes_listener(self, store):
        system = SystemThemePreference({})
        ctx = ThemeContext(store, system).open()
        ctx.close()
        system.notify(DARK)
        assert ctx.mode == LIGHT

    def test_use_system_forgets_choice(self, store):
        system = SystemThemePreference({"PROCESSOS_THEME_SYSTEM": "dark"})
        with ThemeContext(store, system) as ctx:
            ctx.set_mode(LIGHT)
            ctx.use_system()
            assert ctx.mode == DARK
            assert not ctx.is_user_preference
        assert store.load() is None
