import json
import os

import pytest

from ksp_mod_admin.models import ModInfo
from ksp_mod_admin.services import mod_store, settings_store
from ksp_mod_admin.services.settings_store import Settings
from ksp_mod_admin.util.errors import ConfigError


def test_settings_default_when_missing():
    assert settings_store.load_settings() == Settings()


def test_settings_default_when_corrupt(home):
    home.mkdir(parents=True)
    (home / "settings.json").write_text("{not json", encoding="utf-8")
    assert settings_store.load_settings() == Settings()


@pytest.mark.parametrize("content", ["[1, 2]", '"x"', "5", "null"])
def test_settings_default_when_not_an_object(home, content):
    home.mkdir(parents=True)
    (home / "settings.json").write_text(content, encoding="utf-8")
    assert settings_store.load_settings() == Settings()


@pytest.mark.parametrize("value", ["/games/KSP", 5, {"a": 1}])
def test_settings_ignore_malformed_game_paths(home, value):
    home.mkdir(parents=True)
    data = {"known_game_paths": value, "selected_game_path": "/games/KSP"}
    (home / "settings.json").write_text(json.dumps(data), encoding="utf-8")

    settings = settings_store.load_settings()

    assert settings.known_game_paths == ()
    assert settings.selected_game_path == "/games/KSP"


def test_settings_saved_and_loaded(home):
    settings = Settings(download_path="/tmp/dl", known_game_paths=("/games/KSP",), http_timeout_s=5.0)
    settings_store.save_settings(settings)
    assert json.loads((home / "settings.json").read_text())["known_game_paths"] == ["/games/KSP"]
    assert settings_store.load_settings() == settings


def test_download_path_defaults_to_data_dir(home):
    assert Settings().effective_download_path == str(home / "downloads")
    assert Settings(download_path="/x").effective_download_path == "/x"


def test_add_and_select_game_paths(tmp_path):
    a = os.path.normpath(str(tmp_path / "KSP-1.12"))
    b = os.path.normpath(str(tmp_path / "KSP-1.8"))

    settings_store.add_game_path(a)
    settings = settings_store.add_game_path(b, select=False)
    assert settings.known_game_paths == (a, b)
    assert settings.selected_game_path == a

    settings = settings_store.add_game_path(a)
    assert settings.known_game_paths == (a, b)

    assert settings_store.select_game_path(b).selected_game_path == b
    assert settings_store.load_settings().selected_game_path == b


def test_select_unknown_game_path():
    with pytest.raises(ConfigError):
        settings_store.select_game_path("/nowhere")


def test_mod_store_add_update_remove():
    assert mod_store.load_mods() == []

    mod_store.add_or_update_mod(ModInfo(name="A", mod_url="https://github.com/k/a", version="1"))
    mod_store.add_or_update_mod(ModInfo(name="B", mod_url="https://github.com/k/b"))
    mods = mod_store.add_or_update_mod(ModInfo(name="A", mod_url="https://github.com/k/a", version="2"))

    assert [(m.name, m.version) for m in mods] == [("A", "2"), ("B", None)]
    assert mod_store.find_mod(mod_store.load_mods(), "https://github.com/k/b").name == "B"

    assert mod_store.remove_mod("https://github.com/k/a")
    assert not mod_store.remove_mod("https://github.com/k/a")
    assert [m.name for m in mod_store.load_mods()] == ["B"]


def test_mod_store_ignores_garbage(home):
    home.mkdir(parents=True)
    (home / "mods.json").write_text("[1, 2]", encoding="utf-8")
    assert mod_store.load_mods() == []


def test_data_dir_precedence(monkeypatch, tmp_path):
    from ksp_mod_admin.util.paths import data_dir

    monkeypatch.delenv("KSP_MOD_ADMIN_HOME")
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path / "local"))
    assert data_dir() == tmp_path / "local" / "KSPModAdmin"

    monkeypatch.delenv("LOCALAPPDATA")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
    assert data_dir() == tmp_path / "xdg" / "ksp_mod_admin"
