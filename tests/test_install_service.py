import os
from zipfile import ZipFile

import pytest

from ksp_mod_admin.services.install_service import install_archive
from ksp_mod_admin.util.errors import InstallError


def make_zip(path, files):
    with ZipFile(path, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return str(path)


@pytest.fixture
def game_dir(tmp_path):
    d = tmp_path / "KSP"
    (d / "GameData" / "Squad").mkdir(parents=True)
    (d / "GameData" / "Squad" / "keep.cfg").write_text("stock")
    return d


def test_gamedata_folder_inside_archive_is_preferred(tmp_path, game_dir):
    archive = make_zip(
        tmp_path / "SuperMod-1.4.2.zip",
        {
            "SuperMod-1.4.2/GameData/SuperMod/Parts/engine.cfg": "part",
            "SuperMod-1.4.2/README.txt": "readme",
        },
    )

    installed = install_archive(archive, str(game_dir))

    assert installed == [os.path.join("GameData", "SuperMod")]
    assert (game_dir / "GameData" / "SuperMod" / "Parts" / "engine.cfg").read_text() == "part"
    assert (game_dir / "GameData" / "Squad" / "keep.cfg").exists()
    assert not (game_dir / "README.txt").exists()


def test_loose_mod_folder_lands_in_gamedata(tmp_path, game_dir):
    archive = make_zip(tmp_path / "v0.9.1.zip", {"OldMod/Plugins/OldMod.dll": "dll"})

    installed = install_archive(archive, str(game_dir))

    assert installed == [os.path.join("GameData", "OldMod")]
    assert (game_dir / "GameData" / "OldMod" / "Plugins" / "OldMod.dll").exists()


def test_without_preferred_folder_single_root_is_unwrapped(tmp_path, game_dir):
    archive = make_zip(tmp_path / "ship.zip", {"Craft-1.0/Ships/VAB/Rocket.craft": "craft"})

    installed = install_archive(archive, str(game_dir), prefer_folder=None)

    assert installed == ["Ships"]
    assert (game_dir / "Ships" / "VAB" / "Rocket.craft").exists()


def test_reinstall_overwrites_existing_files(tmp_path, game_dir):
    first = make_zip(tmp_path / "a.zip", {"GameData/SuperMod/a.cfg": "v1"})
    second = make_zip(tmp_path / "b.zip", {"GameData/SuperMod/a.cfg": "v2"})

    install_archive(first, str(game_dir))
    install_archive(second, str(game_dir))

    assert (game_dir / "GameData" / "SuperMod" / "a.cfg").read_text() == "v2"


def test_unsupported_archive(tmp_path, game_dir):
    archive = tmp_path / "mod.7z"
    archive.write_bytes(b"7z")
    with pytest.raises(InstallError):
        install_archive(str(archive), str(game_dir))


def test_broken_zip(tmp_path, game_dir):
    archive = tmp_path / "mod.zip"
    archive.write_bytes(b"not a zip")
    with pytest.raises(InstallError):
        install_archive(str(archive), str(game_dir))


def test_missing_game_dir(tmp_path):
    archive = make_zip(tmp_path / "a.zip", {"GameData/x.cfg": ""})
    with pytest.raises(InstallError):
        install_archive(archive, str(tmp_path / "nope"))
