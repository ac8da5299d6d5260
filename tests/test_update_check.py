from datetime import datetime, timezone

from ksp_mod_admin.models import ModInfo
from ksp_mod_admin.site_handlers.base import is_update
from ksp_mod_admin.site_handlers.github import GitHubHandler


OLD = datetime(2015, 1, 1, tzinfo=timezone.utc)
NEW = datetime(2016, 1, 1, tzinfo=timezone.utc)


def test_version_appears():
    assert is_update(ModInfo(), ModInfo(version="1.0"))


def test_version_compare_wins_over_dates():
    old = ModInfo(version="1.4.2", change_date=OLD)
    new = ModInfo(version="1.4.2", change_date=NEW)
    assert not is_update(old, new)
    assert is_update(ModInfo(version="1.4.1"), ModInfo(version="1.4.2"))


def test_dates_decide_without_versions():
    assert is_update(ModInfo(), ModInfo(change_date=NEW))
    assert is_update(ModInfo(change_date=OLD), ModInfo(change_date=NEW))
    assert not is_update(ModInfo(change_date=NEW), ModInfo(change_date=OLD))


def test_creation_date_is_fallback():
    assert is_update(ModInfo(creation_date=OLD), ModInfo(change_date=NEW))


def test_nothing_known_is_no_update():
    assert not is_update(ModInfo(), ModInfo())
    assert not is_update(ModInfo(version="1.0"), ModInfo())


def test_dates_decide_when_remote_has_no_version():
    assert is_update(ModInfo(version="1.0", change_date=OLD), ModInfo(change_date=NEW))
    assert not is_update(ModInfo(version="1.0", change_date=NEW), ModInfo(change_date=OLD))


def test_check_for_updates_scrapes_stored_url(pages, read_fixture):
    pages["https://github.com/kerbal/SuperMod/releases"] = read_fixture("releases_label.html")
    stored = ModInfo(name="SuperMod", mod_url="https://github.com/kerbal/SuperMod", version="1.4.1")

    updated, new = GitHubHandler().check_for_updates(stored)

    assert updated
    assert new.version == "1.4.2"
