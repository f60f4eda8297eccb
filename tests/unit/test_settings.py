import pytest

from bucketlist.config.settings import Environment, Settings
from bucketlist.services.bookmark_service import BookmarkService


def test_defaults():
    settings = Settings()
    assert settings.auth.max_attempts == 3
    assert settings.auth.lockout_key == "isBlocked"
    assert settings.geosearch.radius_m == 10000
    assert settings.geosearch.result_limit == 50
    assert settings.storage.bookmarks_filename == "SavedPlaces"
    assert settings.edit_sessions.idle_seconds == 900
    assert settings.edit_sessions.max_open == 100


def test_paths_follow_data_dir(tmp_path):
    settings = Settings(storage={"data_dir": str(tmp_path)})
    assert settings.get_bookmarks_path() == tmp_path.resolve() / "SavedPlaces"
    assert settings.get_preferences_path() == tmp_path.resolve() / "preferences.json"


def test_environment_is_normalized():
    assert Settings(environment="PRODUCTION").environment == Environment.PRODUCTION


def test_nested_env_prefix(monkeypatch):
    monkeypatch.setenv("AUTH_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("GEOSEARCH_RADIUS_M", "500")
    settings = Settings()
    assert settings.auth.max_attempts == 5
    assert settings.geosearch.radius_m == 500


def test_invalid_log_format():
    with pytest.raises(ValueError):
        Settings(log_format="xml")


def test_service_carries_its_own_settings(tmp_path):
    settings = Settings(
        storage={"data_dir": str(tmp_path)},
        auth={"device_secret": "device-secret-for-this-service"},
        edit_sessions={"max_open": 7},
    )
    service = BookmarkService.from_settings(settings)
    assert service.auth_settings.device_secret == "device-secret-for-this-service"
    assert service.session_settings.max_open == 7
    assert service.store.path == tmp_path.resolve() / "SavedPlaces"
