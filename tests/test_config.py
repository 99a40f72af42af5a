from pathlib import Path

from toolkit.config import Settings, get_settings


def test_settings_defaults(monkeypatch) -> None:
    for name in (
        "UPLOAD_DIR",
        "UPLOAD_MAX_TOTAL_BYTES",
        "UPLOAD_ALLOWED_CONTENT_TYPES",
        "UPLOAD_RENAME_FILES",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.upload_dir == Path("data/uploads")
    assert settings.upload_max_total_bytes == 0
    assert settings.upload_allowed_content_types == []
    assert settings.upload_rename_files is True


def test_settings_from_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path))
    monkeypatch.setenv("UPLOAD_MAX_TOTAL_BYTES", "1024")
    monkeypatch.setenv("UPLOAD_ALLOWED_CONTENT_TYPES", '["image/png", "image/jpeg"]')
    monkeypatch.setenv("UPLOAD_RENAME_FILES", "false")
    get_settings.cache_clear()

    try:
        settings = get_settings()
        assert settings.upload_dir == tmp_path
        assert settings.upload_max_total_bytes == 1024
        assert settings.upload_allowed_content_types == ["image/png", "image/jpeg"]
        assert settings.upload_rename_files is False
        assert get_settings() is settings
    finally:
        get_settings.cache_clear()
