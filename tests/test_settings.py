from pathlib import Path

from core.settings import AgentSettings, SETTINGS_ENV, get_setting, load_settings, settings_path


def test_bundled_settings_load(fresh_settings, monkeypatch):
    monkeypatch.delenv(SETTINGS_ENV, raising=False)
    assert settings_path().name == "settings.yaml"
    assert get_setting("memory", "capacity") == 50
    assert get_setting("executor", "scheduling") == "ready_queue"
    assert get_setting("missing", "key", default="fallback") == "fallback"


def test_environment_override(fresh_settings, monkeypatch, tmp_path):
    config = tmp_path / "custom.yaml"
    config.write_text(
        "agent:\n"
        "  confidence_threshold: 0.5\n"
        "  quit_words: [bye]\n"
        "memory:\n"
        "  capacity: 7\n"
        "executor:\n"
        "  scheduling: single_pass\n"
        f"tools:\n  root: {tmp_path.as_posix()}\n",
        encoding="utf-8",
    )
    monkeypatch.setenv(SETTINGS_ENV, str(config))

    settings = AgentSettings.from_settings()
    assert settings.confidence_threshold == 0.5
    assert settings.quit_words == ("bye",)
    assert settings.memory_capacity == 7
    assert settings.scheduling == "single_pass"
    assert settings.tools_root == tmp_path.resolve()
    assert settings.manifest_files == ("pyproject.toml", "package.json")


def test_empty_file_falls_back_to_defaults(fresh_settings, monkeypatch, tmp_path):
    config = tmp_path / "empty.yaml"
    config.write_text("", encoding="utf-8")
    monkeypatch.setenv(SETTINGS_ENV, str(config))

    assert load_settings() == {}
    settings = AgentSettings.from_settings()
    assert settings.memory_capacity == 50
    assert settings.quit_words == ("quit", "exit", "종료", "그만")
    assert settings.tools_root == Path(".").resolve()
