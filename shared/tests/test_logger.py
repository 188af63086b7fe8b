"""
Tests for logging configuration loading
"""

from shared.utils.logger import DEFAULT_LOGGING_CONFIG, SHARED_CONFIG_PATH, load_logging_config


def test_explicit_yaml_file_wins(tmp_path):
    path = tmp_path / "logging.yml"
    path.write_text(
        "version: 1\n"
        "handlers:\n"
        "  console:\n"
        "    class: logging.StreamHandler\n"
        "root:\n"
        "  level: WARNING\n"
        "  handlers: [console]\n"
    )

    config = load_logging_config(str(path))

    assert config["root"]["level"] == "WARNING"


def test_shared_config_used_when_no_path_given():
    config = load_logging_config()

    assert SHARED_CONFIG_PATH.exists()
    assert "storefront" in config["loggers"]
    assert "environments" in config


def test_unreadable_yaml_falls_through(tmp_path):
    path = tmp_path / "broken.yml"
    path.write_text("version: [1\n")

    config = load_logging_config(str(path))

    # falls back to the shared file, not the broken one
    assert config["version"] == 1
    assert "storefront" in config["loggers"]


def test_default_config_is_copied(monkeypatch, tmp_path):
    monkeypatch.setattr("shared.utils.logger.SHARED_CONFIG_PATH", tmp_path / "missing.yml")

    config = load_logging_config()
    config["loggers"]["storefront"]["level"] = "DEBUG"

    assert DEFAULT_LOGGING_CONFIG["loggers"]["storefront"]["level"] == "INFO"
