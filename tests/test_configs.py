import logging

import pytest

from workbook_compare import bootstrap
from workbook_compare.utils.configs import DEFAULT_HIGHLIGHT_COLORS, AppSettings, load_settings
from workbook_compare.utils.exceptions import ConfigError
from workbook_compare.utils.log import LOGGER_NAME, init_logger


def _write(tmp_path, text):
    path = tmp_path / "settings.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_defaults_when_no_path():
    settings = load_settings()
    assert settings == AppSettings()
    assert settings.max_file_size == 100 * 1024 * 1024
    assert settings.highlight_colors == DEFAULT_HIGHLIGHT_COLORS


def test_defaults_when_file_missing(tmp_path):
    assert load_settings(str(tmp_path / "missing.yaml")) == AppSettings()


def test_yaml_overrides(tmp_path):
    path = _write(tmp_path, """
log_level: debug
max_file_size_mb: 5
cache_ttl_seconds: 60
compare:
  values: true
  formulas: false
highlight:
  value: ff00ff00
  unknown: FF000000
""")
    settings = load_settings(path)

    assert settings.log_level == "DEBUG"
    assert settings.max_file_size == 5 * 1024 * 1024
    assert settings.cache_ttl_seconds == 60
    assert settings.compare_values is True
    assert settings.compare_formulas is False
    assert settings.highlight_colors["value"] == "FF00FF00"
    assert settings.highlight_colors["merged"] == DEFAULT_HIGHLIGHT_COLORS["merged"]
    assert "unknown" not in settings.highlight_colors


@pytest.mark.parametrize("text", [
    "log_level: LOUD",
    "max_file_size_mb: 0",
    "cache_ttl_seconds: -5",
    "cache_ttl_seconds: true",
    "compare:\n  values: 'yes'",
    "compare: [1, 2]",
    "- just\n- a list",
    "key: [unclosed",
])
def test_invalid_settings(tmp_path, text):
    with pytest.raises(ConfigError):
        load_settings(_write(tmp_path, text))


@pytest.fixture
def clean_bootstrap():
    bootstrap.reset()
    yield
    bootstrap.reset()


def test_initialize_is_idempotent(tmp_path, clean_bootstrap):
    first = bootstrap.initialize(_write(tmp_path, "log_level: WARNING"))
    second = bootstrap.initialize(None)

    assert first is second
    assert bootstrap.get_settings() is first
    assert logging.getLogger(LOGGER_NAME).level == logging.WARNING


def test_get_settings_before_initialize(clean_bootstrap):
    with pytest.raises(RuntimeError):
        bootstrap.get_settings()


def test_init_logger_writes_file(tmp_path):
    logger = logging.getLogger(LOGGER_NAME)
    saved = logger.handlers[:]
    logger.handlers.clear()
    try:
        init_logger(str(tmp_path / "logs"), "INFO")
        logging.getLogger(f"{LOGGER_NAME}.test").info("hello")
        for handler in logger.handlers:
            handler.flush()

        assert "hello" in (tmp_path / "logs" / "app.log").read_text(encoding="utf-8")
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers[:] = saved
