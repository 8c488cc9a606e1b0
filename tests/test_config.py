###########EXTERNAL IMPORTS############

import pytest

#######################################

#############LOCAL IMPORTS#############

from controller.cursor.config import load_cursor_config, load_service_config
from controller.exceptions import CursorConfigError
from model.cursor import TrimMode

#######################################

CONFIG_KEYS = [
    "CURSOR_UNIT_SIZE",
    "CURSOR_RETENTION_UNITS",
    "CURSOR_TRIM_MODE",
    "CURSOR_RESET_OPPOSITE_BOUNDARY",
    "HTTP_HOST",
    "HTTP_PORT",
    "LOG_LEVEL",
    "MOCK_LOG_COUNT",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    # Registering each key first makes monkeypatch remove values loaded by dotenv on teardown
    for key in CONFIG_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    yield


def write_config(tmp_path, text: str) -> str:
    config_path = tmp_path / "cursor_options.env"
    config_path.write_text(text)
    return str(config_path)


def test_load_cursor_config(tmp_path):
    config_file = write_config(
        tmp_path,
        "CURSOR_UNIT_SIZE=20\nCURSOR_RETENTION_UNITS=3\nCURSOR_TRIM_MODE=CENTERED\nCURSOR_RESET_OPPOSITE_BOUNDARY=false\n",
    )
    config = load_cursor_config(config_file)
    assert config.unit_size == 20
    assert config.retention_units == 3
    assert config.capacity == 60
    assert config.trim_mode is TrimMode.CENTERED
    assert config.reset_opposite_boundary is False


def test_cursor_config_defaults(tmp_path):
    config = load_cursor_config(write_config(tmp_path, "CURSOR_UNIT_SIZE=10\n"))
    assert config.retention_units == 2
    assert config.trim_mode is TrimMode.DIRECTIONAL
    assert config.reset_opposite_boundary is True


def test_missing_unit_size(tmp_path):
    with pytest.raises(ValueError, match="CURSOR_UNIT_SIZE"):
        load_cursor_config(write_config(tmp_path, "CURSOR_RETENTION_UNITS=3\n"))


def test_invalid_trim_mode(tmp_path):
    with pytest.raises(CursorConfigError):
        load_cursor_config(write_config(tmp_path, "CURSOR_UNIT_SIZE=10\nCURSOR_TRIM_MODE=newest\n"))


def test_load_service_config(tmp_path):
    config = load_service_config(write_config(tmp_path, "HTTP_PORT=9000\nLOG_LEVEL=debug\n"))
    assert config.host == "0.0.0.0"
    assert config.port == 9000
    assert config.log_level == "DEBUG"
    assert config.mock_log_count == 10000


def test_invalid_service_port(tmp_path):
    with pytest.raises(CursorConfigError):
        load_service_config(write_config(tmp_path, "HTTP_PORT=eighty\n"))
