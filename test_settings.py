"""
Tests for settings loading, saving, validation and logging setup.
"""

import json
import logging

import pytest
import yaml

from calibration_map import CalibrationTable, Settings
from calibration_map.utils.logging_config import get_logger, set_log_level, setup_logging


@pytest.fixture
def calmap_logger():
    """Named logger configured by a test, closed and reset afterwards."""
    logger = logging.getLogger("calibration_map.tests")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def test_defaults():
    settings = Settings()
    assert settings.table.name == "calibration"
    assert settings.logging.level == "INFO"
    assert settings.to_dict()['logging']['backup_count'] == 5


def test_missing_file_writes_defaults(tmp_path):
    config_file = tmp_path / "conf" / "settings.yaml"
    settings = Settings(str(config_file))
    assert settings.load_config()
    assert config_file.exists()
    assert yaml.safe_load(config_file.read_text())['table'] == {'name': 'calibration'}


def test_yaml_round_trip(tmp_path):
    config_file = tmp_path / "settings.yaml"
    settings = Settings()
    settings.table.name = "z-axis"
    settings.logging.level = "DEBUG"
    settings.set_custom_setting("units", "mm")
    assert settings.save_config(str(config_file))

    loaded = Settings()
    assert loaded.load_config(str(config_file))
    assert loaded.table.name == "z-axis"
    assert loaded.logging.level == "DEBUG"
    assert loaded.get_custom_setting("units") == "mm"
    assert loaded.get_custom_setting("missing", 3) == 3


def test_json_load_ignores_unknown_keys(tmp_path):
    config_file = tmp_path / "settings.json"
    config_file.write_text(json.dumps({
        'table': {'name': 'spindle', 'colour': 'red'},
        'logging': {'backup_count': 2},
        'serial': {'port': 'COM1'}
    }))
    settings = Settings()
    assert settings.load_config(str(config_file))
    assert settings.table.name == "spindle"
    assert not hasattr(settings.table, 'colour')
    assert settings.logging.backup_count == 2


def test_unsupported_format(tmp_path):
    config_file = tmp_path / "settings.ini"
    config_file.write_text("[table]\n")
    assert not Settings().load_config(str(config_file))
    assert not Settings().save_config(str(tmp_path / "out.ini"))


@pytest.mark.parametrize("section, values", [
    ('logging', {'level': 'LOUD'}),
    ('logging', {'max_file_size_mb': 0}),
    ('logging', {'backup_count': -1}),
    ('table', {'name': ''}),
])
def test_invalid_config_is_rejected(tmp_path, section, values):
    config_file = tmp_path / "settings.yaml"
    config_file.write_text(yaml.dump({section: values}))
    assert not Settings().load_config(str(config_file))


def test_malformed_yaml_is_rejected(tmp_path):
    config_file = tmp_path / "settings.yaml"
    config_file.write_text("table: [unclosed\n")
    assert not Settings().load_config(str(config_file))


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CALMAP_TABLE_NAME", "y-axis")
    monkeypatch.setenv("CALMAP_LOG_LEVEL", "warning")
    monkeypatch.setenv("CALMAP_LOG_FILE", "other.log")
    settings = Settings()
    settings.load_environment_overrides()
    assert settings.table.name == "y-axis"
    assert settings.logging.level == "WARNING"
    assert settings.logging.log_file == "other.log"


def test_update_from_dict_and_create_table():
    settings = Settings()
    settings.update_from_dict({'table': {'name': 'x-axis'}})
    table = settings.create_table()
    assert isinstance(table, CalibrationTable)
    assert table.name == "x-axis"
    assert table.is_empty()


def test_setup_logging_writes_log_file(tmp_path, calmap_logger):
    log_file = tmp_path / "logs" / "calibration_map.log"
    assert setup_logging(level="DEBUG", log_file=str(log_file), console_output=False,
                         logger_name=calmap_logger.name)
    assert calmap_logger.level == logging.DEBUG
    assert len(calmap_logger.handlers) == 1

    get_logger(calmap_logger.name).debug("table ready")
    calmap_logger.handlers[0].flush()
    assert "table ready" in log_file.read_text()


def test_setup_logging_replaces_previous_handlers(tmp_path, calmap_logger):
    for _ in range(2):
        assert setup_logging(log_file=str(tmp_path / "a.log"), console_output=True,
                             logger_name=calmap_logger.name)
    assert len(calmap_logger.handlers) == 2


def test_settings_setup_logging(tmp_path, calmap_logger):
    settings = Settings()
    settings.logging.log_file = str(tmp_path / "settings.log")
    settings.logging.console_output = False
    settings.logging.detailed_format = True
    assert settings.setup_logging(logger_name=calmap_logger.name)
    assert (tmp_path / "settings.log").exists()


def test_set_log_level(calmap_logger):
    assert setup_logging(level="INFO", log_file=None, console_output=True,
                         logger_name=calmap_logger.name)
    set_log_level("error", logger_name=calmap_logger.name)
    assert calmap_logger.level == logging.ERROR
    assert all(handler.level == logging.ERROR for handler in calmap_logger.handlers)


@pytest.mark.parametrize("file_name, content", [
    ("settings.yaml", "logging:\n  max_file_size_mb: big\n"),
    ("settings.yaml", "42\n"),
    ("settings.json", '{"table": ["a"]}'),
    ("settings.json", '{"custom": "units"}'),
])
def test_wrongly_typed_config_is_rejected(tmp_path, file_name, content):
    config_file = tmp_path / file_name
    config_file.write_text(content)
    assert Settings().load_config(str(config_file)) is False


def test_update_from_dict_rejects_non_mapping_section():
    with pytest.raises(ValueError):
        Settings().update_from_dict({'logging': ['DEBUG']})


def test_log_file_format(tmp_path, calmap_logger):
    log_file = tmp_path / "detailed.log"
    assert setup_logging(level="INFO", log_file=str(log_file), console_output=False,
                         detailed_format=True, logger_name=calmap_logger.name)
    calmap_logger.warning("x-axis drift")
    calmap_logger.handlers[0].flush()

    lines = log_file.read_text().splitlines()
    assert "Calibration map logging at INFO" in lines[0]
    assert "WARNING  calibration_map.tests [test_settings.test_log_file_format:" in lines[1]
    assert lines[1].endswith(": x-axis drift")
