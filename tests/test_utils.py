"""Tests for utility helpers and configuration loading."""

import json
import logging

import pytest

from clutch_vault import config
from clutch_vault.logging_config import ENV_LOG_LEVEL, LOGGER_NAME, parse_level, setup_logging
from clutch_vault.schemas import LeagueHistory, OwnerAlias
from clutch_vault.utils import coerce_number, format_year_ranges, load_json, save_json


class TestCoerceNumber:
    """Tests for lenient numeric coercion of imported stats."""

    @pytest.mark.parametrize('value,expected', [
        (7, 7.0),
        (1432.6, 1432.6),
        ('1432.6', 1432.6),
        (' 12 ', 12.0),
        ('', 0.0),
        ('n/a', 0.0),
        (None, 0.0),
        (float('nan'), 0.0),
        ('inf', 0.0),
        ([3], 0.0),
        (True, 1.0),
    ])
    def test_coerce(self, value, expected):
        assert coerce_number(value) == expected


class TestFormatYearRanges:
    """Tests for compact year range display."""

    def test_ranges(self):
        assert format_year_ranges([2010, 2011, 2012, 2015]) == '2010-12, 2015'

    def test_unsorted_input(self):
        assert format_year_ranges([2021, 2019, 2020, 2023]) == '2019-21, 2023'

    def test_single_and_empty(self):
        assert format_year_ranges([2018]) == '2018'
        assert format_year_ranges([]) == ''


class TestJsonFiles:
    """Tests for JSON load/save helpers."""

    def test_load_with_schema(self, tmp_path):
        """Test a file is validated into the schema model."""
        path = tmp_path / 'history.json'
        path.write_text(json.dumps({'leagueId': 'lg1', 'seasons': {'2021': [{'teamName': 'Tyrants'}]}}))

        history = load_json(path, schema=LeagueHistory)

        assert history.league_id == 'lg1'
        assert history.seasons['2021'][0]['teamName'] == 'Tyrants'

    def test_load_invalid_json(self, tmp_path):
        """Test malformed JSON is reported as ValueError naming the file."""
        path = tmp_path / 'history.json'
        path.write_text('{"seasons": ')

        with pytest.raises(ValueError, match='history.json is not valid JSON'):
            load_json(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / 'missing.json')

    def test_load_schema_failure(self, tmp_path):
        """Test schema errors are raised as ValueError."""
        path = tmp_path / 'alias.json'
        path.write_text(json.dumps({'ownerName': 'Tyrants'}))

        with pytest.raises(ValueError, match='Schema validation failed'):
            load_json(path, schema=OwnerAlias)

    def test_save_model_by_alias(self, tmp_path):
        """Test models are written with camelCase keys, creating directories."""
        path = tmp_path / 'out' / 'alias.json'
        save_json(path, OwnerAlias(owner_name='Tyrants', canonical_name='Alice'))

        assert json.loads(path.read_text()) == {
            'ownerName': 'Tyrants',
            'canonicalName': 'Alice',
            'isActive': True,
        }


class TestConfig:
    """Tests for client configuration."""

    @pytest.fixture(autouse=True)
    def isolated_config(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, 'CONFIG_PATH', tmp_path / 'vault_config.json')
        for name in (config.ENV_API_URL, config.ENV_TOKEN, config.ENV_TIMEOUT):
            monkeypatch.delenv(name, raising=False)
        config.clear_config_cache()
        yield
        config.clear_config_cache()

    def test_defaults(self):
        cfg = config.get_config()
        assert cfg.api_url == 'http://localhost:3001/api'
        assert cfg.api_token is None
        assert cfg.request_timeout == 30
        assert config.get_max_workers() == 8

    def test_file_settings(self):
        """Test settings are read from the config file."""
        config.CONFIG_PATH.write_text(json.dumps({'api_url': 'https://clutch.example/api/', 'max_workers': 4}))

        assert config.get_api_url() == 'https://clutch.example/api'
        assert config.get_max_workers() == 4

    def test_environment_overrides(self, monkeypatch):
        """Test environment variables win over the file."""
        config.CONFIG_PATH.write_text(json.dumps({'api_url': 'https://file.example/api'}))
        monkeypatch.setenv(config.ENV_API_URL, 'https://env.example/api')
        monkeypatch.setenv(config.ENV_TOKEN, 'secret')
        monkeypatch.setenv(config.ENV_TIMEOUT, '12.5')

        cfg = config.get_config()

        assert cfg.api_url == 'https://env.example/api'
        assert cfg.api_token == 'secret'
        assert cfg.request_timeout == 12.5

    def test_invalid_setting(self):
        """Test unknown keys in the config file are rejected."""
        config.CONFIG_PATH.write_text(json.dumps({'api_url': 'http://x', 'verbose': True}))

        with pytest.raises(ValueError):
            config.get_config()

    def test_cached(self):
        """Test configuration is loaded once until the cache is cleared."""
        first = config.get_config()
        config.CONFIG_PATH.write_text(json.dumps({'max_workers': 2}))
        assert config.get_config() is first

        config.clear_config_cache()
        assert config.get_config().max_workers == 2


class TestLogging:
    """Tests for package logging setup."""

    @pytest.fixture(autouse=True)
    def reset_handlers(self):
        yield
        logger = logging.getLogger(LOGGER_NAME)
        for handler in logger.handlers:
            handler.close()
        logger.handlers = []
        logger.setLevel(logging.NOTSET)

    @pytest.mark.parametrize('value,expected', [
        ('debug', logging.DEBUG),
        ('WARNING', logging.WARNING),
        ('10', 10),
        (logging.ERROR, logging.ERROR),
        ('chatty', logging.INFO),
        (None, logging.INFO),
    ])
    def test_parse_level(self, value, expected):
        assert parse_level(value) == expected

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv(ENV_LOG_LEVEL, 'debug')
        logger = setup_logging(log_to_file=False)
        assert logger.level == logging.DEBUG

    def test_file_handler(self, tmp_path):
        """Test a timestamped log file is created and receives module output."""
        setup_logging(log_dir=tmp_path / 'logs', level=logging.INFO, log_to_console=False)
        logging.getLogger('clutch_vault.history').info('flattened')

        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.flush()
        log_files = list((tmp_path / 'logs').glob('vault_*.log'))
        assert len(log_files) == 1
        assert 'flattened' in log_files[0].read_text()

    def test_reconfigure_replaces_handlers(self):
        setup_logging(log_to_file=False)
        logger = setup_logging(log_to_file=False)
        assert len(logger.handlers) == 1
