"""Unit tests for configuration module."""
import pytest
import os
import json
import tempfile
from dataclasses import FrozenInstanceError
from unittest.mock import patch

from resource_counter.config import CounterConfig, DEFAULT_OUTPUT_FILE, load_config
from resource_counter.types import AggregationMode


class TestCounterConfig:
    """Test cases for CounterConfig class."""

    def test_default_initialization(self):
        """Test default configuration values."""
        config = CounterConfig()

        assert config.profile is None
        assert config.region == ''
        assert config.output_file is None
        assert config.no_output is False
        assert config.trace_file is None
        assert config.max_retries == 3
        assert config.log_level == 'WARNING'
        assert config.log_format == 'text'

    def test_is_immutable(self):
        config = CounterConfig()

        with pytest.raises(FrozenInstanceError):
            config.region = 'us-east-1'

    def test_mode_follows_region(self):
        assert CounterConfig().all_regions is True
        assert CounterConfig().mode is AggregationMode.ALL_REGIONS
        assert CounterConfig(region='eu-west-1').mode is AggregationMode.SINGLE_REGION

    def test_effective_output_file(self):
        assert CounterConfig().effective_output_file == DEFAULT_OUTPUT_FILE
        assert CounterConfig(output_file='out.csv').effective_output_file == 'out.csv'
        assert CounterConfig(no_output=True).effective_output_file is None

    def test_with_overrides_skips_none(self):
        config = CounterConfig(profile='dev', region='us-west-2')

        updated = config.with_overrides(profile=None, region='eu-west-1')

        assert updated.profile == 'dev'
        assert updated.region == 'eu-west-1'
        assert config.region == 'us-west-2'

    def test_from_dict_ignores_unknown_keys(self):
        config = CounterConfig.from_dict({'region': 'ap-south-1', 'max_concurrent_regions': 10})

        assert config.region == 'ap-south-1'

    def test_from_file(self):
        """Test loading configuration from file."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            json.dump({'profile': 'audit', 'max_retries': 5, 'log_format': 'json'}, f)
            temp_path = f.name

        try:
            config = CounterConfig.from_file(temp_path)

            assert config.profile == 'audit'
            assert config.max_retries == 5
            assert config.log_format == 'json'
        finally:
            os.unlink(temp_path)

    def test_from_file_not_found(self):
        config = CounterConfig.from_file('/nonexistent/config.json')

        assert config == CounterConfig()

    def test_from_file_invalid_json(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            f.write('not valid json')
            temp_path = f.name

        try:
            assert CounterConfig.from_file(temp_path) == CounterConfig()
        finally:
            os.unlink(temp_path)

    @patch.dict(os.environ, {
        'RESOURCE_COUNTER_PROFILE': 'ops',
        'RESOURCE_COUNTER_REGION': 'ca-central-1',
        'RESOURCE_COUNTER_MAX_RETRIES': '6',
        'RESOURCE_COUNTER_LOG_LEVEL': 'DEBUG',
    })
    def test_from_env(self):
        config = CounterConfig.from_env()

        assert config.profile == 'ops'
        assert config.region == 'ca-central-1'
        assert config.max_retries == 6
        assert config.log_level == 'DEBUG'

    @patch.dict(os.environ, {}, clear=True)
    def test_from_env_keeps_base(self):
        base = CounterConfig(profile='file-profile')

        assert CounterConfig.from_env(base) is base

    @pytest.mark.parametrize('value', ['three', '0', '-2'])
    def test_from_env_ignores_bad_max_retries(self, value):
        with patch.dict(os.environ, {'RESOURCE_COUNTER_MAX_RETRIES': value}, clear=True):
            config = CounterConfig.from_env(CounterConfig(max_retries=4))

        assert config.max_retries == 4


class TestLoadConfig:
    """Test cases for load_config."""

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_file_gives_defaults(self):
        assert load_config('/nonexistent/config.json') == CounterConfig()

    @patch.dict(os.environ, {'RESOURCE_COUNTER_REGION': 'eu-north-1'}, clear=True)
    def test_environment_overrides_file(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            json.dump({'region': 'us-east-2', 'profile': 'file'}, f)
            temp_path = f.name

        try:
            config = load_config(temp_path)

            assert config.region == 'eu-north-1'
            assert config.profile == 'file'
        finally:
            os.unlink(temp_path)
