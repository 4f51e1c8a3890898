"""Tests for configuration loading."""

import json

import pytest

from govmetrics.config import DEFAULT_CONFIG, load_config
from govmetrics.errors import ConfigurationError


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.yaml")

        assert config['scoring'] == DEFAULT_CONFIG['scoring']
        assert config['collection']['parallel'] is True

    def test_yaml_merges_over_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("scoring:\n  action_threshold: 0.95\ncollection:\n  parallel: false\n")

        config = load_config(path)

        assert config['scoring']['action_threshold'] == 0.95
        assert config['scoring']['priority_bands'] == DEFAULT_CONFIG['scoring']['priority_bands']
        assert config['collection']['parallel'] is False
        assert config['collection']['max_concurrent_calls'] == 8

    def test_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({'output': {'directory': 'reports'}}))

        assert load_config(path)['output']['directory'] == 'reports'

    def test_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[scoring.compliance_thresholds]\ncompliant = 85\n")

        config = load_config(path)

        assert config['scoring']['compliance_thresholds'] == {'compliant': 85, 'at_risk': 75}

    def test_defaults_not_mutated(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("scoring:\n  priority_bands:\n    low: 0.2\n")

        load_config(path)

        assert DEFAULT_CONFIG['scoring']['priority_bands']['low'] == 0.10

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("scoring: [unclosed\n")

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "env_config.yaml"
        path.write_text("collection:\n  timeout_sec: 2.5\n")
        monkeypatch.setenv('GOVMETRICS_CONFIG', str(path))
        monkeypatch.setenv('GOVMETRICS_OUTPUT_DIR', str(tmp_path / "out"))

        config = load_config()

        assert config['collection']['timeout_sec'] == 2.5
        assert config['output']['directory'] == str(tmp_path / "out")
