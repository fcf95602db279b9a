"""Unit tests for installer configuration."""

from __future__ import annotations

import pytest
import yaml

from tower_installer.config import ENV_VARS, InstallerConfig, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for env_var in ENV_VARS.values():
        monkeypatch.delenv(env_var, raising=False)


class TestLoadConfig:
    """Tests for load_config precedence."""

    def test_defaults_when_no_file(self, tmp_path):
        config = load_config(tmp_path / "missing.yaml")

        assert config.project_name == "tower"
        assert config.image_tag == "0.2.3"
        assert config.compose_command == "docker-compose"
        assert config.migration_port == 8811
        assert config.get_source("project_name") == "default"

    def test_config_file_values(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump({"image_tag": "1.2.0", "migration_port": 9911}))

        config = load_config(config_file)

        assert config.image_tag == "1.2.0"
        assert config.migration_port == 9911
        assert config.get_source("image_tag") == "config file"
        assert config.get_source("runtime_command") == "default"

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump({"compose_command": "docker compose"}))
        monkeypatch.setenv("TOWER_COMPOSE_COMMAND", "podman-compose")

        config = load_config(config_file)

        assert config.compose_command == "podman-compose"
        assert config.get_source("compose_command") == "environment"

    def test_invalid_env_port_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TOWER_MIGRATION_PORT", "not-a-port")
        config = load_config(tmp_path / "missing.yaml")
        assert config.migration_port == 8811

    def test_invalid_yaml_ignored(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("image_tag: [unterminated")
        config = load_config(config_file)
        assert config == InstallerConfig()

    def test_non_mapping_file_ignored(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- just\n- a list\n")
        assert load_config(config_file).image_tag == "0.2.3"

    def test_unknown_keys_ignored(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump({"colour": "blue"}))
        assert not hasattr(load_config(config_file), "colour")

    @pytest.mark.parametrize("port", ["0", "70000", "-1"])
    def test_out_of_range_env_port_ignored(self, tmp_path, monkeypatch, port):
        monkeypatch.setenv("TOWER_MIGRATION_PORT", port)

        config = load_config(tmp_path / "missing.yaml")

        assert config.migration_port == 8811
        assert config.get_source("migration_port") == "default"

    def test_out_of_range_file_port_ignored(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump({"migration_port": 70000}))
        assert load_config(config_file).migration_port == 8811

    def test_empty_file_value_ignored(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("project_name:\nimage_tag: 1.0.0\n")

        config = load_config(config_file)

        assert config.project_name == "tower"
        assert config.get_source("project_name") == "default"
        assert config.image_tag == "1.0.0"
