# tests/test_config.py
"""
Tests for the settings file
"""
import json
import os

import pytest

from config import Config
from errors import ConfigError


class TestConfig:
    def test_defaults(self, settings):
        assert settings.hostname == "github.com"
        assert settings.clone_protocol == "https"
        assert settings.update_repository is None
        assert settings.update_branch == "main"
        assert settings.completion_path == os.path.expanduser(
            "~/.local/share/bash-completion/completions/ch")

    def test_values_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "hostname": "github-course",
            "clone_protocol": "ssh",
            "update_branch": "dev",
            "completion_path": str(tmp_path / "ch-completion"),
        }))
        conf = Config(str(path), verbosity=True)
        assert conf.verbose is True
        assert conf.hostname == "github-course"
        assert conf.update_branch == "dev"
        assert conf.update_repository is None
        assert conf.completion_path == str(tmp_path / "ch-completion")

    def test_path_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "ch.json"
        path.write_text('{"hostname": "ghe.example.edu"}')
        monkeypatch.setenv("CH_CONFIG", str(path))
        assert Config().hostname == "ghe.example.edu"

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{hostname: ")
        with pytest.raises(ConfigError, match="Cannot parse"):
            Config(str(path))

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="JSON object"):
            Config(str(path))

    def test_unknown_protocol(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"clone_protocol": "ftp"}')
        with pytest.raises(ConfigError, match="ftp"):
            Config(str(path))

    def test_https_clone_url(self, settings):
        assert settings.clone_url("cs101", "2425-hw1-group01") == \
            "https://github.com/cs101/2425-hw1-group01.git"

    def test_ssh_clone_url(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"clone_protocol": "ssh", "hostname": "github-wcs"}')
        assert Config(str(path)).clone_url("cs101", "r") == \
            "git@github-wcs:cs101/r.git"

    def test_update_repository_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"update_repository": "cs-staff/class-hub"}')
        conf = Config(str(path))
        assert conf.update_repository == "cs-staff/class-hub"
        assert conf.path == str(path)
