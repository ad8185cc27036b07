"""Tests for ScannerConfig loading."""

import json

import pytest

from route_scanner import ConfigError, ScannerConfig
from route_scanner.config import DEFAULT_IGNORE_DIRS, DEFAULT_TIMEOUT_MS


def test_defaults():
    config = ScannerConfig()
    assert config.ignore_dirs == DEFAULT_IGNORE_DIRS
    assert config.ignore_dirs is not DEFAULT_IGNORE_DIRS
    assert config.timeout_ms == DEFAULT_TIMEOUT_MS == 30000
    assert config.inject_defaults is True
    assert config.base_url is None


def test_from_env(monkeypatch):
    monkeypatch.setenv("SCANNER_IGNORE_DIRS", "vendor, tmp")
    monkeypatch.setenv("SCANNER_MAX_FILE_SIZE", "0.5")
    monkeypatch.setenv("SCANNER_TIMEOUT", "10000")
    monkeypatch.setenv("SCANNER_BASE_URL", "http://localhost:8000")
    monkeypatch.setenv("SCANNER_INJECT_DEFAULTS", "false")
    monkeypatch.delenv("SCANNER_LOGIN_URL", raising=False)

    config = ScannerConfig.from_env()
    assert {"vendor", "tmp", "node_modules"} <= config.ignore_dirs
    assert config.max_file_size_mb == 0.5
    assert config.timeout_ms == 10000
    assert config.base_url == "http://localhost:8000"
    assert config.login_url is None
    assert config.inject_defaults is False


@pytest.mark.parametrize("name,value", [
    ("SCANNER_TIMEOUT", "thirty seconds"),
    ("SCANNER_MAX_FILE_SIZE", "2MB"),
])
def test_from_env_rejects_non_numeric_values(monkeypatch, name, value):
    monkeypatch.delenv("SCANNER_TIMEOUT", raising=False)
    monkeypatch.delenv("SCANNER_MAX_FILE_SIZE", raising=False)
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError):
        ScannerConfig.from_env()


def test_from_json_file(tmp_path):
    path = tmp_path / "scanner.json"
    path.write_text(json.dumps({"login_url": "/signin", "ignore_dirs": ["vendor"]}), encoding="utf-8")
    config = ScannerConfig.from_file(str(path))
    assert config.login_url == "/signin"
    assert config.ignore_dirs == {"vendor"}


def test_from_yaml_file(tmp_path):
    path = tmp_path / "scanner.yaml"
    path.write_text("base_url: http://localhost:5000\ninject_defaults: false\n", encoding="utf-8")
    config = ScannerConfig.from_file(str(path))
    assert config.base_url == "http://localhost:5000"
    assert config.inject_defaults is False


def test_empty_yaml_file(tmp_path):
    path = tmp_path / "scanner.yml"
    path.write_text("", encoding="utf-8")
    assert ScannerConfig.from_file(str(path)).timeout_ms == DEFAULT_TIMEOUT_MS


@pytest.mark.parametrize("name,content", [
    ("bad.json", "{not json"),
    ("bad.yaml", "key: [unclosed"),
    ("list.json", "[1, 2]"),
    ("unknown.json", '{"colour": "blue"}'),
])
def test_invalid_files_raise_config_error(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        ScannerConfig.from_file(str(path))


def test_missing_file_raises_config_error(tmp_path):
    with pytest.raises(ConfigError):
        ScannerConfig.from_file(str(tmp_path / "nope.json"))


def test_to_dict():
    data = ScannerConfig(ignore_dirs={"b", "a"}, login_url="/signin").to_dict()
    assert data["ignore_dirs"] == ["a", "b"]
    assert data["login_url"] == "/signin"
    assert data["timeout_ms"] == 30000
