"""
Tests for RuntimeConfig loading from pyproject.toml.
"""

import pytest
from pydantic import ValidationError

from argtail.config import RuntimeConfig


def _write_toml(path, body):
  (path / "pyproject.toml").write_text(f"[tool.argtail]\n{body}\n", encoding="utf-8")


def test_defaults(tmp_path):
  config = RuntimeConfig.load(search_path=tmp_path)

  assert config.function_name == "main"
  assert config.checkout_command == []
  assert config.skip_dirs == ["vendor", "testdata"]
  assert config.dry_run is False


def test_toml_values(tmp_path):
  _write_toml(tmp_path, 'function_name = "realMain"\ncheckout_command = "p4 edit"\nskip_dirs = ["third_party"]')
  nested = tmp_path / "cmd" / "tool"
  nested.mkdir(parents=True)

  config = RuntimeConfig.load(search_path=nested)

  assert config.function_name == "realMain"
  assert config.checkout_command == ["p4", "edit"]
  assert config.skip_dirs == ["third_party"]


def test_cli_overrides_toml(tmp_path):
  _write_toml(tmp_path, 'function_name = "realMain"\ncheckout_command = ["p4", "edit"]\ndry_run = true')

  config = RuntimeConfig.load(function_name="main", checkout_command=[], dry_run=False, search_path=tmp_path)

  assert config.function_name == "main"
  assert config.checkout_command == []
  assert config.dry_run is False


def test_invalid_toml_is_ignored(tmp_path):
  (tmp_path / "pyproject.toml").write_text("[tool.argtail\n", encoding="utf-8")
  assert RuntimeConfig.load(search_path=tmp_path).function_name == "main"


@pytest.mark.parametrize("name", ["", "1main", "ma-in", "a.b"])
def test_invalid_function_name(name):
  with pytest.raises(ValidationError):
    RuntimeConfig(function_name=name)
