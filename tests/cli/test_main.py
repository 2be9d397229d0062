"""
Tests for argument parsing and command dispatch.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from argtail import __version__
from argtail.cli.__main__ import main


def test_fix_dispatch():
  with patch("argtail.cli.commands.handle_fix", return_value=0) as mock_fix:
    assert main(["fix", "a.go", "pkg", "--checkout-cmd", "g4 edit", "--function", "Run", "--diff"]) == 0

  mock_fix.assert_called_once_with([Path("a.go"), Path("pkg")], ["g4", "edit"], "Run", None, True, None)


def test_fix_defaults():
  with patch("argtail.cli.commands.handle_fix", return_value=1) as mock_fix:
    assert main(["fix", "a.go", "--dry-run", "--json-trace", "t.json"]) == 1

  mock_fix.assert_called_once_with([Path("a.go")], None, None, True, False, Path("t.json"))


def test_audit_dispatch():
  with patch("argtail.cli.commands.handle_audit", return_value=0) as mock_audit:
    assert main(["audit", ".", "--all"]) == 0

  mock_audit.assert_called_once_with([Path(".")], None, True)


def test_command_required():
  with pytest.raises(SystemExit):
    main([])


def test_version(capsys):
  with pytest.raises(SystemExit):
    main(["--version"])
  assert __version__ in capsys.readouterr().out


def test_end_to_end(tmp_path, testdata):
  target = tmp_path / "main.go"
  target.write_text((testdata / "normal_in.go").read_text(encoding="utf-8"), encoding="utf-8")

  assert main(["fix", str(target)]) == 0
  assert target.read_text(encoding="utf-8") == (testdata / "normal_out.go").read_text(encoding="utf-8")
  assert main(["audit", str(target)]) == 0
