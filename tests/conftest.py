"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Go source fixtures and a shared parser.
- Console capture so CLI tests can assert on output.
"""

import sys
from pathlib import Path

import pytest
from rich.console import Console

# Add src to path so we can import 'argtail' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from argtail.core.golang import GoParser  # noqa: E402
from argtail.utils.console import reset_console, set_console  # noqa: E402

TESTDATA = Path(__file__).parent / "testdata"


@pytest.fixture
def testdata() -> Path:
  """Directory holding the ``*_in.go`` / ``*_out.go`` fixtures."""
  return TESTDATA


@pytest.fixture
def parser() -> GoParser:
  return GoParser()


@pytest.fixture
def parse(parser):
  """Parses a Go snippet into a `SourceFile`."""

  def _parse(code: str, filename: str = "<test>"):
    return parser.parse(code, filename)

  return _parse


@pytest.fixture
def captured_console():
  """
  Redirects console output and logging into a recording console.

  Yields:
      Console: Call ``export_text()`` to read what was printed.
  """
  console = Console(record=True, width=1000, force_terminal=False)
  set_console(console)
  yield console
  reset_console()
