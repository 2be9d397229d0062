"""
Runtime Configuration Store.

Settings come from the ``[tool.argtail]`` table of the nearest
``pyproject.toml`` and are overridden by command line arguments.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

DEFAULT_SKIP_DIRS = ("vendor", "testdata")


class RuntimeConfig(BaseModel):
  """
  Configuration container for the patch engine and the file driver.
  """

  function_name: str = Field("main", description="Top-level function that receives the guard.")
  checkout_command: List[str] = Field(
    default_factory=list,
    description="Command run with the file path appended before writing (e.g. ['p4', 'edit']). Empty: none.",
  )
  skip_dirs: List[str] = Field(
    default_factory=lambda: list(DEFAULT_SKIP_DIRS),
    description="Directory names never descended into. Hidden directories are always skipped.",
  )
  dry_run: bool = Field(False, description="If True, nothing is written back.")

  @field_validator("function_name")
  @classmethod
  def validate_function_name(cls, v: str) -> str:
    """
    Ensures the target function name is a plain Go identifier.

    Raises:
        ValueError: If the name is empty or contains invalid characters.
    """
    v_clean = v.strip()
    if not v_clean or not (v_clean[0].isalpha() or v_clean[0] == "_"):
      raise ValueError(f"Invalid function name: '{v}'")
    if not all(c.isalnum() or c == "_" for c in v_clean):
      raise ValueError(f"Invalid function name: '{v}'")
    return v_clean

  @field_validator("checkout_command", mode="before")
  @classmethod
  def split_command(cls, v: Any) -> Any:
    """Accepts a shell-like string as well as a list of arguments."""
    if isinstance(v, str):
      return v.split()
    return v

  @classmethod
  def load(
    cls,
    function_name: Optional[str] = None,
    checkout_command: Optional[List[str]] = None,
    dry_run: Optional[bool] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        function_name (Optional[str]): Override for the target function.
        checkout_command (Optional[List[str]]): Override for the checkout command.
        dry_run (Optional[bool]): Override for dry-run mode.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    final_function = function_name or toml_config.get("function_name", "main")

    if checkout_command is not None:
      final_checkout = checkout_command
    else:
      final_checkout = toml_config.get("checkout_command", [])

    if dry_run is not None:
      final_dry_run = dry_run
    else:
      final_dry_run = toml_config.get("dry_run", False)

    final_skip = toml_config.get("skip_dirs", list(DEFAULT_SKIP_DIRS))

    return cls(
      function_name=final_function,
      checkout_command=final_checkout,
      skip_dirs=final_skip,
      dry_run=final_dry_run,
    )


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get("argtail", {}), parent

  return {}, None
