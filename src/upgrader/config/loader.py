import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib

log = logging.getLogger(__name__)


@dataclass
class UpgraderConfig:
    diff_context: int = 3
    show_warnings: bool = True


def _find_pyproject_toml(search_path: Path) -> Path:
    current_dir = search_path.resolve()
    while True:
        pyproject_path = current_dir / "pyproject.toml"
        if pyproject_path.is_file():
            return pyproject_path
        if current_dir.parent == current_dir:
            break
        current_dir = current_dir.parent
    raise FileNotFoundError("Could not find pyproject.toml in any parent directory.")


def load_config_from_path(search_path: Path) -> UpgraderConfig:
    try:
        config_path = _find_pyproject_toml(search_path)
    except FileNotFoundError:
        log.debug("No pyproject.toml above %s, using defaults", search_path)
        return UpgraderConfig()

    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    log.debug("Loaded configuration from %s", config_path)

    upgrader_data: Dict[str, Any] = data.get("tool", {}).get("upgrader", {})

    diff_context = upgrader_data.get("diff_context", 3)
    if isinstance(diff_context, bool) or not isinstance(diff_context, int):
        raise ValueError(f"tool.upgrader.diff_context must be an integer in {config_path}")
    if diff_context < 0:
        raise ValueError(f"tool.upgrader.diff_context must not be negative in {config_path}")

    return UpgraderConfig(
        diff_context=diff_context,
        show_warnings=bool(upgrader_data.get("show_warnings", True)),
    )
