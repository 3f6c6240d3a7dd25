"""Load [tool.webtest-conventions] and [tool] from pyproject.toml. Infrastructure I/O only."""

import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

TOOL_KEYS: tuple[str, ...] = ("webtest-conventions", "webtest_conventions")


class ConfigFileLoader:
    """Finds the nearest pyproject.toml at or above a start directory."""

    @staticmethod
    def load_config_from_fs(start: Path | None = None) -> tuple[dict[str, object], dict[str, object]]:
        """Return (config_dict, tool_section); both empty when no pyproject.toml is found."""
        current_path = (start or Path.cwd()).resolve()
        empty: dict[str, object] = {}
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if not config_file.exists():
                continue
            try:
                with config_file.open("rb") as f:
                    data = toml_lib.load(f)
            except (OSError, toml_lib.TOMLDecodeError):
                continue
            tool_section = data.get("tool", {}) or {}
            for key in TOOL_KEYS:
                if key in tool_section:
                    return (dict(tool_section[key] or {}), tool_section)
            return (empty, tool_section)
        return (empty, empty)
