"""Layered working-copy configuration.

Lookups walk the layers in precedence order: runtime, local, global, then
built-in defaults. Only the runtime layer is writable; it lives in memory for
the lifetime of the config object.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

LOCAL_CONFIG_PATH = Path(".arc") / "config"
GLOBAL_CONFIG_PATH = Path("~/.arcrc")

DEFAULT_CONFIG: Mapping[str, Any] = {
    "unit.busterjs.bin": "buster-test",
}


def _load_json_object(path: Path) -> dict[str, Any]:
    """Read a JSON object from disk; missing or malformed files are empty."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        logger.warning("Could not read config file %s: %s", path, exc)
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning("Ignoring malformed config file %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


class WorkingCopyConfig:
    """Config store scoped to one working copy."""

    def __init__(
        self,
        project_root: Path,
        *,
        local_path: Path | None = None,
        global_path: Path | None = None,
        defaults: Mapping[str, Any] | None = None,
    ) -> None:
        self.project_root = project_root
        self._local_path = local_path if local_path is not None else project_root / LOCAL_CONFIG_PATH
        self._global_path = (
            global_path if global_path is not None else GLOBAL_CONFIG_PATH.expanduser()
        )
        self._defaults = dict(DEFAULT_CONFIG if defaults is None else defaults)
        self._runtime: dict[str, Any] = {}
        self._layers: list[dict[str, Any]] | None = None

    @classmethod
    def from_path(cls, path: str | Path) -> WorkingCopyConfig:
        return cls(Path(path).resolve())

    def _file_layers(self) -> list[dict[str, Any]]:
        if self._layers is None:
            local = _load_json_object(self._local_path)
            # ~/.arcrc keeps user settings under a "config" key.
            arcrc = _load_json_object(self._global_path).get("config")
            self._layers = [local, arcrc if isinstance(arcrc, dict) else {}]
        return self._layers

    def get_config(self, key: str, default: Any = None) -> Any:
        """Return the highest-precedence value for key."""
        if key in self._runtime:
            return self._runtime[key]
        for layer in self._file_layers():
            if key in layer:
                return layer[key]
        return self._defaults.get(key, default)

    def set_runtime_config(self, key: str, value: Any) -> None:
        logger.debug("Runtime config %s=%r", key, value)
        self._runtime[key] = value
