import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from upgrader.common.adapters.yaml_adapter import YamlAdapter

log = logging.getLogger(__name__)


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, str]:
    flat: Dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{full_key}."))
        else:
            flat[full_key] = str(value)
    return flat


class MessageCatalog:
    """
    Resolves dotted message IDs to templates.

    Templates come from a stack of YAML files, first match wins. Nested mappings
    are addressed with dots, so `apply: {run: {success: ...}}` answers
    `apply.run.success`. An unknown ID resolves to itself.
    """

    def __init__(self, paths: List[Path], adapter: Optional[YamlAdapter] = None):
        self._paths = paths
        self._adapter = adapter or YamlAdapter()
        self._templates: Optional[Dict[str, str]] = None

    def _load(self) -> Dict[str, str]:
        if self._templates is None:
            merged: Dict[str, str] = {}
            # Lowest priority first so earlier paths overwrite later ones.
            for path in reversed(self._paths):
                if not path.is_file():
                    continue
                log.debug("Loading messages from %s", path)
                merged.update(_flatten(self._adapter.load(path)))
            self._templates = merged
        return self._templates

    def get(self, msg_id: str) -> str:
        key = str(msg_id)
        return self._load().get(key, key)

    def __call__(self, msg_id: str) -> str:
        return self.get(msg_id)


class DictCatalog:
    def __init__(self, templates: Dict[str, str]):
        self._templates = templates

    def get(self, msg_id: str) -> str:
        key = str(msg_id)
        return self._templates.get(key, key)

    def __call__(self, msg_id: str) -> str:
        return self.get(msg_id)
