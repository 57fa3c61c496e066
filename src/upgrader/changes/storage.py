import json
from pathlib import Path
from typing import Optional

import yaml

from upgrader.common.adapters.yaml_adapter import YamlAdapter
from .change_set import CodeChangeSet
from .exceptions import ChangeSetFormatError


class ChangeSetStorage:
    """Reads and writes change sets as JSON or YAML documents, chosen by suffix."""

    def __init__(self, adapter: Optional[YamlAdapter] = None):
        self._yaml = adapter or YamlAdapter()

    @staticmethod
    def _is_yaml(path: Path) -> bool:
        return path.suffix in (".yaml", ".yml")

    def load(self, path: Path) -> CodeChangeSet:
        if not path.is_file():
            raise FileNotFoundError(f"Change set not found at: {path}")

        text = path.read_text(encoding="utf-8")
        try:
            data = self._yaml.parse(text) if self._is_yaml(path) else json.loads(text)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ChangeSetFormatError(f"Could not parse change set {path}: {e}") from e

        return CodeChangeSet.from_dict(data)

    def dump(self, change_set: CodeChangeSet, path: Path) -> None:
        data = change_set.to_dict()
        if self._is_yaml(path):
            self._yaml.save(path, data)
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
