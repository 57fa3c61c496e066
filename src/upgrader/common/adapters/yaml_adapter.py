from pathlib import Path
from typing import Any, Dict

import yaml

from upgrader.common.interfaces import DocumentAdapter


class _MultilineDumper(yaml.SafeDumper):
    pass


def _str_presenter(dumper: yaml.SafeDumper, data: str):
    # File contents read best as literal blocks; single-line strings stay plain.
    style = "|" if "\n" in data else None
    return dumper.represent_scalar("tag:yaml.org,2002:str", data, style=style)


_MultilineDumper.add_representer(str, _str_presenter)


class YamlAdapter(DocumentAdapter):
    def load(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}

        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError:
            return {}

        if not isinstance(content, dict):
            return {}

        return {str(k): v for k, v in content.items() if v is not None}

    def parse(self, text: str) -> Any:
        return yaml.safe_load(text)

    def dump(self, data: Dict[str, Any]) -> str:
        return yaml.dump(
            data,
            Dumper=_MultilineDumper,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )

    def save(self, path: Path, data: Dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        new_content = self.dump(data)

        if path.exists():
            try:
                if path.read_text(encoding="utf-8") == new_content:
                    return
            except (OSError, UnicodeDecodeError):
                # Unreadable or binary, overwrite it.
                pass

        path.write_text(new_content, encoding="utf-8")
