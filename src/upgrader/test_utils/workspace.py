import json
from pathlib import Path
from textwrap import dedent
from typing import Any, Dict, List

import tomli_w
import yaml


class WorkspaceFactory:
    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._files_to_create: List[Dict[str, Any]] = []
        self._pyproject_data: Dict[str, Any] = {}

    def with_config(self, upgrader_config: Dict[str, Any]) -> "WorkspaceFactory":
        tool = self._pyproject_data.setdefault("tool", {})
        tool["upgrader"] = upgrader_config
        return self

    def with_project_name(self, name: str) -> "WorkspaceFactory":
        project = self._pyproject_data.setdefault("project", {})
        project["name"] = name
        return self

    def with_source(self, path: str, content: str) -> "WorkspaceFactory":
        self._files_to_create.append(
            {"path": path, "content": dedent(content), "format": "raw"}
        )
        return self

    def with_change_set(self, path: str, data: Dict[str, Any]) -> "WorkspaceFactory":
        fmt = "yaml" if path.endswith((".yaml", ".yml")) else "json"
        self._files_to_create.append({"path": path, "content": data, "format": fmt})
        return self

    def build(self) -> Path:
        if self._pyproject_data:
            self._files_to_create.append(
                {
                    "path": "pyproject.toml",
                    "content": self._pyproject_data,
                    "format": "toml",
                }
            )

        for file_spec in self._files_to_create:
            output_path = self.root_path / file_spec["path"]
            output_path.parent.mkdir(parents=True, exist_ok=True)

            fmt = file_spec["format"]
            content = file_spec["content"]

            if fmt == "toml":
                with output_path.open("wb") as f:
                    tomli_w.dump(content, f)
                continue

            if fmt == "yaml":
                content = yaml.dump(content, indent=2)
            elif fmt == "json":
                content = json.dumps(content, indent=2)
            output_path.write_text(content, encoding="utf-8")

        return self.root_path
