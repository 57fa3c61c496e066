from pathlib import Path
from typing import Any, Dict, Protocol


class DocumentAdapter(Protocol):
    def load(self, path: Path) -> Dict[str, Any]: ...

    def save(self, path: Path, data: Dict[str, Any]) -> None: ...
