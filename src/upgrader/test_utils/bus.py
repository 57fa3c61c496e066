from contextlib import contextmanager
from typing import Any, Dict, List, Optional

# Import the actual singleton to patch it in-place
import upgrader.common
from upgrader.common.messaging.protocols import Renderer


class SpyRenderer(Renderer):
    def __init__(self):
        self.messages: List[Dict[str, Any]] = []

    def render(self, message: str, level: str) -> None:
        pass

    def record(self, level: str, msg_id: str, params: Dict[str, Any]):
        self.messages.append({"level": level, "id": str(msg_id), "params": params})


class SpyBus:
    """
    Spies on the global upgrader.common.bus singleton.

    The instance methods are patched in place, so modules that already did
    `from upgrader.common import bus` are covered too.
    """

    def __init__(self):
        self._spy_renderer = SpyRenderer()

    @contextmanager
    def patch(self, monkeypatch: Any):
        real_bus = upgrader.common.bus

        def intercept_render(level: str, msg_id: str, **kwargs: Any) -> None:
            # Record the intent only; nothing reaches stdout.
            self._spy_renderer.record(level, msg_id, kwargs)

        monkeypatch.setattr(real_bus, "_render", intercept_render)
        monkeypatch.setattr(real_bus, "_renderer", self._spy_renderer)

        yield self

    def get_messages(self) -> List[Dict[str, Any]]:
        return self._spy_renderer.messages

    def assert_id_called(self, msg_id: str, level: Optional[str] = None):
        key = str(msg_id)
        captured = self.get_messages()

        for msg in captured:
            if msg["id"] == key and (level is None or msg["level"] == level):
                return

        ids_seen = [m["id"] for m in captured]
        raise AssertionError(
            f"Message with ID '{key}' was not sent.\nCaptured IDs: {ids_seen}"
        )
