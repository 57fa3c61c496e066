from typing import Any, Optional

from .protocols import MessageSource, Renderer


class MessageBus:
    def __init__(self, source: MessageSource):
        self._renderer: Optional[Renderer] = None
        self._source = source

    def set_renderer(self, renderer: Optional[Renderer]) -> None:
        self._renderer = renderer

    def _render(self, level: str, msg_id: str, **kwargs: Any) -> None:
        if not self._renderer:
            return
        self._renderer.render(self.render_to_string(msg_id, **kwargs), level)

    def debug(self, msg_id: str, **kwargs: Any) -> None:
        self._render("debug", msg_id, **kwargs)

    def info(self, msg_id: str, **kwargs: Any) -> None:
        self._render("info", msg_id, **kwargs)

    def success(self, msg_id: str, **kwargs: Any) -> None:
        self._render("success", msg_id, **kwargs)

    def warning(self, msg_id: str, **kwargs: Any) -> None:
        self._render("warning", msg_id, **kwargs)

    def error(self, msg_id: str, **kwargs: Any) -> None:
        self._render("error", msg_id, **kwargs)

    def render_to_string(self, msg_id: str, **kwargs: Any) -> str:
        template = self._source.get(msg_id)
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError):
            return f"<formatting_error for '{msg_id}'>"
