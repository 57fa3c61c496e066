import os
from pathlib import Path

from .messaging.bus import MessageBus
from .messaging.catalog import DictCatalog, MessageCatalog
from .interfaces import DocumentAdapter
from .adapters.yaml_adapter import YamlAdapter

# --- Composition Root for the shared services ---


def _create_catalog() -> MessageCatalog:
    lang = os.getenv("UPGRADER_LANG", "en")
    # Project overrides win over the packaged defaults.
    user_override = Path.cwd() / ".upgrader" / "messages" / f"{lang}.yaml"
    default_assets = Path(__file__).parent / "assets" / "messages" / f"{lang}.yaml"
    return MessageCatalog([user_override, default_assets])


upgrader_catalog = _create_catalog()

bus = MessageBus(source=upgrader_catalog)

__all__ = [
    "bus",
    "upgrader_catalog",
    "MessageBus",
    "MessageCatalog",
    "DictCatalog",
    "DocumentAdapter",
    "YamlAdapter",
]
