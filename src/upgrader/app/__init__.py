from .apply import ApplyRunner
from .protocols import PreviewRenderer

__all__ = ["ApplyRunner", "PreviewRenderer"]
