from .loader import UpgraderConfig, load_config_from_path

__all__ = ["UpgraderConfig", "load_config_from_path"]
