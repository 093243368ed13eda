from .load import CONFIG_FILENAME, load_config
from .model import ConfigLoadError, ConvertConfig

__all__ = ["CONFIG_FILENAME", "ConfigLoadError", "ConvertConfig", "load_config"]
