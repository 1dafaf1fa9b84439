from .loader import load_config, validate_options
from .models import DtsConfig, OptionsResult

__all__ = [
    "DtsConfig",
    "OptionsResult",
    "load_config",
    "validate_options",
]
