"""
KuriOS Core Module

Core components including:
- Configuration Loader
- Clock helpers
"""

from . import clock
from .config_loader import ConfigLoader, Config, get_config, VERSION

__all__ = [
    # Clock
    'clock',
    # Config
    'ConfigLoader',
    'Config',
    'get_config',
    'VERSION',
]
