"""
Utility modules for the number scrambler.
"""

from .config import (
    ConfigurationManager,
    ConfigurationFactory,
    ConfigurationError,
    get_config,
    set_config,
    init_config,
    ConfigContext
)

__all__ = [
    'ConfigurationManager',
    'ConfigurationFactory',
    'ConfigurationError',
    'get_config',
    'set_config',
    'init_config',
    'ConfigContext'
]
