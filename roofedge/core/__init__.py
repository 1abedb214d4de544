"""
Kernfunktionen: Konfiguration und Logging.
"""

from .config_manager import load_config, get_module_config, merge_config, get_config_path, ValidationResult
from .logging_config import setup_logging, LoggedOperation

__all__ = [
    'load_config',
    'get_module_config',
    'merge_config',
    'get_config_path',
    'ValidationResult',
    'setup_logging',
    'LoggedOperation'
]
