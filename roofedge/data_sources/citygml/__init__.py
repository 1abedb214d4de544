"""
CityGML-Paket für die Verarbeitung von CityGML-Gebäudedaten.
"""

from .config import CityGMLConfig, CityGMLConfigError, DEFAULT_RECORD_PATH
from .client import CityGMLBaseClient
from .geometry import CityGMLGeometryProcessor, RecordPathError, parse_pos_list

__all__ = [
    'CityGMLConfig',
    'CityGMLConfigError',
    'DEFAULT_RECORD_PATH',
    'CityGMLBaseClient',
    'CityGMLGeometryProcessor',
    'RecordPathError',
    'parse_pos_list'
]
