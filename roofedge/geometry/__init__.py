"""
Geometrie-Paket: Vektortyp und Datenmodell für Dachkanten.
"""

from .vector3 import (
    Vector3,
    VectorLike,
    ZERO,
    as_vector,
    VectorError,
    DivideByZeroError,
    ZeroLengthVectorError,
    InvalidOperandError
)
from .models import BoundingBox, Building, MapTileResult, DatasetResult

__all__ = [
    'Vector3',
    'VectorLike',
    'ZERO',
    'as_vector',
    'VectorError',
    'DivideByZeroError',
    'ZeroLengthVectorError',
    'InvalidOperandError',
    'BoundingBox',
    'Building',
    'MapTileResult',
    'DatasetResult'
]
