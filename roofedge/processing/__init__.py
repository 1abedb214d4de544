"""
Verarbeitungsschritte: Kachel-Aggregation und Koordinatentransformation.
"""

from .tile_aggregator import aggregate_tile, aggregate_tiles, combine_tile_means
from .transformations import remap_point, LocalGrid, DEFAULT_DEGREES_PER_UNIT

__all__ = [
    'aggregate_tile',
    'aggregate_tiles',
    'combine_tile_means',
    'remap_point',
    'LocalGrid',
    'DEFAULT_DEGREES_PER_UNIT'
]
