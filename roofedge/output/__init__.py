"""
Ausgabe der Kachelergebnisse.
"""

from .writer import write_output, write_tiles_json, write_metadata, tiles_to_geodataframe, summarize_tiles, build_metadata

__all__ = [
    'write_output',
    'write_tiles_json',
    'write_metadata',
    'tiles_to_geodataframe',
    'summarize_tiles',
    'build_metadata'
]
