"""
Transformationsfunktionen für extrahierte Gebäudedaten.

Dieses Modul bildet geographische Koordinaten (Grad) relativ zu einem
Ursprung auf ein lokales, gleichmäßiges Gitter ab.
"""

import logging
from typing import Any, Dict, Optional

from roofedge.geometry import (
    BoundingBox,
    Building,
    DivideByZeroError,
    MapTileResult,
    Vector3,
    VectorLike,
    as_vector
)

logger = logging.getLogger(__name__)

# 1 Einheit = 0.00002 Grad
DEFAULT_DEGREES_PER_UNIT = 0.00002


def remap_point(point: VectorLike, origin: VectorLike, scale: float = DEFAULT_DEGREES_PER_UNIT) -> Vector3:
    """Bildet einen Punkt auf das lokale Gitter ab: (point - origin) * (1 / scale).

    Args:
        point: Punkt in geographischen Koordinaten
        origin: Ursprung im selben Koordinatenraum
        scale: Grad pro Gittereinheit

    Returns:
        Vector3: Punkt in Gittereinheiten

    Raises:
        DivideByZeroError: Wenn scale 0 ist
    """
    if scale == 0:
        raise DivideByZeroError("Maßstab 0 ist ungültig")
    return as_vector(point).subtract(origin).scale(1 / scale)


class LocalGrid:
    """Lokales Gitter mit festem Ursprung und Maßstab."""

    def __init__(self, origin: VectorLike, scale: float = DEFAULT_DEGREES_PER_UNIT, snap: bool = False):
        """Initialisiert das Gitter.

        Args:
            origin: Ursprung in geographischen Koordinaten
            scale: Grad pro Gittereinheit
            snap: Wenn True, werden Punkte auf ganzzahlige Gitterzellen abgerundet
        """
        if scale == 0:
            raise DivideByZeroError("Maßstab 0 ist ungültig")
        self.origin = as_vector(origin)
        self.scale = scale
        self.snap = snap

    @classmethod
    def from_config(cls, config: Dict[str, Any], fallback_origin: Optional[Vector3] = None) -> 'LocalGrid':
        """Erstellt das Gitter aus der Sektion 'remap'.

        Args:
            config: Sektion mit origin ([x, y, z] oder 'mean'), degrees_per_unit, snap
            fallback_origin: Ursprung für origin == 'mean' (Gesamtmittel des Datensatzes)

        Raises:
            ValueError: Wenn kein Ursprung bestimmt werden kann
        """
        origin = config.get('origin', 'mean')
        if origin == 'mean':
            if fallback_origin is None:
                raise ValueError("Ursprung 'mean' benötigt ein Datensatzmittel")
            origin = fallback_origin
        return cls(
            origin=origin,
            scale=float(config.get('degrees_per_unit', DEFAULT_DEGREES_PER_UNIT)),
            snap=bool(config.get('snap', False))
        )

    def to_grid(self, point: VectorLike) -> Vector3:
        result = remap_point(point, self.origin, self.scale)
        return result.to_block_location() if self.snap else result

    def remap_building(self, building: Building) -> Building:
        """Bildet den Ring eines Gebäudes ab; die Bounding Box wird neu bestimmt."""
        polygon = [self.to_grid(point) for point in building.polygon]
        return Building(polygon=polygon, bbox=BoundingBox.from_points(polygon), gml_id=building.gml_id)

    def remap_tile(self, tile: MapTileResult) -> MapTileResult:
        buildings = [self.remap_building(building) for building in tile.buildings]
        logger.debug(f"Kachel {tile.area_index}/{tile.index} auf lokales Gitter abgebildet")
        return MapTileResult(
            area_index=tile.area_index,
            index=tile.index,
            buildings=buildings,
            mean=self.to_grid(tile.mean),
            point_count=tile.point_count
        )
