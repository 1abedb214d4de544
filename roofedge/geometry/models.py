"""
Datenmodell für extrahierte Gebäude und Kachelergebnisse.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .vector3 import Vector3


@dataclass(frozen=True)
class BoundingBox:
    """Achsenparallele Box (min, max) über die Punkte eines Rings."""

    min: Vector3
    max: Vector3

    @classmethod
    def from_points(cls, points: Iterable[Vector3]) -> Optional['BoundingBox']:
        """Bestimmt die Box über alle Punkte.

        Args:
            points: Punkte in beliebiger Reihenfolge

        Returns:
            Optional[BoundingBox]: Box oder None für eine leere Punktfolge
        """
        box = None
        for point in points:
            box = cls(point, point) if box is None else box.include(point)
        return box

    def include(self, point: Vector3) -> 'BoundingBox':
        """Erweitert die Box achsenweise um einen Punkt."""
        return BoundingBox(
            Vector3(min(self.min.x, point.x), min(self.min.y, point.y), min(self.min.z, point.z)),
            Vector3(max(self.max.x, point.x), max(self.max.y, point.y), max(self.max.z, point.z))
        )

    def contains(self, point: Vector3) -> bool:
        return (self.min.x <= point.x <= self.max.x
                and self.min.y <= point.y <= self.max.y
                and self.min.z <= point.z <= self.max.z)

    @property
    def size(self) -> Vector3:
        return self.max.subtract(self.min)


@dataclass
class Building:
    """Dachkanten-Ring eines Gebäudes mit optionaler Bounding Box."""

    polygon: List[Vector3] = field(default_factory=list)
    bbox: Optional[BoundingBox] = None
    gml_id: Optional[str] = None

    @property
    def min(self) -> Optional[Vector3]:
        return self.bbox.min if self.bbox else None

    @property
    def max(self) -> Optional[Vector3]:
        return self.bbox.max if self.bbox else None

    def to_dict(self) -> Dict[str, Any]:
        """Serialisierbare Form; min/max nur bei nicht-leerem Ring."""
        data: Dict[str, Any] = {'polygon': [point.to_dict() for point in self.polygon]}
        if self.bbox is not None:
            data['min'] = self.bbox.min.to_dict()
            data['max'] = self.bbox.max.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Building':
        polygon = [Vector3.from_mapping(point) for point in data.get('polygon', [])]
        bbox = None
        if data.get('min') is not None and data.get('max') is not None:
            bbox = BoundingBox(Vector3.from_mapping(data['min']), Vector3.from_mapping(data['max']))
        return cls(polygon=polygon, bbox=bbox)


@dataclass
class MapTileResult:
    """Ergebnis einer Kachel: Gebäude in Quellreihenfolge und Mittelpunkt."""

    area_index: int
    index: int
    buildings: List[Building]
    mean: Vector3
    point_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'areaIndex': self.area_index,
            'index': self.index,
            'buildings': [building.to_dict() for building in self.buildings]
        }


@dataclass
class DatasetResult:
    """Alle Kacheln eines Laufs mit dem punktgewichteten Gesamtmittel."""

    tiles: List[MapTileResult]
    mean: Vector3

    @property
    def building_count(self) -> int:
        return sum(len(tile.buildings) for tile in self.tiles)

    @property
    def point_count(self) -> int:
        return sum(tile.point_count for tile in self.tiles)

    def to_list(self) -> List[Dict[str, Any]]:
        return [tile.to_dict() for tile in self.tiles]
