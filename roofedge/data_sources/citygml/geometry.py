"""
CityGML-Geometrieprozessor für die Extraktion von Dachkanten-Ringen.
"""

import logging
from typing import Any, Dict, List, Optional

import numpy as np

from roofedge.data_sources.citygml.client import ID_KEY
from roofedge.data_sources.citygml.config import DEFAULT_RECORD_PATH
from roofedge.geometry import BoundingBox, Building, InvalidOperandError, Vector3


class RecordPathError(KeyError):
    """Ein Datensatz enthält den konfigurierten Schlüsselpfad nicht."""

    def __init__(self, key: str, path: List[str]):
        self.key = key
        self.path = path
        super().__init__(f"Schlüssel '{key}' fehlt im Pfad {'/'.join(path)}")


def parse_pos_list(text: str) -> np.ndarray:
    """Zerlegt eine gml:posList in ein (n, 3)-Array.

    Trennt an beliebigem Leerraum. Bleiben am Ende 1-2 Werte übrig, die
    kein vollständiges Tripel bilden, werden sie verworfen.

    Args:
        text: Leerzeichen-getrennte Koordinaten x y z x y z ...

    Returns:
        np.ndarray: Array der Form (n, 3), n >= 0

    Raises:
        InvalidOperandError: Bei nicht-numerischen oder nicht-endlichen Werten
    """
    tokens = text.split() if text else []
    try:
        values = np.array(tokens, dtype=np.float64)
    except ValueError as e:
        raise InvalidOperandError(f"Ungültige Koordinatenliste: {str(e)}") from e

    if not np.all(np.isfinite(values)):
        raise InvalidOperandError("Koordinatenliste enthält nicht-endliche Werte")

    usable = len(values) - len(values) % 3
    return values[:usable].reshape(-1, 3)


class CityGMLGeometryProcessor:
    """Prozessor für die Dachkanten-Geometrie einzelner Gebäude."""

    def __init__(self, record_path: Optional[List[str]] = None):
        """Initialisiert den Geometrie-Prozessor.

        Args:
            record_path: Schlüsselpfad vom Stadtobjekt zur posList
                (Standard: bldg:lod0RoofEdge, äußerer Ring)
        """
        self.logger = logging.getLogger(__name__)
        self.record_path = list(record_path or DEFAULT_RECORD_PATH)

    def get_pos_list(self, record: Dict[str, Any]) -> str:
        """Folgt dem Schlüsselpfad bis zur Koordinatenliste.

        Trifft der Pfad auf eine Liste (mehrere Flächen oder Ringe), wird das
        erste Element verwendet.

        Raises:
            RecordPathError: Wenn ein Pfadelement fehlt
        """
        node: Any = record
        for key in self.record_path:
            if isinstance(node, list):
                if not node:
                    raise RecordPathError(key, self.record_path)
                self.logger.debug(f"Mehrere Einträge vor '{key}', verwende den ersten")
                node = node[0]
            if not isinstance(node, dict) or key not in node:
                raise RecordPathError(key, self.record_path)
            node = node[key]

        if isinstance(node, list):
            node = node[0] if node else ''
        if isinstance(node, dict):
            # posList mit eigenen Kindelementen ist kein gültiger Koordinatentext
            raise InvalidOperandError(f"posList ist kein Text: {node!r}")
        return str(node)

    def extract_building(self, record: Dict[str, Any]) -> Building:
        """Extrahiert den Dachkanten-Ring eines Gebäudes mit Bounding Box.

        Args:
            record: Stadtobjekt-Datensatz als Schlüssel/Wert-Baum

        Returns:
            Building: Ring in Quellreihenfolge; bbox None bei leerem Ring
        """
        coords = parse_pos_list(self.get_pos_list(record))
        polygon = [Vector3(x, y, z) for x, y, z in coords.tolist()]

        bbox = None
        if len(coords):
            bbox = BoundingBox(
                Vector3.from_sequence(coords.min(axis=0).tolist()),
                Vector3.from_sequence(coords.max(axis=0).tolist())
            )

        return Building(polygon=polygon, bbox=bbox, gml_id=self._find_gml_id(record))

    def _find_gml_id(self, record: Dict[str, Any]) -> Optional[str]:
        building = record.get(self.record_path[0]) if isinstance(record, dict) else None
        if isinstance(building, dict):
            return building.get(ID_KEY)
        return None
