"""
Aggregation der Gebäude einer Kachel und Berechnung der Mittelpunkte.

Jeder Aufruf hält Summe und Punktanzahl lokal; Kacheln teilen keinen
Zustand und können daher parallel verarbeitet werden.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from roofedge.data_sources.citygml.geometry import CityGMLGeometryProcessor
from roofedge.geometry import DivideByZeroError, MapTileResult, Vector3, ZERO

logger = logging.getLogger(__name__)

# (area_index, index, Datensätze)
TileInput = Tuple[int, int, Sequence[Dict[str, Any]]]


def aggregate_tile(records: Iterable[Dict[str, Any]],
                   area_index: int,
                   index: int,
                   processor: Optional[CityGMLGeometryProcessor] = None) -> MapTileResult:
    """Extrahiert alle Gebäude einer Kachel und bildet den Punktmittelwert.

    Der Mittelwert ist über alle Punkte aller Gebäude gewichtet, nicht über
    die Mittelpunkte der einzelnen Gebäude.

    Args:
        records: Stadtobjekt-Datensätze in Quellreihenfolge
        area_index: Gebietskennung
        index: Kachelindex
        processor: Geometrie-Prozessor (Standard: lod0RoofEdge-Pfad)

    Returns:
        MapTileResult: Gebäude in Quellreihenfolge und Mittelpunkt

    Raises:
        DivideByZeroError: Wenn die Kachel keinen einzigen Punkt enthält
    """
    processor = processor or CityGMLGeometryProcessor()
    buildings = []
    total = ZERO
    count = 0

    for record in records:
        building = processor.extract_building(record)
        buildings.append(building)
        for point in building.polygon:
            total = total.add(point)
            count += 1

    try:
        mean = total.divide(count)
    except DivideByZeroError:
        logger.error(f"❌ Kachel {area_index}/{index} enthält keine Punkte")
        raise

    logger.info(f"✅ Kachel {area_index}/{index}: {len(buildings)} Gebäude, {count} Punkte, Mittel {mean}")
    return MapTileResult(
        area_index=area_index,
        index=index,
        buildings=buildings,
        mean=mean,
        point_count=count
    )


def aggregate_tiles(tiles: Sequence[TileInput],
                    processor: Optional[CityGMLGeometryProcessor] = None,
                    max_workers: int = 1) -> List[MapTileResult]:
    """Aggregiert mehrere Kacheln, optional parallel.

    Args:
        tiles: Liste von (area_index, index, Datensätze)
        processor: Geometrie-Prozessor für alle Kacheln
        max_workers: Anzahl paralleler Worker (1 = sequentiell)

    Returns:
        Ergebnisse in der Reihenfolge der Eingabe
    """
    processor = processor or CityGMLGeometryProcessor()

    def run(tile: TileInput) -> MapTileResult:
        area_index, index, records = tile
        return aggregate_tile(records, area_index, index, processor)

    if max_workers <= 1:
        return [run(tile) for tile in tiles]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        # map liefert in Eingabereihenfolge
        return list(executor.map(run, tiles))


def combine_tile_means(tiles: Iterable[MapTileResult]) -> Vector3:
    """Punktgewichtetes Gesamtmittel über mehrere Kacheln.

    Raises:
        DivideByZeroError: Wenn insgesamt keine Punkte vorliegen
    """
    total = ZERO
    count = 0
    for tile in tiles:
        total = total.add(tile.mean.scale(tile.point_count))
        count += tile.point_count
    return total.divide(count)
