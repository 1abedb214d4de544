# roofedge/output/writer.py

"""
Output-Writer für die Dachkanten-Pipeline.

Dieses Modul stellt Funktionen zum Speichern der Kachelergebnisse
in verschiedenen Formaten bereit.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import geopandas as gpd
import pandas as pd
import yaml
from shapely.geometry import Polygon

from roofedge.geometry import DatasetResult, MapTileResult

# Logger konfigurieren
logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ('json', 'geojson', 'csv')


def tiles_to_geodataframe(tiles: Sequence[MapTileResult],
                          crs: Optional[str] = None,
                          swap_axes: bool = False) -> gpd.GeoDataFrame:
    """Erstellt einen GeoDataFrame mit einer Zeile pro Gebäude.

    Ringe mit weniger als 3 Punkten ergeben kein Polygon und werden
    übersprungen.

    Args:
        tiles: Kachelergebnisse
        crs: Koordinatensystem (z.B. 'EPSG:6697')
        swap_axes: Vertauscht x und y (Breite/Länge -> Länge/Breite)

    Returns:
        gpd.GeoDataFrame mit areaIndex, index, building, min_z, max_z
    """
    rows: List[Dict[str, Any]] = []
    geometries = []
    skipped = 0

    for tile in tiles:
        for number, building in enumerate(tile.buildings):
            if len(building.polygon) < 3:
                skipped += 1
                continue
            if swap_axes:
                coords = [(p.y, p.x, p.z) for p in building.polygon]
            else:
                coords = [(p.x, p.y, p.z) for p in building.polygon]
            rows.append({
                'areaIndex': tile.area_index,
                'index': tile.index,
                'building': number,
                'gml_id': building.gml_id,
                'min_z': building.min.z,
                'max_z': building.max.z
            })
            geometries.append(Polygon(coords))

    if skipped:
        logger.warning(f"⚠️ {skipped} Gebäude mit weniger als 3 Punkten übersprungen")

    columns = ['areaIndex', 'index', 'building', 'gml_id', 'min_z', 'max_z']
    return gpd.GeoDataFrame(rows, columns=columns, geometry=geometries, crs=crs)


def summarize_tiles(tiles: Sequence[MapTileResult]) -> pd.DataFrame:
    """Übersicht mit einer Zeile pro Kachel (Gebäude, Punkte, Mittelpunkt)."""
    return pd.DataFrame(
        [
            {
                'areaIndex': tile.area_index,
                'index': tile.index,
                'buildings': len(tile.buildings),
                'points': tile.point_count,
                'mean_x': tile.mean.x,
                'mean_y': tile.mean.y,
                'mean_z': tile.mean.z
            }
            for tile in tiles
        ],
        columns=['areaIndex', 'index', 'buildings', 'points', 'mean_x', 'mean_y', 'mean_z']
    )


def write_tiles_json(tiles: Sequence[MapTileResult], output_path: Union[str, Path]) -> Path:
    """Schreibt die Kachelergebnisse als JSON-Liste (buildings.json).

    Args:
        tiles: Kachelergebnisse
        output_path: Zieldatei

    Returns:
        Pfad der geschriebenen Datei
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump([tile.to_dict() for tile in tiles], f, indent=2, ensure_ascii=False)
    logger.info(f"✅ {len(tiles)} Kacheln als JSON gespeichert: {output_path}")
    return output_path


def write_output(result: DatasetResult,
                 output_dir: Union[str, Path],
                 output_formats: Optional[List[str]] = None,
                 crs: Optional[str] = None,
                 swap_axes: bool = False) -> bool:
    """Speichert das Ergebnis in den gewünschten Formaten.

    Args:
        result: Ergebnis des Laufs
        output_dir: Ausgabeverzeichnis
        output_formats: Liste der Formate (Standard: ['json'])
        crs: Koordinatensystem für GeoJSON
        swap_axes: Achsen für GeoJSON vertauschen

    Returns:
        bool: True wenn alle Formate erfolgreich gespeichert wurden
    """
    if output_formats is None:
        output_formats = ['json']

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"📝 Speichere Daten in: {output_dir}")
    logger.info(f"📊 Ausgabeformate: {output_formats}")

    success = True
    for fmt in output_formats:
        try:
            if fmt == 'json':
                write_tiles_json(result.tiles, output_dir / 'buildings.json')
            elif fmt == 'geojson':
                output_path = output_dir / 'buildings.geojson'
                gdf = tiles_to_geodataframe(result.tiles, crs=crs, swap_axes=swap_axes)
                gdf.to_file(output_path, driver='GeoJSON')
                logger.info(f"✅ {len(gdf)} Gebäude als GeoJSON gespeichert: {output_path}")
            elif fmt == 'csv':
                output_path = output_dir / 'tiles_summary.csv'
                summarize_tiles(result.tiles).to_csv(output_path, index=False)
                logger.info(f"✅ Kachelübersicht als CSV gespeichert: {output_path}")
            else:
                logger.error(f"❌ Nicht unterstütztes Ausgabeformat: {fmt}")
                success = False
        except Exception as e:
            logger.error(f"❌ Fehler beim Speichern als {fmt}: {str(e)}")
            success = False

    return success


def build_metadata(result: DatasetResult) -> Dict[str, Any]:
    """Stellt die Metadaten eines Laufs zusammen."""
    return {
        'tiles': [
            {
                'areaIndex': tile.area_index,
                'index': tile.index,
                'buildings': len(tile.buildings),
                'points': tile.point_count,
                'mean': tile.mean.to_dict()
            }
            for tile in result.tiles
        ],
        'total_buildings': result.building_count,
        'total_points': result.point_count,
        'mean': result.mean.to_dict()
    }


def write_metadata(result: DatasetResult, output_dir: Union[str, Path]) -> bool:
    """Speichert Metadaten zur Verarbeitung.

    Args:
        result: Ergebnis des Laufs
        output_dir: Ausgabeverzeichnis

    Returns:
        bool: True wenn Metadaten erfolgreich gespeichert wurden
    """
    try:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        output_path = output_dir / 'processing_metadata.yml'
        with open(output_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(build_metadata(result), f, default_flow_style=False, allow_unicode=True, sort_keys=False)

        logger.info(f"✅ Metadaten gespeichert: {output_path}")
        return True

    except (OSError, yaml.YAMLError) as e:
        logger.error(f"❌ Fehler beim Speichern der Metadaten: {str(e)}")
        return False
