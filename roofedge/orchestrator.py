"""
Pipeline-Orchestrator für die Extraktion von Dachkanten aus CityGML-Kacheln.

Ablauf: Kacheln ermitteln -> Dateien laden -> Gebäude extrahieren und
aggregieren -> Gesamtmittel -> optional lokales Gitter -> Ausgabe.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from roofedge.core.config_manager import get_module_config, load_config
from roofedge.core.logging_config import LoggedOperation
from roofedge.data_sources.citygml import (
    CityGMLBaseClient,
    CityGMLConfig,
    CityGMLConfigError,
    CityGMLGeometryProcessor
)
from roofedge.geometry import DatasetResult, VectorError
from roofedge.output.writer import write_metadata, write_output
from roofedge.processing.tile_aggregator import aggregate_tiles, combine_tile_means
from roofedge.processing.transformations import LocalGrid

logger = logging.getLogger(__name__)


class PipelineError(Exception):
    """Basisklasse für Pipeline-Fehler"""
    def __init__(self, message: str, step: str, details: Optional[Exception] = None):
        self.message = message
        self.step = step
        self.details = details
        super().__init__(f"{message} in Schritt '{step}'" + (f": {str(details)}" if details else ""))


class TilePipeline:
    """Steuert die Verarbeitung aller konfigurierten Kacheln."""

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 config_path: Optional[Union[str, Path]] = None):
        """Initialisiert die Pipeline.

        Args:
            config: Globale Konfiguration (Sektionen citygml, processing, remap, output)
            config_path: Alternativ Pfad zur YAML-Konfiguration

        Raises:
            CityGMLConfigError: Bei ungültiger CityGML-Konfiguration
        """
        if config is None:
            config = load_config(config_path) if config_path is not None else {}
        self.config = config

        self.citygml = CityGMLConfig(config=get_module_config(config, 'citygml') or {})
        validation = self.citygml.validate()
        if not validation.is_valid:
            raise CityGMLConfigError("Ungültige CityGML-Konfiguration: " + "; ".join(validation.errors))

        self.processing_config = get_module_config(config, 'processing') or {}
        self.remap_config = get_module_config(config, 'remap') or {}
        self.output_config = get_module_config(config, 'output') or {}

        self.client = CityGMLBaseClient(namespaces=self.citygml.namespaces)
        self.processor = CityGMLGeometryProcessor(record_path=self.citygml.record_path)

    def tile_paths(self) -> List[Tuple[int, Path]]:
        """Ermittelt (index, Dateipfad) für alle konfigurierten Kacheln."""
        return [
            (index, self.citygml.input_dir / self.citygml.tile_file_name(index))
            for index in self.citygml.tile_indexes
        ]

    def load_records(self, path: Path) -> List[Any]:
        """Lädt eine Kachel und liefert ihre Stadtobjekt-Datensätze.

        Raises:
            PipelineError: Wenn die Datei fehlt oder nicht geparst werden kann
        """
        if not path.exists():
            raise PipelineError(f"CityGML-Datei nicht gefunden: {path}", "load_tile")
        tree = self.client.load_tree(path)
        if tree is None:
            raise PipelineError(f"CityGML-Datei konnte nicht geladen werden: {path}", "load_tile")
        return self.client.find_city_objects(tree, self.citygml.model_path)

    def process(self) -> DatasetResult:
        """Lädt und aggregiert alle Kacheln.

        Returns:
            DatasetResult: Kacheln in konfigurierter Reihenfolge mit Gesamtmittel

        Raises:
            PipelineError: Bei Lade- oder Rechenfehlern
        """
        tiles = []
        with LoggedOperation("Kacheln laden", logger):
            for index, path in self.tile_paths():
                records = self.load_records(path)
                logger.info(f"📂 {path.name}: {len(records)} Datensätze")
                tiles.append((self.citygml.area_index, index, records))

        try:
            with LoggedOperation("Gebäude extrahieren", logger):
                results = aggregate_tiles(
                    tiles,
                    processor=self.processor,
                    max_workers=int(self.processing_config.get('max_workers', 1))
                )
                mean = combine_tile_means(results)
        except (VectorError, KeyError) as e:
            raise PipelineError("Fehler bei der Gebäudeextraktion", "aggregate", e)

        result = DatasetResult(tiles=results, mean=mean)
        logger.info(f"✅ {result.building_count} Gebäude in {len(results)} Kacheln, Mittel {mean}")

        if self.remap_config.get('enabled', False):
            result = self.remap(result)
        return result

    def remap(self, result: DatasetResult) -> DatasetResult:
        """Bildet alle Kacheln auf das lokale Gitter ab."""
        try:
            with LoggedOperation("Lokales Gitter", logger):
                grid = LocalGrid.from_config(self.remap_config, fallback_origin=result.mean)
                logger.info(f"📍 Ursprung {grid.origin}, {grid.scale} Grad pro Einheit")
                tiles = [grid.remap_tile(tile) for tile in result.tiles]
                return DatasetResult(tiles=tiles, mean=grid.to_grid(result.mean))
        except (VectorError, ValueError) as e:
            raise PipelineError("Fehler bei der Koordinatentransformation", "remap", e)

    def write(self, result: DatasetResult, output_dir: Optional[Union[str, Path]] = None) -> Path:
        """Speichert das Ergebnis und die Metadaten.

        Raises:
            PipelineError: Wenn ein Format nicht gespeichert werden konnte
        """
        output_dir = Path(output_dir or self.output_config.get('directory', 'output'))
        with LoggedOperation("Ausgabe schreiben", logger):
            ok = write_output(
                result,
                output_dir,
                output_formats=self.output_config.get('formats', ['json']),
                crs=self.citygml.srs_name,
                swap_axes=bool(self.output_config.get('swap_axes', False))
            )
            ok = write_metadata(result, output_dir) and ok
        if not ok:
            raise PipelineError("Ausgabe unvollständig", "write_output")
        return output_dir

    def run(self, output_dir: Optional[Union[str, Path]] = None) -> DatasetResult:
        """Führt die komplette Pipeline aus."""
        result = self.process()
        self.write(result, output_dir)
        return result
