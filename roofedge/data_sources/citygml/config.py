"""
CityGML-Konfigurationsklasse.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from roofedge.core.config_manager import ValidationResult, load_config, merge_config

DEFAULT_NAMESPACES = {
    'core': 'http://www.opengis.net/citygml/2.0',
    'bldg': 'http://www.opengis.net/citygml/building/2.0',
    'gml': 'http://www.opengis.net/gml',
    'gen': 'http://www.opengis.net/citygml/generics/2.0',
    'uro': 'https://www.geospatial.jp/iur/uro/3.0'
}

# Pfad vom Stadtobjekt zum posList der Dachkante (LOD0)
DEFAULT_RECORD_PATH = [
    'bldg:Building',
    'bldg:lod0RoofEdge',
    'gml:MultiSurface',
    'gml:surfaceMember',
    'gml:Polygon',
    'gml:exterior',
    'gml:LinearRing',
    'gml:posList'
]

DEFAULT_CITYGML_CONFIG = {
    'namespaces': DEFAULT_NAMESPACES,
    'model_path': ['core:CityModel', 'core:cityObjectMember'],
    'record_path': DEFAULT_RECORD_PATH,
    'geometry': {
        'srs_name': 'EPSG:6697'
    },
    'input_dir': 'data/bldg',
    'file_pattern': '{area_index}{index}_bldg_6697_op.gml',
    'area_index': 543967,
    'tile_indexes': [
        70, 71, 72, 73, 74,
        60, 61, 62, 63, 64,
        52, 53, 54
    ]
}


class CityGMLConfigError(Exception):
    """Fehler bei der CityGML-Konfiguration."""
    pass


class CityGMLConfig:
    """Konfigurationsklasse für die CityGML-Verarbeitung.

    Fehlende Werte werden mit DEFAULT_CITYGML_CONFIG aufgefüllt.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, config_path: Optional[str] = None):
        """Initialisiert die CityGML-Konfiguration.

        Args:
            config: Optional[Dict] - Direkte Konfiguration (Sektion 'citygml')
            config_path: Optional[str] - Pfad zu einer YAML-Datei mit Sektion 'citygml'
        """
        self.logger = logging.getLogger(__name__)

        if config is not None:
            overrides = config
            self.logger.debug("CityGML-Konfiguration aus Dictionary geladen")
        elif config_path is not None:
            overrides = load_config(config_path).get('citygml', {})
            self.logger.info(f"✅ CityGML-Konfiguration geladen von: {config_path}")
        else:
            overrides = {}
            self.logger.debug("Keine CityGML-Konfiguration übergeben, verwende Standardwerte")

        self.config = merge_config(DEFAULT_CITYGML_CONFIG, overrides)

    def validate(self) -> ValidationResult:
        """Validiert die Konfiguration.

        Returns:
            ValidationResult: is_valid und Liste der Fehlermeldungen
        """
        errors = []

        if not isinstance(self.config.get('namespaces'), dict):
            errors.append("namespaces muss ein Dictionary sein")

        for key in ('model_path', 'record_path'):
            path = self.config.get(key)
            if not isinstance(path, list) or not path or not all(isinstance(p, str) for p in path):
                errors.append(f"{key} muss eine nicht-leere Liste von Schlüsseln sein")

        geometry = self.config.get('geometry')
        srs_name = geometry.get('srs_name') if isinstance(geometry, dict) else None
        if not isinstance(srs_name, str) or not srs_name.strip():
            errors.append("geometry.srs_name fehlt")

        if not isinstance(self.config.get('area_index'), int):
            errors.append("area_index muss eine Ganzzahl sein")

        indexes = self.config.get('tile_indexes')
        if not isinstance(indexes, list) or not all(isinstance(i, int) for i in indexes):
            errors.append("tile_indexes muss eine Liste von Ganzzahlen sein")

        pattern = self.config.get('file_pattern')
        if not isinstance(pattern, str) or '{index}' not in pattern:
            errors.append("file_pattern muss den Platzhalter {index} enthalten")

        for error in errors:
            self.logger.warning(f"⚠️ {error}")

        return ValidationResult(not errors, errors)

    def tile_file_name(self, index: int) -> str:
        """Dateiname einer Kachel, z.B. '54396770_bldg_6697_op.gml'."""
        return self.file_pattern.format(area_index=self.area_index, index=index)

    @property
    def namespaces(self) -> Dict[str, str]:
        return self.config['namespaces']

    @property
    def model_path(self) -> List[str]:
        """Schlüsselpfad vom Dokument zur Liste der Stadtobjekte."""
        return self.config['model_path']

    @property
    def record_path(self) -> List[str]:
        """Schlüsselpfad vom Stadtobjekt zur Koordinatenliste."""
        return self.config['record_path']

    @property
    def srs_name(self) -> str:
        return self.config['geometry']['srs_name']

    @property
    def input_dir(self) -> Path:
        return Path(self.config['input_dir'])

    @property
    def file_pattern(self) -> str:
        return self.config['file_pattern']

    @property
    def area_index(self) -> int:
        return self.config['area_index']

    @property
    def tile_indexes(self) -> List[int]:
        return self.config['tile_indexes']
