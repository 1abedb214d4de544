"""
Konfigurationsmanager-Modul für die Pipeline.

Dieses Modul stellt Funktionen zum Laden und Validieren von
YAML-Konfigurationsdateien bereit.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional, Union

import yaml

from roofedge.core.logging_config import LoggedOperation

logger = logging.getLogger(__name__)

# Projekt-Root (enthält config/)
ROOT_DIR = Path(__file__).resolve().parent.parent.parent


class ValidationResult(NamedTuple):
    """Ergebnis der Konfigurationsvalidierung."""
    is_valid: bool
    errors: List[str]


def load_config(config_file: Union[str, Path]) -> Dict[str, Any]:
    """Lädt eine YAML-Konfigurationsdatei.

    Args:
        config_file: Pfad zur Konfigurationsdatei

    Returns:
        Dictionary mit der Konfiguration

    Raises:
        FileNotFoundError: Wenn die Datei nicht existiert
        ValueError: Bei falscher Endung, leerer Datei oder YAML-Syntaxfehler
    """
    try:
        with LoggedOperation("Konfiguration laden", logger):
            config_path = Path(config_file)

            if not config_path.exists():
                raise FileNotFoundError(f"Konfigurationsdatei nicht gefunden: {config_path}")

            if config_path.suffix not in ('.yml', '.yaml'):
                raise ValueError(f"Ungültiges Dateiformat: {config_path.suffix}")

            with open(config_path, 'r', encoding='utf-8') as f:
                try:
                    config = yaml.safe_load(f)
                except yaml.YAMLError as e:
                    raise ValueError("YAML Syntax-Fehler") from e

            if not config:
                raise ValueError("Leere Konfigurationsdatei")
            if not isinstance(config, dict):
                raise ValueError(f"Ungültiges Konfigurationsformat: {type(config).__name__}")

            logger.info(f"✅ Konfiguration geladen: {config_path}")
            return config
    except Exception as e:
        logger.error(f"❌ Fehler beim Laden der Konfiguration: {str(e)}")
        raise


def get_module_config(global_config: Dict[str, Any], module_name: str) -> Optional[Dict[str, Any]]:
    """Holt die Konfiguration für ein spezifisches Modul.

    Args:
        global_config: Globale Konfiguration
        module_name: Name des Moduls (z.B. 'citygml', 'remap', 'output')

    Returns:
        Modulspezifische Konfiguration oder None
    """
    module_config = global_config.get(module_name)
    if module_config is None:
        return None
    if not isinstance(module_config, dict):
        logger.warning(f"⚠️ Modulkonfiguration '{module_name}' ist kein Dictionary")
        return None
    return module_config


def merge_config(defaults: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Führt zwei Konfigurationen rekursiv zusammen; overrides hat Vorrang.

    Args:
        defaults: Basiskonfiguration (wird nicht verändert)
        overrides: Überschreibende Werte

    Returns:
        Neue zusammengeführte Konfiguration
    """
    merged = copy.deepcopy(defaults)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def get_config_path(config_name: str = "global.yml") -> Path:
    """Ermittelt den absoluten Pfad zu einer Konfigurationsdatei im config/-Verzeichnis.

    Args:
        config_name: Name der Konfigurationsdatei (z.B. 'global.yml')

    Returns:
        Absoluter Pfad zur Konfigurationsdatei
    """
    if not config_name.endswith(('.yml', '.yaml')):
        config_name += '.yml'
    return ROOT_DIR / 'config' / config_name
