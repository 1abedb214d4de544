"""
CLI-Schnittstelle für die Extraktion von Dachkanten aus CityGML-Kacheln.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from roofedge.core.config_manager import get_config_path, load_config
from roofedge.core.logging_config import setup_logging
from roofedge.data_sources.citygml import CityGMLConfigError
from roofedge.orchestrator import PipelineError, TilePipeline

logger = logging.getLogger(__name__)


@click.command()
@click.option('--config', '-c', 'config_file', default=None, help='Pfad zur Konfigurationsdatei (Standard: config/global.yml)')
@click.option('--input-dir', '-i', default=None, help='Verzeichnis mit den CityGML-Kacheln')
@click.option('--output-dir', '-o', default=None, help='Ausgabeverzeichnis')
@click.option('--workers', '-w', type=int, default=None, help='Anzahl paralleler Worker')
@click.option('--remap/--no-remap', default=None, help='Auf lokales Gitter abbilden')
@click.option('--verbose', '-v', is_flag=True, help='Debug-Ausgaben aktivieren')
def run_tiles(config_file: Optional[str], input_dir: Optional[str], output_dir: Optional[str],
              workers: Optional[int], remap: Optional[bool], verbose: bool):
    """Extrahiert Dachkanten aller konfigurierten Kacheln."""
    setup_logging(logging.DEBUG if verbose else logging.INFO)
    try:
        config_path = Path(config_file) if config_file else get_config_path()
        logger.info(f"📂 Lade Konfiguration: {config_path}")
        config = load_config(config_path)

        # Kommandozeile überschreibt die Konfiguration
        if input_dir is not None:
            config.setdefault('citygml', {})['input_dir'] = input_dir
        if workers is not None:
            config.setdefault('processing', {})['max_workers'] = workers
        if remap is not None:
            config.setdefault('remap', {})['enabled'] = remap

        pipeline = TilePipeline(config=config)
        logger.info("🚀 Starte Verarbeitung...")
        result = pipeline.run(output_dir=output_dir)

        logger.info(f"✅ {result.building_count} Gebäude extrahiert, Mittel {result.mean}")
        click.echo(f"{result.building_count} Gebäude, {result.point_count} Punkte, Mittel {result.mean}")

    except PipelineError as e:
        logger.error(f"❌ Pipeline-Fehler: {e.message}")
        if e.details:
            logger.debug(f"Details: {str(e.details)}")
        raise click.Abort()
    except (CityGMLConfigError, FileNotFoundError, ValueError) as e:
        logger.error(f"❌ Konfigurationsfehler: {str(e)}")
        raise click.Abort()


if __name__ == "__main__":
    run_tiles()
