"""
Logging-Konfiguration für das Projekt.
"""
import logging
import sys
import time
from contextlib import contextmanager
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.INFO) -> None:
    """Konfiguriert das Logging-System.

    Args:
        level: Logging-Level (default: INFO)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Prüfe, ob Logger bereits konfiguriert ist
    if root_logger.handlers:
        return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)

    root_logger.debug("🔧 Logging-System initialisiert")


@contextmanager
def LoggedOperation(step: str, logger: Optional[logging.Logger] = None):
    """Protokolliert Beginn, Dauer und Abbruch eines Pipeline-Schritts.

    Ausnahmen werden mit Schrittname und Fehlertyp geloggt und unverändert
    weitergereicht; die Abschlussmeldung erscheint nur bei Erfolg.

    Args:
        step: Name des Schritts (z.B. 'Kacheln laden')
        logger: Ziel-Logger (Standard: Logger dieses Moduls)
    """
    logger = logger or logging.getLogger(__name__)
    logger.info(f"🔄 Schritt '{step}' gestartet")
    started = time.perf_counter()
    try:
        yield
    except Exception as e:
        logger.error(f"❌ Schritt '{step}' abgebrochen ({type(e).__name__}): {e}")
        raise
    logger.info(f"✅ Schritt '{step}' abgeschlossen in {time.perf_counter() - started:.2f} s")
