"""
Tests für die Logging-Konfiguration.
"""
import logging

import pytest

from roofedge.core.logging_config import LoggedOperation, setup_logging


def test_logged_operation_success(caplog):
    """Test: Start und Abschluss mit Dauer werden geloggt."""
    with caplog.at_level(logging.INFO):
        with LoggedOperation("Kacheln laden"):
            pass
    messages = [record.getMessage() for record in caplog.records]
    assert "🔄 Schritt 'Kacheln laden' gestartet" in messages
    assert any(m.startswith("✅ Schritt 'Kacheln laden' abgeschlossen in") for m in messages)


def test_logged_operation_names_step_on_failure(caplog):
    """Test: Fehler werden mit Schritt und Fehlertyp geloggt und weitergereicht."""
    with caplog.at_level(logging.INFO):
        with pytest.raises(ZeroDivisionError):
            with LoggedOperation("Mittelwert"):
                raise ZeroDivisionError("keine Punkte")

    errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert errors == ["❌ Schritt 'Mittelwert' abgebrochen (ZeroDivisionError): keine Punkte"]
    assert not any("abgeschlossen" in r.getMessage() for r in caplog.records)


def test_logged_operation_uses_given_logger(caplog):
    """Test: Meldungen gehen an den übergebenen Logger."""
    logger = logging.getLogger("roofedge.test")
    with caplog.at_level(logging.INFO):
        with LoggedOperation("Ausgabe schreiben", logger):
            pass
    assert {record.name for record in caplog.records} == {"roofedge.test"}


def test_setup_logging_sets_level():
    """Test: Root-Logger erhält das gewünschte Level."""
    root = logging.getLogger()
    previous = root.level
    try:
        setup_logging(logging.DEBUG)
        assert root.level == logging.DEBUG
        assert root.handlers
    finally:
        root.setLevel(previous)
