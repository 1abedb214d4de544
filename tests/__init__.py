"""
Test-Suite für die Dachkanten-Extraktion.

Dieses Paket enthält alle Tests für roofedge,
einschließlich Unit-Tests und Integrationstests.
"""

import os
import sys

# Füge das Hauptverzeichnis zum Python-Pfad hinzu
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
