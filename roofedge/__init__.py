"""
roofedge - Dachkanten-Extraktion aus CityGML-Gebäudekacheln.
"""

__version__ = "0.1.0"
