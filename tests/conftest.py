"""
Gemeinsame Test-Fixtures und Konfiguration.
"""
import pytest
from pathlib import Path

SAMPLE_TILE = """<?xml version="1.0" encoding="UTF-8"?>
<core:CityModel xmlns:core="http://www.opengis.net/citygml/2.0"
                xmlns:bldg="http://www.opengis.net/citygml/building/2.0"
                xmlns:gml="http://www.opengis.net/gml">
    <gml:boundedBy>
        <gml:Envelope srsName="http://www.opengis.net/def/crs/EPSG/0/6697" srsDimension="3">
            <gml:lowerCorner>0 0 0</gml:lowerCorner>
            <gml:upperCorner>2 2 0</gml:upperCorner>
        </gml:Envelope>
    </gml:boundedBy>
    <core:cityObjectMember>
        <bldg:Building gml:id="bldg_0001">
            <bldg:lod0RoofEdge>
                <gml:MultiSurface>
                    <gml:surfaceMember>
                        <gml:Polygon>
                            <gml:exterior>
                                <gml:LinearRing>
                                    <gml:posList>0 0 0 2 0 0</gml:posList>
                                </gml:LinearRing>
                            </gml:exterior>
                        </gml:Polygon>
                    </gml:surfaceMember>
                </gml:MultiSurface>
            </bldg:lod0RoofEdge>
        </bldg:Building>
    </core:cityObjectMember>
    <core:cityObjectMember>
        <bldg:Building gml:id="bldg_0002">
            <bldg:lod0RoofEdge>
                <gml:MultiSurface>
                    <gml:surfaceMember>
                        <gml:Polygon>
                            <gml:exterior>
                                <gml:LinearRing>
                                    <gml:posList>0 2 0</gml:posList>
                                </gml:LinearRing>
                            </gml:exterior>
                        </gml:Polygon>
                    </gml:surfaceMember>
                </gml:MultiSurface>
            </bldg:lod0RoofEdge>
        </bldg:Building>
    </core:cityObjectMember>
</core:CityModel>
"""

ROOF_TILE = """<?xml version="1.0" encoding="UTF-8"?>
<core:CityModel xmlns:core="http://www.opengis.net/citygml/2.0"
                xmlns:bldg="http://www.opengis.net/citygml/building/2.0"
                xmlns:gml="http://www.opengis.net/gml">
    <core:cityObjectMember>
        <bldg:Building gml:id="bldg_roof">
            <bldg:lod0RoofEdge>
                <gml:MultiSurface>
                    <gml:surfaceMember>
                        <gml:Polygon>
                            <gml:exterior>
                                <gml:LinearRing>
                                    <gml:posList>36.5514 139.9 10 36.5516 139.9 10
                                        36.5516 139.9002 12 36.5514 139.9 10</gml:posList>
                                </gml:LinearRing>
                            </gml:exterior>
                        </gml:Polygon>
                    </gml:surfaceMember>
                </gml:MultiSurface>
            </bldg:lod0RoofEdge>
        </bldg:Building>
    </core:cityObjectMember>
</core:CityModel>
"""


def make_record(pos_list: str, gml_id: str = None) -> dict:
    """Erstellt einen Stadtobjekt-Datensatz mit der Standardpfad-Struktur."""
    building = {
        'bldg:lod0RoofEdge': {
            'gml:MultiSurface': {
                'gml:surfaceMember': {
                    'gml:Polygon': {
                        'gml:exterior': {
                            'gml:LinearRing': {
                                'gml:posList': pos_list
                            }
                        }
                    }
                }
            }
        }
    }
    if gml_id:
        building['@gml:id'] = gml_id
    return {'bldg:Building': building}


@pytest.fixture
def sample_tile_xml():
    """CityGML-Kachel mit zwei Gebäuden und insgesamt drei Punkten."""
    return SAMPLE_TILE


@pytest.fixture
def roof_tile_xml():
    """CityGML-Kachel mit einem Gebäude in geographischen Koordinaten."""
    return ROOF_TILE


@pytest.fixture
def record_factory():
    """Fabrik für Stadtobjekt-Datensätze."""
    return make_record


@pytest.fixture
def tile_dir(tmp_path, sample_tile_xml, roof_tile_xml) -> Path:
    """Verzeichnis mit zwei Kacheln im PLATEAU-Dateinamensschema."""
    directory = tmp_path / "bldg"
    directory.mkdir()
    (directory / "54396770_bldg_6697_op.gml").write_text(sample_tile_xml, encoding="utf-8")
    (directory / "54396771_bldg_6697_op.gml").write_text(roof_tile_xml, encoding="utf-8")
    return directory


@pytest.fixture
def pipeline_config(tile_dir, tmp_path):
    """Globale Konfiguration für zwei Testkacheln."""
    return {
        'citygml': {
            'input_dir': str(tile_dir),
            'area_index': 543967,
            'tile_indexes': [70, 71]
        },
        'processing': {
            'max_workers': 1
        },
        'remap': {
            'enabled': False
        },
        'output': {
            'directory': str(tmp_path / "output"),
            'formats': ['json']
        }
    }
