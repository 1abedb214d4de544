"""
Tests für den CityGML-Geometrieprozessor.
"""
import numpy as np
import pytest

from roofedge.data_sources.citygml import CityGMLGeometryProcessor, RecordPathError, parse_pos_list
from roofedge.geometry import InvalidOperandError, Vector3


@pytest.fixture
def processor():
    """Prozessor mit Standardpfad."""
    return CityGMLGeometryProcessor()


class TestParsePosList:
    """Tests für das Zerlegen von Koordinatenlisten."""

    def test_three_points(self):
        """Test: Drei vollständige Tripel."""
        coords = parse_pos_list("0 0 0 1 1 1 2 2 2")
        assert coords.shape == (3, 3)
        np.testing.assert_array_equal(coords[1], [1.0, 1.0, 1.0])

    def test_trailing_values_dropped(self):
        """Test: Unvollständiges Tripel am Ende wird verworfen."""
        assert parse_pos_list("0 0 0 1 1").shape == (1, 3)
        assert parse_pos_list("5").shape == (0, 3)

    def test_empty(self):
        """Test: Leerer Text ergibt keine Punkte."""
        assert parse_pos_list("").shape == (0, 3)
        assert parse_pos_list("   \n  ").shape == (0, 3)

    def test_mixed_whitespace(self):
        """Test: Beliebiger Leerraum als Trenner."""
        coords = parse_pos_list("  1.5\t2.5 3.5\n\n 4 5   6 ")
        np.testing.assert_array_equal(coords, [[1.5, 2.5, 3.5], [4.0, 5.0, 6.0]])

    def test_invalid_token(self):
        """Test: Nicht-numerischer Wert."""
        with pytest.raises(InvalidOperandError):
            parse_pos_list("0 0 abc")

    def test_non_finite_token(self):
        """Test: NaN ist keine gültige Koordinate."""
        with pytest.raises(InvalidOperandError):
            parse_pos_list("0 nan 0")


class TestExtractBuilding:
    """Tests für die Gebäudeextraktion."""

    def test_polygon_and_bounds(self, processor, record_factory):
        """Test: Ring in Quellreihenfolge mit Bounding Box."""
        building = processor.extract_building(record_factory("0 0 0 1 1 1 2 2 2", gml_id="bldg_1"))
        assert building.polygon == [Vector3(0, 0, 0), Vector3(1, 1, 1), Vector3(2, 2, 2)]
        assert building.min == Vector3(0, 0, 0)
        assert building.max == Vector3(2, 2, 2)
        assert building.gml_id == "bldg_1"

    def test_bounds_are_per_axis(self, processor, record_factory):
        """Test: min/max werden je Achse bestimmt, nicht als Punkt."""
        building = processor.extract_building(record_factory("5 0 9 1 7 3"))
        assert building.min == Vector3(1, 0, 3)
        assert building.max == Vector3(5, 7, 9)
        for point in building.polygon:
            assert building.bbox.contains(point)

    def test_partial_triple(self, processor, record_factory):
        """Test: Nur das vollständige Tripel wird übernommen."""
        building = processor.extract_building(record_factory("0 0 0 1 1"))
        assert building.polygon == [Vector3(0, 0, 0)]
        assert building.min == building.max == Vector3(0, 0, 0)

    def test_empty_ring(self, processor, record_factory):
        """Test: Leerer Ring ohne min/max."""
        building = processor.extract_building(record_factory(""))
        assert building.polygon == []
        assert building.bbox is None
        assert 'min' not in building.to_dict()

    def test_missing_path(self, processor):
        """Test: Fehlendes Pfadelement."""
        record = {'bldg:Building': {'bldg:lod0RoofEdge': {}}}
        with pytest.raises(RecordPathError) as excinfo:
            processor.extract_building(record)
        assert excinfo.value.key == 'gml:MultiSurface'
        # RecordPathError ist ein KeyError
        with pytest.raises(KeyError):
            processor.extract_building({})

    def test_multiple_surfaces_use_first(self, processor, record_factory):
        """Test: Bei mehreren Flächen wird die erste verwendet."""
        first = record_factory("0 0 0")['bldg:Building']['bldg:lod0RoofEdge']['gml:MultiSurface']['gml:surfaceMember']
        second = record_factory("9 9 9")['bldg:Building']['bldg:lod0RoofEdge']['gml:MultiSurface']['gml:surfaceMember']
        record = {'bldg:Building': {'bldg:lod0RoofEdge': {'gml:MultiSurface': {'gml:surfaceMember': [first, second]}}}}
        building = processor.extract_building(record)
        assert building.polygon == [Vector3(0, 0, 0)]

    def test_custom_record_path(self):
        """Test: Konfigurierbarer Schlüsselpfad."""
        processor = CityGMLGeometryProcessor(record_path=['a', 'b'])
        building = processor.extract_building({'a': {'b': "1 2 3"}})
        assert building.polygon == [Vector3(1, 2, 3)]
