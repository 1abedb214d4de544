"""
Unveränderlicher 3D-Vektor für Punkte und Richtungen.

Alle Operationen liefern neue Instanzen zurück. Operanden werden über
as_vector() normalisiert: akzeptiert werden Vector3-Instanzen, geordnete
Sequenzen mit genau drei Zahlen und Mappings mit den Schlüsseln x, y, z.
"""

import math
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Sequence, Union

import numpy as np


class VectorError(Exception):
    """Basisklasse für Fehler in Vektoroperationen."""
    pass


class DivideByZeroError(VectorError, ZeroDivisionError):
    """Division durch einen Divisor (oder eine Achse) mit exakt 0."""
    pass


class ZeroLengthVectorError(VectorError, ValueError):
    """Normalisierung des Nullvektors."""
    pass


class InvalidOperandError(VectorError, ValueError):
    """Operand lässt sich nicht in einen Vektor umwandeln."""
    pass


VectorLike = Union['Vector3', Sequence[float], Mapping[str, float]]


def _to_float(value: Any, axis: str) -> float:
    # Zeichenketten wie '1e3' nicht über float() durchreichen
    if not _is_scalar(value):
        raise InvalidOperandError(f"Ungültiger Wert für Achse {axis}: {value!r}")
    result = float(value)
    if not math.isfinite(result):
        raise InvalidOperandError(f"Nicht-endlicher Wert für Achse {axis}: {value!r}")
    return result


@dataclass(frozen=True)
class Vector3:
    """3D-Punkt bzw. -Vektor mit double-Komponenten."""

    x: float
    y: float
    z: float

    def __post_init__(self):
        # frozen: Komponenten nur über object.__setattr__ normalisierbar
        object.__setattr__(self, 'x', _to_float(self.x, 'x'))
        object.__setattr__(self, 'y', _to_float(self.y, 'y'))
        object.__setattr__(self, 'z', _to_float(self.z, 'z'))

    # ------------------------------------------------------------------
    # Konstruktion
    # ------------------------------------------------------------------

    @classmethod
    def from_vector(cls, vector: 'Vector3') -> 'Vector3':
        """Erstellt eine Kopie eines vorhandenen Vektors."""
        if not isinstance(vector, Vector3):
            raise InvalidOperandError(f"Kein Vector3: {type(vector).__name__}")
        return cls(vector.x, vector.y, vector.z)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> 'Vector3':
        """Erstellt einen Vektor aus einer geordneten Sequenz (x, y, z).

        Args:
            values: Sequenz mit genau drei Zahlen

        Returns:
            Vector3: Neuer Vektor

        Raises:
            InvalidOperandError: Wenn values keine geordnete Sequenz (Liste, Tupel,
                numpy-Array) ist oder nicht genau drei Werte enthält
        """
        if isinstance(values, (str, bytes)):
            raise InvalidOperandError(f"Zeichenkette ist keine Koordinatenfolge: {values!r}")
        if not isinstance(values, (Sequence, np.ndarray)):
            raise InvalidOperandError(f"Keine geordnete Sequenz: {values!r}")
        items = list(values)
        if len(items) != 3:
            raise InvalidOperandError(f"Erwartet 3 Werte, erhalten {len(items)}")
        return cls(items[0], items[1], items[2])

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> 'Vector3':
        """Erstellt einen Vektor aus einem Mapping mit den Schlüsseln x, y, z."""
        missing = [axis for axis in ('x', 'y', 'z') if values.get(axis) is None]
        if missing:
            raise InvalidOperandError(f"Fehlende Achsen: {', '.join(missing)}")
        return cls(values['x'], values['y'], values['z'])

    def copy(self) -> 'Vector3':
        return Vector3(self.x, self.y, self.z)

    # ------------------------------------------------------------------
    # Arithmetik
    # ------------------------------------------------------------------

    def add(self, other: VectorLike) -> 'Vector3':
        v = as_vector(other)
        return Vector3(self.x + v.x, self.y + v.y, self.z + v.z)

    def subtract(self, other: VectorLike) -> 'Vector3':
        v = as_vector(other)
        return Vector3(self.x - v.x, self.y - v.y, self.z - v.z)

    def multiply(self, other: Union[VectorLike, float]) -> 'Vector3':
        """Komponentenweises Produkt oder gleichmäßige Skalierung.

        Args:
            other: Vektor (komponentenweise) oder Skalar

        Returns:
            Vector3: Produkt
        """
        if _is_scalar(other):
            return self.scale(other)
        v = as_vector(other)
        return Vector3(self.x * v.x, self.y * v.y, self.z * v.z)

    def scale(self, scalar: float) -> 'Vector3':
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def divide(self, other: Union[VectorLike, float]) -> 'Vector3':
        """Komponentenweise oder gleichmäßige Division.

        Args:
            other: Vektor (komponentenweise) oder Skalar

        Returns:
            Vector3: Quotient

        Raises:
            DivideByZeroError: Wenn der Skalar oder eine Divisor-Achse exakt 0 ist
        """
        if _is_scalar(other):
            if other == 0:
                raise DivideByZeroError("Division durch 0")
            return Vector3(self.x / other, self.y / other, self.z / other)
        v = as_vector(other)
        if v.x == 0 or v.y == 0 or v.z == 0:
            raise DivideByZeroError(f"Division durch Vektor mit Nullkomponente: {v}")
        return Vector3(self.x / v.x, self.y / v.y, self.z / v.z)

    # ------------------------------------------------------------------
    # Längen und Abstände
    # ------------------------------------------------------------------

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def normalize(self) -> 'Vector3':
        """Liefert den Einheitsvektor in gleicher Richtung.

        Raises:
            ZeroLengthVectorError: Für den Nullvektor
        """
        if self.is_zero():
            raise ZeroLengthVectorError("Nullvektor kann nicht normalisiert werden")
        length = self.length()
        return Vector3(self.x / length, self.y / length, self.z / length)

    def distance(self, other: VectorLike) -> float:
        return math.sqrt(self.distance_squared(other))

    def distance_squared(self, other: VectorLike) -> float:
        return self.subtract(other).length_squared()

    def distance_to_line_segment(self, start: VectorLike, end: VectorLike) -> float:
        """Kürzester Abstand zum Segment [start, end].

        Liegt der Lotfußpunkt außerhalb des Segments, wird der Abstand zum
        näheren Endpunkt geliefert. Für ein entartetes Segment (start == end)
        ist das Ergebnis der Abstand zu start.

        Args:
            start: Anfangspunkt des Segments
            end: Endpunkt des Segments

        Returns:
            float: Abstand
        """
        start = as_vector(start)
        direction = as_vector(end).subtract(start)
        if direction.length_squared() == 0:
            return self.subtract(start).length()
        t = self.subtract(start).dot(direction) / direction.dot(direction)
        t = max(0.0, min(1.0, t))
        projection = start.add(direction.scale(t))
        return self.subtract(projection).length()

    # ------------------------------------------------------------------
    # Produkte und Winkel
    # ------------------------------------------------------------------

    def dot(self, other: VectorLike) -> float:
        v = as_vector(other)
        return self.x * v.x + self.y * v.y + self.z * v.z

    def cross(self, other: VectorLike) -> 'Vector3':
        v = as_vector(other)
        return Vector3(
            self.y * v.z - self.z * v.y,
            self.z * v.x - self.x * v.z,
            self.x * v.y - self.y * v.x
        )

    def angle_between(self, other: VectorLike) -> float:
        """Winkel in Radiant; 0 wenn einer der Vektoren die Länge 0 hat."""
        v = as_vector(other)
        lengths = self.length() * v.length()
        if lengths == 0:
            return 0.0
        # Rundungsfehler können |cos| knapp über 1 treiben
        cosine = max(-1.0, min(1.0, self.dot(v) / lengths))
        return math.acos(cosine)

    def project_onto(self, other: VectorLike) -> 'Vector3':
        """Orthogonale Projektion auf other; Nullvektor wenn other der Nullvektor ist."""
        v = as_vector(other)
        if v.is_zero():
            return ZERO
        return v.scale(self.dot(v) / v.dot(v))

    def reflect(self, normal: VectorLike) -> 'Vector3':
        """Spiegelt den Vektor an der übergebenen Normalen."""
        return self.subtract(self.project_onto(normal).scale(2))

    # ------------------------------------------------------------------
    # Interpolation und Rotation
    # ------------------------------------------------------------------

    def lerp(self, target: VectorLike, t: float) -> 'Vector3':
        """Lineare Interpolation, außerhalb von [0, 1] Extrapolation.

        Args:
            target: Zielvektor
            t: Interpolationsfaktor

        Returns:
            Vector3: self für t == 0 oder fehlendes Ziel, target für t == 1
        """
        if target is None or not t:
            return self.copy()
        v = as_vector(target)
        if t == 1:
            return v.copy()
        return Vector3(
            self.x + (v.x - self.x) * t,
            self.y + (v.y - self.y) * t,
            self.z + (v.z - self.z) * t
        )

    def slerp(self, target: VectorLike, t: float) -> 'Vector3':
        """Sphärische Interpolation zwischen zwei Richtungen.

        Voraussetzung: beide Vektoren haben bereits die Länge 1. Der Winkel
        wird direkt aus dem Skalarprodukt bestimmt, ohne vorher zu
        normalisieren. Die Voraussetzung wird nicht geprüft.

        Args:
            target: Zielrichtung (Einheitsvektor)
            t: Interpolationsfaktor

        Returns:
            Vector3: Interpolierte Richtung

        Raises:
            ZeroLengthVectorError: Für parallele Richtungen (z.B. a.slerp(a, 0.5)),
                da die Orthogonalkomponente dann der Nullvektor ist
        """
        if target is None or not t:
            return self.copy()
        v = as_vector(target)
        if t == 1:
            return v.copy()
        dot = self.dot(v)
        theta = math.acos(dot) * t
        relative = v.subtract(self.scale(dot)).normalize()
        return self.scale(math.cos(theta)).add(relative.scale(math.sin(theta)))

    def rotate(self, axis: VectorLike, angle: float) -> 'Vector3':
        """Rotiert den Vektor um eine Achse (Quaternion-Rotation).

        Args:
            axis: Rotationsachse, muss ein Einheitsvektor sein (nicht geprüft)
            angle: Winkel in Grad

        Returns:
            Vector3: Rotierter Vektor
        """
        axis = as_vector(axis)
        half_angle = math.radians(angle) / 2
        sin_half = math.sin(half_angle)
        w = math.cos(half_angle)
        qx, qy, qz = axis.x * sin_half, axis.y * sin_half, axis.z * sin_half
        vx, vy, vz = self.x, self.y, self.z

        # q * v * q^-1, ausmultipliziert
        rx = (w * w * vx + 2 * qy * w * vz - 2 * qz * w * vy + qx * qx * vx
              + 2 * qy * qx * vy + 2 * qz * qx * vz - qz * qz * vx - qy * qy * vx)
        ry = (2 * qx * qy * vx + qy * qy * vy + 2 * qz * qy * vz + 2 * w * qz * vx
              - qz * qz * vy + w * w * vy - 2 * qx * w * vz - qx * qx * vy)
        rz = (2 * qx * qz * vx + 2 * qy * qz * vy + qz * qz * vz - 2 * w * qy * vx
              - qy * qy * vz + 2 * w * qx * vy - qx * qx * vz + w * w * vz)
        return Vector3(rx, ry, rz)

    # ------------------------------------------------------------------
    # Rundung
    # ------------------------------------------------------------------

    def floor(self) -> 'Vector3':
        return Vector3(math.floor(self.x), math.floor(self.y), math.floor(self.z))

    def floor_x(self) -> 'Vector3':
        return self.with_x(math.floor(self.x))

    def floor_y(self) -> 'Vector3':
        return self.with_y(math.floor(self.y))

    def floor_z(self) -> 'Vector3':
        return self.with_z(math.floor(self.z))

    def ceil(self) -> 'Vector3':
        return Vector3(math.ceil(self.x), math.ceil(self.y), math.ceil(self.z))

    def ceil_x(self) -> 'Vector3':
        return self.with_x(math.ceil(self.x))

    def ceil_y(self) -> 'Vector3':
        return self.with_y(math.ceil(self.y))

    def ceil_z(self) -> 'Vector3':
        return self.with_z(math.ceil(self.z))

    def round(self) -> 'Vector3':
        """Rundet alle Achsen kaufmännisch (.5 nach oben)."""
        return Vector3(_round_half_up(self.x), _round_half_up(self.y), _round_half_up(self.z))

    def round_x(self) -> 'Vector3':
        return self.with_x(_round_half_up(self.x))

    def round_y(self) -> 'Vector3':
        return self.with_y(_round_half_up(self.y))

    def round_z(self) -> 'Vector3':
        return self.with_z(_round_half_up(self.z))

    def to_block_location(self) -> 'Vector3':
        """Bildet den Punkt auf die Gitterzelle ab, in der er liegt (Abrunden je Achse)."""
        return self.floor()

    # ------------------------------------------------------------------
    # Hilfsfunktionen
    # ------------------------------------------------------------------

    def with_x(self, value: float) -> 'Vector3':
        return Vector3(value, self.y, self.z)

    def with_y(self, value: float) -> 'Vector3':
        return Vector3(self.x, value, self.z)

    def with_z(self, value: float) -> 'Vector3':
        return Vector3(self.x, self.y, value)

    def up(self) -> 'Vector3':
        return self.add((0, 1, 0))

    def down(self) -> 'Vector3':
        return self.add((0, -1, 0))

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0 and self.z == 0

    def equals(self, other: Any) -> bool:
        """Exakter komponentenweiser Vergleich; False bei ungültigem Operanden."""
        try:
            v = as_vector(other)
        except InvalidOperandError:
            return False
        return self.x == v.x and self.y == v.y and self.z == v.z

    def almost_equal(self, other: Any, delta: float) -> bool:
        """Vergleich mit Toleranz je Achse (Chebyshev, nicht euklidisch).

        Args:
            other: Vergleichsvektor
            delta: Nicht-negative Toleranz, unabhängig auf jede Achse angewendet

        Returns:
            bool: True wenn jede Achse um höchstens delta abweicht;
            False auch bei ungültigem Operanden
        """
        try:
            v = as_vector(other)
        except InvalidOperandError:
            return False
        return (abs(self.x - v.x) <= delta
                and abs(self.y - v.y) <= delta
                and abs(self.z - v.z) <= delta)

    def to_list(self) -> List[float]:
        return [self.x, self.y, self.z]

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y, 'z': self.z}

    def to_string(self, long: bool = True, separator: str = ', ') -> str:
        result = separator.join(repr(c) for c in (self.x, self.y, self.z))
        return f"Vector3({result})" if long else result

    # ------------------------------------------------------------------
    # Operatoren
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __mul__(self, other):
        return self.multiply(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        return self.divide(other)

    def __neg__(self):
        return Vector3(-self.x, -self.y, -self.z)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


ZERO = Vector3(0.0, 0.0, 0.0)


def _round_half_up(value: float) -> float:
    return math.floor(value + 0.5)


def as_vector(value: VectorLike) -> Vector3:
    """Wandelt einen vektorartigen Operanden in einen Vector3 um.

    Args:
        value: Vector3, Sequenz (x, y, z) oder Mapping mit x, y, z

    Returns:
        Vector3: Der Operand als Vektor

    Raises:
        InvalidOperandError: Wenn der Operand keine dieser Formen hat
    """
    if isinstance(value, Vector3):
        return value
    if isinstance(value, Mapping):
        return Vector3.from_mapping(value)
    # Mengen, Generatoren und dict-Views haben keine feste Achsenreihenfolge
    if isinstance(value, (Sequence, np.ndarray)):
        return Vector3.from_sequence(value)
    raise InvalidOperandError(f"Kein vektorartiger Operand: {value!r}")
