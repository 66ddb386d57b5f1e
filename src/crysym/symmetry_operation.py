import logging
import math
import re
from fractions import Fraction

import numpy as np

LOG = logging.getLogger(__name__)

# 24 so that 1/8 in change-of-basis operators is still exact
DEN = 24

_BLANKS = " \t_"
_AXIS_INDEX = {
    "x": 0, "h": 0, "a": 0,
    "y": 1, "k": 1, "b": 1,
    "z": 2, "l": 2, "c": 2,
}
_TRIPLET_STYLES = {"x": "xyz", "h": "hkl", "a": "abc"}
_NUMBER_REGEX = re.compile(r"\d+(?:\.\d+)?(?:/\d+)?")


class SymmetryParseError(ValueError):
    """
    Raised when a coordinate triplet or a Hall symbol cannot be parsed.

    Attributes:
        token (str): the offending part of the input
    """

    def __init__(self, message, token=""):
        super().__init__(message)
        self.token = token


class InexactArithmeticError(ArithmeticError):
    "Raised when a result that must be a multiple of 1/DEN is not"


def _skip_blank(s: str, pos: int) -> int:
    while pos < len(s) and s[pos] in _BLANKS:
        pos += 1
    return pos


def _exact_div(numerator: int, denominator: int, what: str) -> int:
    quotient, remainder = divmod(numerator, denominator)
    if remainder:
        raise InexactArithmeticError(
            "{} {}/{} is not a multiple of 1/{}".format(
                what, numerator, denominator, DEN
            )
        )
    return quotient


def _wrap(tran):
    return tuple(t % DEN for t in tran)


def _parse_number(token: str, s: str) -> Fraction:
    if "/" in token:
        numerator, denominator = token.split("/")
        if int(denominator) == 0:
            raise SymmetryParseError(
                "zero denominator in '{}' in: '{}'".format(token, s), token
            )
        return Fraction(numerator) / int(denominator)
    return Fraction(token)


def _to_den(value: Fraction, token: str, s: str) -> int:
    scaled = value * DEN
    if scaled.denominator != 1:
        raise SymmetryParseError(
            "'{}' is not a multiple of 1/{} in: '{}'".format(token, DEN, s), token
        )
    return int(scaled)


def parse_triplet_part(s: str):
    """
    Parse one coordinate expression of a symmetry operation triplet
    e.g. '-y+3/4' or '1/3*x+2/3*y' into a row [rx, ry, rz, t],
    with all values scaled by DEN.

    >>> parse_triplet_part("-y+3/4")
    [0, -24, 0, 18]
    >>> parse_triplet_part("1/2*X - 1/2*y")
    [12, -12, 0, 0]

    Letters h, k, l and a, b, c are accepted in place of x, y, z.
    Blanks (space, tab and underscore) are ignored.

    Args:
        s (str): the coordinate expression

    Returns:
        List[int]: the DEN-scaled coefficients of x, y, z and the translation

    Raises:
        SymmetryParseError: if the expression is malformed or a number
            is not an exact multiple of 1/DEN
    """
    row = [0, 0, 0, 0]
    n = len(s)
    terms = 0
    pos = _skip_blank(s, 0)
    while pos < n:
        start = pos
        sign = 1
        if s[pos] in "+-":
            sign = -1 if s[pos] == "-" else 1
            pos = _skip_blank(s, pos + 1)
            if pos == n:
                raise SymmetryParseError(
                    "trailing sign in: '{}'".format(s), s[start:]
                )
        elif terms:
            raise SymmetryParseError(
                "missing sign before '{}' in: '{}'".format(s[pos:], s), s[pos:]
            )
        value = Fraction(1)
        numeric = _NUMBER_REGEX.match(s, pos)
        if numeric:
            value = _parse_number(numeric.group(), s)
            pos = _skip_blank(s, numeric.end())
            if pos < n and s[pos] == "*":
                pos = _skip_blank(s, pos + 1)
            elif pos == n or s[pos].lower() not in _AXIS_INDEX:
                # a constant term
                row[3] += _to_den(sign * value, s[start:pos].strip(), s)
                terms += 1
                continue
        if pos == n or s[pos].lower() not in _AXIS_INDEX:
            token = s[pos] if pos < n else s[start:]
            raise SymmetryParseError(
                "unexpected character '{}' in: '{}'".format(token, s), token
            )
        axis = _AXIS_INDEX[s[pos].lower()]
        pos = _skip_blank(s, pos + 1)
        if pos < n and s[pos] == "*":
            trailing = _NUMBER_REGEX.match(s, _skip_blank(s, pos + 1))
            if not trailing:
                raise SymmetryParseError(
                    "expected a number after '*' in: '{}'".format(s), s[pos:]
                )
            value *= _parse_number(trailing.group(), s)
            pos = _skip_blank(s, trailing.end())
        row[axis] += _to_den(sign * value, s[start:pos].strip(), s)
        terms += 1
    if terms == 0:
        raise SymmetryParseError("no axis or constant in: '{}'".format(s), s)
    return row


def _parse_triplet_rows(s: str):
    if s.count(",") != 2:
        raise SymmetryParseError(
            "expected exactly two commas in triplet: '{}'".format(s), s
        )
    rows = [parse_triplet_part(part) for part in s.split(",")]
    rotation = [row[:3] for row in rows]
    translation = [row[3] for row in rows]
    return rotation, translation


def parse_triplet(s: str):
    """
    Parse a symmetry operation triplet e.g. 'x+1/2,-y,z'

    Args:
        s (str): the comma separated triplet

    Returns:
        SymmetryOperation: the parsed operation, translation not wrapped
    """
    return SymmetryOperation(*_parse_triplet_rows(s))


def _format_fraction(w: int) -> str:
    f = Fraction(w, DEN)
    if f.denominator == 1:
        return str(f.numerator)
    return "{}/{}".format(f.numerator, f.denominator)


def make_triplet_part(x, y, z, w, style="x", multiply_by=1):
    """
    Format one row of a symmetry operation, the inverse of `parse_triplet_part`.

    Coefficients are printed in x, y, z order, followed by the translation
    as a fraction in lowest terms.

    >>> make_triplet_part(0, -24, 0, 18)
    '-y+3/4'
    >>> make_triplet_part(-8, 16, -8, 0)
    '-1/3*x+2/3*y-1/3*z'
    >>> make_triplet_part(0, 0, 0, 1)
    '1/24'

    Args:
        x, y, z (int): DEN-scaled coefficients of the three axes
        w (int): DEN-scaled translation
        style (str, optional): 'x' for xyz, 'h' for hkl or 'a' for abc letters
        multiply_by (int, optional): factor applied to all the values before
            formatting, e.g. DEN for plain integer matrices

    Returns:
        str: the formatted expression
    """
    if style not in _TRIPLET_STYLES:
        raise ValueError("unknown triplet style: '{}'".format(style))
    letters = _TRIPLET_STYLES[style]
    s = ""
    for letter, coefficient in zip(letters, (x, y, z)):
        coefficient *= multiply_by
        if coefficient == 0:
            continue
        if coefficient < 0:
            s += "-"
        elif s:
            s += "+"
        if abs(coefficient) != DEN:
            s += _format_fraction(abs(coefficient)) + "*"
        s += letter
    w *= multiply_by
    if w != 0:
        if w < 0:
            s += "-"
        elif s:
            s += "+"
        s += _format_fraction(abs(w))
    return s or "0"


class SymmetryOperation:
    """
    Class to represent a crystallographic symmetry operation (or a
    change-of-basis transformation), composed of a rotation and a translation.

    Both parts are stored as integers scaled by DEN, so the algebra
    on them is exact.

    Attributes:
        rot (Tuple[Tuple[int]]): (3, 3) DEN-scaled rotation matrix
        tran (Tuple[int]): (3) DEN-scaled translation, not wrapped
    """

    DEN = DEN

    def __init__(self, rotation, translation=None):
        """
        Construct a new symmetry operation from a DEN-scaled rotation matrix
        and translation vector, or from a triplet string e.g. 'x,-y,z+1/2'

        Arguments:
            rotation (array_like or str): (3, 3) rotation matrix, or a triplet
            translation (array_like, optional): (3) translation vector
        """
        if isinstance(rotation, str):
            if translation is not None:
                raise TypeError("translation cannot be combined with a triplet")
            rotation, translation = _parse_triplet_rows(rotation)
        if translation is None:
            translation = (0, 0, 0)
        self.rot = tuple(tuple(int(v) for v in row) for row in rotation)
        self.tran = tuple(int(v) for v in translation)
        if len(self.rot) != 3 or any(len(row) != 3 for row in self.rot):
            raise ValueError("rotation must be a 3x3 matrix")
        if len(self.tran) != 3:
            raise ValueError("translation must have 3 components")

    @classmethod
    def identity(cls):
        "Alternative constructor for the the identity symop i.e. x,y,z"
        return cls(((DEN, 0, 0), (0, DEN, 0), (0, 0, DEN)))

    def is_identity(self) -> bool:
        "Returns true if this is the identity symmetry operation 'x,y,z'"
        return self == SymmetryOperation.identity()

    def triplet(self, style="x", raw=False) -> str:
        """
        Represent this SymmetryOperation in canonical string form e.g. 'x,-y,z+1/2'

        Args:
            style (str, optional): 'x', 'h' or 'a' for xyz, hkl or abc letters
            raw (bool, optional): print the stored translation instead of
                the one wrapped into the unit cell

        Returns:
            str: the triplet
        """
        tran = self.tran if raw else _wrap(self.tran)
        return ",".join(
            make_triplet_part(*row, t, style=style) for row, t in zip(self.rot, tran)
        )

    def wrapped(self):
        "A copy of this operation with the translation moved into [0, 1)"
        return SymmetryOperation(self.rot, _wrap(self.tran))

    def translated(self, translation):
        "A copy of this operation with a DEN-scaled vector added to its translation"
        return SymmetryOperation(
            self.rot, [a + b for a, b in zip(self.tran, translation)]
        )

    def add_centering(self, translation):
        "Translate by a centering vector and wrap"
        return self.translated(translation).wrapped()

    def negated_rot(self):
        return tuple(tuple(-v for v in row) for row in self.rot)

    def negated(self):
        "A copy of this operation under inversion"
        return SymmetryOperation(self.negated_rot(), [-t for t in self.tran])

    def det_rot(self) -> int:
        "Determinant of the rotation, DEN^3 for rotations, -DEN^3 for rotoinversions"
        r = self.rot
        return (
            r[0][0] * (r[1][1] * r[2][2] - r[1][2] * r[2][1])
            - r[0][1] * (r[1][0] * r[2][2] - r[1][2] * r[2][0])
            + r[0][2] * (r[1][0] * r[2][1] - r[1][1] * r[2][0])
        )

    def combine(self, other):
        """
        The operation equivalent to applying `other` first and then this one.
        The translation is not wrapped.

        Args:
            other (SymmetryOperation): the operation applied first

        Returns:
            SymmetryOperation: the composed operation
        """
        if isinstance(other, str):
            other = SymmetryOperation(other)
        a, b = self.rot, other.rot
        rot = [
            [
                _exact_div(sum(a[i][k] * b[k][j] for k in range(3)), DEN, "rotation")
                for j in range(3)
            ]
            for i in range(3)
        ]
        tran = [
            _exact_div(
                self.tran[i] * DEN + sum(a[i][j] * other.tran[j] for j in range(3)),
                DEN,
                "translation",
            )
            for i in range(3)
        ]
        return SymmetryOperation(rot, tran)

    def inverse(self):
        """
        The exact inverse of this operation. Works also for change-of-basis
        operators with determinant other than +/-1.

        Returns:
            SymmetryOperation: the inverse operation

        Raises:
            ValueError: if the rotation matrix is singular
        """
        detr = self.det_rot()
        if detr == 0:
            raise ValueError(
                "cannot invert matrix: " + SymmetryOperation(self.rot).triplet()
            )
        r = self.rot
        d2 = DEN * DEN
        cofactors = (
            (
                r[1][1] * r[2][2] - r[2][1] * r[1][2],
                r[0][2] * r[2][1] - r[0][1] * r[2][2],
                r[0][1] * r[1][2] - r[0][2] * r[1][1],
            ),
            (
                r[1][2] * r[2][0] - r[1][0] * r[2][2],
                r[0][0] * r[2][2] - r[0][2] * r[2][0],
                r[1][0] * r[0][2] - r[0][0] * r[1][2],
            ),
            (
                r[1][0] * r[2][1] - r[2][0] * r[1][1],
                r[2][0] * r[0][1] - r[0][0] * r[2][1],
                r[0][0] * r[1][1] - r[1][0] * r[0][1],
            ),
        )
        rot = [[_exact_div(d2 * c, detr, "rotation") for c in row] for row in cofactors]
        tran = [
            _exact_div(
                -sum(self.tran[j] * rot[i][j] for j in range(3)), DEN, "translation"
            )
            for i in range(3)
        ]
        return SymmetryOperation(rot, tran)

    def apply_to_xyz(self, xyz) -> np.ndarray:
        """
        Apply this symmetry operation to fractional coordinates.

        Args:
            xyz (array_like): (3) vector or (N, 3) array of fractional coordinates

        Returns:
            np.ndarray: the transformed coordinates, same shape as the input
        """
        seitz = self.float_seitz()
        return np.dot(np.asarray(xyz, dtype=np.float64), seitz[:3, :3].T) + seitz[:3, 3]

    def apply_to_hkl(self, hkl):
        """
        Transform Miller indices, which transform with the transposed rotation.

        Args:
            hkl (array_like): (3) integer Miller indices

        Returns:
            List[int]: the equivalent reflection
        """
        r = self.rot
        return [
            _exact_div(
                r[0][i] * hkl[0] + r[1][i] * hkl[1] + r[2][i] * hkl[2], DEN, "index"
            )
            for i in range(3)
        ]

    def phase_shift(self, h, k, l) -> float:
        """
        Phase shift (in radians, within [0, 2pi)) that this operation's
        translation gives to the structure factor of reflection hkl.
        """
        w = -(h * self.tran[0] + k * self.tran[1] + l * self.tran[2]) % DEN
        return 2 * math.pi * w / DEN

    def int_seitz(self) -> np.ndarray:
        "The DEN-scaled 4x4 integer Seitz matrix"
        s = np.zeros((4, 4), dtype=np.int64)
        s[:3, :3] = self.rot
        s[:3, 3] = self.tran
        s[3, 3] = 1
        return s

    def float_seitz(self) -> np.ndarray:
        "The 4x4 Seitz matrix in fractional coordinates"
        s = np.eye(4, dtype=np.float64)
        s[:3, :3] = np.array(self.rot, dtype=np.float64) / DEN
        s[:3, 3] = np.array(self.tran, dtype=np.float64) / DEN
        return s

    @property
    def seitz_matrix(self) -> np.ndarray:
        "The Seitz matrix form of this SymmetryOperation"
        return self.float_seitz()

    def _key(self):
        return (self.rot, _wrap(self.tran))

    def __mul__(self, other):
        if isinstance(other, str):
            other = SymmetryOperation(other)
        if not isinstance(other, SymmetryOperation):
            return NotImplemented
        return self.combine(other).wrapped()

    def __rmul__(self, other):
        if isinstance(other, str):
            return SymmetryOperation(other) * self
        return NotImplemented

    def __eq__(self, other):
        if isinstance(other, str):
            try:
                other = SymmetryOperation(other)
            except SymmetryParseError:
                return False
        if not isinstance(other, SymmetryOperation):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if not isinstance(other, SymmetryOperation):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash(self._key())

    def __str__(self):
        return self.triplet()

    def __repr__(self):
        return "<{}: {}>".format(self.__class__.__name__, self)

    def __call__(self, coordinates):
        return self.apply_to_xyz(coordinates)


Op = SymmetryOperation
