"""
Interpretation of Hall symbols, e.g. '-P 2ac 2n' or 'P 61 2 (0 0 -1)',
following ITfC vol. B ch. 1.4 and http://cci.lbl.gov/sginfo/hall_symbols.html
"""
import logging

from .group_ops import GroupOps, centring_vectors
from .symmetry_operation import (
    _BLANKS,
    DEN,
    SymmetryOperation,
    SymmetryParseError,
    _skip_blank,
    parse_triplet,
)

LOG = logging.getLogger(__name__)

_HALL_ROTATION_Z = {
    1: ((DEN, 0, 0), (0, DEN, 0), (0, 0, DEN)),
    2: ((-DEN, 0, 0), (0, -DEN, 0), (0, 0, DEN)),
    3: ((0, -DEN, 0), (DEN, -DEN, 0), (0, 0, DEN)),
    4: ((0, -DEN, 0), (DEN, 0, 0), (0, 0, DEN)),
    6: ((DEN, -DEN, 0), (DEN, 0, 0), (0, 0, DEN)),
    # two-fold axes along the face diagonals and three-fold along the body diagonal
    "'": ((0, -DEN, 0), (-DEN, 0, 0), (0, 0, -DEN)),
    '"': ((0, DEN, 0), (DEN, 0, 0), (0, 0, -DEN)),
    "*": ((0, 0, DEN), (DEN, 0, 0), (0, DEN, 0)),
}

_HALL_TRANSLATIONS = {
    "a": (DEN // 2, 0, 0),
    "b": (0, DEN // 2, 0),
    "c": (0, 0, DEN // 2),
    "n": (DEN // 2, DEN // 2, DEN // 2),
    "u": (DEN // 4, 0, 0),
    "v": (0, DEN // 4, 0),
    "w": (0, 0, DEN // 4),
    "d": (DEN // 4, DEN // 4, DEN // 4),
}

_AXIS_ORDER = {"x": (2, 0, 1), "y": (1, 2, 0)}


def _find_blank(s, pos):
    while pos < len(s) and s[pos] not in _BLANKS:
        pos += 1
    return pos


def _alter_order(r, i, j, k):
    return (
        (r[i][i], r[i][j], r[i][k]),
        (r[j][i], r[j][j], r[j][k]),
        (r[k][i], r[k][j], r[k][k]),
    )


def hall_matrix_symbol(token: str, pos: int, prev: int):
    """
    Interpret one matrix symbol of a Hall symbol, e.g. '-2xc' or '61'.

    Args:
        token (str): the matrix symbol
        pos (int): 1-based position of the symbol after the lattice letter
        prev (int): order of the preceding rotation, for implicit axes

    Returns:
        Tuple[SymmetryOperation, int]: the operation and its rotation order
    """
    neg = token.startswith("-")
    body = (token[1:] if neg else token).lower()
    if not body or body[0] not in "12346":
        raise SymmetryParseError(
            "wrong n-fold order notation: '{}'".format(token), token
        )
    order = int(body[0])
    screw = 0
    principal = None
    diagonal = None
    tran = [0, 0, 0]
    for ch in body[1:]:
        if ch in "12345":
            if screw:
                raise SymmetryParseError(
                    "two numeric subscripts in: '{}'".format(token), token
                )
            screw = int(ch)
        elif ch in "'\"*":
            if order != (3 if ch == "*" else 2):
                raise SymmetryParseError("wrong symbol: '{}'".format(token), token)
            diagonal = ch
        elif ch in "xyz":
            principal = ch
        elif ch in _HALL_TRANSLATIONS:
            tran = [t + dt for t, dt in zip(tran, _HALL_TRANSLATIONS[ch])]
        else:
            raise SymmetryParseError(
                "unknown symbol '{}' in: '{}'".format(ch, token), ch
            )

    if principal is None and diagonal is None:
        if pos == 1:
            principal = "z"
        elif pos == 2 and order == 2:
            if prev in (2, 4):
                principal = "x"
            elif prev in (3, 6):
                diagonal = "'"
        elif pos == 3 and order == 3:
            diagonal = "*"
        elif order != 1:
            raise SymmetryParseError("missing axis in: '{}'".format(token), token)

    rot = _HALL_ROTATION_Z[diagonal or order]
    if neg:
        rot = tuple(tuple(-v for v in row) for row in rot)
    if principal in _AXIS_ORDER:
        rot = _alter_order(rot, *_AXIS_ORDER[principal])
    if screw:
        if principal is None:
            raise SymmetryParseError(
                "screw translation without an axis in: '{}'".format(token), token
            )
        tran["xyz".index(principal)] += DEN // order * screw
    return SymmetryOperation(rot, tran), order


def parse_hall_change_of_basis(text: str) -> SymmetryOperation:
    """
    Parse the change-of-basis part of a Hall symbol (without the brackets),
    either the short form of a translation in twelfths e.g. '0 0 -1'
    or a full triplet e.g. '-y+z,x+z,-x+y+z'.
    """
    if "," in text:
        return parse_triplet(text)
    parts = text.split()
    if len(parts) != 3:
        raise SymmetryParseError(
            "unexpected change-of-basis format: '{}'".format(text), text
        )
    try:
        values = [int(p) for p in parts]
    except ValueError:
        raise SymmetryParseError(
            "unexpected change-of-basis format: '{}'".format(text), text
        )
    # remainder takes the sign of the value
    tran = [(abs(v) % 12) * (1 if v >= 0 else -1) * (DEN // 12) for v in values]
    return SymmetryOperation.identity().translated(tran)


def generators_from_hall(hall: str) -> GroupOps:
    """
    The generators encoded in a Hall symbol, in the order they are listed,
    after the identity (and the inversion, for symbols starting with '-').

    Args:
        hall (str): the Hall symbol, case insensitive

    Returns:
        GroupOps: the generators and the lattice centering vectors

    Raises:
        SymmetryParseError: if the symbol is malformed
    """
    if hall is None:
        raise SymmetryParseError("not a hall symbol: None", "")
    n = len(hall)
    pos = _skip_blank(hall, 0)
    sym_ops = [SymmetryOperation.identity()]
    if pos < n and hall[pos] == "-":
        sym_ops.append(SymmetryOperation.identity().negated())
        pos = _skip_blank(hall, pos + 1)
    if pos == n:
        raise SymmetryParseError("not a hall symbol: '{}'".format(hall), hall)
    cen_ops = centring_vectors(hall[pos])

    counter = 0
    prev = 0
    pos = _skip_blank(hall, pos + 1)
    while pos < n and hall[pos] != "(":
        end = _find_blank(hall, pos)
        if "(" in hall[pos:end]:
            end = hall.index("(", pos)
        token = hall[pos:end]
        counter += 1
        if token != "1":
            op, prev = hall_matrix_symbol(token, counter, prev)
            sym_ops.append(op)
        pos = _skip_blank(hall, end)

    ops = GroupOps(sym_ops, cen_ops)
    if pos < n:
        rb = hall.find(")", pos)
        if rb == -1:
            raise SymmetryParseError("missing ')': '{}'".format(hall), hall[pos:])
        ops.change_basis(parse_hall_change_of_basis(hall[pos + 1 : rb]))
        if _skip_blank(hall, rb + 1) != n:
            raise SymmetryParseError(
                "unexpected characters after ')': '{}'".format(hall), hall[rb + 1 :]
            )
    return ops


def symops_from_hall(hall: str) -> GroupOps:
    """
    All the operations of the space group described by a Hall symbol.

    >>> len(symops_from_hall("-P 2ac 2n"))
    8
    """
    ops = generators_from_hall(hall)
    ops.add_missing_elements()
    LOG.debug("'%s': %d operations", hall, len(ops))
    return ops
