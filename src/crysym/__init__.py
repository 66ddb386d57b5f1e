"""
This module implements the algebra of crystallographic symmetry:
symmetry operations in exact fractional arithmetic (`SymmetryOperation`, `Op`),
their triplet notation, space groups generated from Hall symbols (`GroupOps`),
point groups (`PointGroup`) and the table of space group settings (`SpaceGroup`).
"""

from .group_ops import GroupOps, centring_vectors, split_centering_vectors
from .hall import generators_from_hall, symops_from_hall
from .point_group import PointGroup
from .space_group import (
    ReciprocalAsu,
    SpaceGroup,
    find_spacegroup_by_hall,
    find_spacegroup_by_name,
    find_spacegroup_by_number,
    find_spacegroup_by_ops,
    get_spacegroup_by_name,
    get_spacegroup_by_number,
    get_spacegroup_reference_setting,
    spacegroup_table,
)
from .symmetry_operation import (
    DEN,
    InexactArithmeticError,
    Op,
    SymmetryOperation,
    SymmetryParseError,
    make_triplet_part,
    parse_triplet,
    parse_triplet_part,
)

__all__ = [
    "DEN",
    "GroupOps",
    "InexactArithmeticError",
    "Op",
    "PointGroup",
    "ReciprocalAsu",
    "SpaceGroup",
    "SymmetryOperation",
    "SymmetryParseError",
    "centring_vectors",
    "find_spacegroup_by_hall",
    "find_spacegroup_by_name",
    "find_spacegroup_by_number",
    "find_spacegroup_by_ops",
    "generators_from_hall",
    "get_spacegroup_by_name",
    "get_spacegroup_by_number",
    "get_spacegroup_reference_setting",
    "make_triplet_part",
    "parse_triplet",
    "parse_triplet_part",
    "spacegroup_table",
    "split_centering_vectors",
    "symops_from_hall",
]
