import logging
from math import gcd

import numpy as np

from .symmetry_operation import DEN, SymmetryOperation, SymmetryParseError

LOG = logging.getLogger(__name__)

# largest group we are prepared to generate from a set of generators
MAX_GROUP_SIZE = 1023

_H = DEN // 2
_T = DEN // 3
_D = 2 * _T

_CENTRING_VECTORS = {
    "P": ((0, 0, 0),),
    "A": ((0, 0, 0), (0, _H, _H)),
    "B": ((0, 0, 0), (_H, 0, _H)),
    "C": ((0, 0, 0), (_H, _H, 0)),
    "I": ((0, 0, 0), (_H, _H, _H)),
    "R": ((0, 0, 0), (_T, _D, _D), (_D, _T, _T)),
    "S": ((0, 0, 0), (_T, _T, _D), (_D, _D, _T)),
    "T": ((0, 0, 0), (_T, _D, _T), (_D, _T, _D)),
    "H": ((0, 0, 0), (_T, _D, 0), (_D, _T, 0)),
    "F": ((0, 0, 0), (0, _H, _H), (_H, 0, _H), (_H, _H, 0)),
}


def centring_vectors(lattice_symbol: str):
    """
    The DEN-scaled lattice translations of a lattice symbol (case insensitive)

    >>> centring_vectors("C")
    [(0, 0, 0), (12, 12, 0)]

    Raises:
        SymmetryParseError: if the symbol is not one of P A B C I R S T H F
    """
    try:
        return list(_CENTRING_VECTORS[lattice_symbol.upper()])
    except KeyError:
        raise SymmetryParseError(
            "not a lattice symbol: '{}'".format(lattice_symbol), lattice_symbol
        )


def _as_op(op):
    return op if isinstance(op, SymmetryOperation) else SymmetryOperation(op)


class GroupOps:
    """
    A space group as a list of symmetry operations (one per distinct
    rotation, identity first) and a list of centering vectors.

    The full group is the product of the two lists, i.e.
    every operation translated by every centering vector.

    Attributes:
        sym_ops (List[SymmetryOperation]): operations, identity first
        cen_ops (List[Tuple[int]]): DEN-scaled centering vectors, (0, 0, 0) first
    """

    def __init__(self, sym_ops, cen_ops=None):
        """
        Arguments:
            sym_ops (Iterable[SymmetryOperation or str]): operations. If
                `cen_ops` is not given, these are treated as a list of all the
                operations in the group and the centering vectors are split off
            cen_ops (Iterable[Tuple[int]], optional): centering vectors
        """
        if cen_ops is None:
            split = split_centering_vectors(sym_ops)
            sym_ops, cen_ops = split.sym_ops, split.cen_ops
        self.sym_ops = [_as_op(op) for op in sym_ops]
        self.cen_ops = [tuple(int(x) for x in c) for c in cen_ops]

    def order(self) -> int:
        "The number of operations in the group"
        return len(self.sym_ops) * len(self.cen_ops)

    def __len__(self):
        return self.order()

    def __iter__(self):
        for cen in self.cen_ops:
            for op in self.sym_ops:
                yield op.add_centering(cen)

    def get_op(self, n: int) -> SymmetryOperation:
        "The n-th operation in iteration order"
        if not 0 <= n < self.order():
            raise IndexError("operation index out of range: {}".format(n))
        n_cen, n_sym = divmod(n, len(self.sym_ops))
        return self.sym_ops[n_sym].add_centering(self.cen_ops[n_cen])

    def find_by_rotation(self, rot):
        "The operation with the given DEN-scaled rotation matrix, or None"
        rot = tuple(tuple(row) for row in rot)
        for op in self.sym_ops:
            if op.rot == rot:
                return op
        return None

    def find_centering(self):
        """
        The lattice letter matching the centering vectors of this group,
        or None if they correspond to no standard lattice
        """
        if self.cen_ops == [(0, 0, 0)]:
            return "P"
        trans = sorted(self.cen_ops)
        for letter in "ABCIFRSTH":
            if trans == sorted(_CENTRING_VECTORS[letter]):
                return letter
        return None

    def is_centric(self) -> bool:
        "True if the group contains an inversion"
        inversion = ((-DEN, 0, 0), (0, -DEN, 0), (0, 0, -DEN))
        return self.find_by_rotation(inversion) is not None

    def change_basis(self, cob: SymmetryOperation):
        """
        Transform this group in place to a new basis: every operation
        becomes cob * op * cob^-1. For a change of basis to a larger cell,
        extra centering vectors from the supercell are added.

        Args:
            cob (SymmetryOperation): change-of-basis operator
        """
        if not self.sym_ops or not self.cen_ops:
            return
        inv = cob.inverse()
        # the first element is the identity
        self.sym_ops[1:] = [
            cob.combine(op).combine(inv).wrapped() for op in self.sym_ops[1:]
        ]

        idet = abs(inv.det_rot()) // DEN ** 3
        if idet > 1:
            LOG.debug("change of basis to a %d-fold supercell", idet)
            self.cen_ops = [
                (i * DEN + c[0], j * DEN + c[1], k * DEN + c[2])
                for i in range(idet)
                for j in range(idet)
                for k in range(idet)
                for c in self.cen_ops
            ]

        cen_ops = self.cen_ops[:1]
        for tran in self.cen_ops[1:]:
            cvec = SymmetryOperation.identity().translated(tran)
            tran = cob.combine(cvec).combine(inv).wrapped().tran
            if tran not in cen_ops:
                cen_ops.append(tran)
        self.cen_ops = cen_ops

    def all_ops_sorted(self):
        "All operations of the group, wrapped and sorted"
        return sorted(self)

    def is_same_as(self, other) -> bool:
        """
        True if both objects realize the same set of operations, however
        they are split into operations and centering vectors
        """
        return set(self) == set(other)

    def __eq__(self, other):
        if not isinstance(other, GroupOps):
            return NotImplemented
        return self.is_same_as(other)

    __hash__ = None

    def find_grid_factors(self):
        """
        Minimal multiplicity of a real-space grid in each direction,
        e.g. [1, 2, 1] for P21 and [1, 1, 6] for P61

        Returns:
            List[int]: one factor per axis, each a divisor of DEN
        """
        factors = [DEN, DEN, DEN]
        for op in self:
            for i in range(3):
                factors[i] = gcd(factors[i], op.tran[i])
        return [DEN // f for f in factors]

    def are_directions_symmetry_related(self, u: int, v: int) -> bool:
        "True if any rotation maps axis v onto axis u"
        return any(op.rot[u][v] != 0 for op in self.sym_ops)

    def add_missing_elements(self):
        """
        Close the group in place, treating sym_ops[1:] as generators
        (Dimino's algorithm). Centering vectors must be already complete.

        Raises:
            ValueError: if sym_ops[0] is not the identity
            RuntimeError: if the group grows beyond MAX_GROUP_SIZE
        """
        identity = SymmetryOperation.identity()
        if not self.sym_ops or self.sym_ops[0] != identity:
            raise ValueError("the first operation must be the identity")
        if len(self.sym_ops) == 1:
            return

        def check_size():
            if len(self.sym_ops) > MAX_GROUP_SIZE:
                raise RuntimeError(
                    "more than {} elements generated, not a space group".format(
                        MAX_GROUP_SIZE
                    )
                )

        gen = self.sym_ops[1:]
        self.sym_ops = self.sym_ops[:2]
        g = self.sym_ops[1] * self.sym_ops[1]
        while g.rot != identity.rot:
            self.sym_ops.append(g)
            check_size()
            g = g * self.sym_ops[1]

        for i in range(1, len(gen)):
            coset_repr = [identity]
            init_size = len(self.sym_ops)
            while True:
                size = len(coset_repr)
                for j in range(size):
                    for n in range(i + 1):
                        sg = gen[n] * coset_repr[j]
                        if self.find_by_rotation(sg.rot) is None:
                            self.sym_ops.append(sg)
                            for k in range(1, init_size):
                                self.sym_ops.append(sg * self.sym_ops[k])
                            coset_repr.append(sg)
                if size == len(coset_repr):
                    break
                check_size()
        LOG.debug("closed group with %d operations", len(self.sym_ops))

    def apply_all(self, coordinates):
        """
        For a given set of coordinates, apply all symmetry
        operations in this group, yielding a set subject
        to only translational symmetry (i.e. a unit cell).
        Assumes the input coordinates are fractional.

        Args:
            coordinates (np.ndarray): (N, 3) set of fractional coordinates

        Returns:
            Tuple[np.ndarray, np.ndarray]: an (MxN) array of indices of the
                generating operation and an (MxN, 3) array of coordinates
                where M is the number of operations in this group.
        """
        coordinates = np.asarray(coordinates, dtype=np.float64)
        nsites = len(coordinates)
        transformed = np.empty((nsites * len(self), 3))
        generator = np.empty(nsites * len(self), dtype=np.int32)
        # identity comes first
        for i, op in enumerate(self):
            transformed[i * nsites : (i + 1) * nsites] = op(coordinates)
            generator[i * nsites : (i + 1) * nsites] = i
        return generator, transformed

    def __repr__(self):
        return "<{}: {} x {} operations>".format(
            self.__class__.__name__, len(self.sym_ops), len(self.cen_ops)
        )


def split_centering_vectors(ops):
    """
    Split a complete list of operations into a GroupOps: operations with
    the identity rotation become centering vectors, and only one operation
    (preferably with zero translation) is kept for each rotation.

    Args:
        ops (Iterable[SymmetryOperation or str]): all operations of a group

    Returns:
        GroupOps: the group
    """
    identity = SymmetryOperation.identity()
    sym_ops = [identity]
    cen_ops = []
    for op in ops:
        op = _as_op(op).wrapped()
        for idx, existing in enumerate(sym_ops):
            if existing.rot == op.rot:
                break
        else:
            sym_ops.append(op)
            continue
        if op.rot == identity.rot and op.tran not in cen_ops:
            cen_ops.append(op.tran)
        if op.tran == (0, 0, 0):
            sym_ops[idx] = op
    # zero vector goes first
    if (0, 0, 0) in cen_ops:
        cen_ops.remove((0, 0, 0))
    cen_ops.insert(0, (0, 0, 0))
    return GroupOps(sym_ops, cen_ops)
