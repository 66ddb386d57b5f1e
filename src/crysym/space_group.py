import json
import logging
import numbers
import os
import re
from collections import namedtuple
from functools import lru_cache

from .group_ops import GroupOps, split_centering_vectors
from .hall import symops_from_hall
from .point_group import point_group_for_number
from .symmetry_operation import _skip_blank, parse_triplet
from .util.text import hm_unicode

LOG = logging.getLogger(__name__)

_sgdata = namedtuple(
    "_sgdata",
    "number ccp4 hm ext qualifier hall basisop_idx",
)
_altname = namedtuple("_altname", "hm ext pos")

with open(os.path.join(os.path.dirname(__file__), "sgdata.json")) as f:
    _sgdata_dict = json.load(f)

BASISOPS = tuple(_sgdata_dict["basisops"])
HKL_ASU = tuple(_sgdata_dict["hkl_asu"])
SG_ALT_NAMES = tuple(_altname._make(x) for x in _sgdata_dict["alt_names"])

_NUMBER_REGEX = re.compile(r"\d+")


@lru_cache(maxsize=None)
def _hall_operations(hall):
    return symops_from_hall(hall)


class SpaceGroup:
    """
    One setting of a crystallographic space group from the table
    of 554 settings, e.g. 'P 1 21 1' or 'R 3 2:H'.

    Attributes:
        number (int): International Tables number, 1-230
        ccp4 (int): CCP4 number (0 if the setting has none)
        hm (str): Hermann-Mauguin symbol, space separated
        ext (str): extension '1', '2', 'H', 'R' or ''
        qualifier (str): setting qualifier, e.g. 'b1' or '-cba'
        hall (str): Hall symbol
        basisop_idx (int): index of the change-of-basis operator
            from the reference setting, 0 for the reference setting
    """

    def __init__(self, key):
        """
        Look up a space group by CCP4 number (e.g. 4 or 4005) or by name
        (e.g. 'P21', 'P 1 21 1', 'R 3 2:H').

        Arguments:
            key (int or str or SpaceGroup): the number or name

        Raises:
            ValueError: if nothing matches
        """
        if isinstance(key, SpaceGroup):
            sg = key
        elif isinstance(key, numbers.Integral):
            sg = get_spacegroup_by_number(key)
        elif isinstance(key, str):
            sg = get_spacegroup_by_name(key)
        else:
            raise TypeError("Cannot make a SpaceGroup from {!r}".format(key))
        self._sgdata = sg._sgdata

    @classmethod
    def _from_sgdata(cls, sgdata):
        sg = cls.__new__(cls)
        sg._sgdata = sgdata
        return sg

    @property
    def number(self) -> int:
        return self._sgdata.number

    @property
    def ccp4(self) -> int:
        return self._sgdata.ccp4

    @property
    def hm(self) -> str:
        return self._sgdata.hm

    @property
    def ext(self) -> str:
        return self._sgdata.ext

    @property
    def qualifier(self) -> str:
        return self._sgdata.qualifier

    @property
    def hall(self) -> str:
        return self._sgdata.hall

    @property
    def basisop_idx(self) -> int:
        return self._sgdata.basisop_idx

    def colon_ext(self) -> str:
        return ":" + self.ext if self.ext else ""

    def xhm(self) -> str:
        "extended Hermann-Mauguin symbol, e.g. 'R 3 2:H'"
        return self.hm + self.colon_ext()

    def short_name(self) -> str:
        "compact name, P 1 2 1 -> P2, but P 1 1 2 -> P112. R 3:H -> H3."
        s = self.hm
        if len(s) > 6 and s[2] == "1" and s[-2:] == " 1":
            s = s[0] + s[4:-2]
        if self.ext == "H":
            s = "H" + s[1:]
        return s.replace(" ", "")

    @property
    def point_group(self):
        "the point group of this space group"
        return point_group_for_number(self.number)

    def point_group_hm(self) -> str:
        return self.point_group.symbol

    @property
    def laue_class(self):
        "the Laue class, as the centrosymmetric point group"
        return self.point_group.laue_class

    def laue_str(self) -> str:
        return self.point_group.laue_group

    @property
    def crystal_system(self) -> str:
        "The crystal system of the space group e.g. triclinic, monoclinic etc."
        return self.point_group.crystal_system

    def crystal_system_str(self) -> str:
        return self.crystal_system

    @property
    def lattice_type(self) -> str:
        "the lattice type of this space group e.g. rhombohedral, hexagonal etc."
        if self.crystal_system not in ("trigonal", "hexagonal"):
            return self.crystal_system
        if self.ext == "R":
            return "rhombohedral"
        return "hexagonal"

    @property
    def centering(self) -> str:
        "the lattice letter of the Hall symbol"
        return self.hall.lstrip("-")[0].upper()

    def is_centrosymmetric(self) -> bool:
        return self.point_group.is_centrosymmetric

    def basisop_str(self) -> str:
        "change-of-basis operator from the reference setting"
        return BASISOPS[self.basisop_idx]

    def basisop(self):
        return parse_triplet(self.basisop_str())

    def is_reference_setting(self) -> bool:
        return self.basisop_idx == 0

    def operations(self) -> GroupOps:
        """
        All the symmetry operations of this space group, generated
        from its Hall symbol. A new object is returned on each call.
        """
        ops = _hall_operations(self.hall)
        return GroupOps(list(ops.sym_ops), list(ops.cen_ops))

    @property
    def symbol_unicode(self) -> str:
        "the space group symbol with unicode subscripts"
        return hm_unicode(self.hm)

    @property
    def cif_section(self) -> str:
        "Representation of the SpaceGroup in CIF files"
        return "\n".join(
            "{} {}".format(i, op.triplet())
            for i, op in enumerate(self.operations(), start=1)
        )

    def __len__(self):
        return len(self.operations())

    def __repr__(self):
        return "<{} {}: {}>".format(self.__class__.__name__, self.number, self.xhm())

    def __eq__(self, other):
        if not isinstance(other, SpaceGroup):
            return NotImplemented
        return self._sgdata == other._sgdata

    def __hash__(self):
        return hash(self._sgdata)


SPACEGROUP_TABLE = tuple(
    SpaceGroup._from_sgdata(_sgdata._make(x)) for x in _sgdata_dict["settings"]
)
LOG.debug(
    "loaded %d space group settings, %d alternative names",
    len(SPACEGROUP_TABLE),
    len(SG_ALT_NAMES),
)


def spacegroup_table():
    "All 554 settings, the first 530 in the order of International Tables"
    return SPACEGROUP_TABLE


def find_spacegroup_by_number(ccp4: int):
    """
    Find the first setting with the given CCP4 number. Numbers below 231
    are International Tables numbers of the reference (or CCP4 default)
    settings; larger ones select other settings, e.g. 4005 is 'I 1 2 1'.

    Returns:
        SpaceGroup or None: the matching setting
    """
    # settings without a CCP4 number have 0 in the table
    if ccp4 <= 0:
        return None
    for sg in SPACEGROUP_TABLE:
        if sg.ccp4 == ccp4:
            return sg
    return None


def get_spacegroup_by_number(ccp4: int) -> SpaceGroup:
    "as `find_spacegroup_by_number`, but raise ValueError if nothing is found"
    sg = find_spacegroup_by_number(ccp4)
    if sg is None:
        raise ValueError("Invalid space-group number: {}".format(ccp4))
    return sg


def get_spacegroup_reference_setting(number: int) -> SpaceGroup:
    "The reference setting of International Tables space group `number`"
    for sg in SPACEGROUP_TABLE:
        if sg.number == number and sg.is_reference_setting():
            return sg
    raise ValueError("Invalid space-group number: {}".format(number))


def _matches_hm(rest, hm, ext):
    # rest starts at the symbol following the lattice letter
    if not rest or len(hm) < 3 or hm[2] != rest[0]:
        return False
    a = _skip_blank(rest, 1)
    b = _skip_blank(hm, 3)
    while a < len(rest) and b < len(hm) and rest[a] == hm[b]:
        a = _skip_blank(rest, a + 1)
        b = _skip_blank(hm, b + 1)
    if b != len(hm):
        return False
    if a == len(rest):
        return True
    if rest[a] != ":":
        return False
    a = _skip_blank(rest, a + 1)
    return rest[a : a + 1] == ext


def _matches_monoclinic_short_name(rest, hm):
    # e.g. 'P 21' or 'P21' for 'P 1 21 1'
    if not (len(hm) > 4 and hm[2] == "1" and hm[3] == " " and hm[4] != "1"):
        return False
    a = _skip_blank(rest, 0)
    b = 4
    while a < len(rest) and b < len(hm) and rest[a] == hm[b] and hm[b] != " ":
        a = _skip_blank(rest, a + 1)
        b += 1
    return a == len(rest) and b < len(hm) and hm[b] == " "


def find_spacegroup_by_name(name: str):
    """
    Find a setting by its name. The comparison ignores blanks, so
    'P 21 21 21' and 'P212121' are the same. Extended symbols ('R 3 2:H'),
    H-prefixed hexagonal settings ('H32'), monoclinic short names ('P21'),
    alternative symbols ('Aem2') and numbers ('19') are understood.

    Args:
        name (str): the space group name

    Returns:
        SpaceGroup or None: the first matching setting
    """
    if not name:
        return None
    if name[0] == "H":
        name = "R" + name[1:]
    pos = _skip_blank(name, 0)
    if pos < len(name) and name[pos].isdigit():
        if _NUMBER_REGEX.fullmatch(name, pos):
            return find_spacegroup_by_number(int(name[pos:]))
        return None
    if pos == len(name):
        return None
    first = name[pos].upper()
    rest = name[_skip_blank(name, pos + 1) :]
    for sg in SPACEGROUP_TABLE:
        if sg.hm[0] != first:
            continue
        if rest and sg.hm[2] == rest[0]:
            if _matches_hm(rest, sg.hm, sg.ext):
                return sg
        elif _matches_monoclinic_short_name(rest, sg.hm):
            return sg
    for alt in SG_ALT_NAMES:
        if alt.hm[0] == first and _matches_hm(rest, alt.hm, alt.ext):
            return SPACEGROUP_TABLE[alt.pos]
    LOG.debug("no space group named '%s'", name)
    return None


def get_spacegroup_by_name(name: str) -> SpaceGroup:
    "as `find_spacegroup_by_name`, but raise ValueError if nothing is found"
    sg = find_spacegroup_by_name(name)
    if sg is None:
        raise ValueError("Unknown space-group name: '{}'".format(name))
    return sg


def find_spacegroup_by_ops(gops: GroupOps):
    """
    Find the table setting with exactly the same set of operations.

    Args:
        gops (GroupOps): a complete group

    Returns:
        SpaceGroup or None: the first matching setting
    """
    # the same group may be factored differently, e.g. with all ops in sym_ops
    gops = split_centering_vectors(list(gops))
    centering = gops.find_centering()
    if centering is None:
        return None
    realized = set(gops)
    for sg in SPACEGROUP_TABLE:
        if centering not in sg.hall[:2]:
            continue
        ops = _hall_operations(sg.hall)
        if ops.order() == len(realized) and set(ops) == realized:
            return sg
    return None


def find_spacegroup_by_hall(hall: str):
    """
    Find the setting described by a Hall symbol. Symbols as written in
    the table are matched directly; others are matched by the operations
    they generate.
    """
    normalized = " ".join(hall.split())
    for sg in SPACEGROUP_TABLE:
        if sg.hall == normalized:
            return sg
    return find_spacegroup_by_ops(symops_from_hall(hall))


class ReciprocalAsu:
    """
    Reciprocal-space asymmetric unit of a space group setting,
    one of the same ten choices as in CCP4 symlib and cctbx.
    """

    _CONDITIONS = (
        lambda h, k, l: l > 0 or (l == 0 and (h > 0 or (h == 0 and k >= 0))),
        lambda h, k, l: k >= 0 and (l > 0 or (l == 0 and h >= 0)),
        lambda h, k, l: h >= 0 and k >= 0 and l >= 0,
        lambda h, k, l: l >= 0 and ((h >= 0 and k > 0) or (h == 0 and k == 0)),
        lambda h, k, l: h >= k and k >= 0 and l >= 0,
        lambda h, k, l: (h >= 0 and k > 0) or (h == 0 and k == 0 and l >= 0),
        lambda h, k, l: h >= k and k >= 0 and (k > 0 or l >= 0),
        lambda h, k, l: h >= k and k >= 0 and (h > k or l >= 0),
        lambda h, k, l: h >= 0 and ((l >= h and k > h) or (l == h and k == h)),
        lambda h, k, l: k >= l and l >= h and h >= 0,
    )

    _CONDITION_STRINGS = (
        "l>0 or (l=0 and (h>0 or (h=0 and k>=0)))",
        "k>=0 and (l>0 or (l=0 and h>=0))",
        "h>=0 and k>=0 and l>=0",
        "l>=0 and ((h>=0 and k>0) or (h=0 and k=0))",
        "h>=k and k>=0 and l>=0",
        "(h>=0 and k>0) or (h=0 and k=0 and l>=0)",
        "h>=k and k>=0 and (k>0 or l>=0)",
        "h>=k and k>=0 and (h>k or l>=0)",
        "h>=0 and ((l>=h and k>h) or (l=h and k=h))",
        "k>=l and l>=h and h>=0",
    )

    def __init__(self, sg):
        if sg is None:
            raise ValueError("Missing space group")
        self.rot = sg.basisop().inverse().rot
        self.idx = HKL_ASU[sg.number - 1]

    def is_in(self, h, k, l) -> bool:
        "True if reflection hkl (in the setting of the space group) is in the ASU"
        r = self.rot
        return self.is_in_reference_setting(
            r[0][0] * h + r[0][1] * k + r[0][2] * l,
            r[1][0] * h + r[1][1] * k + r[1][2] * l,
            r[2][0] * h + r[2][1] * k + r[2][2] * l,
        )

    def is_in_reference_setting(self, h, k, l) -> bool:
        return self._CONDITIONS[self.idx](h, k, l)

    def condition_str(self) -> str:
        return self._CONDITION_STRINGS[self.idx]
