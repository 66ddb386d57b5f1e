from dataclasses import dataclass

CRYSTAL_SYSTEMS = (
    "triclinic",
    "monoclinic",
    "orthorhombic",
    "tetragonal",
    "trigonal",
    "hexagonal",
    "cubic",
)


@dataclass(frozen=True)
class PointGroup:
    number: int
    symbol: str
    schoenflies: str
    crystal_system: str
    laue_group: str

    def __repr__(self):
        return f"<PointGroup: {self.symbol}>"

    @property
    def laue_class(self):
        "The centrosymmetric point group of the Laue class of this point group"
        return POINT_GROUP_FROM_SYMBOL[self.laue_group]

    @property
    def is_centrosymmetric(self):
        return self.symbol == self.laue_group

    @classmethod
    def from_number(cls, number):
        if number < 1 or number > 32:
            raise ValueError("Point group number must be between [1, 32]")
        return POINT_GROUP_DATA[number - 1]

    @classmethod
    def from_symbol(cls, symbol):
        if symbol not in POINT_GROUP_FROM_SYMBOL:
            raise ValueError(f"Unknown point group symbol: '{symbol}'")
        return POINT_GROUP_FROM_SYMBOL[symbol]


POINT_GROUP_DATA = (
    PointGroup(1, "1", "C1", "triclinic", "-1"),
    PointGroup(2, "-1", "Ci", "triclinic", "-1"),
    PointGroup(3, "2", "C2", "monoclinic", "2/m"),
    PointGroup(4, "m", "Cs", "monoclinic", "2/m"),
    PointGroup(5, "2/m", "C2h", "monoclinic", "2/m"),
    PointGroup(6, "222", "D2", "orthorhombic", "mmm"),
    PointGroup(7, "mm2", "C2v", "orthorhombic", "mmm"),
    PointGroup(8, "mmm", "D2h", "orthorhombic", "mmm"),
    PointGroup(9, "4", "C4", "tetragonal", "4/m"),
    PointGroup(10, "-4", "S4", "tetragonal", "4/m"),
    PointGroup(11, "4/m", "C4h", "tetragonal", "4/m"),
    PointGroup(12, "422", "D4", "tetragonal", "4/mmm"),
    PointGroup(13, "4mm", "C4v", "tetragonal", "4/mmm"),
    PointGroup(14, "-42m", "D2d", "tetragonal", "4/mmm"),
    PointGroup(15, "4/mmm", "D4h", "tetragonal", "4/mmm"),
    PointGroup(16, "3", "C3", "trigonal", "-3"),
    PointGroup(17, "-3", "C3i", "trigonal", "-3"),
    PointGroup(18, "32", "D3", "trigonal", "-3m"),
    PointGroup(19, "3m", "C3v", "trigonal", "-3m"),
    PointGroup(20, "-3m", "D3d", "trigonal", "-3m"),
    PointGroup(21, "6", "C6", "hexagonal", "6/m"),
    PointGroup(22, "-6", "C3h", "hexagonal", "6/m"),
    PointGroup(23, "6/m", "C6h", "hexagonal", "6/m"),
    PointGroup(24, "622", "D6", "hexagonal", "6/mmm"),
    PointGroup(25, "6mm", "C6v", "hexagonal", "6/mmm"),
    PointGroup(26, "-62m", "D3h", "hexagonal", "6/mmm"),
    PointGroup(27, "6/mmm", "D6h", "hexagonal", "6/mmm"),
    PointGroup(28, "23", "T", "cubic", "m-3"),
    PointGroup(29, "m-3", "Th", "cubic", "m-3"),
    PointGroup(30, "432", "O", "cubic", "m-3m"),
    PointGroup(31, "-43m", "Td", "cubic", "m-3m"),
    PointGroup(32, "m-3m", "Oh", "cubic", "m-3m"),
)

POINT_GROUP_FROM_SYMBOL = {x.symbol: x for x in POINT_GROUP_DATA}

# point group number (as in POINT_GROUP_DATA) for each of the 230 space groups
_SPACE_GROUP_POINT_GROUP = (
    1, 2, 3, 3, 3, 4, 4, 4, 4, 5,
    5, 5, 5, 5, 5, 6, 6, 6, 6, 6,
    6, 6, 6, 6, 7, 7, 7, 7, 7, 7,
    7, 7, 7, 7, 7, 7, 7, 7, 7, 7,
    7, 7, 7, 7, 7, 7, 8, 8, 8, 8,
    8, 8, 8, 8, 8, 8, 8, 8, 8, 8,
    8, 8, 8, 8, 8, 8, 8, 8, 8, 8,
    8, 8, 8, 8, 9, 9, 9, 9, 9, 9,
    10, 10, 11, 11, 11, 11, 11, 11, 12, 12,
    12, 12, 12, 12, 12, 12, 12, 12, 13, 13,
    13, 13, 13, 13, 13, 13, 13, 13, 13, 13,
    14, 14, 14, 14, 14, 14, 14, 14, 14, 14,
    14, 14, 15, 15, 15, 15, 15, 15, 15, 15,
    15, 15, 15, 15, 15, 15, 15, 15, 15, 15,
    15, 15, 16, 16, 16, 16, 17, 17, 18, 18,
    18, 18, 18, 18, 18, 19, 19, 19, 19, 19,
    19, 20, 20, 20, 20, 20, 20, 21, 21, 21,
    21, 21, 21, 22, 23, 23, 24, 24, 24, 24,
    24, 24, 25, 25, 25, 25, 26, 26, 26, 26,
    27, 27, 27, 27, 28, 28, 28, 28, 28, 29,
    29, 29, 29, 29, 29, 29, 30, 30, 30, 30,
    30, 30, 30, 30, 31, 31, 31, 31, 31, 31,
    32, 32, 32, 32, 32, 32, 32, 32, 32, 32,
)


def point_group_for_number(space_group_number):
    """
    The crystallographic point group of a space group.

    Args:
        space_group_number (int): International Tables number, 1-230

    Returns:
        PointGroup: the point group
    """
    if space_group_number < 1 or space_group_number > 230:
        raise ValueError("Space group number must be between [1, 230]")
    return PointGroup.from_number(_SPACE_GROUP_POINT_GROUP[space_group_number - 1])
