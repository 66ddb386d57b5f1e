import logging
import math
import unittest

from crysym.group_ops import GroupOps
from crysym.hall import symops_from_hall
from crysym.point_group import PointGroup, point_group_for_number
from crysym.space_group import (
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

LOG = logging.getLogger(__name__)


class SpaceGroupTableTestCase(unittest.TestCase):
    def test_table(self):
        self.assertEqual(len(spacegroup_table()), 554)
        for sg in spacegroup_table():
            if sg.ccp4 != 0:
                self.assertEqual(sg.ccp4 % 1000, sg.number)
            if sg.operations().is_centric():
                self.assertEqual(sg.laue_str(), sg.point_group_hm())
                self.assertTrue(sg.is_centrosymmetric())
            else:
                self.assertNotEqual(sg.laue_str(), sg.point_group_hm())
                self.assertFalse(sg.is_centrosymmetric())

    def test_reference_settings(self):
        for number in range(1, 231):
            sg = get_spacegroup_reference_setting(number)
            self.assertEqual(sg.number, number)
            self.assertEqual(sg.basisop_str(), "x,y,z")
        with self.assertRaises(ValueError):
            get_spacegroup_reference_setting(231)

    def test_names_roundtrip(self):
        for sg in spacegroup_table():
            self.assertIs(find_spacegroup_by_name(sg.xhm()), sg)

    def test_hall_roundtrip(self):
        for sg in spacegroup_table()[:60]:
            self.assertEqual(find_spacegroup_by_hall(sg.hall).hall, sg.hall)


class SpaceGroupLookupTestCase(unittest.TestCase):
    def test_find_spacegroup(self):
        self.assertEqual(SpaceGroup("P21212").hm, "P 21 21 2")
        self.assertEqual(find_spacegroup_by_name("P21").hm, "P 1 21 1")
        self.assertEqual(find_spacegroup_by_name("P 2").hm, "P 1 2 1")

        def check_xhm(name, xhm):
            self.assertEqual(SpaceGroup(name).xhm(), xhm)

        check_xhm("R 3 2", "R 3 2:H")
        check_xhm("R32:H", "R 3 2:H")
        check_xhm("H32", "R 3 2:H")
        check_xhm("R 3 2:R", "R 3 2:R")
        check_xhm("P6", "P 6")
        check_xhm("P 6", "P 6")
        check_xhm("P65", "P 65")
        check_xhm("I1211", "I 1 21 1")
        check_xhm("Aem2", "A b m 2")
        check_xhm("C c c e", "C c c a:1")
        check_xhm("i2", "I 1 2 1")
        check_xhm("R 3 :H", "R 3:H")
        check_xhm("P 1 21/c 1", "P 1 21/c 1")
        check_xhm("P\t1_21/c 1", "P 1 21/c 1")
        self.assertRaises(ValueError, SpaceGroup, "i3")
        self.assertEqual(find_spacegroup_by_number(5).hm, "C 1 2 1")
        self.assertEqual(SpaceGroup(4005).hm, "I 1 2 1")
        self.assertIsNone(find_spacegroup_by_name("abc"))

    def test_find_by_number_string(self):
        self.assertEqual(find_spacegroup_by_name("19").hm, "P 21 21 21")
        self.assertEqual(find_spacegroup_by_name(" 4005").hm, "I 1 2 1")
        self.assertIsNone(find_spacegroup_by_name("19x"))

    def test_misses(self):
        self.assertIsNone(find_spacegroup_by_name(""))
        self.assertIsNone(find_spacegroup_by_name("   "))
        self.assertIsNone(find_spacegroup_by_number(231))
        with self.assertRaises(ValueError):
            get_spacegroup_by_name("P 7")
        with self.assertRaises(ValueError):
            get_spacegroup_by_number(999)
        with self.assertRaises(ValueError):
            SpaceGroup(0)
        with self.assertRaises(TypeError):
            SpaceGroup(1.5)

    def test_find_by_hall(self):
        self.assertEqual(find_spacegroup_by_hall("-P 2ac 2n").hm, "P n m a")
        self.assertEqual(find_spacegroup_by_hall(" P  2yb ").hm, "P 1 21 1")
        self.assertEqual(find_spacegroup_by_hall("-P 2a 2ac (z,x,y)").hm, "P b a a")
        self.assertIsNone(find_spacegroup_by_hall("C -4 -2b"))

    def test_find_by_ops(self):
        for name in ("P 1", "P 21 21 21", "R 3:R", "F d -3 m:2", "P 63/m m c"):
            sg = SpaceGroup(name)
            self.assertEqual(find_spacegroup_by_ops(sg.operations()), sg)
            flat = GroupOps(list(sg.operations()), [(0, 0, 0)])
            self.assertEqual(find_spacegroup_by_ops(flat), sg)

    def test_operations(self):
        gops = symops_from_hall("-P 2a 2ac (z,x,y)")
        self.assertEqual(set(SpaceGroup("Pbaa").operations()), set(gops))
        self.assertEqual(find_spacegroup_by_ops(gops).hm, "P b a a")

    def test_operations_are_copies(self):
        sg = SpaceGroup("P 1 21 1")
        ops = sg.operations()
        ops.change_basis(sg.basisop().inverse())
        ops.sym_ops.append(ops.sym_ops[0])
        self.assertEqual(len(sg.operations().sym_ops), 2)


class SpaceGroupTestCase(unittest.TestCase):
    def test_short_name(self):
        for longer, shorter in [
            ("P 21 2 21", "P21221"),
            ("P 1 2 1", "P2"),
            ("P 1", "P1"),
            ("R 3 2:R", "R32"),
            ("R 3 2:H", "H32"),
            ("P 1 1 2", "P112"),
        ]:
            self.assertEqual(SpaceGroup(longer).short_name(), shorter)

    def test_colon_ext(self):
        self.assertEqual(SpaceGroup("P n n n:2").colon_ext(), ":2")
        self.assertEqual(SpaceGroup("P 1").colon_ext(), "")

    def test_point_group(self):
        sg = SpaceGroup("P 21 21 21")
        self.assertEqual(sg.point_group_hm(), "222")
        self.assertEqual(sg.laue_str(), "mmm")
        self.assertEqual(sg.laue_class, PointGroup.from_symbol("mmm"))
        self.assertEqual(sg.crystal_system_str(), "orthorhombic")
        self.assertEqual(SpaceGroup("P 1 21/c 1").point_group_hm(), "2/m")
        self.assertEqual(SpaceGroup("P -6 m 2").point_group_hm(), "-62m")

    def test_crystal_system(self):
        systems = (
            (1, "triclinic"),
            (14, "monoclinic"),
            (33, "orthorhombic"),
            (76, "tetragonal"),
            (148, "trigonal"),
            (169, "hexagonal"),
            (225, "cubic"),
        )
        for number, system in systems:
            self.assertEqual(get_spacegroup_reference_setting(number).crystal_system, system)

    def test_lattice_type(self):
        sgs = (
            SpaceGroup(15),
            SpaceGroup(169),
            SpaceGroup("R -3:H"),
            SpaceGroup("R -3:R"),
        )
        latt = ("monoclinic", "hexagonal", "hexagonal", "rhombohedral")
        for s, lattice_type in zip(sgs, latt):
            self.assertEqual(s.lattice_type, lattice_type)

    def test_basisop(self):
        sg = SpaceGroup("I 1 2 1")
        self.assertEqual(sg.basisop_str(), "x,y,-x+z")
        self.assertFalse(sg.is_reference_setting())
        self.assertEqual(sg.basisop().det_rot(), 24 ** 3)
        self.assertTrue(SpaceGroup("C 1 2 1").is_reference_setting())
        ref = get_spacegroup_reference_setting(sg.number)
        ops = ref.operations()
        ops.change_basis(sg.basisop())
        self.assertEqual(ops, sg.operations())

    def test_centering(self):
        self.assertEqual(SpaceGroup("I 1 2 1").centering, "I")
        self.assertEqual(SpaceGroup("P -1").centering, "P")
        self.assertEqual(SpaceGroup("F m -3 m").centering, "F")

    def test_symbol_unicode(self):
        self.assertEqual(SpaceGroup("P 1 21/c 1").symbol_unicode, "P 1 2₁/c 1")
        self.assertEqual(SpaceGroup("P -1").symbol_unicode, "P 1\u0305")

    def test_cif_section(self):
        self.assertEqual(SpaceGroup("P 1").cif_section, "1 x,y,z")
        self.assertEqual(SpaceGroup("P -1").cif_section, "1 x,y,z\n2 -x,-y,-z")

    def test_len(self):
        self.assertEqual(len(SpaceGroup("F m -3 m")), 192)
        self.assertEqual(len(SpaceGroup("P 1")), 1)

    def test_repr(self):
        self.assertEqual(repr(SpaceGroup("P 1")), "<SpaceGroup 1: P 1>")
        self.assertEqual(repr(SpaceGroup("H 3")), "<SpaceGroup 146: R 3:H>")

    def test_hash(self):
        self.assertEqual(
            set((SpaceGroup("R 3 2:H"), SpaceGroup("H32"), SpaceGroup(155))),
            set((SpaceGroup("R 3 2:H"),)),
        )
        self.assertEqual(len(set((SpaceGroup("R 3 2:H"), SpaceGroup("R 3 2:R")))), 2)
        self.assertEqual(SpaceGroup(SpaceGroup("P 1")), SpaceGroup("P 1"))

    def test_phase_shift(self):
        # example from pages 9-10 of the IUCr teaching pamphlet 9
        ops = find_spacegroup_by_name("P 31 2 1").operations()
        refl = [3, 0, 1]
        expected_equiv = [
            [3, 0, 1],
            [0, -3, 1],
            [-3, 3, 1],
            [0, 3, -1],
            [3, -3, -1],
            [-3, 0, -1],
        ]
        self.assertEqual([op.apply_to_hkl(refl) for op in ops], expected_equiv)
        expected_shifts = [0, -120, -240, 0, -240, -120]
        for op, expected in zip(ops, expected_shifts):
            shift = math.degrees(op.phase_shift(*refl))
            difference = (shift - expected) % 360
            self.assertAlmostEqual(min(difference, 360 - difference), 0)


class PointGroupTestCase(unittest.TestCase):
    def test_from_number(self):
        self.assertEqual(PointGroup.from_number(1).symbol, "1")
        self.assertEqual(PointGroup.from_number(32).schoenflies, "Oh")
        for invalid in (0, 33):
            with self.assertRaises(ValueError):
                PointGroup.from_number(invalid)

    def test_laue_class(self):
        for number in range(1, 33):
            pg = PointGroup.from_number(number)
            self.assertTrue(pg.laue_class.is_centrosymmetric)
            self.assertEqual(pg.laue_class.crystal_system, pg.crystal_system)
        self.assertEqual(PointGroup.from_symbol("-42m").laue_class.symbol, "4/mmm")
        with self.assertRaises(ValueError):
            PointGroup.from_symbol("5")

    def test_point_group_for_number(self):
        self.assertEqual(point_group_for_number(1).symbol, "1")
        self.assertEqual(point_group_for_number(19).symbol, "222")
        self.assertEqual(point_group_for_number(230).symbol, "m-3m")
        with self.assertRaises(ValueError):
            point_group_for_number(231)

    def test_repr(self):
        self.assertEqual(repr(PointGroup.from_number(15)), "<PointGroup: 4/mmm>")


class ReciprocalAsuTestCase(unittest.TestCase):
    def laue_orbit(self, sg, hkl):
        orbit = set()
        for op in sg.operations().sym_ops:
            h = tuple(op.apply_to_hkl(hkl))
            orbit.add(h)
            orbit.add(tuple(-x for x in h))
        return orbit

    def test_one_reflection_per_orbit(self):
        for name in (
            "P 1",
            "P 1 2 1",
            "P 21 21 21",
            "P 4",
            "P 4 2 2",
            "P 3",
            "P 3 1 2",
            "P 3 2 1",
            "P 6",
            "P 6 2 2",
            "P 2 3",
            "P 4 3 2",
        ):
            sg = SpaceGroup(name)
            asu = ReciprocalAsu(sg)
            for hkl in ((1, 2, 3), (3, 1, 5)):
                inside = [h for h in self.laue_orbit(sg, hkl) if asu.is_in(*h)]
                self.assertEqual(len(inside), 1, msg="{} {}".format(name, hkl))

    def test_condition_str(self):
        self.assertEqual(
            ReciprocalAsu(SpaceGroup("P 1")).condition_str(),
            "l>0 or (l=0 and (h>0 or (h=0 and k>=0)))",
        )
        self.assertEqual(
            ReciprocalAsu(SpaceGroup("P 21 21 21")).condition_str(),
            "h>=0 and k>=0 and l>=0",
        )
        asu = ReciprocalAsu(SpaceGroup("P 1"))
        self.assertTrue(asu.is_in(0, 0, 1))
        self.assertFalse(asu.is_in(0, 0, -1))

    def test_missing_space_group(self):
        with self.assertRaises(ValueError):
            ReciprocalAsu(None)
