import logging
import sys

from crysym.hall import symops_from_hall
from crysym.space_group import (
    ReciprocalAsu,
    find_spacegroup_by_name,
    find_spacegroup_by_ops,
)

LOG = logging.getLogger("crysym-sg")


def _yes_no(value):
    return "yes" if value else "no"


def print_symmetry_operations(ops, file=None):
    print(
        "{} x {} symmetry operations:".format(len(ops.cen_ops), len(ops.sym_ops)),
        file=file,
    )
    for op in ops:
        print("    {}".format(op.triplet()), file=file)


def describe(sg, file=None):
    "Print the properties of a space group setting"
    is_reference = sg.is_reference_setting()
    ops = sg.operations()
    nx, ny, nz = ops.find_grid_factors()
    print("Number: {}".format(sg.number), file=file)
    print("Is standard setting for this space group: {}".format(_yes_no(is_reference)), file=file)
    print("Change-of-basis operator to standard setting: {}".format(sg.basisop_str()), file=file)
    print("CCP4 number: {}".format(sg.ccp4), file=file)
    print("Hermann–Mauguin: {}".format(sg.hm), file=file)
    print("Extended H-M: {}".format(sg.xhm()), file=file)
    print("Hall symbol: {}".format(sg.hall), file=file)
    print("Point group: {}".format(sg.point_group_hm()), file=file)
    print("Is centric: {}".format(_yes_no(ops.is_centric())), file=file)
    print("Grid restrictions: NX={}n NY={}n NZ={}n".format(nx, ny, nz), file=file)
    print(
        "Reciprocal space ASU{}: {}".format(
            "" if is_reference else " wrt. standard setting",
            ReciprocalAsu(sg).condition_str(),
        ),
        file=file,
    )
    print_symmetry_operations(ops, file=file)
    print(file=file)


def process_arg(arg, file=None) -> bool:
    """
    Describe the space group given by name, number or Hall symbol.
    Hall symbols of groups that are not in the table are described
    by their operations only.

    Returns:
        bool: False if `arg` could not be interpreted
    """
    sg = find_spacegroup_by_name(arg)
    if sg is None:
        try:
            ops = symops_from_hall(arg)
        except (ValueError, ArithmeticError, RuntimeError) as e:
            LOG.debug("'%s' is not a Hall symbol: %s", arg, e)
            ops = None
        if ops is not None:
            sg = find_spacegroup_by_ops(ops)
            if sg is None:
                print("Hall symbol: {}".format(arg), file=file)
                print_symmetry_operations(ops, file=file)
                return True
    if sg is None:
        LOG.error("Space group not found: %s", arg)
        return False
    describe(sg, file=file)
    return True


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(
        description="Print information about space groups"
    )
    parser.add_argument(
        "spacegroups", nargs="+", metavar="SPACEGROUP", help="name, number or Hall symbol"
    )
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level)

    found = [process_arg(arg) for arg in args.spacegroups]
    if not all(found):
        sys.exit(1)


if __name__ == "__main__":
    main()
