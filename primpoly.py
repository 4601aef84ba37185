#!/usr/bin/env python3
"""
primpoly.py
Command-line entrypoint: find primitive polynomials of degree n modulo p.

    primpoly 2 4                  first primitive polynomial, x^4 + x + 1
    primpoly -a 2 4               all of them
    primpoly -s 5 20              with search statistics
    primpoly -t "x^4 + x + 1, 2"  test a given polynomial
"""

import argparse
import logging
import sys
from typing import List, Optional

from mpmath import nstr

from polynomial_format import OutputForm, parse_polynomial, render_polynomial
from primitivity import PolyOrder, SearchStatistics, find_primitive_polynomials
from primpoly_config import DEFAULT_CONFIG, integer_limits, load_config, setup_basic_logger
from primpoly_errors import PrimpolyInputError, PrimpolyInternalError

HELP_TEXT = """This program generates a primitive polynomial of degree n modulo p.

Usage:  primpoly p n
          where p is a prime >= 2 and n is an integer >= 2

        primpoly -t "<polynomial to test>, p"
          Test a polynomial for primitivity.  If you leave off the , p
          we default to p = 2

Options (may be combined, e.g. -sa):
   -a    list ALL primitive polynomials of degree n modulo p
   -s    print search statistics
   -c    confirm primitivity with an additional, very slow, independent check
         (ignored with -a)
   -x    print polynomials as a hexadecimal bit mask
   -t    test the given polynomial instead of searching
   -h    print this help message

   --config FILE    JSON file overriding the default configuration
   --bits {64,128}  integer width which bounds p ^ n
   --verbose        log the progress of every test

Examples:
   primpoly 2 4
     Primitive polynomial modulo 2 of degree 4
     x^4 + x + 1

   primpoly -t "x^4 + x + 1, 2"
     x^4 + x + 1, 2 is primitive!

Primitive polynomials find many uses in mathematics and communications
engineering:
   * Generation of pseudonoise (PN) sequences for spread spectrum
     communications and chip fault testing.
   * Generation of CRC and Hamming codes.
   * Generation of Galois (finite) fields for use in decoding Reed-Solomon
     and BCH error correcting codes.
"""

CONFIRM_WARNING = ("\nConfirming polynomial is primitive with an independent check.\n"
                   "Warning:  You may wait an impossibly long time!\n")


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="primpoly",
        description="Compute primitive polynomials of degree n modulo p.",
        add_help=False,
    )
    p.add_argument("-t", dest="test", action="store_true", help="Test a polynomial for primitivity.")
    p.add_argument("-a", dest="list_all", action="store_true", help="List all primitive polynomials.")
    p.add_argument("-s", dest="statistics", action="store_true", help="Print search statistics.")
    p.add_argument("-h", "-H", dest="help", action="store_true", help="Print help.")
    p.add_argument("-c", dest="confirm", action="store_true", help="Slow independent confirmation.")
    p.add_argument("-x", dest="hex", action="store_true", help="Hexadecimal bit mask output.")
    p.add_argument("--config", default=None, help="Optional JSON config file to override defaults.")
    p.add_argument("--bits", type=int, choices=(64, 128), default=None, help="Integer width bounding p^n.")
    p.add_argument("--verbose", action="store_true", help="Log every stage of the tests.")
    p.add_argument("args", nargs="*", help="p n, or the polynomial to test with -t")
    return p


def format_factorization(factors) -> str:
    return " ".join(str(q) if e == 1 else f"{q}^{e}" for q, e in factors.items())


def format_statistics(stats: SearchStatistics, dps: int) -> str:
    """Operation counts and the cascade counters as a compact table."""
    rows = [
        (f"Total num. degree {stats.n} polynomials mod {stats.p}", stats.max_num_poly),
        ("Actually tested", stats.num_poly),
        ("Const. coeff. was primitive root", stats.num_const_coeff_prim_root),
        ("Free of linear factors", stats.num_free_of_linear_factors),
        ("Irreducible or irred. to power", stats.num_irred_to_power),
        ("Had order r (x^r = integer)", stats.num_order_r),
        ("Passed const. coeff. test", stats.num_passing_const_coeff_test),
        ("Had order m (x^m != integer)", stats.num_order_m),
    ]
    ops = stats.operations
    lines = ["Operation count",
             "  Integer factorization:  Table lookup + Trial division + Pollard Rho"]
    for label, value in [
        ("Number of trial divisions", ops.num_trial_divides),
        ("Number of gcd's computed", ops.num_gcds),
        ("Number of primality tests", ops.num_primality_tests),
        ("Number of squarings", ops.num_squarings),
    ]:
        lines.append(f"  {label + ' :':<45}{value:>15}")

    lines.append("Statistics")
    for label, value in rows:
        lines.append(f"  {label + ' :':<45}{value:>15}")
    lines.append(f"  {'Fraction of polynomials primitive :':<45}{nstr(stats.primitive_fraction(dps), 6):>15}")
    return "\n".join(lines)


def run_search(p: int, n: int, args, cfg) -> None:
    form = OutputForm.HEX if args.hex else OutputForm.TEXT
    order = PolyOrder(p, n, cfg)

    if args.statistics:
        print(f"\nFactoring r = {order.r} into\n    {format_factorization(order.factors_of_r)}\n")
    if args.statistics or args.list_all:
        print(f"Total number of primitive polynomials = {order.num_primitive_polynomials()}.  Begin testing...\n")

    count = 0
    for f in find_primitive_polynomials(p, n, list_all=args.list_all, config=cfg, order=order):
        count += 1
        if args.list_all:
            print(f"Primitive polynomial {count} of {order.num_primitive_polynomials()} modulo {p} of degree {n}")
        else:
            print(f"Primitive polynomial modulo {p} of degree {n}")
        print(f"\n{render_polynomial(f, p, form)}\n")

        if args.confirm and not args.list_all:
            print(CONFIRM_WARNING)
            if not order.maximal_order():
                raise PrimpolyInternalError(
                    f"fast test says {render_polynomial(f, p)} is primitive but the slow test disagrees")
            print("    -Polynomial is confirmed to be primitive.\n")

    if args.statistics:
        print(format_statistics(order.statistics, cfg["mp_dps"]))


def run_test(text: str, args, cfg) -> None:
    f, p = parse_polynomial(text)
    n = len(f) - 1
    order = PolyOrder(p, n, cfg)
    shown = f"{render_polynomial(f, p, OutputForm.HEX if args.hex else OutputForm.TEXT)}, {p}"

    primitive = order.is_primitive(f)
    print(f"{shown} is {'' if primitive else 'NOT '}primitive!")

    if args.statistics:
        print(format_statistics(order.statistics, cfg["mp_dps"]))

    if args.confirm:
        print(CONFIRM_WARNING)
        print(f"{shown} confirmed {'' if order.maximal_order() else 'NOT '}primitive!")


def main(argv: Optional[List[str]] = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.help:
        print(HELP_TEXT)
        return 1

    try:
        cfg = DEFAULT_CONFIG.copy()
        if args.config:
            cfg = load_config(args.config, base=cfg)
        if args.bits:
            cfg["integer_bits"] = args.bits
        integer_limits(cfg["integer_bits"])
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}\n", file=sys.stderr)
        return 1

    level = logging.DEBUG if args.verbose else getattr(logging, str(cfg["log_level"]).upper(), logging.WARNING)
    setup_basic_logger("", level=level)

    try:
        if args.test:
            if len(args.args) != 1:
                raise PrimpolyInputError("Expecting one polynomial to test, e.g. \"x^4 + x + 1, 2\".")
            run_test(args.args[0], args, cfg)
        else:
            if len(args.args) != 2:
                print("ERROR:  Expecting two arguments, p and n.\n", file=sys.stderr)
                print(HELP_TEXT)
                return 1
            try:
                p, n = int(args.args[0]), int(args.args[1])
            except ValueError:
                raise PrimpolyInputError(f"p and n must be integers, got {args.args[0]!r} and {args.args[1]!r}")
            run_search(p, n, args, cfg)
    except PrimpolyInputError as e:
        print(f"ERROR:  {e}\n", file=sys.stderr)
        return 1
    except PrimpolyInternalError as e:
        print(f"Internal error:  {e}\n", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
