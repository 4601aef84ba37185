"""
Exception types shared by the primitive polynomial modules.
"""


class PrimpolyError(Exception):
    """Base class for all errors raised by primpoly."""


class PrimpolyInputError(PrimpolyError, ValueError):
    """p, n or a supplied polynomial is out of range."""


class PolynomialSyntaxError(PrimpolyInputError):
    """A polynomial string could not be parsed."""


class PrimpolyInternalError(PrimpolyError):
    """
    An invariant of the algorithms failed.

    This signals a logic defect rather than bad user input, e.g. a modular
    inverse that does not verify, or a search that exhausted every candidate
    without finding a primitive polynomial.
    """
