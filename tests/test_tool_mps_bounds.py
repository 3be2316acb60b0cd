import math
import unittest

import pytest

from mipdd.exceptions import (MalformedLineError, UnknownBoundCodeError, UnknownReferenceError,
                              UnsupportedSectionError)
from mipdd.tools.mps import read_mps


def _with_bounds(bounds, integral=False):
    columns = "    x obj 1 c1 1\n    y c1 1\n"
    if integral:
        columns = "    M1 'MARKER' 'INTORG'\n" + columns + "    M2 'MARKER' 'INTEND'\n"
    return ("NAME bounds\n"
            "ROWS\n N obj\n L c1\n"
            "COLUMNS\n" + columns +
            "RHS\n    RHS c1 10\n"
            "BOUNDS\n" + bounds +
            "ENDATA\n")


def _domain(problem, name):
    column = problem.column(name)
    return column.lower, column.upper


class TestBounds(unittest.TestCase):

    def test_numeric_codes(self):
        problem = read_mps(_with_bounds(" UP BND x 4\n LO BND y -2\n"))
        self.assertEqual(_domain(problem, "x"), (0, 4))
        self.assertEqual(_domain(problem, "y"), (-2, math.inf))

    def test_fixed(self):
        problem = read_mps(_with_bounds(" FX BND x 2.5\n"))
        self.assertEqual(_domain(problem, "x"), (2.5, 2.5))

    def test_free_and_infinite(self):
        problem = read_mps(_with_bounds(" FR BND x\n MI BND y\n"))
        self.assertEqual(_domain(problem, "x"), (-math.inf, math.inf))
        self.assertEqual(_domain(problem, "y"), (-math.inf, math.inf))
        self.assertTrue(problem.column("y").lb_inf)

    def test_minus_infinity_keeps_upper(self):
        problem = read_mps(_with_bounds(" UP BND x 3\n MI BND x\n"))
        self.assertEqual(_domain(problem, "x"), (-math.inf, 3))

    def test_plus_infinity(self):
        problem = read_mps(_with_bounds(" UP BND x 3\n PL BND x\n"))
        self.assertEqual(_domain(problem, "x"), (0, math.inf))

    def test_valueless_code_ignores_value(self):
        problem = read_mps(_with_bounds(" FR BND x 5\n"))
        self.assertEqual(_domain(problem, "x"), (-math.inf, math.inf))

    def test_binary(self):
        problem = read_mps(_with_bounds(" UP BND x 10\n MI BND x\n BV BND x\n"))
        column = problem.column("x")
        self.assertTrue(column.is_integer)
        self.assertEqual((column.lower, column.upper), (0, 1))
        self.assertFalse(column.lb_inf)
        self.assertFalse(column.ub_inf)
        self.assertFalse(problem.column("y").is_integer)

    def test_integer_bounds(self):
        problem = read_mps(_with_bounds(" LI BND x 2\n UI BND y 7\n"))
        self.assertTrue(problem.column("x").is_integer)
        self.assertTrue(problem.column("y").is_integer)
        # the side that was never given falls back to [0, +inf)
        self.assertEqual(_domain(problem, "x"), (2, math.inf))
        self.assertEqual(_domain(problem, "y"), (0, 7))

    def test_integral_column_upper_default(self):
        # the default upper bound 1 of a marked column is dropped once a lower bound is set
        problem = read_mps(_with_bounds(" LO BND x 2\n", integral=True))
        self.assertEqual(_domain(problem, "x"), (2, math.inf))
        self.assertEqual(_domain(problem, "y"), (0, 1))

    def test_integral_column_lower_default(self):
        problem = read_mps(_with_bounds(" MI BND x\n UP BND x 5\n", integral=True))
        column = problem.column("x")
        self.assertEqual(column.upper, 5)
        self.assertEqual(problem.lower_bounds[0], 0)

    def test_explicit_side_is_kept(self):
        problem = read_mps(_with_bounds(" UP BND x 5\n LO BND x -3\n", integral=True))
        self.assertEqual(_domain(problem, "x"), (-3, 5))

    def test_rational_bounds(self):
        from fractions import Fraction
        problem = read_mps(_with_bounds(" UP BND x 0.1\n"), number_type="rational")
        self.assertEqual(problem.column("x").upper, Fraction(1, 10))


class TestBoundErrors(unittest.TestCase):

    def test_unknown_code(self):
        with pytest.raises(UnknownBoundCodeError) as excinfo:
            read_mps(_with_bounds(" XX BND x 1\n"))
        self.assertEqual(excinfo.value.section, "BOUNDS")

    def test_indicators(self):
        with pytest.raises(UnsupportedSectionError):
            read_mps(_with_bounds(" INDICATORS\n"))

    def test_unknown_column(self):
        with pytest.raises(UnknownReferenceError):
            read_mps(_with_bounds(" UP BND z 1\n"))

    def test_missing_value(self):
        with pytest.raises(MalformedLineError):
            read_mps(_with_bounds(" UP BND x\n"))

    def test_too_many_fields(self):
        with pytest.raises(MalformedLineError):
            read_mps(_with_bounds(" UP BND x 1 2\n"))

    def test_missing_column(self):
        with pytest.raises(MalformedLineError):
            read_mps(_with_bounds(" FR BND\n"))

    def test_bad_value(self):
        with pytest.raises(MalformedLineError):
            read_mps(_with_bounds(" UP BND x inf?\n"))
