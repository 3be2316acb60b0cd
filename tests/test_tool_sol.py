import unittest
from fractions import Fraction

import pytest

from mipdd.exceptions import MipddWarning, UnreadableFileError
from mipdd.tools.io import read
from mipdd.tools.mps import read_mps
from mipdd.tools.sol import read_sol

MPS = """\
NAME sol
ROWS
 N obj
 L c1
COLUMNS
    x obj 1 c1 1
    y obj 2 c1 1
    z obj -1 c1 2
RHS
    RHS obj 1 c1 10
ENDATA
"""

SOL = """\
solution status: optimal solution found
objective value:                    4
x                                   1 	(obj:1)
z                                   0.5 	(obj:-1)
y                                   2 	(obj:2)
"""


class SolTool(unittest.TestCase):

    def setUp(self) -> None:
        self.problem = read_mps(MPS)

    def test_read_sol(self):
        primal = read_sol(SOL, self.problem.variable_names)
        self.assertEqual(list(primal), [1, 2, 0.5])

    def test_missing_columns_are_zero(self):
        primal = read_sol("x 3\n", self.problem.variable_names)
        self.assertEqual(list(primal), [3, 0, 0])

    def test_unknown_column(self):
        with pytest.warns(MipddWarning):
            primal = read_sol("x 1\nw 5\ny 1\n", self.problem.variable_names)
        self.assertEqual(list(primal), [1, 1, 0])

    def test_bad_value(self):
        with pytest.warns(MipddWarning):
            primal = read_sol("x one\ny 1\n", self.problem.variable_names)
        self.assertEqual(list(primal), [0, 1, 0])

    def test_rational(self):
        primal = read_sol(SOL, self.problem.variable_names, number_type="rational")
        self.assertEqual(primal[2], Fraction(1, 2))

    def test_primal_objective(self):
        primal = read_sol(SOL, self.problem.variable_names)
        # offset is minus the RHS of the objective row
        self.assertEqual(self.problem.primal_objective(primal), 1 + 4 - 0.5 - 1)
        self.assertEqual(self.problem.primal_activity(primal, "c1"), 1 + 2 + 1)

    def test_read_sol_file(self):
        import tempfile, os
        with tempfile.NamedTemporaryFile(mode="w", suffix=".sol", delete=False) as f:
            f.write(SOL)
        try:
            primal = read(f.name, column_names=self.problem.variable_names)
            self.assertEqual(list(primal), [1, 2, 0.5])
        finally:
            os.remove(f.name)

    def test_missing_file(self):
        with pytest.raises(UnreadableFileError):
            read_sol("nope.sol", self.problem.variable_names)
