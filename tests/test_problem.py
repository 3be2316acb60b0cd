import os
import tempfile
import unittest
from os.path import join

import numpy as np
import pytest

from mipdd import read_mps, Problem, ConstraintMatrix, RowSense, RowFlag, ColFlag
from mipdd.problem import row_sense, Objective

MPS = """\
NAME          TESTPROB
ROWS
 N  COST
 L  LIM1
 G  LIM2
 E  MYEQN
COLUMNS
    XONE      COST         1   LIM1         1
    XONE      LIM2         1
    YTWO      COST         2   LIM1         1
    YTWO      MYEQN       -1
    ZTHREE    COST        -1   LIM2         1
    ZTHREE    MYEQN        1
RHS
    RHS       LIM1         4   LIM2         1
    RHS       MYEQN        7
BOUNDS
 UP BND       XONE         4
 LO BND       YTWO        -1
 UP BND       YTWO         1
ENDATA
"""


class TestProblem(unittest.TestCase):

    def setUp(self) -> None:
        self.tempdir = tempfile.mkdtemp()
        self.problem = read_mps(MPS)
        return super().setUp()

    def tearDown(self) -> None:
        os.rmdir(self.tempdir)
        return super().tearDown()

    def test_sizes(self):
        self.assertEqual(self.problem.nrows, 3)
        self.assertEqual(self.problem.ncols, 3)
        self.assertEqual(self.problem.nnz, 6)
        self.assertEqual(self.problem.matrix.shape, (3, 3))
        self.assertEqual(self.problem.num_integral_cols, 0)
        self.assertEqual(self.problem.num_continuous_cols, 3)

    def test_views(self):
        self.assertEqual(self.problem.row_index("MYEQN"), 2)
        self.assertEqual(self.problem.column_index("ZTHREE"), 2)
        self.assertEqual(self.problem.row(2), self.problem.row("MYEQN"))
        self.assertEqual(self.problem.column("YTWO").lower, -1)
        self.assertEqual([r.sense for r in self.problem.rows],
                         [RowSense.LESS_EQUAL, RowSense.GREATER_EQUAL, RowSense.EQUAL])
        self.assertRaises(KeyError, self.problem.row_index, "COST")
        self.assertRaises(KeyError, self.problem.column, "nope")

    def test_flags(self):
        self.assertEqual(self.problem.row_flags[0], RowFlag.LHS_INF)
        self.assertEqual(self.problem.row_flags[2], RowFlag.EQUATION)
        self.assertEqual(self.problem.col_flags[2], ColFlag.UB_INF)
        self.assertEqual(self.problem.col_flags[1], ColFlag.NONE)

    def test_row_sense(self):
        self.assertEqual(row_sense(RowFlag.LHS_INF | RowFlag.RHS_INF), RowSense.FREE)
        self.assertEqual(row_sense(RowFlag.NONE), RowSense.RANGED)
        self.assertEqual(row_sense(RowFlag.EQUATION), RowSense.EQUAL)

    def test_immutable(self):
        with pytest.raises(ValueError):
            self.problem.lhs[0] = 5
        with pytest.raises(ValueError):
            self.problem.upper_bounds[0] = 5
        rows, vals = self.problem.matrix.column(0)
        with pytest.raises(ValueError):
            vals[0] = 5
        with pytest.raises(AttributeError):
            self.problem.name = "other"

    def test_primal(self):
        primal = np.array([1, 0.5, 2])
        self.assertEqual(self.problem.primal_objective(primal), 1 + 1 - 2)
        self.assertEqual(self.problem.primal_activity(primal, "LIM1"), 1.5)
        self.assertEqual(self.problem.primal_activity(primal, 2), 1.5)
        self.assertRaises(ValueError, self.problem.primal_objective, [1, 2])

    def test_io(self):
        fname = join(self.tempdir, "problem")
        self.problem.to_file(fname)
        loaded = Problem.from_file(fname)
        os.remove(fname)

        self.assertEqual(loaded.name, "TESTPROB")
        self.assertEqual(loaded.rows, self.problem.rows)
        self.assertEqual(loaded.columns, self.problem.columns)
        self.assertEqual(list(loaded.matrix.triplets()), list(self.problem.matrix.triplets()))
        self.assertEqual(loaded.objective, self.problem.objective)
        # still read-only after loading
        with pytest.raises(ValueError):
            loaded.rhs[0] = 1

    def test_str(self):
        self.assertIn("Problem 'TESTPROB': 3 rows, 3 columns", str(self.problem))
        self.assertEqual(repr(self.problem), "Problem(name='TESTPROB', nrows=3, ncols=3, nnz=6)")


class TestObjective(unittest.TestCase):

    def test_defaults(self):
        objective = Objective()
        self.assertEqual(objective.coefficients, ())
        self.assertEqual(objective.offset, 0)
        self.assertTrue(objective.minimize)
        self.assertIsNone(objective.name)

    def test_to_dense(self):
        objective = Objective([(2, 1.5), (0, -1), (2, 4)], maximize=True)
        self.assertEqual(list(objective.to_dense(4)), [-1, 0, 4, 0])
        self.assertFalse(objective.minimize)


class TestConstraintMatrix(unittest.TestCase):

    def setUp(self) -> None:
        self.matrix = ConstraintMatrix([(0, 1, 2.0), (0, 0, 1.0), (2, 1, 3.0)], nrows=2, ncols=3)

    def test_views(self):
        rows, vals = self.matrix.column(0)
        self.assertEqual(list(rows), [0, 1])
        self.assertEqual(list(vals), [1, 2])
        self.assertEqual(len(self.matrix.column(1)[0]), 0)
        cols, vals = self.matrix.row(1)
        self.assertEqual(list(cols), [0, 2])
        self.assertEqual(list(vals), [2, 3])

    def test_sizes(self):
        self.assertEqual(list(self.matrix.col_sizes), [2, 0, 1])
        self.assertEqual(list(self.matrix.row_sizes), [1, 2])
        self.assertEqual(self.matrix.nnz, 3)
        self.assertEqual(len(self.matrix), 3)

    def test_triplets(self):
        self.assertEqual(list(self.matrix.triplets()), [(0, 0, 1), (0, 1, 2), (2, 1, 3)])

    def test_to_dense(self):
        np.testing.assert_array_equal(self.matrix.to_dense(), [[1, 0, 0], [2, 0, 3]])

    def test_empty(self):
        matrix = ConstraintMatrix([], nrows=0, ncols=2)
        self.assertEqual(matrix.nnz, 0)
        self.assertEqual(list(matrix.col_sizes), [0, 0])
        self.assertEqual(matrix.to_dense().shape, (0, 2))

    def test_out_of_range(self):
        self.assertRaises(AssertionError, ConstraintMatrix, [(3, 0, 1.0)], 2, 3)
        self.assertRaises(AssertionError, ConstraintMatrix, [(0, 2, 1.0)], 2, 3)
