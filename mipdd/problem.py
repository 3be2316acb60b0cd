#!/usr/bin/env python
#-*- coding:utf-8 -*-
##
## problem.py
##
"""
    The `Problem` class is an immutable container for a linear (mixed-integer) optimization problem.

    It holds the objective, the constraint rows with their left and right hand sides,
    the columns with their bounds and integrality, the sparse constraint matrix and
    the names of rows and columns. Problems are built once, by a reader such as
    :func:`mipdd.tools.mps.read_mps`, and are not modified afterwards.

    Infinite sides and bounds are carried by flags (`RowFlag`, `ColFlag`); the raw
    value arrays hold `0` there. The `Row` and `Column` views report such sides as
    `-math.inf` / `math.inf`.

    ===============
    List of classes
    ===============
    .. autosummary::
        :nosignatures:

        Problem
        Objective
        Row
        Column
        RowSense
        RowFlag
        ColFlag
"""
import math
import pickle
from collections import namedtuple
from enum import Enum, IntFlag

import numpy as np

from .matrix import ConstraintMatrix


class RowSense(Enum):
    LESS_EQUAL = "L"
    GREATER_EQUAL = "G"
    EQUAL = "E"
    FREE = "N"
    RANGED = "R"    # both sides finite and different


class RowFlag(IntFlag):
    NONE = 0
    LHS_INF = 1
    RHS_INF = 2
    EQUATION = 4


class ColFlag(IntFlag):
    NONE = 0
    LB_INF = 1
    UB_INF = 2
    INTEGRAL = 4


def row_sense(flags):
    """
        Sense of a row, derived from its flags.
    """
    if flags & RowFlag.EQUATION:
        return RowSense.EQUAL
    lhs_inf = bool(flags & RowFlag.LHS_INF)
    rhs_inf = bool(flags & RowFlag.RHS_INF)
    if lhs_inf and rhs_inf:
        return RowSense.FREE
    if lhs_inf:
        return RowSense.LESS_EQUAL
    if rhs_inf:
        return RowSense.GREATER_EQUAL
    return RowSense.RANGED


Row = namedtuple("Row", ["name", "index", "sense", "lhs", "rhs", "lhs_inf", "rhs_inf"])
Column = namedtuple("Column", ["name", "index", "lower", "upper", "is_integer", "lb_inf", "ub_inf"])


class Objective(namedtuple("Objective", ["coefficients", "offset", "maximize", "name"])):
    """
        Objective function: sparse coefficients, constant offset and direction.

        `coefficients` is a tuple of (column_index, value) pairs in the order they were read.
        `name` is the name of the objective row, None if the problem had none.
    """
    __slots__ = ()

    def __new__(cls, coefficients=(), offset=0, maximize=False, name=None):
        return super().__new__(cls, tuple(coefficients), offset, bool(maximize), name)

    @property
    def minimize(self):
        return not self.maximize

    def to_dense(self, ncols, dtype=float, zero=0):
        """
            Dense vector of objective coefficients.

            A column listed more than once keeps the last value.
        """
        dense = np.full(ncols, zero, dtype=dtype)
        for j, val in self.coefficients:
            dense[j] = val
        return dense


class Problem(object):
    """
        mipdd Problem object, contains the objective, rows, columns and constraint matrix
    """

    def __init__(self, name, objective, matrix, lhs, rhs, row_flags,
                 lower_bounds, upper_bounds, col_flags,
                 constraint_names, variable_names, zero=0):
        """
            Arguments of constructor:

            - `name`: name of the problem
            - `objective`: an `Objective`
            - `matrix`: a `ConstraintMatrix` of shape (#rows, #columns)
            - `lhs`, `rhs`: left and right hand side per row
            - `row_flags`: a `RowFlag` per row
            - `lower_bounds`, `upper_bounds`: bounds per column
            - `col_flags`: a `ColFlag` per column
            - `constraint_names`, `variable_names`: names of rows and columns
            - `zero`: zero of the number type, used for dense vectors
        """
        assert isinstance(matrix, ConstraintMatrix)
        nrows, ncols = matrix.shape
        assert len(lhs) == len(rhs) == len(row_flags) == len(constraint_names) == nrows, \
            "row data does not match the number of rows"
        assert len(lower_bounds) == len(upper_bounds) == len(col_flags) == len(variable_names) == ncols, \
            "column data does not match the number of columns"

        self._name = name
        self._objective = objective
        self._matrix = matrix
        self._lhs = np.asarray(lhs, dtype=matrix.dtype)
        self._rhs = np.asarray(rhs, dtype=matrix.dtype)
        self._row_flags = tuple(RowFlag(f) for f in row_flags)
        self._lower = np.asarray(lower_bounds, dtype=matrix.dtype)
        self._upper = np.asarray(upper_bounds, dtype=matrix.dtype)
        self._col_flags = tuple(ColFlag(f) for f in col_flags)
        self._constraint_names = tuple(constraint_names)
        self._variable_names = tuple(variable_names)
        self._obj_dense = objective.to_dense(ncols, dtype=matrix.dtype, zero=zero)

        self._row_index = {n: i for i, n in enumerate(self._constraint_names)}
        self._col_index = {n: j for j, n in enumerate(self._variable_names)}
        self._freeze()

    def _freeze(self):
        for arr in (self._lhs, self._rhs, self._lower, self._upper, self._obj_dense):
            arr.flags.writeable = False

    # ---------------------------------- content --------------------------------- #

    @property
    def name(self):
        return self._name

    @property
    def objective(self):
        return self._objective

    @property
    def objective_coefficients(self):
        """Dense (read-only) vector of objective coefficients"""
        return self._obj_dense

    @property
    def matrix(self):
        return self._matrix

    @property
    def nrows(self):
        return self._matrix.nrows

    @property
    def ncols(self):
        return self._matrix.ncols

    @property
    def nnz(self):
        return self._matrix.nnz

    @property
    def lhs(self):
        return self._lhs

    @property
    def rhs(self):
        return self._rhs

    @property
    def row_flags(self):
        return self._row_flags

    @property
    def lower_bounds(self):
        return self._lower

    @property
    def upper_bounds(self):
        return self._upper

    @property
    def col_flags(self):
        return self._col_flags

    @property
    def constraint_names(self):
        return self._constraint_names

    @property
    def variable_names(self):
        return self._variable_names

    @property
    def num_integral_cols(self):
        return sum(1 for f in self._col_flags if f & ColFlag.INTEGRAL)

    @property
    def num_continuous_cols(self):
        return self.ncols - self.num_integral_cols

    # ----------------------------------- views ---------------------------------- #

    def row(self, i):
        """
            View on row `i` (by index or by name).
        """
        if isinstance(i, str):
            i = self.row_index(i)
        flags = self._row_flags[i]
        lhs_inf = bool(flags & RowFlag.LHS_INF)
        rhs_inf = bool(flags & RowFlag.RHS_INF)
        return Row(name=self._constraint_names[i], index=i, sense=row_sense(flags),
                   lhs=-math.inf if lhs_inf else self._lhs[i],
                   rhs=math.inf if rhs_inf else self._rhs[i],
                   lhs_inf=lhs_inf, rhs_inf=rhs_inf)

    def column(self, j):
        """
            View on column `j` (by index or by name).
        """
        if isinstance(j, str):
            j = self.column_index(j)
        flags = self._col_flags[j]
        lb_inf = bool(flags & ColFlag.LB_INF)
        ub_inf = bool(flags & ColFlag.UB_INF)
        return Column(name=self._variable_names[j], index=j,
                      lower=-math.inf if lb_inf else self._lower[j],
                      upper=math.inf if ub_inf else self._upper[j],
                      is_integer=bool(flags & ColFlag.INTEGRAL),
                      lb_inf=lb_inf, ub_inf=ub_inf)

    @property
    def rows(self):
        return tuple(self.row(i) for i in range(self.nrows))

    @property
    def columns(self):
        return tuple(self.column(j) for j in range(self.ncols))

    def row_index(self, name):
        if name not in self._row_index:
            raise KeyError(f"Unknown row: {name}")
        return self._row_index[name]

    def column_index(self, name):
        if name not in self._col_index:
            raise KeyError(f"Unknown column: {name}")
        return self._col_index[name]

    # --------------------------------- solutions -------------------------------- #

    def _check_primal(self, primal):
        if len(primal) != self.ncols:
            raise ValueError(f"Expected a primal vector of length {self.ncols}, got {len(primal)}")

    def primal_objective(self, primal):
        """
            Objective value of the primal vector `primal` (one value per column), offset included.
        """
        self._check_primal(primal)
        total = self._objective.offset
        for c, x in zip(self._obj_dense, primal):
            total = total + c * x
        return total

    def primal_activity(self, primal, row):
        """
            Activity of row `row` (index or name) for the primal vector `primal`.
        """
        self._check_primal(primal)
        if isinstance(row, str):
            row = self.row_index(row)
        cols, vals = self._matrix.row(row)
        total = 0
        for j, a in zip(cols, vals):
            total = total + a * primal[j]
        return total

    # ------------------------------------ io ------------------------------------ #

    def to_file(self, fname):
        """
            Serializes this problem to a .pickle format

            :param: fname: Filename of the resulting serialized problem
        """
        with open(fname, "wb") as f:
            pickle.dump(self, file=f)

    @staticmethod
    def from_file(fname):
        """
            Reads a Problem instance from a binary pickled file

            :return: an object of :class: `Problem`
        """
        with open(fname, "rb") as f:
            return pickle.load(f)

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._freeze()

    def __str__(self):
        direction = "maximize" if self._objective.maximize else "minimize"
        return (f"Problem '{self._name}': {self.nrows} rows, {self.ncols} columns "
                f"({self.num_integral_cols} integral), {self.nnz} nonzeros\n"
                f"Objective: {direction}, {len(self._objective.coefficients)} coefficients, "
                f"offset {self._objective.offset}")

    def __repr__(self):
        return f"Problem(name={self._name!r}, nrows={self.nrows}, ncols={self.ncols}, nnz={self.nnz})"
