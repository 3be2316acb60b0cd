"""
Bookkeeping shared by the section handlers of the MPS parser.

The registries only grow: rows and columns are added, bounds are narrowed or set
by explicit bound lines, nothing is ever removed. They are consumed once, when
the problem is assembled.

===============
List of classes
===============

.. autosummary::
    :nosignatures:

    RowRegistry
    ColumnRegistry
    CoefficientAccumulator
    BoundState
"""

from enum import Enum
from operator import itemgetter

from mipdd.exceptions import DuplicateNameError, UnknownReferenceError
from mipdd.problem import ColFlag, RowFlag, RowSense


OBJECTIVE_INDEX = -1                                # sentinel row index of the objective
PLACEHOLDER_OBJECTIVE = "artificial_empty_objective"


class BoundState(Enum):
    UNSET = 0       # still the default assigned when the column was created
    EXPLICIT = 1    # set by a bound line with a value


class RowRegistry(object):
    """
    Rows in declaration order, and the (single) objective row.
    """

    def __init__(self, arithmetic):
        self.arithmetic = arithmetic
        self.index = dict()             # maps row names to their index, the objective to OBJECTIVE_INDEX
        self.names = []
        self.senses = []                # declared sense, fixed at declaration
        self.lhs = []
        self.rhs = []
        self.flags = []
        self.objective_name = None      # name of the `N` row used as objective
        self.objective_key = None       # key the objective is registered under, None while there is none
        self.frozen = False

    def __len__(self):
        return len(self.names)

    @property
    def has_objective(self):
        return self.objective_key is not None

    def _register(self, name, index):
        if name in self.index:
            raise DuplicateNameError(f"Duplicate row: {name}")
        self.index[name] = index

    def add_objective(self, name):
        self._register(name, OBJECTIVE_INDEX)
        self.objective_key = name
        self.objective_name = name

    def add_placeholder_objective(self):
        self._register(PLACEHOLDER_OBJECTIVE, OBJECTIVE_INDEX)
        self.objective_key = PLACEHOLDER_OBJECTIVE

    def add(self, name, sense):
        """
        Declare a constraint row, with the default sides of its sense.
        """
        assert not self.frozen, "rows can not be added after the ROWS section"
        self._register(name, len(self.names))
        zero = self.arithmetic.zero
        if sense == RowSense.GREATER_EQUAL:
            flags = RowFlag.RHS_INF
        elif sense == RowSense.LESS_EQUAL:
            flags = RowFlag.LHS_INF
        elif sense == RowSense.EQUAL:
            flags = RowFlag.EQUATION
        elif sense == RowSense.FREE:
            flags = RowFlag.LHS_INF | RowFlag.RHS_INF
        else:
            raise ValueError(f"Invalid row sense: {sense}")
        self.names.append(name)
        self.senses.append(sense)
        self.lhs.append(zero)
        self.rhs.append(zero)
        self.flags.append(flags)

    def lookup(self, name):
        """
        Index of row `name`, OBJECTIVE_INDEX for the objective.
        """
        if name not in self.index:
            raise UnknownReferenceError(f"Unknown row: {name}")
        return self.index[name]


class ColumnRegistry(object):
    """
    Columns in first-seen order, with their domains.
    """

    def __init__(self, arithmetic):
        self.arithmetic = arithmetic
        self.index = dict()
        self.names = []
        self.lower = []
        self.upper = []
        self.flags = []
        self.lb_state = []
        self.ub_state = []

    def __len__(self):
        return len(self.names)

    def add(self, name, integral):
        """
        Declare a column; integral columns default to [0, 1], others to [0, +inf).
        """
        if name in self.index:
            raise DuplicateNameError(f"Duplicate column: {name}")
        idx = len(self.names)
        self.index[name] = idx
        self.names.append(name)
        self.lower.append(self.arithmetic.zero)
        if integral:
            self.upper.append(self.arithmetic.one)
            self.flags.append(ColFlag.INTEGRAL)
        else:
            self.upper.append(self.arithmetic.zero)
            self.flags.append(ColFlag.UB_INF)
        self.lb_state.append(BoundState.UNSET)
        self.ub_state.append(BoundState.UNSET)
        return idx

    def lookup(self, name):
        if name not in self.index:
            raise UnknownReferenceError(f"Unknown column: {name}")
        return self.index[name]


class CoefficientAccumulator(object):
    """
    Matrix triplets (column, row, value) and the sparse objective, in reading order.

    Columns arrive one block at a time; a block is sorted on row index when the
    next one starts (or when the section ends).
    """

    def __init__(self):
        self.entries = []
        self.objective = []
        self._block_start = 0

    def __len__(self):
        return len(self.entries)

    def add(self, col, row, value):
        self.entries.append((col, row, value))

    def add_objective(self, col, value):
        self.objective.append((col, value))

    def close_block(self):
        start = self._block_start
        # sorted() is stable: duplicate (column, row) pairs keep their reading order
        self.entries[start:] = sorted(self.entries[start:], key=itemgetter(1))
        self._block_start = len(self.entries)
