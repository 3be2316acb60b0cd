#!/usr/bin/env python
#-*- coding:utf-8 -*-
##
## parser.py
##
"""
Parser for the MPS format.

The reader is a single-pass state machine over the lines of the input. Every
line is classified on its first word: a section keyword switches the active
section, anything else is data for the handler of the active section. All
handlers share one explicit parse state (the row and column registries, the
coefficient accumulator and the current-column cursor), which is turned into
an immutable :class:`~mipdd.problem.Problem` once `ENDATA` is reached.

.. code-block:: python

    from mipdd.tools.mps import read_mps
    problem = read_mps("instance.mps.gz", number_type="rational")

=================
List of functions
=================

.. autosummary::
    :nosignatures:

    read_mps
    classify_line
    assemble_problem

===============
List of classes
===============

.. autosummary::
    :nosignatures:

    MPSParser
    Section
"""

from __future__ import annotations

import logging
import os
import re
import warnings
from collections import namedtuple
from enum import Enum
from typing import Iterable, Union

from mipdd.arithmetic import get_arithmetic
from mipdd.exceptions import (MPSException, ParserExhaustedError, UnknownSectionError, MalformedLineError,
                              MarkerMismatchError, UnknownBoundCodeError, UnknownReferenceError,
                              UnsupportedSectionError, PrematureEndError, LineLimitError,
                              MissingObjectiveWarning)
from mipdd.matrix import ConstraintMatrix
from mipdd.problem import Problem, Objective, RowSense, RowFlag, ColFlag
from mipdd.utils import open_lines
from .registry import (RowRegistry, ColumnRegistry, CoefficientAccumulator, BoundState,
                       OBJECTIVE_INDEX, PLACEHOLDER_OBJECTIVE)

logger = logging.getLogger(__name__)


class Section(Enum):
    NONE = "NONE"               # no section keyword on the line
    NAME = "NAME"               # metadata, never an active section
    OBJSENSE = "OBJSENSE"
    ROWS = "ROWS"
    COLUMNS = "COLUMNS"
    RHS = "RHS"
    RANGES = "RANGES"
    BOUNDS = "BOUNDS"
    ENDATA = "ENDATA"
    UNSUPPORTED = "UNSUPPORTED" # known MPS extension we do not read


_keyword_map = {s.value: s for s in Section if s not in (Section.NONE, Section.UNSUPPORTED)}

# extensions of the format, only recognized as header when starting in the first column
_unsupported_keywords = frozenset(["INDICATORS", "SOS", "QUADOBJ", "QMATRIX", "QSECTION",
                                   "QCMATRIX", "CSECTION", "OBJNAME", "GENCONS", "PWLOBJ"])

_WORD_RE = re.compile(r"\s*(\S*)")

ClassifiedLine = namedtuple("ClassifiedLine", ["section", "word", "rest"])


def classify_line(line: str) -> ClassifiedLine:
    """
    Splits off the first word of a line and maps it to a section keyword.

    Arguments:
        line (str): a raw line of the input

    Returns:
        ClassifiedLine: the section keyword (`Section.NONE` for data lines),
        the first word and the remainder of the line after that word.
    """
    m = _WORD_RE.match(line)
    word = m.group(1)
    rest = line[m.end():]
    if word in _keyword_map:
        section = _keyword_map[word]
    elif word in _unsupported_keywords and not line[:1].isspace():
        section = Section.UNSUPPORTED
    else:
        section = Section.NONE
    return ClassifiedLine(section, word, rest)


def _unset(flags, flag):
    return type(flag)(int(flags) & ~int(flag))


def _pairs(tokens):
    # (name, value) pairs of a `setname name value [name value]` line
    return zip(tokens[1::2], tokens[2::2])


def _check_pair_line(tokens, what):
    if len(tokens) not in (3, 5):
        raise MalformedLineError(f"Expected 3 or 5 fields in {what} line, got {len(tokens)}")


def _unquote(word):
    return word.strip("'")


class _ParseState(object):
    """
    Everything the section handlers read and modify during one parse.
    """

    def __init__(self, arithmetic):
        self.arithmetic = arithmetic
        self.name = ""
        self.maximize = False
        self.offset = arithmetic.zero
        self.rows = RowRegistry(arithmetic)
        self.cols = ColumnRegistry(arithmetic)
        self.coefs = CoefficientAccumulator()
        self.column = None          # name of the column whose entries are being read
        self.integral = False       # inside an 'INTORG' ... 'INTEND' block


# ---------------------------------- OBJSENSE ---------------------------------- #

def _parse_objsense(state, tokens):
    word = tokens[0]
    if word.startswith("MAX"):
        state.maximize = True
    elif word.startswith("MIN"):
        state.maximize = False


# ------------------------------------ ROWS ------------------------------------ #

_row_sense_map = {
    "N": RowSense.FREE,
    "L": RowSense.LESS_EQUAL,
    "G": RowSense.GREATER_EQUAL,
    "E": RowSense.EQUAL,
}


def _parse_row(state, tokens):
    if len(tokens) < 2:
        raise MalformedLineError("Missing row name")
    code, name = tokens[0], tokens[1]
    sense = _row_sense_map.get(code[0])
    if sense is None:
        raise MalformedLineError(f"Unknown row type: {code}")

    rows = state.rows
    if sense == RowSense.FREE and not rows.has_objective:
        rows.add_objective(name)
    else:
        rows.add(name, sense)


def _ensure_objective(rows):
    if not rows.has_objective:
        warnings.warn(f"No objective row found, using empty objective '{PLACEHOLDER_OBJECTIVE}'",
                      MissingObjectiveWarning)
        rows.add_placeholder_objective()


def _finish_rows(state):
    _ensure_objective(state.rows)
    state.rows.frozen = True


# ---------------------------------- COLUMNS ----------------------------------- #

def _parse_marker(state, marker):
    if marker == "INTORG" and not state.integral:
        state.integral = True
    elif marker == "INTEND" and state.integral:
        state.integral = False
    else:
        expected = "INTEND" if state.integral else "INTORG"
        raise MarkerMismatchError(f"Integrality marker error: expected '{expected}', got '{marker}'")


def _is_marker(tokens):
    if len(tokens) < 3:
        return False
    if tokens[1] == "'MARKER'":
        return True
    # unquoted spelling, as written by some tools
    return tokens[1] == "MARKER" and _unquote(tokens[2]) in ("INTORG", "INTEND")


def _parse_column(state, tokens):
    if _is_marker(tokens):
        _parse_marker(state, _unquote(tokens[2]))
        return

    _check_pair_line(tokens, "COLUMNS")
    cols, coefs = state.cols, state.coefs
    name = tokens[0]
    if name != state.column:
        coefs.close_block()
        cols.add(name, state.integral)
        state.column = name
    j = cols.index[name]

    for rowname, value in _pairs(tokens):
        i = state.rows.lookup(rowname)
        val = state.arithmetic.parse(value)
        if i == OBJECTIVE_INDEX:
            coefs.add_objective(j, val)
        else:
            coefs.add(j, i, val)


def _finish_columns(state):
    state.coefs.close_block()
    if state.integral:
        raise MarkerMismatchError("Integrality marker error: missing 'INTEND' at end of COLUMNS")


# ------------------------------------- RHS ------------------------------------ #

def _parse_rhs(state, tokens):
    _check_pair_line(tokens, "RHS")
    rows = state.rows
    for rowname, value in _pairs(tokens):
        i = rows.lookup(rowname)
        val = state.arithmetic.parse(value)
        if i == OBJECTIVE_INDEX:
            state.offset = -val
            continue

        sense = rows.senses[i]
        if sense in (RowSense.EQUAL, RowSense.LESS_EQUAL):
            rows.rhs[i] = val
            rows.flags[i] = _unset(rows.flags[i], RowFlag.RHS_INF)
        if sense in (RowSense.EQUAL, RowSense.GREATER_EQUAL):
            rows.lhs[i] = val
            rows.flags[i] = _unset(rows.flags[i], RowFlag.LHS_INF)


# ----------------------------------- RANGES ----------------------------------- #

def _parse_range(state, tokens):
    _check_pair_line(tokens, "RANGES")
    rows = state.rows
    for rowname, value in _pairs(tokens):
        i = rows.lookup(rowname)
        if i == OBJECTIVE_INDEX:
            raise UnknownReferenceError(f"Range on the objective row: {rowname}")
        val = state.arithmetic.parse(value)

        sense = rows.senses[i]
        if sense == RowSense.GREATER_EQUAL:
            rows.rhs[i] = rows.lhs[i] + abs(val)
            rows.flags[i] = _unset(rows.flags[i], RowFlag.RHS_INF)
        elif sense == RowSense.LESS_EQUAL:
            rows.lhs[i] = rows.rhs[i] - abs(val)
            rows.flags[i] = _unset(rows.flags[i], RowFlag.LHS_INF)
        elif sense == RowSense.EQUAL:
            if val > 0:
                rows.rhs[i] = rows.rhs[i] + val
                rows.flags[i] = _unset(rows.flags[i], RowFlag.EQUATION)
            elif val < 0:
                rows.lhs[i] = rows.lhs[i] + val
                rows.flags[i] = _unset(rows.flags[i], RowFlag.EQUATION)


# ----------------------------------- BOUNDS ----------------------------------- #

BoundCode = namedtuple("BoundCode", ["lower", "upper", "integral", "has_value"])

_bound_code_map = {
    "UP": BoundCode(lower=False, upper=True, integral=False, has_value=True),
    "LO": BoundCode(lower=True, upper=False, integral=False, has_value=True),
    "FX": BoundCode(lower=True, upper=True, integral=False, has_value=True),
    "MI": BoundCode(lower=True, upper=False, integral=False, has_value=False),
    "PL": BoundCode(lower=False, upper=True, integral=False, has_value=False),
    "BV": BoundCode(lower=True, upper=True, integral=True, has_value=False),
    "LI": BoundCode(lower=True, upper=False, integral=True, has_value=True),
    "UI": BoundCode(lower=False, upper=True, integral=True, has_value=True),
    "FR": BoundCode(lower=True, upper=True, integral=False, has_value=False),
}


def _parse_bound(state, tokens):
    code = tokens[0]
    if code == "INDICATORS":
        raise UnsupportedSectionError("INDICATORS are not supported")
    if code not in _bound_code_map:
        raise UnknownBoundCodeError(f"Unknown bound type: {code}")
    bound = _bound_code_map[code]

    if bound.has_value and len(tokens) != 4:
        raise MalformedLineError(f"Expected 4 fields in {code} bound line, got {len(tokens)}")
    if not bound.has_value and len(tokens) < 3:
        raise MalformedLineError(f"Missing column name in {code} bound line")

    cols = state.cols
    j = cols.lookup(tokens[2])

    if not bound.has_value:
        if bound.integral:  # binary
            cols.lower[j] = state.arithmetic.zero
            cols.upper[j] = state.arithmetic.one
            flags = _unset(cols.flags[j], ColFlag.LB_INF | ColFlag.UB_INF)
            cols.flags[j] = flags | ColFlag.INTEGRAL
        else:
            if bound.lower:
                cols.flags[j] |= ColFlag.LB_INF
            if bound.upper:
                cols.flags[j] |= ColFlag.UB_INF
        return

    val = state.arithmetic.parse(tokens[3])
    if bound.lower:
        cols.lower[j] = val
        cols.lb_state[j] = BoundState.EXPLICIT
        cols.flags[j] = _unset(cols.flags[j], ColFlag.LB_INF)
    if bound.upper:
        cols.upper[j] = val
        cols.ub_state[j] = BoundState.EXPLICIT
        cols.flags[j] = _unset(cols.flags[j], ColFlag.UB_INF)
    if bound.integral:
        cols.flags[j] |= ColFlag.INTEGRAL

    # an integral column with one explicit side: the other side falls back to [0, +inf)
    if cols.flags[j] & ColFlag.INTEGRAL:
        if not bound.lower and cols.lb_state[j] is BoundState.UNSET:
            cols.lower[j] = state.arithmetic.zero
        if not bound.upper and cols.ub_state[j] is BoundState.UNSET:
            cols.flags[j] |= ColFlag.UB_INF


_section_handlers = {
    Section.OBJSENSE: _parse_objsense,
    Section.ROWS: _parse_row,
    Section.COLUMNS: _parse_column,
    Section.RHS: _parse_rhs,
    Section.RANGES: _parse_range,
    Section.BOUNDS: _parse_bound,
}

# run when the section is left
_section_exits = {
    Section.ROWS: _finish_rows,
    Section.COLUMNS: _finish_columns,
}


def assemble_problem(state: _ParseState) -> Problem:
    """
    Moves the content of the registries into an immutable Problem.

    The registries are released afterwards, the state can not be assembled twice.
    """
    rows, cols, coefs = state.rows, state.cols, state.coefs
    arith = state.arithmetic
    _ensure_objective(rows)

    nrows = len(rows.index) - 1  # the objective is not a row
    ncols = len(cols.index)
    assert nrows == len(rows.names) == len(rows.lhs) == len(rows.rhs) == len(rows.flags), \
        f"row registry out of sync: {nrows} rows"
    assert ncols == len(cols.names) == len(cols.lower) == len(cols.upper) == len(cols.flags), \
        f"column registry out of sync: {ncols} columns"

    matrix = ConstraintMatrix(coefs.entries, nrows, ncols, dtype=arith.dtype)
    objective = Objective(coefs.objective, offset=state.offset, maximize=state.maximize,
                          name=rows.objective_name)
    problem = Problem(state.name, objective, matrix,
                      lhs=rows.lhs, rhs=rows.rhs, row_flags=rows.flags,
                      lower_bounds=cols.lower, upper_bounds=cols.upper, col_flags=cols.flags,
                      constraint_names=rows.names, variable_names=cols.names,
                      zero=arith.zero)
    state.rows = state.cols = state.coefs = None

    logger.info("read problem '%s': %d rows, %d columns (%d integral), %d nonzeros",
                problem.name, problem.nrows, problem.ncols, problem.num_integral_cols, problem.nnz)
    return problem


class MPSParser(object):
    """
    Single-use reader turning the lines of an MPS file into a Problem.

    Arguments:
        number_type: the value type of all numbers read, see :func:`mipdd.arithmetic.get_arithmetic`
        max_lines (int, optional): raise :class:`~mipdd.exceptions.LineLimitError` on longer inputs
    """

    def __init__(self, number_type=float, max_lines=None):
        if max_lines is not None and max_lines < 0:
            raise ValueError(f"max_lines should be a non-negative integer, got {max_lines}")
        self.arithmetic = get_arithmetic(number_type)
        self.max_lines = max_lines
        self.section = Section.NONE
        self._exhausted = False

    def _transition(self, state, new, rest, seen):
        if new in seen:
            raise UnknownSectionError(f"Section {new.value} appears twice")
        if self.section in _section_exits:
            _section_exits[self.section](state)
        logger.debug("leaving section %s for %s", self.section.name, new.name)
        seen.add(new)
        self.section = new

        # `OBJSENSE MAX` on a single line
        if new == Section.OBJSENSE and rest.split():
            _parse_objsense(state, rest.split())

    def parse(self, lines: Iterable[str]) -> Problem:
        """
        Reads the lines up to `ENDATA` and assembles the problem.

        Arguments:
            lines (iterable of str): the lines of the MPS file

        Raises:
            MPSException: on the first malformed line, annotated with the active section and the line
            ParserExhaustedError: if this parser was used before
        """
        if self._exhausted:
            raise ParserExhaustedError("An MPSParser can only be used once, create a new one")
        self._exhausted = True

        state = _ParseState(self.arithmetic)
        seen = set()
        lineno, line = 0, None
        try:
            for lineno, line in enumerate(lines, start=1):
                if self.max_lines is not None and lineno > self.max_lines:
                    raise LineLimitError(f"Input is longer than {self.max_lines} lines")
                if line.startswith("*") or not line.strip():  # comment or blank line
                    continue

                key = classify_line(line)
                # NAME is only metadata before the data sections, later it names a column or set
                if key.section == Section.NAME and self.section in (Section.NONE, Section.OBJSENSE):
                    state.name = key.rest.strip()
                    continue
                if key.section == Section.UNSUPPORTED:
                    raise UnsupportedSectionError(f"Section {key.word} is not supported")
                # in RHS and RANGES the section keyword is also a common set name
                if key.section not in (Section.NONE, Section.NAME) \
                        and not (key.section == self.section and key.section in (Section.RHS, Section.RANGES)):
                    self._transition(state, key.section, key.rest, seen)
                    if self.section == Section.ENDATA:
                        break
                    continue

                if self.section == Section.NONE:
                    raise UnknownSectionError(f"Unknown section: {key.word}")
                _section_handlers[self.section](state, line.split())
            else:
                raise PrematureEndError("Unexpected end of input, missing ENDATA", lineno=lineno)

        except MPSException as e:
            if e.section is None:
                e.section = self.section.name
            if e.lineno is None:
                e.lineno, e.line = lineno, line
            logger.error("read error in section %s", e.section)
            raise

        return assemble_problem(state)


def read_mps(mps: Union[str, os.PathLike], number_type=float, max_lines=None, open=None) -> Problem:
    """
    Parser for MPS format. Reads in an instance and returns its matching Problem.

    Arguments:
        mps (str or os.PathLike):
            - A file path to an MPS file (optionally compressed with `.gz`, `.bz2` or `.xz`)
            - OR a string containing the MPS content directly
        number_type:
            Value type of the numbers in the problem: a name ("float", "rational", ...)
            or a callable turning a literal into a value (default=float).
        max_lines (int, optional):
            Fail on inputs with more lines than this.
        open: (callable):
            If mps is the path to a file, a callable to "open" that file in text mode
            (default: chosen by the file extension).

    Returns:
        Problem: the problem described by the file.
    """
    parser = MPSParser(number_type=number_type, max_lines=max_lines)
    with open_lines(mps, open=open) as lines:
        return parser.parse(lines)
