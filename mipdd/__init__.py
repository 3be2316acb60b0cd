"""
    mipdd is the problem-loading layer of a delta debugger for mixed-integer programs.

    A reduction session repeatedly loads, shrinks and re-checks a problem that makes
    a MIP solver misbehave. This package reads such problems from MPS files (plain
    or compressed) into an immutable, numpy-backed `Problem`, with numbers in the
    value type the session asks for (floating point or exact rationals).

    The package consists of these modules:
    - `problem`: the `Problem` container with its rows, columns and objective
    - `matrix`: the sparse constraint matrix, with column and row views
    - `arithmetic`: parsing of numeric literals for a chosen value type
    - `tools`: readers for the MPS and solution formats, and a generic `read`
    - `exceptions`: the errors and warnings raised while reading
"""

__version__ = "0.1.0"


from .problem import Problem, Objective, Row, Column, RowSense, RowFlag, ColFlag
from .matrix import ConstraintMatrix
from .arithmetic import Arithmetic, get_arithmetic
from .tools.mps import read_mps
from .tools.sol import read_sol
