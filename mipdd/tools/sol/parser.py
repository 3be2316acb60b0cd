"""
Parser for solution files, as written by SCIP and most other MIP solvers.

A solution file holds one `name value` pair per line, optionally followed by
more fields (e.g. SCIP's `(obj:1)`), after a header of free-form lines
such as `solution status: optimal`. The header ends at the first line whose
first word is the name of a column.


=================
List of functions
=================

.. autosummary::
    :nosignatures:

    read_sol
"""

import os
import logging
import warnings
from typing import Sequence, Union

import numpy as np

from mipdd.arithmetic import get_arithmetic
from mipdd.exceptions import MalformedLineError, MipddWarning
from mipdd.utils import open_lines

logger = logging.getLogger(__name__)


def read_sol(sol: Union[str, os.PathLike], column_names: Sequence[str], number_type=float, open=None) -> np.ndarray:
    """
    Reads a solution and aligns it with the columns of a problem.

    Arguments:
        sol (str or os.PathLike):
            - A file path to a solution file (optionally compressed with `.gz`, `.bz2` or `.xz`)
            - OR a string containing the solution directly
        column_names (sequence of str):
            Names of the problem's columns, e.g. `problem.variable_names`.
        number_type:
            Value type of the solution values (default=float).
        open: (callable):
            If sol is the path to a file, a callable to "open" that file in text mode.

    Returns:
        np.ndarray: one value per column, zero for columns the solution does not mention.
    """
    arith = get_arithmetic(number_type)
    name_to_col = {name: j for j, name in enumerate(column_names)}
    primal = arith.zeros(len(name_to_col))

    in_header = True
    nvalues = 0
    with open_lines(sol, open=open) as lines:
        for line in lines:
            tokens = line.split()
            if not tokens:
                continue
            if in_header:
                if tokens[0] not in name_to_col:
                    continue
                in_header = False

            name = tokens[0]
            if name not in name_to_col:
                warnings.warn(f"Skipping unknown column {name} in reference solution", MipddWarning)
                continue
            if len(tokens) < 2:
                warnings.warn(f"Skipping column {name} without value in reference solution", MipddWarning)
                continue
            try:
                primal[name_to_col[name]] = arith.parse(tokens[1])
            except MalformedLineError as e:
                warnings.warn(f"Skipping column {name} in reference solution: {e}", MipddWarning)
                continue
            nvalues += 1

    logger.info("read %d of %d solution values", nvalues, len(primal))
    return primal
