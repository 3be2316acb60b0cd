"""
    Readers for the file formats a reduction session consumes.

    =============
    List of tools
    =============

    .. autosummary::
        :nosignatures:

        mps
        sol
        io
"""

from .mps import read_mps
from .sol import read_sol
