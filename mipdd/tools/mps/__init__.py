#!/usr/bin/env python
#-*- coding:utf-8 -*-
##
## __init__.py
##
"""
Set of utilities for reading MPS-formatted LP/MIP problems.


==================
List of submodules
==================

.. autosummary::
    :nosignatures:

    parser
    registry
"""

from .parser import read_mps, MPSParser, Section, classify_line
