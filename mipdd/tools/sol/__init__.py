#!/usr/bin/env python
#-*- coding:utf-8 -*-
##
## __init__.py
##
"""
Reader for reference solutions of a problem.

==================
List of submodules
==================

.. autosummary::
    :nosignatures:

    parser
"""

from .parser import read_sol
