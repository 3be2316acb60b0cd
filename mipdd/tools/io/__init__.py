"""
IO tools for mipdd.

This module provides the generic entry point to read problems and solutions.
Use `read(..., format="...")` to read a file in one of the supported formats,
or let the format be derived from the file extension.
"""

from .reader import read, read_formats
from .utils import get_extension, get_format
from mipdd.utils import open_lines, open_source
