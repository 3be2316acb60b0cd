"""
mipdd tools for reading problems and solutions from files.

=================
List of functions
=================

.. autosummary::
    :nosignatures:

    read
    read_formats
"""

from typing import Callable, List, Optional

from mipdd.tools.mps import read_mps
from mipdd.tools.sol import read_sol
from mipdd.tools.io.utils import get_format, is_compression_extension

# mapping format names to appropriate reader functions
_reader_map = {
    "mps": read_mps,
    "sol": read_sol,
}


def _get_reader(format: str) -> Callable:
    """
    Get the reader function for a given format.

    Arguments:
        format (str): The name of the format to get a reader for.

    Raises:
        ValueError: If the format is not supported.

    Returns:
        A callable that reads a file.
    """

    if format not in _reader_map:
        raise ValueError(f"Unsupported format: {format}")

    return _reader_map[format]

def read_formats() -> List[str]:
    """
    List of supported read formats.

    Each can be used as the `format` argument to the `read` function.
    E.g.:

    .. code-block:: python

        from mipdd.tools.io import read
        problem = read(file_path, format="mps")
        primal = read(sol_path, format="sol", column_names=problem.variable_names)
    """
    return list(_reader_map.keys())

def _derive_format(file_path: str) -> str:
    """
    Derive the format of a file from its path.

    Arguments:
        file_path (str): The path to the file to derive the format from.

    Raises:
        ValueError: If the format could not be derived from the file path.

    Returns:
        The name of the format.

    Example:
        >>> _derive_format("instance.mps")
        "mps"
        >>> _derive_format("instance.mps.gz")
        "mps"
    """

    # Iterate over the file path extensions in reverse order, the first one may be a compression
    for ext in str(file_path).split(".")[:0:-1]:
        if is_compression_extension(ext):
            continue
        try:
            return get_format(ext)
        except ValueError:
            continue

    raise ValueError(f"No file format provided and could not derive format from file path: {file_path}")

def read(file_path: str, format: Optional[str] = None, **kwargs):
    """
    Read a problem (or a solution) from a file.

    Arguments:
        file_path (str): The path to the file to read.
        format (Optional[str]): The format of the file to read. If None, the format will be derived from the file path.
        kwargs: passed on to the reader, e.g. `number_type`

    Raises:
        ValueError: If the format is not supported.

    Returns:
        A `Problem` for "mps", a primal vector for "sol".
    """

    if format is None:
        format = _derive_format(file_path)

    reader = _get_reader(format)
    return reader(file_path, **kwargs)
