"""
    Line sources: turn a file path (possibly compressed) or an in-memory string into text lines.

    The readers only consume an iterable of lines; where the lines come from,
    and whether the bytes had to be decompressed first, is decided here.

    =================
    List of functions
    =================
    .. autosummary::
        :nosignatures:

        open_lines
        open_source
        get_opener
"""
import bz2
import gzip
import lzma
import os
from contextlib import contextmanager
from io import StringIO

from .exceptions import UnreadableFileError

# mapping compressed-file extensions to a function opening such a file
_compression_map = {
    "gz": gzip.open,
    "bz2": bz2.open,
    "xz": lzma.open,
}

_std_open = open


def compression_extensions():
    return list(_compression_map.keys())


def get_opener(file_path):
    """
        Function to open `file_path` with, based on its last extension.
    """
    ext = str(file_path).rsplit(".", 1)[-1]
    return _compression_map.get(ext, _std_open)


def open_source(source, open=None):
    """
        Open `source` as a text file object.

        Arguments:
            source (str or os.PathLike):
                - A file path (optionally compressed with `.gz`, `.bz2` or `.xz`)
                - OR a string containing the content directly (must contain a newline)
            open: (callable):
                If source is the path to a file, a callable to "open" that file in text mode
                (default: chosen by the file extension).

        Raises:
            UnreadableFileError: if the file does not exist or can not be opened
    """
    if isinstance(source, os.PathLike):
        source = os.fspath(source)
    if not isinstance(source, str):
        raise TypeError(f"Expected a file path or a string, got {type(source).__name__}")

    # If source is a string containing the content -> create an in-memory file
    if "\n" in source:
        return StringIO(source)

    if not os.path.isfile(source):
        raise UnreadableFileError(f"No such file: {source}")
    try:
        if open is not None:
            return open(source)
        return get_opener(source)(source, "rt", encoding="utf-8", errors="surrogateescape")
    except OSError as e:
        raise UnreadableFileError(f"Could not open {source}: {e}") from e


def _iter_lines(f):
    # decompression and decoding errors only surface while reading
    try:
        for line in f:
            yield line
    except (OSError, EOFError, lzma.LZMAError, UnicodeDecodeError) as e:
        raise UnreadableFileError(f"Could not read input: {e}") from e


@contextmanager
def open_lines(source, open=None):
    """
        Context manager yielding an iterator over the lines of `source`.

        The underlying file is closed when the context is left.
        See :func:`open_source` for the accepted sources.
    """
    f = open_source(source, open=open)
    try:
        yield _iter_lines(f)
    finally:
        f.close()
