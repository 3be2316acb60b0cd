import warnings

from mipdd.utils import compression_extensions


# mapping file extensions to appropriate format names
_format_map = {
    "mps"   : "mps",
    "fixmps": "mps",
    "freemps": "mps",
    "sol"   : "sol",
}

_extension_map = {}
for extension, format in _format_map.items():
    _extension_map[format] = _extension_map.get(format, []) + [extension]

def get_extension(format: str) -> str:
    """
    Get the file extension for a given format.
    """
    if format not in _extension_map:
        raise ValueError(f"Unsupported format: {format}")
    if len(_extension_map[format]) > 1:
        warnings.warn(f"Multiple extensions found for format {format}: {_extension_map[format]}. Using the first one: {_extension_map[format][0]}")

    return _extension_map[format][0]

def get_format(extension: str) -> str:
    """
    Get the format for a given file extension.
    """
    if extension not in _format_map:
        raise ValueError(f"Unknown file extension: {extension}")
    return _format_map[extension]

def is_compression_extension(extension: str) -> bool:
    return extension in compression_extensions()
