"""
    Parsing of numeric literals, generic over the value type.

    The readers never hard-code a number type: they receive an `Arithmetic`
    object that knows how to turn a literal into a value and which numpy dtype
    holds such values. Floating point is the default; exact rationals
    (`fractions.Fraction`) are what a reduction that must stay sound asks for.

    .. code-block:: python

        from mipdd.arithmetic import get_arithmetic
        get_arithmetic("rational").parse("0.1")    # Fraction(1, 10)

    ===============
    List of classes
    ===============
    .. autosummary::
        :nosignatures:

        Arithmetic

    =================
    List of functions
    =================
    .. autosummary::
        :nosignatures:

        get_arithmetic
"""
from decimal import Decimal
from fractions import Fraction

import numpy as np

from .exceptions import MalformedLineError

# mapping names of value types to the callable that builds a value from a literal
_number_type_map = {
    "float": float,
    "double": float,
    "longdouble": np.longdouble,
    "rational": Fraction,
    "decimal": Decimal,
}


class Arithmetic(object):
    """
        Number type capability: parses literals and allocates arrays of values.

        Any callable that accepts a string works as `number_type`, it is called
        on every literal read. Values of numpy floating types are stored in
        arrays of that dtype, everything else in object arrays.
    """

    def __init__(self, number_type=float):
        if isinstance(number_type, str):
            if number_type not in _number_type_map:
                raise ValueError(f"Unknown number type: {number_type}, expected one of {list(_number_type_map)}")
            number_type = _number_type_map[number_type]
        if not callable(number_type):
            raise TypeError(f"number_type should be callable, got {number_type!r}")

        self.number_type = number_type
        if isinstance(number_type, type) and issubclass(number_type, (float, np.floating)):
            self.dtype = np.dtype(number_type)
        else:
            self.dtype = np.dtype(object)

        self.zero = self.parse("0")
        self.one = self.parse("1")

    @property
    def name(self):
        return getattr(self.number_type, "__name__", repr(self.number_type))

    def parse(self, text):
        """
            Parse a numeric literal.

            :param text: the literal, e.g. "-1.5e3"
            :return: a value of the number type
            :raises MalformedLineError: if the literal is not a (non-NaN) number
        """
        try:
            value = self.number_type(text)
            is_nan = value != value  # a signalling Decimal NaN raises here
        except (ValueError, TypeError, ArithmeticError) as e:
            raise MalformedLineError(f"Invalid number {text!r} for number type {self.name}") from e
        if is_nan:
            raise MalformedLineError(f"Invalid number {text!r}: not a number")
        return value

    def array(self, values):
        """
            Numpy array holding `values`, with the dtype of this number type.
        """
        return np.array(list(values), dtype=self.dtype)

    def zeros(self, n):
        """
            Numpy array of `n` zeros of this number type.
        """
        return np.full(n, self.zero, dtype=self.dtype)

    def __repr__(self):
        return f"Arithmetic({self.name})"


def get_arithmetic(number_type=float):
    """
        Returns the `Arithmetic` matching `number_type`.

        :param number_type: an `Arithmetic`, the name of a value type
                            ("float", "double", "longdouble", "rational", "decimal")
                            or a callable turning a literal into a value
    """
    if isinstance(number_type, Arithmetic):
        return number_type
    return Arithmetic(number_type)
