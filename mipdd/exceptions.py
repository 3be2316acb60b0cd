'''
Custom exception classes, for finer grained error handling
'''


class MipddException(Exception):
    '''Parent class for all our exceptions'''
    pass


class ParserExhaustedError(MipddException):
    '''Raised when a parser instance is used for a second parse'''
    pass


class MPSException(MipddException):
    '''
    Parent class of all errors raised while reading an MPS file.

    The reader annotates the exception with the section that was active when
    reading failed, and with the offending line and its (1-based) number.
    '''

    def __init__(self, message, section=None, lineno=None, line=None):
        super().__init__(message)
        self.message = message
        self.section = section
        self.lineno = lineno
        self.line = line

    def __str__(self):
        where = []
        if self.section is not None:
            where.append(f"section {self.section}")
        if self.lineno is not None:
            where.append(f"line {self.lineno}")
        if not where:
            return self.message
        msg = f"{self.message} ({', '.join(where)})"
        if self.line is not None:
            msg += f": {self.line.rstrip()!r}"
        return msg

    def __reduce__(self):
        return (type(self), (self.message, self.section, self.lineno, self.line))


class UnreadableFileError(MPSException):
    '''Raised when the input file does not exist or can not be opened'''
    pass

class UnknownSectionError(MPSException):
    '''Raised when a section header is expected but the keyword is not recognized'''
    pass

class MalformedLineError(MPSException):
    '''Raised when a data line has the wrong number of fields or an unparsable number'''
    pass

class DuplicateNameError(MPSException):
    '''Raised when a row or column name is declared twice'''
    pass

class UnknownReferenceError(MPSException):
    '''Raised when a row or column is referenced before (or without) being declared'''
    pass

class MarkerMismatchError(MPSException):
    '''Raised when the 'INTORG'/'INTEND' integrality markers are out of sequence or unterminated'''
    pass

class UnknownBoundCodeError(MPSException):
    '''Raised when a line in the BOUNDS section starts with an unknown bound type'''
    pass

class UnsupportedSectionError(MPSException):
    '''Raised on MPS extensions we do not read, e.g. INDICATORS'''
    pass

class PrematureEndError(MPSException):
    '''Raised when the input ends before the ENDATA line'''
    pass

class LineLimitError(MPSException):
    '''Raised when the input is longer than the configured `max_lines`'''
    pass


class MipddWarning(UserWarning):
    '''Parent class for all our warnings'''
    pass

class MissingObjectiveWarning(MipddWarning):
    '''Issued when the ROWS section declares no objective (`N`) row'''
    pass
