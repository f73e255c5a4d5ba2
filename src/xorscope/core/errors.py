"""
Error Taxonomy
Precondition violations raised by the cryptanalysis core and its collaborators

Every error is raised before any output is produced. Nothing here is retried:
the computations are pure, so a retry can never change the outcome.
"""


class XorscopeError(Exception):
    """Base class for all xorscope errors"""


class InvalidLengthError(XorscopeError, ValueError):
    """Buffer lengths do not satisfy an equal-length or block-multiple requirement"""


class InsufficientInputError(XorscopeError, ValueError):
    """Ciphertext is too short for the requested key-length search range"""

    def __init__(self, message: str, required: int = 0, actual: int = 0):
        super().__init__(message)
        self.required = required
        self.actual = actual


class EmptyInputError(XorscopeError, ValueError):
    """Zero-length input where a score or frequency would divide by zero"""


class InputDecodingError(XorscopeError, ValueError):
    """Hex/base64 input could not be decoded into ciphertext bytes"""


class ConfigError(XorscopeError, ValueError):
    """Unknown preset or invalid analysis configuration"""


class InvalidParameterError(XorscopeError, ValueError):
    """A key length, key byte, block size or sample count outside its valid range"""
