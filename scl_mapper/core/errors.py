"""Exceptions raised by the mapper.

Lookup misses are not errors; they surface as ``None`` values and are
rendered as the ``X`` sentinel in the output.
"""


class MapperError(Exception):
    """Base class for fatal mapper errors."""


class ArgumentError(MapperError):
    """The invocation is malformed or inconsistent."""


class FileAccessError(MapperError):
    """An input could not be opened/read, or the output could not be written."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class DocumentError(MapperError):
    """A structural document is not well-formed XML."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path
