# caesarfile/algo/errors.py
from typing import Optional


class CipherError(Exception):
    """Base class for every failure raised by the cipher core."""


class InvalidStreamError(CipherError):
    """Missing source/sink, the same handle used twice, or an empty path."""


class CipherIOError(CipherError):
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class SourceOpenError(CipherIOError):
    pass


class SinkOpenError(CipherIOError):
    pass


class ReadError(CipherIOError):
    pass


class WriteError(CipherIOError):
    def __init__(self, message: str, path: Optional[str] = None, bytes_written: int = 0):
        super().__init__(message, path)
        self.bytes_written = bytes_written
