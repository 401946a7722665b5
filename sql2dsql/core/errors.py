"""
Exceptions raised by sql2dsql. The reformatter never raises; everything here
comes from talking to the translation backend.
"""

class Sql2DsqlError(Exception):
    """Base class for sql2dsql errors."""

class TranslationError(Sql2DsqlError):
    """The translation backend could not be reached or refused the request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
