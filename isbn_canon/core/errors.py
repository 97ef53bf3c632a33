class IsbnError(ValueError):
    """Base class for everything the engine raises on bad input."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.code = code


class LengthError(IsbnError):
    pass


class FormatError(IsbnError):
    pass


class NotFoundError(IsbnError):
    pass


class AmbiguousError(IsbnError):
    pass


class UnsupportedError(IsbnError):
    pass


class UnknownLengthError(UnsupportedError):
    pass
