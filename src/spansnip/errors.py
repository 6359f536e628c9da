class SnippetError(Exception):
    """Base class for all snippet rendering errors."""


class InvalidSpan(SnippetError):
    """Raised when a span cannot be built over the given input."""

    def __init__(self, message: str, start: int, end: int):
        super().__init__(message)
        self.message = message
        self.start = start
        self.end = end


class OutOfBoundsSpan(SnippetError):
    """Raised when a span offset cannot be matched to any line of the input."""

    def __init__(self, offset: int, length: int):
        super().__init__(f"offset {offset} is outside of input of length {length}")
        self.offset = offset
        self.length = length


class SinkWriteFailure(SnippetError):
    """Raised when writing to the output sink fails mid-render."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
