class IdentifierOverflowError(OverflowError):
    """Raised when a field does not fit in its slot of the ID bit layout."""

    pass


class InvalidBatchSizeError(ValueError):
    """Raised when a negative or non-integer batch size is requested."""

    pass
