"""Errors raised by :mod:`seqlist.sequential_list`."""


class OutOfRangeError(IndexError):
    """A position fell outside the interval accepted by an operation."""

    def __init__(self, operation: str, position: int) -> None:
        self.operation = operation
        self.position = position
        super().__init__(f"Illegal position {position} given to {operation} operation.")
