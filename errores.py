class SimplexError(Exception):
    "Raised when a tableau is malformed and the computation cannot go on."
    pass


class RowLengthError(SimplexError):
    "Raised when two rows of different length are combined."

    def __init__(self, expected, found):
        super().__init__(f"row length mismatch: expected {expected}, found {found}")
        self.expected = expected
        self.found = found


class BasisError(SimplexError):
    "Raised when a basis is not a valid basis of its tableau."
    pass
