class MatrixError(Exception):
    """Base exception for sparse matrix errors"""
    pass


class InvalidDimension(MatrixError, ValueError):
    """Raised when a matrix is created with negative or non-integer dimensions"""
    pass


class MissingDimensions(MatrixError):
    """Raised when the rows=/cols= header is absent or malformed"""
    pass


class MalformedEntry(MatrixError):
    """Raised when an entry line does not match (row, col, value)"""

    def __init__(self, line_number, line):
        self.line_number = line_number
        self.line = line
        super().__init__(f"Invalid file format: line {line_number} is not a matrix element: {line!r}")


class DimensionMismatch(MatrixError, ValueError):
    """Raised when operand shapes are incompatible for an operation"""
    pass


class GridTooLarge(MatrixError):
    """Raised when a dense scan would visit more positions than allowed"""
    pass


class FileAccessError(MatrixError):
    """Wraps an underlying I/O failure together with the path involved"""

    def __init__(self, path, message):
        self.path = path
        super().__init__(message)
