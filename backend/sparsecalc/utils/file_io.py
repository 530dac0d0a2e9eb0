import logging

from .errors import FileAccessError
from .sparse_matrix import SparseMatrix

logger = logging.getLogger(__name__)


def read_text(path):
    """Reads a UTF-8 text file, wrapping OS and decoding failures in FileAccessError"""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(path, f"Error reading file: {e}") from e


def write_text(path, text):
    """Writes a UTF-8 text file, wrapping any OS failure in FileAccessError"""
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
    except (OSError, UnicodeEncodeError) as e:
        raise FileAccessError(path, f"Error writing file: {e}") from e


def load_matrix(path):
    """Loads a matrix file; parse errors propagate unchanged"""
    return SparseMatrix.from_text(read_text(path))


def save_matrix(matrix, path):
    write_text(path, matrix.render())
    logger.info("Output matrix has been written to %s", path)
