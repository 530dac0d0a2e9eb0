import logging

from sparsecalc.utils.errors import GridTooLarge
from sparsecalc.utils.file_io import load_matrix, save_matrix
from sparsecalc.utils.sparse_matrix import DENSE, SparseMatrix, check_strategy

logger = logging.getLogger(__name__)

OPERATIONS = ('add', 'subtract', 'multiply')


def dense_cost(operation, left, right):
    """Number of positions the dense scan visits for an operation"""
    if operation == 'multiply':
        return left.rows * right.cols * left.cols
    return left.rows * left.cols


class MatrixService:
    """Servicio para operaciones sobre matrices dispersas en texto o en archivos"""

    def __init__(self, strategy=DENSE, max_grid_cells=None):
        check_strategy(strategy)
        self.strategy = strategy
        # None means unlimited; only the dense strategy is bounded
        self.max_grid_cells = max_grid_cells

    def parse(self, text):
        """Parses matrix text into a SparseMatrix"""
        return SparseMatrix.from_text(text)

    def compute(self, operation, left, right, strategy=None):
        """
        Applies an arithmetic operation to two matrices.

        Args:
            operation (str): 'add', 'subtract' or 'multiply'
            left (SparseMatrix): Left operand
            right (SparseMatrix): Right operand
            strategy (str): Overrides the service strategy for this call

        Returns:
            SparseMatrix: Fresh result matrix

        Raises:
            GridTooLarge: the dense scan would exceed max_grid_cells
        """
        if operation not in OPERATIONS:
            raise ValueError(f"Unknown operation: {operation!r}")
        strategy = strategy or self.strategy
        check_strategy(strategy)

        if strategy == DENSE and self.max_grid_cells is not None:
            cost = dense_cost(operation, left, right)
            if cost > self.max_grid_cells:
                raise GridTooLarge(
                    f"Dense {operation} would scan {cost} positions, limit is "
                    f"{self.max_grid_cells}; use the sparse strategy"
                )

        logger.debug("%s %dx%d with %dx%d (%s)", operation, left.rows, left.cols,
                     right.rows, right.cols, strategy)
        return getattr(left, operation)(right, strategy=strategy)

    def compute_text(self, operation, left_text, right_text, strategy=None):
        """Parses both operands, applies the operation and returns the result matrix"""
        left = self.parse(left_text)
        right = self.parse(right_text)
        return self.compute(operation, left, right, strategy)

    def compute_files(self, operation, left_path, right_path, output_path):
        """Loads both operand files, applies the operation and writes the result"""
        left = load_matrix(left_path)
        right = load_matrix(right_path)
        result = self.compute(operation, left, right)
        save_matrix(result, output_path)
        return result
