import logging
import pytest
from sparsecalc.utils.errors import DimensionMismatch, InvalidDimension, MalformedEntry, MissingDimensions
from sparsecalc.utils.sparse_matrix import (
    SparseMatrix,
    create_identity_matrix,
    create_sparse_matrix_from_data,
    create_zero_matrix,
)

@pytest.fixture
def left():
    """[[1, 2], [0, 3]]"""
    return create_sparse_matrix_from_data(2, 2, {(0, 0): 1, (0, 1): 2, (1, 1): 3})

@pytest.fixture
def right():
    """[[2, 0], [1, 4]]"""
    return create_sparse_matrix_from_data(2, 2, {(0, 0): 2, (1, 0): 1, (1, 1): 4})

@pytest.fixture
def rectangular():
    """3x4 matrix with a few scattered entries"""
    return create_sparse_matrix_from_data(3, 4, {(0, 3): 7, (1, 0): -2, (2, 2): 5, (2, 3): 1})

def test_create_empty_matrix():
    """Test a new matrix has no entries"""
    matrix = SparseMatrix(3, 5)

    assert matrix.shape == (3, 5)
    assert matrix.nnz == 0
    assert matrix.get_element(2, 4) == 0

def test_create_zero_dimensions():
    """Test zero-sized matrices are allowed"""
    matrix = create_zero_matrix(0, 0)

    assert matrix.shape == (0, 0)
    assert matrix.get_density() == 0

@pytest.mark.parametrize('rows, cols', [(-1, 2), (2, -1), (2.5, 2), ('2', 2)])
def test_invalid_dimensions(rows, cols):
    """Test negative or non-integer dimensions are rejected"""
    with pytest.raises(InvalidDimension):
        SparseMatrix(rows, cols)

def test_dimensions_are_read_only():
    """Test rows and cols can't be reassigned"""
    matrix = SparseMatrix(2, 2)

    with pytest.raises(AttributeError):
        matrix.rows = 3

def test_set_and_get_element():
    """Test storing and overwriting a value"""
    matrix = SparseMatrix(2, 2)
    matrix.set_element(1, 0, 9)
    matrix.set_element(1, 0, -4)

    assert matrix.get_element(1, 0) == -4
    assert matrix.nnz == 1

def test_set_zero_removes_entry():
    """Test setting zero deletes the key instead of storing it"""
    matrix = SparseMatrix(2, 2)
    matrix.set_element(0, 1, 6)
    matrix.set_element(0, 1, 0)

    assert matrix.get_element(0, 1) == 0
    assert (0, 1) not in matrix.data
    assert len(matrix) == 0

def test_set_zero_on_missing_entry():
    """Test setting zero where nothing is stored is a no-op"""
    matrix = SparseMatrix(2, 2)
    matrix.set_element(1, 1, 0)

    assert matrix.data == {}

def test_get_element_outside_bounds_returns_zero():
    """Test get_element does not bounds check"""
    matrix = SparseMatrix(2, 2)

    assert matrix.get_element(10, -3) == 0

def test_add(left, right):
    """Test element-wise addition"""
    result = left.add(right)

    assert result.to_dense() == [[3, 2], [1, 7]]
    for i in range(2):
        for j in range(2):
            assert result.get_element(i, j) == left.get_element(i, j) + right.get_element(i, j)

def test_subtract(left, right):
    """Test element-wise subtraction"""
    result = left.subtract(right)

    assert result.to_dense() == [[-1, 2], [-1, -1]]
    for i in range(2):
        for j in range(2):
            assert result.get_element(i, j) == left.get_element(i, j) - right.get_element(i, j)

def test_subtract_self_is_empty(left):
    """Test cancelling entries are not stored"""
    result = left.subtract(left)

    assert result.nnz == 0
    assert result.shape == (2, 2)

def test_multiply(left, right):
    """Test the known 2x2 product"""
    result = left.multiply(right)

    assert result.data == {(0, 0): 4, (0, 1): 8, (1, 0): 3, (1, 1): 12}

def test_multiply_rectangular(rectangular):
    """Test a 3x4 by 4x3 product has shape 3x3"""
    result = rectangular.multiply(rectangular.transpose())

    assert result.shape == (3, 3)
    assert result.get_element(0, 0) == 49
    assert result.get_element(0, 2) == 7
    assert result.get_element(1, 1) == 4
    assert result.get_element(2, 2) == 26
    assert result.get_element(0, 1) == 0

def test_multiply_by_identity(rectangular):
    """Test multiplying by the identity returns an equal matrix"""
    assert rectangular.multiply(create_identity_matrix(4)) == rectangular

def test_operations_do_not_mutate_operands(left, right):
    """Test operands are unchanged and results are new instances"""
    left_before = dict(left.data)
    right_before = dict(right.data)

    results = [left.add(right), left.subtract(right), left.multiply(right)]

    assert left.data == left_before
    assert right.data == right_before
    assert all(result is not left and result is not right for result in results)

@pytest.mark.parametrize('operation', ['add', 'subtract'])
def test_elementwise_dimension_mismatch(left, rectangular, operation):
    """Test add and subtract require equal shapes"""
    with pytest.raises(DimensionMismatch):
        getattr(left, operation)(rectangular)
    with pytest.raises(DimensionMismatch):
        getattr(left, operation)(SparseMatrix(2, 3))

def test_multiply_dimension_mismatch(left, rectangular):
    """Test multiply requires left cols to equal right rows"""
    with pytest.raises(DimensionMismatch):
        rectangular.multiply(left)

@pytest.mark.parametrize('operation', ['add', 'subtract', 'multiply'])
def test_sparse_strategy_matches_dense(rectangular, operation):
    """Test both strategies store identical entries"""
    other = create_sparse_matrix_from_data(3, 4, {(0, 3): -7, (1, 1): 2, (2, 2): 3})
    if operation == 'multiply':
        other = other.transpose()

    dense = getattr(rectangular, operation)(other, strategy='dense')
    sparse = getattr(rectangular, operation)(other, strategy='sparse')

    assert dense == sparse
    assert list(dense.data.items()) == list(sparse.data.items())

def test_sparse_multiply_drops_cancelled_sums():
    """Test a product that sums to zero is not stored"""
    a = create_sparse_matrix_from_data(1, 2, {(0, 0): 1, (0, 1): 1})
    b = create_sparse_matrix_from_data(2, 1, {(0, 0): 5, (1, 0): -5})

    assert a.multiply(b, strategy='sparse').nnz == 0
    assert a.multiply(b, strategy='dense').nnz == 0

def test_unknown_strategy(left, right):
    """Test an unknown strategy name is rejected"""
    with pytest.raises(ValueError):
        left.add(right, strategy='fast')

def test_large_values_do_not_overflow():
    """Test integers grow past 64 bits"""
    big = 2 ** 62
    a = create_sparse_matrix_from_data(1, 2, {(0, 0): big, (0, 1): big})
    b = create_sparse_matrix_from_data(2, 1, {(0, 0): big, (1, 0): big})

    assert a.multiply(b).get_element(0, 0) == 2 * big * big

def test_operators(left, right):
    """Test +, - and @ map to the dense operations"""
    assert left + right == left.add(right)
    assert left - right == left.subtract(right)
    assert left @ right == left.multiply(right)

def test_from_text():
    """Test building a matrix from the input format"""
    matrix = SparseMatrix.from_text("rows=2\ncols=2\n(0,0,5)\n(1,1,-3)\n")

    assert matrix.get_element(0, 0) == 5
    assert matrix.get_element(1, 1) == -3
    assert matrix.get_element(0, 1) == 0

def test_from_text_drops_out_of_bounds(caplog):
    """Test out-of-bounds entries are skipped with a warning"""
    with caplog.at_level(logging.WARNING):
        matrix = SparseMatrix.parse("rows=2\ncols=2\n(0,0,5)\n(5,5,1)\n")

    assert matrix.data == {(0, 0): 5}
    assert 'Index (5, 5) out of matrix bounds.' in caplog.text

def test_from_text_zero_value_not_stored():
    """Test a zero entry in the file is not stored"""
    matrix = SparseMatrix.from_text("rows=2\ncols=2\n(0,1,0)\n")

    assert matrix.nnz == 0

def test_from_text_errors():
    """Test fatal parse errors propagate"""
    with pytest.raises(MissingDimensions):
        SparseMatrix.from_text("rows=2\n(0,0,1)\n")
    with pytest.raises(MalformedEntry):
        SparseMatrix.from_text("rows=2\ncols=2\n(a,b,c)\n")

def test_round_trip(rectangular):
    """Test rendered output parses back to the same entries"""
    parsed = SparseMatrix.from_text(rectangular.render())

    assert parsed == rectangular
    assert str(parsed) == str(rectangular)

def test_row_and_column(rectangular):
    """Test row and column views"""
    assert rectangular.get_row(2) == {2: 5, 3: 1}
    assert rectangular.get_column(3) == {0: 7, 2: 1}
    assert rectangular.get_row(9) == {}
    assert rectangular.get_column(-1) == {}

def test_transpose(rectangular):
    """Test transpose swaps positions and shape"""
    result = rectangular.transpose()

    assert result.shape == (4, 3)
    assert result.get_element(3, 0) == 7
    assert result.transpose() == rectangular

def test_density(rectangular):
    """Test density as a percentage"""
    assert rectangular.get_density() == pytest.approx(100 * 4 / 12)

def test_get_non_zero_elements_is_a_copy(left):
    """Test the returned dict doesn't alias storage"""
    elements = left.get_non_zero_elements()
    elements[(1, 0)] = 99

    assert left.get_element(1, 0) == 0

def test_create_from_string_keys():
    """Test 'row,col' string keys"""
    matrix = create_sparse_matrix_from_data(2, 2, {'0,1': 4, '1,0': 0})

    assert matrix.data == {(0, 1): 4}

def test_to_string(left):
    """Test the grid representation"""
    assert left.to_string() == "1 2\n0 3"
    assert repr(left) == "SparseMatrix(2x2, 3 elementos no-cero)"

def test_equality():
    """Test equality compares shape and entries"""
    assert SparseMatrix(2, 3) == SparseMatrix(2, 3)
    assert SparseMatrix(2, 3) != SparseMatrix(3, 2)
    assert SparseMatrix(2, 3) != "not a matrix"

def test_sparse_strategy_ignores_entries_outside_grid():
    """Test manually stored out-of-range keys don't leak into sparse results"""
    a = SparseMatrix(2, 2)
    a.set_element(0, 0, 2)
    a.set_element(5, 5, 9)
    b = create_identity_matrix(2)

    for operation in ('add', 'subtract', 'multiply'):
        dense = getattr(a, operation)(b, strategy='dense')
        sparse = getattr(a, operation)(b, strategy='sparse')
        assert dense == sparse
        assert (5, 5) not in sparse.data
