from datetime import datetime, timezone


def matrix_to_dict(matrix):
    """Serialize a matrix for JSON responses"""
    return {
        'rows': matrix.rows,
        'cols': matrix.cols,
        'nnz': matrix.nnz,
        'density': matrix.get_density(),
        'entries': [[row, col, value] for (row, col), value in matrix.data.items()],
        'text': matrix.render()
    }


def generate_response(success=True, data=None, message=None, error=None):
    """Generate standardized API response"""
    response = {
        'success': success,
        'timestamp': datetime.now(timezone.utc).isoformat()
    }

    if data is not None:
        response['data'] = data

    if message:
        response['message'] = message

    if error:
        response['error'] = error

    return response
