from flask import Blueprint, request, jsonify, current_app
from marshmallow import Schema, ValidationError, fields, validate
from werkzeug.utils import secure_filename
import logging

from sparsecalc.services.matrix_service import MatrixService, OPERATIONS
from sparsecalc.utils.errors import MatrixError
from sparsecalc.utils.helpers import generate_response, matrix_to_dict
from sparsecalc.utils.sparse_matrix import STRATEGIES

api_bp = Blueprint('api', __name__)
logger = logging.getLogger(__name__)


class ParseRequestSchema(Schema):
    matrix = fields.String(required=True)


class OperationRequestSchema(Schema):
    left = fields.String(required=True)
    right = fields.String(required=True)
    strategy = fields.String(load_default=None, validate=validate.OneOf(STRATEGIES))


parse_schema = ParseRequestSchema()
operation_schema = OperationRequestSchema()


def get_matrix_service():
    return MatrixService(
        current_app.config['MATRIX_STRATEGY'],
        max_grid_cells=current_app.config['MAX_GRID_CELLS']
    )


def unknown_operation(operation):
    return jsonify(generate_response(
        success=False,
        error=f"Unknown operation '{operation}', expected one of: {', '.join(OPERATIONS)}"
    )), 404


@api_bp.route('/matrices/parse', methods=['POST'])
def parse_matrix():
    """Parse matrix text and return its entries"""
    try:
        data = parse_schema.load(request.get_json(silent=True) or {})
        matrix = get_matrix_service().parse(data['matrix'])
        return jsonify(generate_response(data=matrix_to_dict(matrix))), 200
    except ValidationError as e:
        return jsonify(generate_response(success=False, error=e.messages)), 400
    except MatrixError as e:
        return jsonify(generate_response(success=False, error=str(e))), 400


@api_bp.route('/matrices/<operation>', methods=['POST'])
def compute_matrices(operation):
    """Apply add, subtract or multiply to two matrices given as text"""
    if operation not in OPERATIONS:
        return unknown_operation(operation)

    try:
        data = operation_schema.load(request.get_json(silent=True) or {})
        result = get_matrix_service().compute_text(
            operation, data['left'], data['right'], strategy=data['strategy']
        )
        return jsonify(generate_response(data=matrix_to_dict(result))), 200
    except ValidationError as e:
        return jsonify(generate_response(success=False, error=e.messages)), 400
    except MatrixError as e:
        return jsonify(generate_response(success=False, error=str(e))), 400


@api_bp.route('/matrices/upload/<operation>', methods=['POST'])
def upload_matrices(operation):
    """Apply an operation to two uploaded matrix files ('left' and 'right')"""
    if operation not in OPERATIONS:
        return unknown_operation(operation)

    missing = [name for name in ('left', 'right') if name not in request.files]
    if missing:
        return jsonify(generate_response(
            success=False, error=f"Missing file(s): {', '.join(missing)}"
        )), 400

    try:
        texts = []
        for name in ('left', 'right'):
            file = request.files[name]
            logger.info("Received %s operand %s", name, secure_filename(file.filename or name))
            texts.append(file.read().decode('utf-8'))

        result = get_matrix_service().compute_text(operation, texts[0], texts[1])
        return jsonify(generate_response(
            data=matrix_to_dict(result),
            message=f"{operation} completed"
        )), 200
    except UnicodeDecodeError:
        return jsonify(generate_response(success=False, error='Files must be UTF-8 text')), 400
    except MatrixError as e:
        return jsonify(generate_response(success=False, error=str(e))), 400
