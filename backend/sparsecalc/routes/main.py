from flask import Blueprint, jsonify

main_bp = Blueprint('main', __name__)

@main_bp.route('/')
def index():
    """Root endpoint"""
    return jsonify({
        'message': 'Sparse Matrix Calculator',
        'version': '1.0.0',
        'status': 'running'
    })

@main_bp.route('/health')
def health_check():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'message': 'API is running successfully'
    })

@main_bp.route('/api-info')
def api_info():
    """API information endpoint"""
    return jsonify({
        'name': 'Sparse Matrix Calculator',
        'version': '1.0.0',
        'description': 'Parse, add, subtract and multiply sparse integer matrices',
        'endpoints': {
            'main': '/',
            'health': '/health',
            'api_info': '/api-info',
            'parse': '/api/v1/matrices/parse',
            'operation': '/api/v1/matrices/<add|subtract|multiply>',
            'upload': '/api/v1/matrices/upload/<add|subtract|multiply>'
        }
    })
