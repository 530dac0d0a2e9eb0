from flask import Flask
from flask_cors import CORS
from dotenv import load_dotenv
import logging
import os

from sparsecalc.utils.sparse_matrix import check_strategy

# Load environment variables
load_dotenv()

def create_app(config_name='development'):
    """Application factory pattern"""
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev-secret-key')
    app.config['MATRIX_STRATEGY'] = os.environ.get('MATRIX_STRATEGY', 'dense').strip().lower()
    # Upper bound on positions a dense scan may visit per request
    app.config['MAX_GRID_CELLS'] = int(os.environ.get('MAX_GRID_CELLS', 1_000_000))
    app.config['MAX_CONTENT_LENGTH'] = int(os.environ.get('MAX_CONTENT_LENGTH', 16 * 1024 * 1024))
    app.config['LOG_LEVEL'] = os.environ.get('LOG_LEVEL', 'INFO').upper()
    app.config['TESTING'] = config_name == 'testing'

    check_strategy(app.config['MATRIX_STRATEGY'])

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    # Enable CORS
    CORS(app)

    # Register blueprints
    from sparsecalc.routes.main import main_bp
    from sparsecalc.routes.api import api_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp, url_prefix='/api/v1')

    return app
