#!/usr/bin/env python3
"""
Script de ejemplo: carga dos matrices de sample_inputs/ y escribe la suma,
la resta y el producto en output/.

Uso:
    python run_example.py [matriz1.txt matriz2.txt [directorio_salida]]
"""

import logging
import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from dotenv import load_dotenv

from sparsecalc.services.matrix_service import MatrixService, OPERATIONS
from sparsecalc.utils.errors import MatrixError

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_INPUTS = (
    os.path.join(BASE_DIR, 'sample_inputs', 'easy_sample_01_1.txt'),
    os.path.join(BASE_DIR, 'sample_inputs', 'easy_sample_01_2.txt'),
)
DEFAULT_OUTPUT_DIR = os.path.join(BASE_DIR, 'output')


def run_example(left_path, right_path, output_dir):
    """Ejecuta las tres operaciones y devuelve las rutas escritas"""
    service = MatrixService(os.environ.get('MATRIX_STRATEGY', 'dense').strip().lower())
    os.makedirs(output_dir, exist_ok=True)

    print(f"🚀 Operando {os.path.basename(left_path)} y {os.path.basename(right_path)}...")

    written = []
    for operation in OPERATIONS:
        output_path = os.path.join(output_dir, f"{operation}_result.txt")
        try:
            result = service.compute_files(operation, left_path, right_path, output_path)
            written.append(output_path)
            print(f"✅ {operation}: {result!r}")
        except MatrixError as e:
            print(f"❌ Error en {operation}: {str(e)}")

    print(f"\n🎉 Resultados escritos: {len(written)}")
    return written


if __name__ == '__main__':
    load_dotenv()
    logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'INFO').upper())

    args = sys.argv[1:]
    left, right = args[:2] if len(args) >= 2 else DEFAULT_INPUTS
    output = args[2] if len(args) >= 3 else DEFAULT_OUTPUT_DIR
    run_example(left, right, output)
