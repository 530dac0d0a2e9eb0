import logging

from .errors import DimensionMismatch, InvalidDimension
from .matrix_codec import parse_text, render

logger = logging.getLogger(__name__)

DENSE = 'dense'
SPARSE = 'sparse'
STRATEGIES = (DENSE, SPARSE)


class SparseMatrix:
    """
    Implementación de Matriz Dispersa usando diccionarios para almacenar elementos no-cero.
    Las claves son tuplas (fila, col); una clave ausente vale 0.
    """

    def __init__(self, rows, cols):
        """
        Inicializa una matriz dispersa vacía con las dimensiones dadas.

        Args:
            rows (int): Número de filas
            cols (int): Número de columnas

        Raises:
            InvalidDimension: si alguna dimensión es negativa o no es entera
        """
        for name, value in (('rows', rows), ('cols', cols)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidDimension(f"{name} debe ser un entero, se recibió {value!r}")
            if value < 0:
                raise InvalidDimension(f"{name} no puede ser negativo: {value}")
        self._rows = rows
        self._cols = cols
        self.data = {}  # Diccionario para almacenar elementos no-cero: (fila, col) -> valor

    @property
    def rows(self):
        return self._rows

    @property
    def cols(self):
        return self._cols

    @property
    def shape(self):
        return (self._rows, self._cols)

    @property
    def nnz(self):
        """Número de elementos almacenados (no-cero)"""
        return len(self.data)

    @classmethod
    def from_text(cls, text):
        """
        Construye una matriz desde el formato de texto (rows=, cols=, (fila, col, valor)).
        Los elementos fuera de rango se descartan con una advertencia.

        Args:
            text (str): Contenido del archivo

        Returns:
            SparseMatrix: Nueva matriz dispersa
        """
        rows, cols, entries = parse_text(text)
        matrix = cls(rows, cols)
        for row, col, value in entries:
            if 0 <= row < rows and 0 <= col < cols:
                matrix.set_element(row, col, value)
            else:
                logger.warning("Index (%d, %d) out of matrix bounds.", row, col)
        return matrix

    parse = from_text

    def get_element(self, row, col):
        """
        Obtiene el valor en la posición especificada.

        Args:
            row (int): Índice de fila (base 0)
            col (int): Índice de columna (base 0)

        Returns:
            int: Valor en la posición (fila, col), 0 si no se encuentra
        """
        return self.data.get((row, col), 0)

    def set_element(self, row, col, value):
        """
        Establece un valor en la posición especificada. Un 0 elimina la entrada.

        Args:
            row (int): Índice de fila (base 0)
            col (int): Índice de columna (base 0)
            value (int): Valor a establecer
        """
        if value != 0:
            self.data[(row, col)] = value
        else:
            self.data.pop((row, col), None)

    def get_non_zero_elements(self):
        """
        Obtiene todos los elementos no-cero como un diccionario.

        Returns:
            dict: Diccionario con claves (fila, col) y sus valores
        """
        return self.data.copy()

    def get_row(self, row):
        """
        Obtiene todos los elementos en una fila específica.

        Returns:
            dict: Diccionario con índices de columna como claves y valores
        """
        if 0 <= row < self.rows:
            return {c: value for (r, c), value in self.data.items() if r == row}
        return {}

    def get_column(self, col):
        """
        Obtiene todos los elementos en una columna específica.

        Returns:
            dict: Diccionario con índices de fila como claves y valores
        """
        if 0 <= col < self.cols:
            return {r: value for (r, c), value in self.data.items() if c == col}
        return {}

    def _check_same_shape(self, other, operation):
        if self.rows != other.rows or self.cols != other.cols:
            raise DimensionMismatch(
                f"Las dimensiones de las matrices deben coincidir para la {operation}: "
                f"{self.rows}x{self.cols} vs {other.rows}x{other.cols}"
            )

    def _elementwise(self, other, combine, strategy):
        result = SparseMatrix(self.rows, self.cols)

        if strategy == DENSE:
            # Recorre toda la cuadrícula, incluidas las posiciones vacías
            for row in range(self.rows):
                for col in range(self.cols):
                    value = combine(self.get_element(row, col), other.get_element(row, col))
                    if value != 0:
                        result.set_element(row, col, value)
        else:
            # Solo la unión de claves almacenadas; 0 op 0 siempre es 0
            for key in sorted(self.data.keys() | other.data.keys()):
                if not (0 <= key[0] < self.rows and 0 <= key[1] < self.cols):
                    continue
                value = combine(self.data.get(key, 0), other.data.get(key, 0))
                if value != 0:
                    result.set_element(key[0], key[1], value)

        return result

    def add(self, other, strategy=DENSE):
        """
        Suma otra matriz dispersa a esta.

        Args:
            other (SparseMatrix): Matriz a sumar
            strategy (str): 'dense' recorre toda la cuadrícula, 'sparse' solo las entradas almacenadas

        Returns:
            SparseMatrix: Nueva matriz con el resultado
        """
        check_strategy(strategy)
        self._check_same_shape(other, 'suma')
        return self._elementwise(other, lambda a, b: a + b, strategy)

    def subtract(self, other, strategy=DENSE):
        """
        Resta otra matriz dispersa a esta.

        Args:
            other (SparseMatrix): Matriz a restar
            strategy (str): 'dense' o 'sparse'

        Returns:
            SparseMatrix: Nueva matriz con el resultado
        """
        check_strategy(strategy)
        self._check_same_shape(other, 'resta')
        return self._elementwise(other, lambda a, b: a - b, strategy)

    def multiply(self, other, strategy=DENSE):
        """
        Multiplica esta matriz por otra matriz dispersa.

        Con 'dense' se evalúan las rows * other.cols * cols posiciones sin importar
        la dispersión. Con 'sparse' solo se combinan las entradas almacenadas de esta
        matriz con las de la fila correspondiente de la otra.

        Args:
            other (SparseMatrix): Matriz por la cual multiplicar
            strategy (str): 'dense' o 'sparse'

        Returns:
            SparseMatrix: Nueva matriz con el resultado
        """
        check_strategy(strategy)
        if self.cols != other.rows:
            raise DimensionMismatch(
                "Las dimensiones de las matrices son incompatibles para la multiplicación: "
                f"{self.rows}x{self.cols} vs {other.rows}x{other.cols}"
            )

        result = SparseMatrix(self.rows, other.cols)

        if strategy == DENSE:
            for i in range(self.rows):
                for j in range(other.cols):
                    total = 0
                    for k in range(self.cols):
                        total += self.get_element(i, k) * other.get_element(k, j)
                    if total != 0:
                        result.set_element(i, j, total)
            return result

        # Índice de la otra matriz por fila: fila -> {col: valor}
        other_rows = {}
        for (r, c), value in other.data.items():
            other_rows.setdefault(r, {})[c] = value

        sums = {}
        for (r1, c1), value1 in self.data.items():
            if not (0 <= r1 < self.rows and 0 <= c1 < self.cols):
                continue
            for c2, value2 in other_rows.get(c1, {}).items():
                if not 0 <= c2 < other.cols:
                    continue
                sums[(r1, c2)] = sums.get((r1, c2), 0) + value1 * value2

        for (row, col), total in sorted(sums.items()):
            if total != 0:
                result.set_element(row, col, total)

        return result

    def transpose(self):
        """
        Transpone la matriz.

        Returns:
            SparseMatrix: Matriz transpuesta
        """
        result = SparseMatrix(self.cols, self.rows)

        for (r, c), value in self.data.items():
            result.set_element(c, r, value)

        return result

    def get_density(self):
        """
        Calcula la densidad de la matriz (porcentaje de elementos no-cero).

        Returns:
            float: Densidad como porcentaje
        """
        total_elements = self.rows * self.cols
        return (len(self.data) / total_elements) * 100 if total_elements > 0 else 0

    def to_dense(self):
        """Lista de listas con todos los valores, incluidos los ceros"""
        return [
            [self.get_element(row, col) for col in range(self.cols)]
            for row in range(self.rows)
        ]

    def to_string(self):
        """
        Convierte la matriz a una cuadrícula de texto separada por espacios.

        Returns:
            str: Representación de cadena de la matriz
        """
        return "\n".join(" ".join(str(value) for value in row) for row in self.to_dense())

    def render(self):
        return render(self)

    def __str__(self):
        return render(self)

    def __repr__(self):
        return f"SparseMatrix({self.rows}x{self.cols}, {len(self.data)} elementos no-cero)"

    def __len__(self):
        return len(self.data)

    def __eq__(self, other):
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.shape == other.shape and self.data == other.data

    __hash__ = None

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __matmul__(self, other):
        return self.multiply(other)


def check_strategy(strategy):
    if strategy not in STRATEGIES:
        raise ValueError(f"Estrategia desconocida: {strategy!r}, use una de {STRATEGIES}")


def create_sparse_matrix_from_data(rows, cols, data_dict):
    """
    Crea una matriz dispersa desde un diccionario de datos.
    Args:
        rows (int): Número de filas
        cols (int): Número de columnas
        data_dict (dict): Diccionario con claves (fila, col) o 'fila,col' y valores
    Returns:
        SparseMatrix: Nueva matriz dispersa
    """
    matrix = SparseMatrix(rows, cols)
    for key, value in data_dict.items():
        if isinstance(key, str):
            row, col = map(int, key.split(','))
        else:
            row, col = key
        matrix.set_element(row, col, value)
    return matrix


def create_identity_matrix(size):
    """
    Crea una matriz identidad del tamaño dado.

    Args:
        size (int): Tamaño de la matriz identidad

    Returns:
        SparseMatrix: Matriz identidad
    """
    matrix = SparseMatrix(size, size)
    for i in range(size):
        matrix.set_element(i, i, 1)
    return matrix


def create_zero_matrix(rows, cols):
    """Crea una matriz cero con las dimensiones dadas."""
    return SparseMatrix(rows, cols)
