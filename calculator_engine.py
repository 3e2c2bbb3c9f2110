"""
Motor de estado de la calculadora de teclado.

Este módulo provee la clase CalculatorEngine, que recibe pulsaciones
discretas (dígitos, punto, operadores, funciones y borrado) y mantiene
el valor mostrado en pantalla. No hay precedencia de operadores: cada
operador se resuelve de inmediato contra el operando pendiente.

Contrato de interfaz:
    - handle_input(token: str) -> None
    - display_value() -> str
"""

import logging
import math
from enum import Enum

from number_formatter import format_number, parse_number


logger = logging.getLogger("calculator_engine")


class Operation(str, Enum):
    """Operaciones que puede pedir el teclado."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"
    NEGATE = "±"
    PERCENT = "%"
    EQUALS = "="


BINARY_OPERATIONS = frozenset(
    {Operation.ADD, Operation.SUBTRACT, Operation.MULTIPLY, Operation.DIVIDE}
)
FUNCTIONS = frozenset({Operation.NEGATE, Operation.PERCENT})

_BINARY_TOKENS = frozenset(op.value for op in BINARY_OPERATIONS)
_FUNCTION_TOKENS = frozenset(op.value for op in FUNCTIONS)

DIGITS = frozenset("0123456789")
DECIMAL_POINT = "."
CLEAR = "C"


def apply_operation(operation: Operation, a: float, b: float) -> float:
    """Aplica ``operation`` a los operandos izquierdo ``a`` y derecho ``b``."""
    if operation is Operation.ADD:
        return a + b
    if operation is Operation.SUBTRACT:
        return a - b
    if operation is Operation.MULTIPLY:
        return a * b
    if operation is Operation.DIVIDE:
        return _divide(a, b)
    if operation is Operation.NEGATE:
        return -b
    if operation is Operation.PERCENT:
        return b * 0.01
    if operation is Operation.EQUALS:
        return b
    raise ValueError(f"Operación desconocida: {operation!r}")


def _divide(a: float, b: float) -> float:
    # Semántica IEEE 754: x/0 da ±∞ y 0/0 da NaN
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


class CalculatorEngine:
    """Máquina de estados de una calculadora de bolsillo."""

    def __init__(self):
        self.reset()

    # ── Estado ───────────────────────────────────────────────────

    def reset(self):
        """Vuelve al estado inicial (lo que hace la tecla C)."""
        self._display = "0"
        self._pending_operand: float | None = None
        self._pending_operation: Operation | None = None
        self._needs_new_entry = True
        self._last_operand: float | None = None

    def display_value(self) -> str:
        return self._display

    @property
    def pending_operand(self) -> float | None:
        return self._pending_operand

    @property
    def pending_operation(self) -> Operation | None:
        return self._pending_operation

    @property
    def needs_new_entry(self) -> bool:
        return self._needs_new_entry

    @property
    def last_operand(self) -> float | None:
        return self._last_operand

    def snapshot(self) -> dict:
        operation = self._pending_operation
        return {
            "display": self._display,
            "operand": self._pending_operand,
            "operation": operation.value if operation is not None else None,
            "needs_new_entry": self._needs_new_entry,
            "last_operand": self._last_operand,
        }

    # ── Entrada ──────────────────────────────────────────────────

    def handle_input(self, token: str) -> None:
        """Procesa una pulsación. Los tokens desconocidos se ignoran."""
        if not isinstance(token, str):
            logger.debug("Token ignorado: %r", token)
            return

        if token in DIGITS:
            self._enter_digit(token)
        elif token == DECIMAL_POINT:
            self._enter_decimal_point()
        elif token == CLEAR:
            self.reset()
        elif token == Operation.EQUALS.value:
            self._evaluate_equals()
        elif token in _BINARY_TOKENS:
            self._apply_operation(Operation(token))
            self._needs_new_entry = True
        elif token in _FUNCTION_TOKENS:
            self._apply_function(Operation(token))
        else:
            logger.debug("Token ignorado: %r", token)

    def handle_inputs(self, tokens) -> str:
        """Procesa una secuencia de pulsaciones y devuelve la pantalla."""
        for token in tokens:
            self.handle_input(token)
        return self._display

    def _current_value(self) -> float:
        return parse_number(self._display)

    def _enter_digit(self, digit: str):
        if self._needs_new_entry:
            self._needs_new_entry = False
            self._display = digit
        else:
            self._display += digit
        self._last_operand = None

    def _enter_decimal_point(self):
        if DECIMAL_POINT not in self._display:
            self._display += DECIMAL_POINT

    # ── Operaciones ──────────────────────────────────────────────

    def _apply_operation(self, new_operation: Operation):
        # Dos operadores seguidos (o operador tras "="): el operando
        # izquierdo pasa a ser lo que hay en pantalla
        if self._pending_operation is not None and self._needs_new_entry:
            self._pending_operand = self._current_value()
            self._pending_operation = new_operation
            return

        if self._pending_operand is None:
            self._pending_operand = self._current_value()
        elif self._pending_operation is not None:
            self._resolve(self._pending_operation, self._pending_operand)
            self._pending_operand = self._current_value()

        self._needs_new_entry = True
        self._pending_operation = new_operation

    def _evaluate_equals(self):
        if self._pending_operand is None:
            self._pending_operand = self._current_value()
            return
        if self._pending_operation is None:
            return

        if self._last_operand is None:
            self._last_operand = self._current_value()
        self._resolve(self._pending_operation, self._pending_operand)
        self._pending_operand = self._last_operand
        self._needs_new_entry = True

    def _apply_function(self, function: Operation):
        self._resolve(function, 0.0)
        if self._needs_new_entry:
            self._pending_operand = self._current_value()

    def _resolve(self, operation: Operation, left: float):
        right = self._current_value()
        result = apply_operation(operation, left, right)
        self._display = format_number(result)
        logger.debug("%r %s %r = %s", left, operation.value, right, self._display)
