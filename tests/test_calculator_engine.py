"""
Pruebas de la máquina de estados de la calculadora.
"""

import math

import pytest

from calculator_engine import CalculatorEngine, Operation, apply_operation


def press(engine, sequence):
    return engine.handle_inputs(sequence.split())


class TestInitialState:
    """Motor recién creado y la tecla C."""

    def setup_method(self):
        self.engine = CalculatorEngine()

    def test_fresh_engine_shows_zero(self):
        assert self.engine.display_value() == "0"
        assert self.engine.pending_operand is None
        assert self.engine.pending_operation is None
        assert self.engine.needs_new_entry is True
        assert self.engine.last_operand is None

    def test_clear_resets_everything(self):
        press(self.engine, "7 + 3 =")
        self.engine.handle_input("C")
        assert self.engine.snapshot() == {
            "display": "0",
            "operand": None,
            "operation": None,
            "needs_new_entry": True,
            "last_operand": None,
        }

    def test_reset_matches_clear_key(self):
        press(self.engine, "1 2 ×")
        self.engine.reset()
        assert self.engine.display_value() == "0"
        assert self.engine.pending_operation is None


class TestDataEntry:
    """Dígitos y punto decimal."""

    def setup_method(self):
        self.engine = CalculatorEngine()

    def test_digits_concatenate(self):
        assert press(self.engine, "C 1 2 3") == "123"

    def test_first_digit_replaces_zero(self):
        assert press(self.engine, "5") == "5"
        assert self.engine.needs_new_entry is False

    def test_zeros_are_kept_as_typed(self):
        assert press(self.engine, "C 0 0 7") == "007"

    def test_single_decimal_point(self):
        assert press(self.engine, "C 1 . . 5") == "1.5"

    def test_decimal_point_after_digits(self):
        assert press(self.engine, "3 . 1 4") == "3.14"

    def test_digit_clears_last_operand(self):
        press(self.engine, "7 + 3 =")
        assert self.engine.last_operand == 3.0
        self.engine.handle_input("1")
        assert self.engine.last_operand is None

    def test_digit_after_result_starts_new_entry(self):
        assert press(self.engine, "7 + 3 = 4") == "4"


class TestOperations:
    """Operadores binarios, igual e igual repetido."""

    def setup_method(self):
        self.engine = CalculatorEngine()

    @pytest.mark.parametrize("sequence, expected", [
        ("C 7 + 3 =", "10"),
        ("C 7 + 3 = =", "13"),
        ("C 5 - =", "0"),
        ("C 4 + × 2 =", "8"),
        ("C 9 - 4 =", "5"),
        ("C 6 × 7 =", "42"),
        ("C 7 ÷ 2 =", "3.5"),
        ("C 1 ÷ 3 =", "0.3333333333333333"),
        ("C 9 9 9 + 1 =", "1,000"),
        ("C 0 . 1 + 0 . 2 =", "0.30000000000000004"),
        ("C 7 + 3 = × 2 =", "20"),
        ("C 7 + 3 = + 1 =", "11"),
    ])
    def test_sequences(self, sequence, expected):
        assert press(self.engine, sequence) == expected

    def test_chaining_is_left_to_right(self):
        assert press(self.engine, "C 2 + 3 × 4 =") == "20"

    def test_operator_resolves_pending_operation(self):
        press(self.engine, "C 1 2 + 3 0 -")
        assert self.engine.display_value() == "42"
        assert self.engine.pending_operand == 42.0
        assert self.engine.pending_operation is Operation.SUBTRACT
        assert self.engine.needs_new_entry is True

    def test_second_operator_only_changes_operation(self):
        press(self.engine, "C 4 + ×")
        assert self.engine.pending_operand == 4.0
        assert self.engine.pending_operation is Operation.MULTIPLY
        assert self.engine.display_value() == "4"

    def test_operator_after_equals_starts_from_result(self):
        press(self.engine, "C 7 + 3 = ×")
        assert self.engine.pending_operand == 10.0
        assert self.engine.pending_operation is Operation.MULTIPLY
        assert self.engine.display_value() == "10"

    def test_equals_without_operand_locks_value(self):
        press(self.engine, "C 5 =")
        assert self.engine.pending_operand == 5.0
        assert self.engine.pending_operation is None
        assert self.engine.display_value() == "5"

    def test_locked_value_is_left_operand(self):
        assert press(self.engine, "C 5 = + 3 =") == "8"

    def test_equals_without_operation_is_noop(self):
        press(self.engine, "C 5 = =")
        assert self.engine.display_value() == "5"
        assert self.engine.last_operand is None

    def test_repeat_equals_keeps_reapplying(self):
        assert press(self.engine, "C 2 × 3 = = =") == "54"

    def test_repeat_equals_uses_captured_operand_on_the_left(self):
        # 10 - 3 = 7, luego 3 - 7
        assert press(self.engine, "C 1 0 - 3 = =") == "-4"

    def test_results_with_grouping_feed_later_operations(self):
        assert press(self.engine, "C 9 9 9 + 1 + 5 =") == "1,005"


class TestFunctions:
    """Las teclas ± y %."""

    def setup_method(self):
        self.engine = CalculatorEngine()

    def test_negate(self):
        assert press(self.engine, "C 9 ±") == "-9"

    def test_negate_twice(self):
        assert press(self.engine, "C 9 ± ±") == "9"

    def test_percent(self):
        assert press(self.engine, "C 8 %") == "0.08"
        assert press(self.engine, "C 5 0 %") == "0.5"

    def test_function_keeps_entry_open(self):
        assert press(self.engine, "C 9 ± 1") == "-91"

    def test_function_on_new_entry_captures_operand(self):
        press(self.engine, "C 7 + ±")
        assert self.engine.display_value() == "-7"
        assert self.engine.pending_operand == -7.0
        assert press(self.engine, "3 =") == "-4"

    def test_function_on_fresh_engine_captures_operand(self):
        press(self.engine, "C ±")
        assert self.engine.display_value() == "0"
        assert self.engine.pending_operand == 0.0


class TestDegenerateInput:
    """Nada del contrato público lanza excepciones."""

    def setup_method(self):
        self.engine = CalculatorEngine()

    @pytest.mark.parametrize("token", ["x", "", "12", "*", "/", "c", "AC", "−"])
    def test_unknown_tokens_are_ignored(self, token):
        press(self.engine, "C 4 + 5")
        before = self.engine.snapshot()
        self.engine.handle_input(token)
        assert self.engine.snapshot() == before

    def test_non_string_token_is_ignored(self):
        self.engine.handle_input(None)
        self.engine.handle_input(7)
        assert self.engine.display_value() == "0"

    def test_division_by_zero(self):
        assert press(self.engine, "C 1 ÷ 0 =") == "∞"

    def test_negative_division_by_zero(self):
        assert press(self.engine, "C 1 ± ÷ 0 =") == "-∞"

    def test_zero_divided_by_zero(self):
        assert press(self.engine, "C 0 ÷ 0 =") == "NaN"

    def test_infinity_keeps_flowing(self):
        assert press(self.engine, "C 1 ÷ 0 + 1 =") == "∞"

    def test_large_result_uses_scientific_notation(self):
        assert press(self.engine, "C 1 0 0 0 0 0 0 0 0 0 0 × 1 0 0 0 0 0 0 0 0 0 0 =") == "1E20"


class TestApplyOperation:
    """Despacho puro de operaciones."""

    @pytest.mark.parametrize("operation, a, b, expected", [
        (Operation.ADD, 2.0, 3.0, 5.0),
        (Operation.SUBTRACT, 2.0, 3.0, -1.0),
        (Operation.MULTIPLY, 2.0, 3.0, 6.0),
        (Operation.DIVIDE, 3.0, 2.0, 1.5),
        (Operation.NEGATE, 0.0, 3.0, -3.0),
        (Operation.PERCENT, 0.0, 50.0, 0.5),
        (Operation.EQUALS, 2.0, 3.0, 3.0),
    ])
    def test_operations(self, operation, a, b, expected):
        assert apply_operation(operation, a, b) == expected

    def test_divide_by_zero_follows_ieee(self):
        assert apply_operation(Operation.DIVIDE, 1.0, 0.0) == math.inf
        assert apply_operation(Operation.DIVIDE, -1.0, 0.0) == -math.inf
        assert apply_operation(Operation.DIVIDE, 1.0, -0.0) == -math.inf
        assert math.isnan(apply_operation(Operation.DIVIDE, 0.0, 0.0))

    def test_operation_values_are_keypad_tokens(self):
        assert [op.value for op in Operation] == ["+", "-", "×", "÷", "±", "%", "="]
