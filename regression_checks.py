from calculator_engine import CalculatorEngine
from number_formatter import format_number, parse_number
import sys


def _split_tokens(sequence: str) -> list[str]:
	return sequence.split()


def _walk(sequence: str):
	engine = CalculatorEngine()
	states = []

	for token in _split_tokens(sequence):
		engine.handle_input(token)
		states.append((token, engine.snapshot()))

	return engine.display_value(), states


def inspect_sequence(sequence: str) -> None:
	"""Imprime el estado del motor tras cada pulsación de la secuencia."""
	display, states = _walk(sequence)

	print("Sequence inspection")
	print(f"tokens:         {sequence}")
	print(f"total tokens:   {len(states)}")

	if not states:
		print("states:         (no tokens)")
		print(f"final display:  {display}")
		return

	print("states:")
	for i, (token, state) in enumerate(states, start=1):
		print(
			f"  {i}. {token!r:>5} -> display={state['display']!r}"
			f" operand={state['operand']!r}"
			f" operation={state['operation']!r}"
			f" new_entry={state['needs_new_entry']}"
			f" last={state['last_operand']!r}"
		)

	print(f"final display:  {display}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	for sequence, expected in [
		("C 1 2 3", "123"),
		("C 7 + 3 =", "10"),
		("C 7 + 3 = =", "13"),
		("C 5 - =", "0"),
		("C 9 ±", "-9"),
		("C 8 %", "0.08"),
		("C 4 + × 2 =", "8"),
		("C 7 + 3 = × 2 =", "20"),
		("C 7 + 3 = + 1 =", "11"),
		("C 1 . . 5", "1.5"),
		("C 2 + 3 × 4 =", "20"),
		("C 9 9 9 + 1 =", "1,000"),
		("C 1 0 0 0 0 0 0 0 0 0 0 × 1 0 0 0 0 0 0 0 0 0 0 =", "1E20"),
		("C 1 ÷ 0 =", "∞"),
		("C 0 ÷ 0 =", "NaN"),
		("C 1 + 2 C", "0"),
		("C 5 x ? 3", "53"),
	]:
		display, _ = _walk(sequence)
		expected_actual.append((sequence, expected, display))
		checks.append((f"{sequence} displays {expected}", display == expected))

	_, states_chain = _walk("C 1 2 + 3 0 - 2 =")
	checks.append((
		"chained operator resolves previous operation",
		any(state["display"] == "42" and token == "-" for token, state in states_chain),
	))

	_, states_change = _walk("C 4 + ×")
	checks.append((
		"second operator only replaces pending operation",
		states_change[-1][1]["operation"] == "×" and states_change[-1][1]["operand"] == 4.0,
	))

	_, states_repeat = _walk("C 7 + 3 = 5")
	checks.append((
		"digit after equals clears last operand",
		states_repeat[-1][1]["last_operand"] is None,
	))

	for sequence in ("C 1 2 3 4 5 6 7 + 1 =", "C 1 ÷ 3 =", "C 2 ÷ 3 × 1 0 0 0 =", "C 1 2 %"):
		display, _ = _walk(sequence)
		checks.append((
			f"{sequence} display round-trips through the formatter",
			format_number(parse_number(display)) == display,
		))

	failed = [name for name, ok in checks if not ok]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect "C 7 + 3 = ="
	if "--inspect" in sys.argv:
		try:
			sequence = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing token sequence after --inspect")

		inspect_sequence(sequence)
	else:
		run_regressions()
