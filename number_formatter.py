"""
Formato y lectura de los números que aparecen en la pantalla.

El formato es independiente del locale del sistema: punto como separador
decimal, coma como separador de miles (grupos de 3) y notación científica
a partir de 1e16. Ambas funciones son totales: nunca lanzan excepciones.

Contrato de interfaz:
    - format_number(value: float) -> str
    - parse_number(text: str) -> float
"""

import math
import re
from decimal import ROUND_HALF_EVEN, Decimal, localcontext


SCIENTIFIC_THRESHOLD = 1e16
MAX_FRACTION_DIGITS = 100
GROUPING_SEPARATOR = ","
DECIMAL_SEPARATOR = "."
EXPONENT_MARKER = "E"

NAN_TEXT = "NaN"
INFINITY_TEXT = "∞"

_SPECIAL_VALUES = {
    NAN_TEXT: math.nan,
    INFINITY_TEXT: math.inf,
    "-" + INFINITY_TEXT: -math.inf,
}

_NUMBER_RE = re.compile(
    r"^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$"
)

# Precisión holgada para cuantizar a 100 decimales sin InvalidOperation.
_WORKING_PRECISION = 400


# ── Formato ──────────────────────────────────────────────────────

def format_number(value: float) -> str:
    """Devuelve el texto canónico de pantalla para ``value``.

    Usa los dígitos más cortos que reproducen el double (los mismos que
    ``repr``), de modo que ``parse_number`` recupera el valor original.
    NaN e infinitos se muestran como "NaN", "∞" y "-∞".
    """
    value = float(value)

    if math.isnan(value):
        return NAN_TEXT
    if math.isinf(value):
        return INFINITY_TEXT if value > 0 else "-" + INFINITY_TEXT
    if value == 0:
        return "0"

    number = Decimal(repr(value))
    if abs(value) > SCIENTIFIC_THRESHOLD:
        return _format_scientific(number)
    return _format_decimal(number)


def _format_scientific(number: Decimal) -> str:
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        number = number.normalize()

    sign, digits, _exponent = number.as_tuple()
    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += DECIMAL_SEPARATOR + "".join(str(d) for d in digits[1:])

    prefix = "-" if sign else ""
    return f"{prefix}{mantissa}{EXPONENT_MARKER}{number.adjusted()}"


def _format_decimal(number: Decimal) -> str:
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        if number.as_tuple().exponent < -MAX_FRACTION_DIGITS:
            number = number.quantize(
                Decimal(1).scaleb(-MAX_FRACTION_DIGITS),
                rounding=ROUND_HALF_EVEN,
            )
        number = number.normalize()

    # Valores por debajo de 1e-100 se redondean a cero
    if number.is_zero():
        return "0"

    return format(number, ",f")


# ── Lectura ──────────────────────────────────────────────────────

def parse_number(text: str) -> float:
    """Convierte el texto de pantalla en número.

    Ignora los separadores de miles y reconoce los textos especiales que
    produce ``format_number``. Cualquier otro texto no numérico (incluida
    la cadena vacía) vale 0.
    """
    if not isinstance(text, str):
        return 0.0

    text = text.strip().replace(GROUPING_SEPARATOR, "")
    if text in _SPECIAL_VALUES:
        return _SPECIAL_VALUES[text]
    if not _NUMBER_RE.fullmatch(text):
        return 0.0
    return float(text)
