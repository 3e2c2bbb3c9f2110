"""
Interfaz gráfica de la calculadora de teclado.

Usa tkinter. La ventana no calcula nada: cada botón o tecla envía su
token a CalculatorEngine y vuelve a pintar el texto de pantalla.
"""

import tkinter as tk
from tkinter import font as tkfont

from calculator_engine import CalculatorEngine


# ═════════════════════════════════════════════════════════════════
#  Aplicación principal
# ═════════════════════════════════════════════════════════════════

class CalculatorApp:
    """Ventana principal de la calculadora."""

    # ── Paleta de colores ────────────────────────────────────────
    #  Cada tipo de botón usa un par (fondo, fondo activo)

    C = {
        "bg":           "#1E1E2E",
        "display_bg":   "#181825",
        "display_fg":   "#CDD6F4",
        "number":       "#313244",
        "number_on":    "#414345",
        "operation":    "#FF8008",
        "operation_on": "#FFA84C",
        "control":      "#B83737",
        "control_on":   "#FF5858",
        "function":     "#45475A",
        "function_on":  "#616365",
        "button_fg":    "#FFFFFF",
    }

    # ── Definiciones del teclado ─────────────────────────────────
    #  Cada fila es una lista de (token, tipo_botón, columnas)

    KEYPAD = [
        [("C", "control", 1), ("±", "function", 1),
         ("%", "function", 1), ("÷", "operation", 1)],

        [("7", "number", 1), ("8", "number", 1),
         ("9", "number", 1), ("×", "operation", 1)],

        [("4", "number", 1), ("5", "number", 1),
         ("6", "number", 1), ("-", "operation", 1)],

        [("1", "number", 1), ("2", "number", 1),
         ("3", "number", 1), ("+", "operation", 1)],

        [("0", "number", 2), (".", "number", 1), ("=", "operation", 1)],
    ]

    # ── Atajos de teclado físico → token ─────────────────────────

    KEY_ALIASES = {
        "*": "×",
        "/": "÷",
        "c": "C",
        "<Return>": "=",
        "<KP_Enter>": "=",
        "<Escape>": "C",
    }

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, engine=None):
        self.root = root
        self.root.title("Calculadora")
        self.root.configure(bg=self.C["bg"])
        self.root.resizable(False, False)

        self.engine = engine if engine is not None else CalculatorEngine()

        self._init_fonts()
        self._create_display()
        self._create_keypad()
        self._bind_keyboard()
        self._refresh()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_display = tkfont.Font(family="Segoe UI", size=36)
        self._f_btn     = tkfont.Font(family="Segoe UI", size=20, weight="bold")

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        self.display_var = tk.StringVar(value="0")
        tk.Label(
            frame, textvariable=self.display_var,
            font=self._f_display, bg=self.C["display_bg"],
            fg=self.C["display_fg"], anchor="e",
        ).pack(fill="x", pady=(12, 4))

    # ── Teclado ──────────────────────────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        max_cols = max(sum(span for _, _, span in row) for row in self.KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            col_pos = 0
            for token, kind, span in row_def:
                btn = tk.Button(
                    frame, text=token, font=self._f_btn,
                    bg=self.C[kind], fg=self.C["button_fg"],
                    activebackground=self.C[f"{kind}_on"],
                    relief="flat",
                    command=lambda t=token: self.press(t),
                )
                btn.grid(row=r, column=col_pos, columnspan=span,
                         sticky="nsew", padx=2, pady=2, ipady=10)
                col_pos += span
            frame.rowconfigure(r, weight=1)

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_key)
        for sequence in ("<Return>", "<KP_Enter>", "<Escape>"):
            self.root.bind(
                sequence, lambda _e, s=sequence: self.press(self.KEY_ALIASES[s])
            )

    def _on_key(self, event):
        char = event.char
        if not char:
            return
        self.press(self.KEY_ALIASES.get(char, char))

    # ── Acciones ─────────────────────────────────────────────────

    def press(self, token: str):
        self.engine.handle_input(token)
        self._refresh()

    def _refresh(self):
        self.display_var.set(self.engine.display_value())
