"""Punto de entrada de la calculadora."""

import logging
import tkinter as tk

from calculator_engine import CalculatorEngine
from calculator_ui import CalculatorApp


LOG_LEVEL = logging.INFO
WINDOW_GEOMETRY = "360x560"
WINDOW_MIN_SIZE = (320, 500)


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    root = tk.Tk()
    root.geometry(WINDOW_GEOMETRY)
    root.minsize(*WINDOW_MIN_SIZE)
    CalculatorApp(root, engine=CalculatorEngine())
    root.mainloop()


if __name__ == "__main__":
    main()
