"""
Entry point for the Excel Regression Analyzer.

Usage:
    python -m regression_analyzer [FILE]
    regression-analyzer [FILE]
"""

import argparse
import importlib.util
import os
import sys
import traceback

from . import APP_NAME, APP_VERSION

REQUIRED_PACKAGES = ("PySide6", "matplotlib", "numpy", "scipy", "openpyxl")


def _missing_packages():
    return [name for name in REQUIRED_PACKAGES
            if importlib.util.find_spec(name) is None]


def _report_unhandled(exc_type, exc_value, exc_tb):
    """sys.excepthook: print the traceback and, with a running app, show it."""
    text = ''.join(traceback.format_exception(exc_type, exc_value, exc_tb))
    print(f"[Regression] Unhandled exception:\n{text}", file=sys.stderr)

    from PySide6.QtWidgets import QApplication, QMessageBox
    if QApplication.instance() is None:
        return
    QMessageBox.critical(
        None, "Unhandled Error",
        f"{exc_type.__name__}: {exc_value}\n\n"
        f"The full traceback was written to the console.",
    )


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        prog="regression-analyzer",
        description="Scatter plot and least-squares line for two numeric "
                    "columns of an Excel or CSV file.",
    )
    parser.add_argument("file", nargs="?",
                        help=".xlsx, .xlsm or .csv file to open on start")
    parser.add_argument("--version", action="version",
                        version=f"{APP_NAME} {APP_VERSION}")
    # Qt consumes its own options (-style, -platform, ...)
    args, _ = parser.parse_known_args(argv)
    return args


def main(argv=None):
    """Launch the Excel Regression Analyzer GUI."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    missing = _missing_packages()
    if missing:
        print(f"Missing required packages: {', '.join(missing)}\n"
              f"Install with: pip install {' '.join(missing)}",
              file=sys.stderr)
        return 1

    sys.excepthook = _report_unhandled

    # Backend must be chosen before any Qt widget module is imported
    os.environ.setdefault("QT_API", "pyside6")
    import matplotlib
    matplotlib.use('QtAgg')

    from PySide6.QtGui import QFont, QFontDatabase
    from PySide6.QtWidgets import QApplication

    from .constants import FONT_FAMILIES
    from .gui_main import RegressionMainWindow
    from .theme import get_dark_stylesheet

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setStyle("Fusion")

    available = set(QFontDatabase.families())
    font = QFont(next((f for f in FONT_FAMILIES if f in available), ""))
    font.setPointSize(10)
    app.setFont(font)
    app.setStyleSheet(get_dark_stylesheet())

    window = RegressionMainWindow()
    window.show()
    if args.file:
        window.start_load(args.file)

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
