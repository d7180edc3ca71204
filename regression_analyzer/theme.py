"""
Theme and stylesheet for the Excel Regression Analyzer.

Dark Qt stylesheet over the ``DARK_COLORS`` palette, and a helper that
pushes one of the matplotlib style dicts from ``constants`` into
rcParams.
"""

from .constants import DARK_COLORS


def get_dark_stylesheet() -> str:
    """Qt stylesheet for the whole application window."""
    c = DARK_COLORS
    return f"""
    QMainWindow, QWidget {{
        background-color: {c['bg']};
        color: {c['fg']};
        font-size: 13px;
    }}
    QLabel {{
        color: {c['fg']};
    }}
    QGroupBox {{
        border: 1px solid {c['border']};
        border-radius: 6px;
        margin-top: 12px;
        padding-top: 16px;
        font-weight: bold;
        color: {c['accent']};
    }}
    QGroupBox::title {{
        subcontrol-origin: margin;
        left: 12px;
        padding: 0 6px;
    }}

    /* File and action buttons */
    QPushButton {{
        background-color: {c['bg_widget']};
        color: {c['fg']};
        border: 1px solid {c['border']};
        border-radius: 4px;
        padding: 6px 16px;
        min-height: 24px;
    }}
    QPushButton:hover {{
        background-color: {c['selection']};
        border-color: {c['accent']};
    }}
    QPushButton:pressed {{
        background-color: {c['accent']};
        color: {c['bg']};
    }}
    QPushButton:disabled {{
        background-color: {c['bg']};
        color: {c['fg_dim']};
    }}
    QPushButton#resetButton {{
        background-color: #dc2626;
        color: {c['fg_bright']};
        border: none;
    }}
    QPushButton#resetButton:hover {{
        background-color: #b91c1c;
    }}
    QPushButton#resetButton:disabled {{
        background-color: {c['surface0']};
        color: {c['fg_dim']};
    }}

    /* X / Y column selectors */
    QComboBox {{
        background-color: {c['bg_input']};
        color: {c['fg']};
        border: 1px solid {c['border']};
        border-radius: 4px;
        padding: 4px 8px;
        min-height: 22px;
    }}
    QComboBox:focus {{
        border-color: {c['accent']};
    }}
    QComboBox::drop-down {{
        border: none;
        width: 24px;
    }}
    QComboBox QAbstractItemView {{
        background-color: {c['bg_widget']};
        color: {c['fg']};
        selection-background-color: {c['selection']};
    }}

    /* Drop zone, statistics cards, equation */
    QLabel#dropHint {{
        border: 2px dashed {c['border']};
        border-radius: 8px;
        color: {c['fg_dim']};
        padding: 18px;
    }}
    QFrame#statCard {{
        background-color: {c['bg_alt']};
        border: 1px solid {c['border']};
        border-radius: 6px;
    }}
    QLabel#statTitle {{
        color: {c['fg_dim']};
        font-size: 11px;
    }}
    QLabel#statValue {{
        color: {c['cyan']};
        font-size: 20px;
        font-weight: bold;
    }}
    QLabel#statDescription {{
        color: {c['overlay0']};
        font-size: 10px;
    }}
    QLabel#equationLabel {{
        background-color: {c['bg']};
        color: {c['green']};
        font-family: monospace;
        font-size: 15px;
        padding: 6px;
        border-radius: 4px;
    }}

    /* Audit log viewer */
    QPlainTextEdit {{
        background-color: {c['bg_input']};
        color: {c['fg']};
        border: 1px solid {c['border']};
        font-family: monospace;
    }}

    QScrollBar:vertical {{
        background-color: {c['bg']};
        width: 12px;
        border: none;
    }}
    QScrollBar::handle:vertical {{
        background-color: {c['border']};
        border-radius: 4px;
        min-height: 20px;
    }}
    QScrollBar::add-line, QScrollBar::sub-line {{
        height: 0;
        width: 0;
    }}
    QSplitter::handle {{
        background-color: {c['border']};
    }}
    QStatusBar {{
        background-color: {c['bg_alt']};
        color: {c['fg_dim']};
        border-top: 1px solid {c['border']};
    }}
    QMenuBar {{
        background-color: {c['bg_alt']};
        color: {c['fg']};
    }}
    QMenu {{
        background-color: {c['bg_widget']};
        color: {c['fg']};
        border: 1px solid {c['border']};
    }}
    QMenuBar::item:selected, QMenu::item:selected {{
        background-color: {c['selection']};
    }}
    QToolTip {{
        background-color: {c['bg_widget']};
        color: {c['fg']};
        border: 1px solid {c['accent']};
        padding: 6px;
    }}
    """


def apply_plot_style(style_dict: dict) -> None:
    """Copy *style_dict* (``PLOT_STYLE_DARK`` or ``PLOT_STYLE_LIGHT``) into rcParams."""
    import matplotlib as mpl
    mpl.rcParams.update(style_dict)
