"""
Constants for the Excel Regression Analyzer.

Centralises accepted file types, user-facing messages, number
formats, colour palettes, font families, and export settings.
"""

# ── Accepted input files ─────────────────────────────────────────────────
XLSX_MIME_TYPE = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)
CSV_MIME_TYPES = frozenset(("text/csv", "application/csv"))

WORKBOOK_EXTENSIONS = (".xlsx", ".xlsm")
CSV_EXTENSIONS = (".csv",)
SUPPORTED_EXTENSIONS = WORKBOOK_EXTENSIONS + CSV_EXTENSIONS

FILE_DIALOG_FILTER = (
    "Data Files (*.xlsx *.xlsm *.csv);;"
    "Excel Workbooks (*.xlsx *.xlsm);;"
    "CSV Files (*.csv);;"
    "All Files (*)"
)

# Files above this size trigger a warning (no streaming support)
LARGE_FILE_BYTES = 100 * 1024 * 1024

# Header names given to blank header cells: __EMPTY, __EMPTY_1, ...
EMPTY_HEADER_NAME = "__EMPTY"

# ── User-facing messages ─────────────────────────────────────────────────
MSG_UNSUPPORTED_FILE = "Please upload a valid Excel (.xlsx) or CSV (.csv) file."
MSG_EMPTY_FILE = "The uploaded file is empty or could not be read."
MSG_PARSE_FAILED = "Failed to parse the file. Please ensure it is a valid format."
MSG_SELECT_COLUMNS = "Please select both X and Y axis columns to display the chart."
MSG_INSUFFICIENT_DATA = "Not enough valid points for a regression line."
MSG_NO_POINTS = "No valid data points"
MSG_LOADING = "Parsing your file..."

# ── Number formatting ────────────────────────────────────────────────────
STAT_DECIMALS = 4        # R², slope, intercept cards
EQUATION_DECIMALS = 2    # y = mx + b
NOT_AVAILABLE = "n/a"

# ── GUI fonts, first installed family wins ───────────────────────────────
FONT_FAMILIES = (
    "Inter", "Segoe UI", "DejaVu Sans", "Noto Sans", "Helvetica", "Arial",
)

# ── Dark GUI palette ─────────────────────────────────────────────────────
DARK_COLORS = {
    'bg':         '#1e1e2e',   # window
    'bg_alt':     '#252536',   # cards, status bar, chart figure
    'surface0':   '#313244',
    'bg_widget':  '#2a2a3c',
    'bg_input':   '#333348',
    'fg':         '#cdd6f4',
    'fg_dim':     '#9399b2',
    'fg_bright':  '#ffffff',
    'accent':     '#89b4fa',
    'cyan':       '#22d3ee',
    'green':      '#a6e3a1',   # loaded / equation
    'yellow':     '#f9e2af',   # loading
    'red':        '#f38ba8',   # error
    'border':     '#45475a',
    'overlay0':   '#6c7086',
    'selection':  '#585b70',
}

# ── Chart colours ────────────────────────────────────────────────────────
PLOT_PALETTE = {
    'points':          '#22d3ee',   # scatter markers (GUI)
    'points_export':   '#0033A1',   # scatter markers on white background
    'fit_line':        '#10b981',   # regression segment
    'fit_line_export': '#C00000',
}

# ── Chart size and export resolution ─────────────────────────────────────
DEFAULT_FIGSIZE = (7, 5)
EXPORT_DPI = 600
EXPORT_WIDTH_INCHES = 6.0
CLIPBOARD_DPI = 150

_PLOT_FONT_SIZES = {
    'axes.titlesize': 10,
    'axes.labelsize': 8,
    'xtick.labelsize': 7,
    'ytick.labelsize': 7,
    'legend.fontsize': 7,
}


def _plot_style(figure, axes, edge, text, ticks, grid, legend_edge):
    """matplotlib rcParams for one chart theme."""
    return {
        'figure.facecolor': figure,
        'axes.facecolor': axes,
        'axes.edgecolor': edge,
        'axes.labelcolor': text,
        'text.color': text,
        'xtick.color': ticks,
        'ytick.color': ticks,
        'grid.color': grid,
        'legend.facecolor': axes,
        'legend.edgecolor': legend_edge,
        **_PLOT_FONT_SIZES,
    }


# GUI preview
PLOT_STYLE_DARK = _plot_style(
    figure=DARK_COLORS['bg_alt'], axes=DARK_COLORS['bg_widget'],
    edge=DARK_COLORS['border'], text=DARK_COLORS['fg'],
    ticks=DARK_COLORS['fg_dim'], grid=DARK_COLORS['border'],
    legend_edge=DARK_COLORS['border'],
)

# PNG export and clipboard
PLOT_STYLE_LIGHT = _plot_style(
    figure='#ffffff', axes='#ffffff', edge='#333333', text='#1a1a2e',
    ticks='#333333', grid='#cccccc', legend_edge='#999999',
)
