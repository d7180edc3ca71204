"""
Excel Regression Analyzer v1.0.0

Desktop tool for quick two-variable regression on tabular data.
Loads one spreadsheet (.xlsx, first sheet) or CSV file, offers the
columns whose every value is numeric, and plots the chosen X/Y pair
as a scatter with an ordinary-least-squares line, R², slope and
intercept.
"""

APP_NAME = "Excel Regression Analyzer"
APP_VERSION = "1.0.0"
APP_DATE = "2026-10-19"
__version__ = APP_VERSION
