"""Spreadsheet-driven visual novel engine."""

__version__ = "0.1.0"
