"""Spreadsheet storage and serialization."""
