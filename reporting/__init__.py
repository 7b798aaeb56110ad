"""Aggregation and export of survey responses"""
from .results_engine import ResultsEngine, safe_float
from .exporters import CsvExporter, PdfExporter

__all__ = ["ResultsEngine", "CsvExporter", "PdfExporter", "safe_float"]
