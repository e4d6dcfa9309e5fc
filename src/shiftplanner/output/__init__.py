"""Output generation for schedules."""

from shiftplanner.output.pdf_generator import PDFGenerator
from shiftplanner.output.text_generator import TextReportGenerator

__all__ = [
    "PDFGenerator",
    "TextReportGenerator",
]
