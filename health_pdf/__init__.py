"""Hand-written PDF export for health records.

Three layers, each usable on its own: ``layout.TextLayout`` decides where
lines go and when a page breaks, ``stream.ContentStream`` turns that into text
operators, and ``assembler.assemble`` wraps the finished pages in the object
table, cross-reference table and trailer.
"""
from health_pdf.assembler import PdfAssembler, assemble
from health_pdf.documents import build_fitness_report, build_health_summary
from health_pdf.summary import FitnessSummary, summarize_fitness

__all__ = [
    "PdfAssembler",
    "assemble",
    "build_fitness_report",
    "build_health_summary",
    "FitnessSummary",
    "summarize_fitness",
]
