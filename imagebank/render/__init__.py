"""Intermediate document rendering for the :mod:`imagebank` pipeline."""

from __future__ import annotations

from .base import DocumentWriter, WriterFactory
from .builder import build_document, draw_chunk, write_durably
from .orchestrator import generate_documents
from .reportlab_writer import ReportLabWriter, wrap_caption

__all__ = [
    "DocumentWriter",
    "WriterFactory",
    "ReportLabWriter",
    "build_document",
    "draw_chunk",
    "generate_documents",
    "wrap_caption",
    "write_durably",
]
