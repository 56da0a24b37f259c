"""Merge utilities for the :mod:`imagebank` pipeline."""

from __future__ import annotations

from .combiner import DocumentCombiner
from .merger import merge_documents

__all__ = ["DocumentCombiner", "merge_documents"]
