"""Orchestrator - runs extraction and reports activity."""

from .runner import ExtractionReport, ExtractionRunner

__all__ = [
    "ExtractionRunner",
    "ExtractionReport",
]
