"""Extraction of RPG Maker MV/MZ text into .txt pools and reinjection."""

from .config import EngineConfig, LogMessages, ProcessingMode
from .engine import ExtractReport, InjectReport, extract, inject
from .errors import EngineError, IOFailure, PoolMismatch, SchemaViolation
from .extractor import CorpusExtractor
from .injector import CorpusInjector, InjectStats

__all__ = [
    "CorpusExtractor",
    "CorpusInjector",
    "EngineConfig",
    "EngineError",
    "ExtractReport",
    "IOFailure",
    "InjectReport",
    "InjectStats",
    "LogMessages",
    "PoolMismatch",
    "ProcessingMode",
    "SchemaViolation",
    "extract",
    "inject",
]
