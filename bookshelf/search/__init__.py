"""
Search module for cross-script catalog search.

Provides the phonetic pattern compiler for romanized Bengali queries,
the literal pattern builder for Latin matches, the query evaluator and
the catalog search engine, plus the shared models.
"""

from .models import (
    AlternationGroup,
    FlexibleGap,
    PhoneticPattern,
    LiteralPattern,
    SearchQuery,
    SearchStats,
    ResultSet
)
from .phonetic_compiler import PhoneticCompiler, compile_phonetic, describe
from .literal_pattern import LiteralPatternBuilder
from .evaluator import QueryEvaluator
from .catalog_engine import CatalogSearchEngine

__all__ = [
    "AlternationGroup",
    "FlexibleGap",
    "PhoneticPattern",
    "LiteralPattern",
    "SearchQuery",
    "SearchStats",
    "ResultSet",
    "PhoneticCompiler",
    "compile_phonetic",
    "describe",
    "LiteralPatternBuilder",
    "QueryEvaluator",
    "CatalogSearchEngine"
]
