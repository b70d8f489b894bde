"""
Models package for studiolex

Contains data structures and type definitions for the tokenizer and the
highlighting pipeline.
"""

from .state import ProgramState, pipeline
from .tokens import Category, Token, PYGMENTS_TOKENS
from .rules import (
    LexState,
    Rule,
    Include,
    EmitSimple,
    EmitGrouped,
    EmitAndRecordContext,
    HeredocTerminatorCheck,
    Push,
    Pop,
    PopPush,
)
from .scan import ScanContext, ScanCursor

__all__ = [
    "ProgramState",
    "pipeline",
    "Category",
    "Token",
    "PYGMENTS_TOKENS",
    "LexState",
    "Rule",
    "Include",
    "EmitSimple",
    "EmitGrouped",
    "EmitAndRecordContext",
    "HeredocTerminatorCheck",
    "Push",
    "Pop",
    "PopPush",
    "ScanContext",
    "ScanCursor",
]
