"""Functional core - pure journal logic with no I/O."""

from .errors import ParseError, TransportError
from .questions import DEFAULT_QUESTIONS, QuestionDef, QuestionKind, parse_questions
from .entries import Entry, FormSession, build_entry, generate_id
from .series import DataPoint, METRICS, project
from .export import from_json, to_csv, to_json

__all__ = [
    # Errors
    "ParseError",
    "TransportError",
    # Questions
    "DEFAULT_QUESTIONS",
    "QuestionDef",
    "QuestionKind",
    "parse_questions",
    # Entries
    "Entry",
    "FormSession",
    "build_entry",
    "generate_id",
    # Series
    "DataPoint",
    "METRICS",
    "project",
    # Export
    "from_json",
    "to_csv",
    "to_json",
]
