"""Interactive question flow for the init workflow."""
from .engine import ConsolePrompter, Prompter, QuestionFlow
from .questions import (
    CLOUD_QUESTIONS,
    PROJECT_QUESTIONS,
    VPS_QUESTIONS,
    Choice,
    Question,
    QuestionKind,
    finalize_primary,
    target_questions,
)

__all__ = [
    "CLOUD_QUESTIONS",
    "PROJECT_QUESTIONS",
    "VPS_QUESTIONS",
    "Choice",
    "ConsolePrompter",
    "Prompter",
    "Question",
    "QuestionFlow",
    "QuestionKind",
    "finalize_primary",
    "target_questions",
]
