"""Database models for the form intake service"""

from form_intake.models.submission import (
    EvaluationResponse,
    ExpectationResponse,
    FormationResponse,
)

__all__ = [
    "EvaluationResponse",
    "FormationResponse",
    "ExpectationResponse",
]
