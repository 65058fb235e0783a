"""Attribute validation engine: testers, rule resolution, change detection and fallback.

Usage:
    from attrguard.validators import validation_engine

    outcome = validation_engine.validate(model, {"title": False})
    if outcome is not None:
        # assignment rejected; see outcome.errors
"""

from attrguard.validators.base import ValidatedHost
from attrguard.validators.changes import changed_attributes
from attrguard.validators.engine import ValidationEngine, validation_engine
from attrguard.validators.models import AttributeValidationError, RuleKind, ValidationOutcome
from attrguard.validators.resolver import ResolvedRule, resolve_rules
from attrguard.validators.testers import TESTERS, format_message

__all__ = [
    "ValidationEngine",
    "validation_engine",
    "ValidatedHost",
    "ValidationOutcome",
    "AttributeValidationError",
    "RuleKind",
    "ResolvedRule",
    "resolve_rules",
    "changed_attributes",
    "TESTERS",
    "format_message",
]
