"""attrguard: declarative per-attribute validation for data-model objects."""

from attrguard.config import Settings, get_settings
from attrguard.exceptions import AttrGuardError, InvalidRuleSpec
from attrguard.log_config import configure_logging
from attrguard.models import Model
from attrguard.validators import (
    AttributeValidationError,
    RuleKind,
    ValidatedHost,
    ValidationEngine,
    ValidationOutcome,
    validation_engine,
)

__version__ = "0.1.0"

__all__ = [
    "Model",
    "ValidationEngine",
    "validation_engine",
    "ValidatedHost",
    "ValidationOutcome",
    "AttributeValidationError",
    "RuleKind",
    "AttrGuardError",
    "InvalidRuleSpec",
    "Settings",
    "get_settings",
    "configure_logging",
]
