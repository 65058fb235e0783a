"""Validation models: rule kinds, per-attribute errors and the outcome of a run.

A run never raises for a failing rule; failures are data collected here.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class RuleKind(str, Enum):
    """Every rule kind the resolver knows about.

    Values are the canonical (snake_case) names used in rule-sets.
    """

    RANGE = "range"
    IS_TYPE = "is_type"
    REGEX = "regex"
    IN_LIST = "in_list"
    IS_KEY = "is_key"
    MAX_LENGTH = "max_length"
    MIN_LENGTH = "min_length"
    TO_EQUAL = "to_equal"
    MIN_VALUE = "min_value"
    MAX_VALUE = "max_value"
    IS_INSTANCE = "is_instance"

    # Inline user predicate
    CUSTOM = "fn"


# camelCase spellings found in older rule-sets
RULE_ALIASES = {
    "isType": RuleKind.IS_TYPE,
    "inList": RuleKind.IN_LIST,
    "isKey": RuleKind.IS_KEY,
    "maxLength": RuleKind.MAX_LENGTH,
    "minLength": RuleKind.MIN_LENGTH,
    "toEqual": RuleKind.TO_EQUAL,
    "minValue": RuleKind.MIN_VALUE,
    "maxValue": RuleKind.MAX_VALUE,
    "isInstance": RuleKind.IS_INSTANCE,
}

# Rule-set keys that configure the attribute instead of naming a rule
EMPTY_OK_KEYS = ("empty_ok", "emptyOk")


class AttributeValidationError(BaseModel):
    """A single failed rule for one attribute."""

    attribute: str
    rule: str                 # Rule name as declared, "fn" for custom rules
    message: str


class ValidationOutcome(BaseModel):
    """Flat list of failures from one validation call.

    Ordered by attribute (incoming order) then by rule declaration order.
    The engine hands back ``None`` instead of an empty outcome.
    """

    errors: list[AttributeValidationError] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def attributes(self) -> list[str]:
        """Failing attribute names, in first-seen order."""
        seen: list[str] = []
        for err in self.errors:
            if err.attribute not in seen:
                seen.append(err.attribute)
        return seen

    @property
    def messages(self) -> list[str]:
        return [err.message for err in self.errors]

    def for_attribute(self, attribute: str) -> list[AttributeValidationError]:
        return [err for err in self.errors if err.attribute == attribute]

    def rules_for(self, attribute: str) -> list[str]:
        """Names of the rules that failed for ``attribute``."""
        return [err.rule for err in self.for_attribute(attribute)]

    def __len__(self) -> int:
        return len(self.errors)

    @classmethod
    def build(cls, errors: list[AttributeValidationError]) -> Optional["ValidationOutcome"]:
        """Wrap collected errors, or return None when there are none."""
        if not errors:
            return None
        return cls(errors=list(errors))
