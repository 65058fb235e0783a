"""Exceptions raised by attrguard.

Rule failures are never raised; they are returned as a ValidationOutcome.
These cover misconfiguration only.
"""


class AttrGuardError(Exception):
    """Base class for attrguard errors."""


class InvalidRuleSpec(AttrGuardError):
    """An attribute's rule-set is not a mapping of rule name to argument."""

    def __init__(self, attribute: str, rule_spec: object):
        self.attribute = attribute
        self.rule_spec = rule_spec
        super().__init__(
            f"Rule-set for '{attribute}' must be a mapping, got {type(rule_spec).__name__}"
        )
