"""Validation Engine: runs attribute rules for a model and applies default fallback.

This is the hook a model calls on every validated assignment.

Usage:
    engine = ValidationEngine(use_defaults=True)
    outcome = engine.validate(model, {"title": False})
    if outcome:
        # assignment rejected; outcome.errors says why
"""

import copy
import time
from typing import Any, Mapping, Optional

import structlog

from attrguard.config import get_settings
from attrguard.validators.base import ValidatedHost
from attrguard.validators.changes import changed_attributes
from attrguard.validators.models import AttributeValidationError, ValidationOutcome
from attrguard.validators.resolver import ResolvedRule, resolve_rules

logger = structlog.get_logger()


def is_empty(value: Any) -> bool:
    """None, or anything with a length of zero. False and 0 are not empty."""
    if value is None:
        return True
    try:
        return len(value) == 0
    except TypeError:
        return False


def run_rules(rules: list[ResolvedRule], value: Any, attribute: str) -> list[AttributeValidationError]:
    """Run every rule in order and collect all failures (no short-circuit)."""
    errors: list[AttributeValidationError] = []
    empty = is_empty(value)

    for rule in rules:
        result = rule.run(value, attribute)
        if not result:
            continue
        if rule.empty_ok and empty:
            continue
        errors.append(AttributeValidationError(attribute=attribute, rule=rule.name, message=str(result)))

    return errors


class ValidationEngine:
    """Validates changed attributes against their declared rule-sets.

    Design principles:
        - Synchronous: every rule runs to completion before the call returns
        - Stateless across calls: rule-sets and defaults are re-read each time
        - Complete: all failures for all changed attributes are reported
        - Non-reentrant fallback: defaults go through ``set_raw`` only
    """

    def __init__(self, use_defaults: Optional[bool] = None):
        """Initialize the engine.

        Args:
            use_defaults: Engine-wide fallback flag. If None, taken from Settings.
        """
        self.use_defaults = get_settings().USE_DEFAULTS if use_defaults is None else use_defaults

    def fallback_enabled(self, model: ValidatedHost, options: Optional[Mapping[str, Any]] = None) -> bool:
        """Per-call option wins, then the model's flag, then the engine's."""
        options = options or {}
        if options.get("use_defaults") is not None:
            return bool(options["use_defaults"])
        if model.use_defaults is not None:
            return bool(model.use_defaults)
        return self.use_defaults

    def validate(
        self,
        model: ValidatedHost,
        incoming: Mapping[str, Any],
        options: Optional[Mapping[str, Any]] = None,
    ) -> Optional[ValidationOutcome]:
        """Validate an incoming attribute bag for ``model``.

        Args:
            model: Host model providing rule-sets, defaults and storage
            incoming: Attributes being assigned (may be a partial set)
            options: Assignment options; ``use_defaults`` overrides fallback for this call

        Returns:
            ValidationOutcome with every failure, or None if nothing failed
        """
        start_time = time.perf_counter()

        changed = changed_attributes(model.snapshot(), incoming)
        all_errors, rules_by_attr = self._collect(model, changed, incoming)

        outcome = ValidationOutcome.build(all_errors)
        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)

        if outcome is None:
            logger.debug("validation_complete", passed=True, changed=changed, duration_ms=duration_ms)
            return None

        logger.info(
            "validation_complete",
            passed=False,
            changed=changed,
            failing=outcome.attributes,
            total_errors=len(outcome),
            duration_ms=duration_ms,
        )

        if self.fallback_enabled(model, options):
            outcome = self.apply_defaults(model, outcome, rules_by_attr)

        return outcome

    def check(self, model: ValidatedHost, attributes: Mapping[str, Any]) -> Optional[ValidationOutcome]:
        """Run rules over every given attribute, changed or not. Never applies defaults."""
        errors, _ = self._collect(model, list(attributes), attributes)
        return ValidationOutcome.build(errors)

    def _collect(
        self,
        model: ValidatedHost,
        names: list[str],
        values: Mapping[str, Any],
    ) -> tuple[list[AttributeValidationError], dict[str, list[ResolvedRule]]]:
        errors: list[AttributeValidationError] = []
        rules_by_attr: dict[str, list[ResolvedRule]] = {}

        for attr in names:
            rule_spec = model.rule_spec_for(attr)
            # No rule-set means nothing to enforce
            if not rule_spec:
                continue
            rules = resolve_rules(rule_spec, attr)
            rules_by_attr[attr] = rules
            errors.extend(run_rules(rules, values[attr], attr))

        return errors, rules_by_attr

    def apply_defaults(
        self,
        model: ValidatedHost,
        outcome: ValidationOutcome,
        rules_by_attr: Mapping[str, list[ResolvedRule]],
    ) -> ValidationOutcome:
        """Write declared defaults for failing attributes, then notify once.

        A default is only written if it passes the attribute's own rules;
        otherwise its failures are appended to the outcome.
        """
        errors = list(outcome.errors)

        for attr in outcome.attributes:
            if not model.has_default(attr):
                continue

            default = model.default_for(attr)
            default_errors = run_rules(rules_by_attr.get(attr, []), default, attr)
            if default_errors:
                logger.warning("default_rejected", attribute=attr, total_errors=len(default_errors))
                errors.extend(default_errors)
                continue

            model.set_raw(attr, copy.deepcopy(default))
            logger.info("default_applied", attribute=attr)

        outcome = ValidationOutcome(errors=errors)
        model.notify_failure(outcome)
        return outcome


# Module-level singleton
validation_engine = ValidationEngine()
