"""Rule resolver: turns one attribute's declarative rule-set into runnable rules.

Resolution happens on every validation call, so a rule-set edited between
calls is always honored.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import structlog

from attrguard.exceptions import InvalidRuleSpec
from attrguard.validators.models import RuleKind, RULE_ALIASES, EMPTY_OK_KEYS
from attrguard.validators.testers import Tester, get_tester

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class ResolvedRule:
    """One concrete rule ready to run.

    Attributes
    ----------
    kind:      Which built-in (or CUSTOM) rule this is.
    name:      The key exactly as declared in the rule-set.
    tester:    Callable ``(value, arg, attribute) -> message | None``.
    arg:       Static argument from the rule-set (None for CUSTOM).
    empty_ok:  Suppress failures when the candidate value is empty.
    """

    kind: RuleKind
    name: str
    tester: Tester
    arg: Any
    empty_ok: bool = False

    def run(self, value: Any, attribute: str) -> Optional[str]:
        return self.tester(value, self.arg, attribute)


def parse_rule_kind(key: str) -> Optional[RuleKind]:
    """Map a rule-set key to a RuleKind, or None if it is not a rule we know."""
    if key in RULE_ALIASES:
        return RULE_ALIASES[key]
    try:
        return RuleKind(key)
    except ValueError:
        return None


def resolve_rules(rule_spec: Mapping[str, Any], attribute: str = "") -> list[ResolvedRule]:
    """Expand ``rule_spec`` into ResolvedRules, keeping declaration order.

    Unknown keys are ignored. ``empty_ok`` applies to every rule of the attribute.
    """
    if not isinstance(rule_spec, Mapping):
        raise InvalidRuleSpec(attribute, rule_spec)

    empty_ok = any(bool(rule_spec.get(key)) for key in EMPTY_OK_KEYS)
    rules: list[ResolvedRule] = []

    for key, arg in rule_spec.items():
        if key in EMPTY_OK_KEYS:
            continue

        kind = parse_rule_kind(key)
        if kind is None:
            logger.debug("unknown_rule_ignored", attribute=attribute, rule=key)
            continue

        if kind is RuleKind.CUSTOM:
            if not callable(arg):
                logger.debug("custom_rule_not_callable", attribute=attribute)
                continue
            rules.append(ResolvedRule(kind=kind, name=key, tester=arg, arg=None, empty_ok=empty_ok))
        else:
            rules.append(ResolvedRule(kind=kind, name=key, tester=get_tester(kind), arg=arg, empty_ok=empty_ok))

    return rules
