"""Built-in testers.

A tester takes ``(value, arg, attribute)`` and returns ``None`` when the value
passes, or a human-readable message when it fails. Testers are pure: no I/O,
no mutation of their inputs.
"""

import re
from datetime import date
from numbers import Real
from typing import Any, Callable, Optional
from collections.abc import Mapping, Sized

from attrguard.validators.models import RuleKind

Tester = Callable[[Any, Any, str], Optional[str]]

_PLACEHOLDER = re.compile(r"\{(\d+)\}")

# Portable type names accepted by is_type, mapped to Python types
TYPE_NAMES: dict[str, tuple[type, ...]] = {
    "string": (str,),
    "number": (int, float),
    "boolean": (bool,),
    "object": (dict,),
    "array": (list, tuple),
    "null": (type(None),),
}


def format_message(template: str, *args: Any) -> str:
    """Substitute ``{0}``, ``{1}``... with positional args.

    Placeholders without a matching argument are left as-is.
    """
    def _sub(match: re.Match) -> str:
        index = int(match.group(1))
        return str(args[index]) if index < len(args) else match.group(0)

    return _PLACEHOLDER.sub(_sub, template)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _type_matches(value: Any, type_name: str) -> bool:
    if type_name == "function":
        return callable(value)
    if type_name == "number":
        return _is_number(value)
    if type_name in TYPE_NAMES:
        return isinstance(value, TYPE_NAMES[type_name])
    return type(value).__name__ == type_name


# ── Testers ──

def range_(value: Any, bounds: Any, attribute: str) -> Optional[str]:
    if isinstance(bounds, (list, tuple)) and len(bounds) == 2:
        low, high = bounds
        if not _is_number(value):
            return format_message("{0} is not within the range {1} - {2} for {3}", value, low, high, attribute)
        try:
            outside = value < low or value > high
        except TypeError:
            return format_message("{0} cannot be compared with the range {1} - {2} for {3}", value, low, high, attribute)
        if outside:
            return format_message("{0} is not within the range {1} - {2} for {3}", value, low, high, attribute)
    return None


def is_type(value: Any, type_name: str, attribute: str) -> Optional[str]:
    # datetime is a subclass of date
    if type_name == "date":
        if not isinstance(value, date):
            return format_message("Expected {0} to be a valid date for {1}", value, attribute)
    elif not _type_matches(value, type_name):
        return format_message("Expected {0} to be of type {1} for {2}", value, type_name, attribute)
    return None


def regex(value: Any, pattern: Any, attribute: str) -> Optional[str]:
    compiled = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)
    subject = value if isinstance(value, str) else str(value)
    if not compiled.search(subject):
        return format_message("{0} did not match pattern {1} for {2}", value, compiled.pattern, attribute)
    return None


def in_list(value: Any, choices: Any, attribute: str) -> Optional[str]:
    if isinstance(choices, (list, tuple)) and value not in choices:
        joined = ", ".join(str(c) for c in choices)
        return format_message("{0} is not part of [{1}] for {2}", value, joined, attribute)
    return None


def is_key(value: Any, obj: Mapping, attribute: str) -> Optional[str]:
    if not isinstance(obj, Mapping):
        return format_message("{0} is not a key of {1} for {2}", value, obj, attribute)
    try:
        present = value in obj
    except TypeError:
        # unhashable values can never be keys
        present = False
    if not present:
        keys = ", ".join(str(k) for k in obj)
        return format_message("{0} is not one of [{1}] for {2}", value, keys, attribute)
    return None


def max_length(value: Any, length: int, attribute: str) -> Optional[str]:
    if isinstance(value, Sized) and len(value) > length:
        return format_message("{0} is longer than {1} for {2}", value, length, attribute)
    return None


def min_length(value: Any, length: int, attribute: str) -> Optional[str]:
    if isinstance(value, Sized) and len(value) < length:
        return format_message("{0} is shorter than {1} for {2}", value, length, attribute)
    return None


def to_equal(value: Any, example: Any, attribute: str) -> Optional[str]:
    if value != example:
        return format_message("{0} is not the same as {1} for {2}", value, example, attribute)
    return None


def min_value(value: Any, limit: Any, attribute: str) -> Optional[str]:
    try:
        too_small = value < limit
    except TypeError:
        return format_message("{0} cannot be compared with {1} for {2}", value, limit, attribute)
    if too_small:
        return format_message("{0} is smaller than {1} for {2}", value, limit, attribute)
    return None


def max_value(value: Any, limit: Any, attribute: str) -> Optional[str]:
    try:
        too_big = value > limit
    except TypeError:
        return format_message("{0} cannot be compared with {1} for {2}", value, limit, attribute)
    if too_big:
        return format_message("{0} exceeds {1} for {2}", value, limit, attribute)
    return None


def is_instance(value: Any, descriptor: Any, attribute: str) -> Optional[str]:
    """Class (or tuple of classes) check, or a class-name tag for string descriptors."""
    if isinstance(descriptor, str):
        matched = any(cls.__name__ == descriptor for cls in type(value).__mro__)
        label = descriptor
    else:
        matched = isinstance(value, descriptor)
        label = getattr(descriptor, "__name__", descriptor)
    if not matched:
        return format_message("{0} is not an instance of {1} for {2}", value, label, attribute)
    return None


TESTERS: dict[RuleKind, Tester] = {
    RuleKind.RANGE: range_,
    RuleKind.IS_TYPE: is_type,
    RuleKind.REGEX: regex,
    RuleKind.IN_LIST: in_list,
    RuleKind.IS_KEY: is_key,
    RuleKind.MAX_LENGTH: max_length,
    RuleKind.MIN_LENGTH: min_length,
    RuleKind.TO_EQUAL: to_equal,
    RuleKind.MIN_VALUE: min_value,
    RuleKind.MAX_VALUE: max_value,
    RuleKind.IS_INSTANCE: is_instance,
}


def get_tester(kind: RuleKind) -> Tester:
    """Return the built-in tester for ``kind`` (not defined for CUSTOM)."""
    return TESTERS[kind]
