"""Change detection between the stored snapshot and an incoming assignment."""

from typing import Any, Mapping

_MISSING = object()


def changed_attributes(previous: Mapping[str, Any], incoming: Mapping[str, Any]) -> list[str]:
    """Keys of ``incoming`` that are new or differ (by ``!=``) from ``previous``.

    Order follows ``incoming``. Attributes assigned for the first time are
    always included, even when the value is falsy.
    """
    changed = []
    for attr, value in incoming.items():
        old = previous.get(attr, _MISSING)
        if old is _MISSING or old != value:
            changed.append(attr)
    return changed
