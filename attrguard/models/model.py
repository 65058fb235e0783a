"""Model: a small change-tracking attribute container validated by attrguard.

Subclasses declare their rules at class level:

    class Post(Model):
        use_defaults = True
        defaults = {"title": "untitled"}
        validators = {"title": {"is_type": "string", "max_length": 20}}

Events published on ``model.events``:
    change:<attr>  (model, value)    after a committed assignment, per attribute
    change         (model,)          once per committed assignment
    invalid        (model, outcome)  when an assignment is rejected
    error          (model, outcome)  when default fallback ran
"""

import copy
from typing import Any, Mapping, Optional

from attrguard.services.event_bus import EventBus, EventListener
from attrguard.validators.base import ValidatedHost
from attrguard.validators.changes import changed_attributes as diff_attributes
from attrguard.validators.engine import ValidationEngine, validation_engine
from attrguard.validators.models import ValidationOutcome


class Model(ValidatedHost):
    """Attribute container whose validated assignments run through a ValidationEngine."""

    validators: Optional[Mapping[str, Mapping[str, Any]]] = None
    defaults: Optional[Mapping[str, Any]] = None
    use_defaults: Optional[bool] = None

    engine: ValidationEngine = validation_engine

    def __init__(self, attributes: Optional[Mapping[str, Any]] = None, engine: Optional[ValidationEngine] = None):
        """Seed from ``defaults`` then ``attributes``. Initial values are not validated."""
        if engine is not None:
            self.engine = engine
        self.events = EventBus()
        self.validation_error: Optional[ValidationOutcome] = None

        # instances never share mutable defaults with the class or each other
        self._attributes: dict[str, Any] = copy.deepcopy(dict(self.defaults or {}))
        self._attributes.update(attributes or {})
        self._previous: dict[str, Any] = dict(self._attributes)
        self._changed: dict[str, Any] = {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._attributes!r})"

    # ── Host contract ──

    def snapshot(self) -> Mapping[str, Any]:
        return dict(self._attributes)

    def set_raw(self, attribute: str, value: Any) -> None:
        self._attributes[attribute] = value

    def notify_failure(self, outcome: ValidationOutcome) -> None:
        self.trigger("error", self, outcome)

    # ── Reading ──

    @property
    def attributes(self) -> dict[str, Any]:
        return dict(self._attributes)

    def get(self, attribute: str, default: Any = None) -> Any:
        return self._attributes.get(attribute, default)

    def has(self, attribute: str) -> bool:
        return self._attributes.get(attribute) is not None

    def to_dict(self) -> dict[str, Any]:
        return dict(self._attributes)

    def previous(self, attribute: str) -> Any:
        """Value of ``attribute`` before the last committed assignment."""
        return self._previous.get(attribute)

    def previous_attributes(self) -> dict[str, Any]:
        """All attributes as they were before the last committed assignment."""
        return dict(self._previous)

    def changed_attributes(self) -> dict[str, Any]:
        """Attributes changed by the last committed assignment."""
        return dict(self._changed)

    # ── Writing ──

    def validate(self, attributes: Mapping[str, Any], options: Optional[Mapping[str, Any]] = None) -> Optional[ValidationOutcome]:
        """Validation hook; returns None when the assignment may be committed."""
        return self.engine.validate(self, attributes, options)

    def set(self, key: Any, value: Any = None, *, validate: bool = True, **options: Any) -> bool:
        """Assign one attribute (``set("a", 1)``) or many (``set({"a": 1})``).

        Returns False if validation rejected the whole assignment.
        """
        if isinstance(key, Mapping):
            attrs = dict(key)
        elif isinstance(key, str):
            attrs = {key: value}
        else:
            raise TypeError(f"set() expects an attribute name or a mapping, got {type(key).__name__}")

        if validate and not self._run_validation(attrs, options):
            return False

        self._commit(attrs)
        return True

    def unset(self, attribute: str) -> None:
        """Remove an attribute without validation."""
        if attribute not in self._attributes:
            return
        self._previous = dict(self._attributes)
        del self._attributes[attribute]
        self._changed = {attribute: None}
        self.trigger(f"change:{attribute}", self, None)
        self.trigger("change", self)

    def clear(self) -> None:
        """Remove every attribute without validation, as a single change."""
        if not self._attributes:
            return
        self._previous = dict(self._attributes)
        self._changed = {attribute: None for attribute in self._attributes}
        self._attributes = {}

        for attribute in self._changed:
            self.trigger(f"change:{attribute}", self, None)
        self.trigger("change", self)

    def is_valid(self) -> bool:
        """Check all current attributes against their rules (no defaults applied)."""
        self.validation_error = self.engine.check(self, self._attributes)
        return self.validation_error is None

    # ── Events ──

    def on(self, event: str, listener: EventListener) -> None:
        self.events.subscribe(event, listener)

    def off(self, event: str, listener: EventListener) -> None:
        self.events.unsubscribe(event, listener)

    def trigger(self, event: str, *args: Any) -> None:
        self.events.publish(event, *args)

    # ── Internals ──

    def _run_validation(self, attrs: Mapping[str, Any], options: Mapping[str, Any]) -> bool:
        outcome = self.validate(attrs, options)
        self.validation_error = outcome
        if outcome is None:
            return True
        self.trigger("invalid", self, outcome)
        return False

    def _commit(self, attrs: Mapping[str, Any]) -> None:
        self._previous = dict(self._attributes)
        self._changed = {attr: attrs[attr] for attr in diff_attributes(self._attributes, attrs)}
        self._attributes.update(attrs)

        for attr, value in self._changed.items():
            self.trigger(f"change:{attr}", self, value)
        if self._changed:
            self.trigger("change", self)
