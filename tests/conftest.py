"""Shared fixtures for attrguard tests."""

from typing import Any, Mapping, Optional

import pytest

from attrguard.config import get_settings
from attrguard.models import Model
from attrguard.validators import ValidatedHost, ValidationEngine, ValidationOutcome


class Inner:
    """Marker class for is_instance rules."""


class InnerChild(Inner):
    pass


class RecordingHost(ValidatedHost):
    """Bare host that records raw writes and failure notifications."""

    def __init__(
        self,
        validators: Optional[Mapping[str, Mapping[str, Any]]] = None,
        defaults: Optional[Mapping[str, Any]] = None,
        use_defaults: Optional[bool] = None,
        stored: Optional[Mapping[str, Any]] = None,
    ):
        self.validators = validators
        self.defaults = defaults
        self.use_defaults = use_defaults
        self.stored = dict(stored or {})
        self.raw_writes: list[tuple[str, Any]] = []
        self.notifications: list[ValidationOutcome] = []

    def snapshot(self) -> Mapping[str, Any]:
        return dict(self.stored)

    def set_raw(self, attribute: str, value: Any) -> None:
        self.raw_writes.append((attribute, value))
        self.stored[attribute] = value

    def notify_failure(self, outcome: ValidationOutcome) -> None:
        self.notifications.append(outcome)


class PostModel(Model):
    use_defaults = True
    defaults = {
        "title": "test title",
        "highfives": 12,
        "other": {},
        "always": True,
        "must_be_inner": None,
    }
    validators = {
        "title": {"is_type": "string", "max_length": 20, "min_length": 2},
        "highfives": {"range": [0, 13]},
        "other": {
            "is_type": "object",
            # falsy result means pass
            "fn": lambda value, arg, attribute: False,
        },
        "always": {"to_equal": True},
        "must_be_inner": {"is_instance": Inner},
    }


class EventRecorder:
    """Listener that keeps every call's args."""

    def __init__(self):
        self.calls: list[tuple] = []

    def __call__(self, *args: Any) -> None:
        self.calls.append(args)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def engine() -> ValidationEngine:
    return ValidationEngine(use_defaults=False)


@pytest.fixture
def host_factory():
    return RecordingHost


@pytest.fixture
def post() -> PostModel:
    return PostModel()


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()
