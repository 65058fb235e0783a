"""Host contract: what the validation engine needs from a model.

The engine does not own attribute storage or events. Any model that
implements this ABC can be validated; ``attrguard.models.Model`` is the
bundled implementation.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from attrguard.validators.models import ValidationOutcome


class ValidatedHost(ABC):
    """Abstract collaborator for ValidationEngine.

    Contract:
        - snapshot() is the stored state as it stands before the
          assignment being validated
        - set_raw() writes storage directly and never re-enters validation
        - notify_failure() is synchronous
    """

    # Declarative configuration, usually set at class level
    validators: Optional[Mapping[str, Mapping[str, Any]]] = None
    defaults: Optional[Mapping[str, Any]] = None
    use_defaults: Optional[bool] = None

    @abstractmethod
    def snapshot(self) -> Mapping[str, Any]:
        """Stored attributes before the pending assignment."""
        ...

    @abstractmethod
    def set_raw(self, attribute: str, value: Any) -> None:
        """Overwrite a stored attribute without validation or change events."""
        ...

    @abstractmethod
    def notify_failure(self, outcome: ValidationOutcome) -> None:
        """Tell observers that fallback ran for ``outcome``."""
        ...

    # ── Configuration lookups ──

    def rule_spec_for(self, attribute: str) -> Optional[Mapping[str, Any]]:
        """Rule-set declared for ``attribute``, if any."""
        return (self.validators or {}).get(attribute)

    def has_default(self, attribute: str) -> bool:
        return self.defaults is not None and attribute in self.defaults

    def default_for(self, attribute: str) -> Any:
        return self.defaults[attribute]
