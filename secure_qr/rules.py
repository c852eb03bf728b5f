"""Business rules applied on top of a successful decode."""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Mapping, Optional

from .codec.codec import SecureQRCodec
from .codec.types import Invalid, Outcome

ValidationRule = Callable[[Mapping[str, Any]], Optional[str]]


class RuleValidator:
    """Downgrade ``Valid`` outcomes whose payload breaks a rule.

    Rules run in order; the first error message wins. Outcomes that are
    already ``Invalid`` or ``Expired`` are returned untouched.
    """

    def __init__(self, rules: Iterable[ValidationRule]) -> None:
        self.rules: List[ValidationRule] = list(rules)

    def validate(self, outcome: Outcome) -> Outcome:
        if not outcome.is_valid:
            return outcome
        data = getattr(outcome, "data", None)
        if not isinstance(data, Mapping):
            return Invalid("payload is not an object")
        for rule in self.rules:
            error = rule(data)
            if error is not None:
                return Invalid(error)
        return outcome

    def decode(self, codec: SecureQRCodec, token: str) -> Outcome:
        """Decode ``token`` with ``codec`` and apply the rules."""
        return self.validate(codec.decode(token))


def required_field(name: str) -> ValidationRule:
    """Rule failing when ``name`` is missing or null."""

    def rule(data: Mapping[str, Any]) -> Optional[str]:
        if data.get(name) is None:
            return f"field '{name}' is required"
        return None

    return rule


def number_in_range(name: str, minimum: float, maximum: float) -> ValidationRule:
    """Rule failing when ``name`` is not a number within ``[minimum, maximum]``."""

    def rule(data: Mapping[str, Any]) -> Optional[str]:
        value = data.get(name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return f"field '{name}' must be a number"
        if value < minimum or value > maximum:
            return f"field '{name}' must be between {minimum} and {maximum}"
        return None

    return rule
