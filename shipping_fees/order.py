"""
Order Context

Caller-supplied inputs for one fee resolution. Blank location fields count as
absent, and surrounding whitespace is stripped (zone labels are stored trimmed).
"""

from typing import NamedTuple, Optional


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class Destination(NamedTuple):
    country: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None

    @classmethod
    def of(
        cls,
        country: Optional[str] = None,
        region: Optional[str] = None,
        city: Optional[str] = None,
    ) -> "Destination":
        """Build a destination with blank fields normalized to None."""
        return cls(_clean(country), _clean(region), _clean(city))

    def is_empty(self) -> bool:
        return self.country is None and self.region is None and self.city is None

    def describe(self) -> str:
        parts = [
            f"{field}={value!r}"
            for field, value in zip(self._fields, self)
            if value is not None
        ]
        return "destination(" + ", ".join(parts) + ")" if parts else "empty destination"


class Order(NamedTuple):
    subtotal: float = 0.0
    weight: float = 0.0
    destination: Destination = Destination()

    @classmethod
    def of(
        cls,
        subtotal: float = 0.0,
        weight: float = 0.0,
        country: Optional[str] = None,
        region: Optional[str] = None,
        city: Optional[str] = None,
    ) -> "Order":
        """
        Build an order context.

        Raises:
            ValueError: If subtotal or weight is negative
        """
        subtotal = float(subtotal or 0)
        weight = float(weight or 0)
        if subtotal < 0:
            raise ValueError(f"subtotal must be >= 0, got {subtotal}")
        if weight < 0:
            raise ValueError(f"weight must be >= 0, got {weight}")
        return cls(subtotal, weight, Destination.of(country, region, city))


__all__ = ["Destination", "Order"]
