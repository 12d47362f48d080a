"""Event repository capability.

The engine never touches storage. Callers are handed an object satisfying
``EventRepository`` and load one property's events before computing.
"""

from dataclasses import replace
from typing import Protocol

from proptrack.models.events import PropertyEvents
from proptrack.models.patches import FieldPatch, PatchError, apply_patch

# PropertyEvents attribute holding each event type's sequence
_COLLECTIONS = {
    "LoanEvent": "loans",
    "TenancyEvent": "tenancies",
    "RecurringCostEvent": "recurring_costs",
    "OneOffEvent": "one_offs",
    "ValuationEvent": "valuations",
}


class PropertyNotFoundError(KeyError):
    """Raised when no events are stored for a property id."""


class EventRepository(Protocol):
    def load_events_for_property(self, property_id: str) -> PropertyEvents: ...


class InMemoryEventRepository:
    """Dict-backed repository, for tests and offline use."""

    def __init__(self, events: dict[str, PropertyEvents] | None = None):
        self._events: dict[str, PropertyEvents] = dict(events or {})

    def add(self, property_id: str, events: PropertyEvents) -> None:
        self._events[property_id] = events

    def property_ids(self) -> list[str]:
        return sorted(self._events)

    def load_events_for_property(self, property_id: str) -> PropertyEvents:
        try:
            return self._events[property_id]
        except KeyError:
            raise PropertyNotFoundError(property_id) from None

    def apply(self, property_id: str, patch: FieldPatch, index: int | None = None) -> PropertyEvents:
        """Apply a field patch to one stored event and return the updated set.

        ``index`` selects the event within its collection; it is ignored for
        the purchase event, of which there is at most one.
        """
        events = self.load_events_for_property(property_id)
        target = patch.target.__name__

        if target == "PurchaseEvent":
            if events.purchase is None:
                raise PatchError(f"Property {property_id} has no purchase event")
            updated = replace(events, purchase=apply_patch(events.purchase, patch))
        elif target in _COLLECTIONS:
            attr = _COLLECTIONS[target]
            items = list(getattr(events, attr))
            if index is None or not 0 <= index < len(items):
                raise PatchError(f"No {target} at index {index} for property {property_id}")
            items[index] = apply_patch(items[index], patch)
            updated = replace(events, **{attr: tuple(items)})
        else:
            raise PatchError(f"{target} is not a property event type")

        self._events[property_id] = updated
        return updated
