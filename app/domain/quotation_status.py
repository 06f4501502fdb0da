from __future__ import annotations

import enum
from dataclasses import dataclass


class QuotationStatus(str, enum.Enum):
    OPEN = "OPEN"
    QUOTED = "QUOTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CLOSED = "CLOSED"


# Fixed total order; a quotation only ever moves forward along it.
STATUS_ORDER: tuple[QuotationStatus, ...] = (
    QuotationStatus.OPEN,
    QuotationStatus.QUOTED,
    QuotationStatus.APPROVED,
    QuotationStatus.REJECTED,
    QuotationStatus.CLOSED,
)

TERMINAL_STATUSES: frozenset[QuotationStatus] = frozenset(
    {QuotationStatus.REJECTED, QuotationStatus.CLOSED}
)


@dataclass(frozen=True, slots=True)
class QuotationLifecyclePolicy:
    """Defines which status changes and item mutations a quotation accepts.

    Semantics (intentionally centralized):
    - Status changes are monotonic along STATUS_ORDER. Staying in the same
      status is allowed (no-op); moving to an earlier one is not.
    - Items may only be added, updated or removed while the quotation is in
      a non-terminal status.
    """

    current: QuotationStatus

    @staticmethod
    def rank(status: QuotationStatus) -> int:
        return STATUS_ORDER.index(status)

    def can_transition_to(self, target: QuotationStatus) -> bool:
        return self.rank(target) >= self.rank(self.current)

    @property
    def is_terminal(self) -> bool:
        return self.current in TERMINAL_STATUSES

    def accepts_item_changes(self) -> bool:
        return not self.is_terminal
