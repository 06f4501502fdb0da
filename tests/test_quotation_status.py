import pytest

from app.domain.quotation_status import (
    STATUS_ORDER,
    QuotationLifecyclePolicy,
    QuotationStatus,
)


def test_quotations_start_open():
    assert STATUS_ORDER[0] is QuotationStatus.OPEN


@pytest.mark.parametrize(
    "current,target",
    [
        (QuotationStatus.OPEN, QuotationStatus.QUOTED),
        (QuotationStatus.OPEN, QuotationStatus.CLOSED),
        (QuotationStatus.QUOTED, QuotationStatus.APPROVED),
        (QuotationStatus.APPROVED, QuotationStatus.APPROVED),
    ],
)
def test_forward_or_same_status_is_allowed(current, target):
    assert QuotationLifecyclePolicy(current).can_transition_to(target)


@pytest.mark.parametrize(
    "current,target",
    [
        (QuotationStatus.QUOTED, QuotationStatus.OPEN),
        (QuotationStatus.CLOSED, QuotationStatus.APPROVED),
        (QuotationStatus.REJECTED, QuotationStatus.QUOTED),
    ],
)
def test_backward_status_is_rejected(current, target):
    assert not QuotationLifecyclePolicy(current).can_transition_to(target)


def test_only_terminal_statuses_block_item_changes():
    assert QuotationLifecyclePolicy(QuotationStatus.OPEN).accepts_item_changes()
    assert QuotationLifecyclePolicy(QuotationStatus.APPROVED).accepts_item_changes()
    assert not QuotationLifecyclePolicy(QuotationStatus.REJECTED).accepts_item_changes()
    assert not QuotationLifecyclePolicy(QuotationStatus.CLOSED).accepts_item_changes()
