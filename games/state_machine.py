# games/state_machine.py
"""
Registration state machine.

pending → approved | rejected   (admin review)
rejected → pending              (registrant resubmits)
approved, confirmed             (locked for the registrant)

Admin review has no precondition besides the record existing, so
``apply_review`` may record approved/rejected from any status; only the
registrant-driven path goes through VALID_TRANSITIONS.
"""
from typing import Tuple
import logging

from .models import Registration

logger = logging.getLogger('sportsreg.games')


VALID_TRANSITIONS = {
    Registration.STATUS_PENDING: [Registration.STATUS_APPROVED, Registration.STATUS_REJECTED],
    Registration.STATUS_REJECTED: [Registration.STATUS_PENDING],
    Registration.STATUS_APPROVED: [],
    Registration.STATUS_CONFIRMED: [],
}

# Outcomes an admin can record on a registration
REVIEW_STATUSES = (Registration.STATUS_APPROVED, Registration.STATUS_REJECTED)


def can_transition(registration: Registration, new_status: str) -> Tuple[bool, str]:
    """
    Returns (can_transition: bool, reason: str)
    """
    current_status = registration.status

    if new_status == current_status:
        return True, "Same status"

    if new_status not in dict(Registration.STATUS_CHOICES):
        return False, f"Invalid status: {new_status}"

    if new_status not in VALID_TRANSITIONS.get(current_status, []):
        return False, f"Cannot transition from '{current_status}' to '{new_status}'"

    return True, ""


def transition(registration: Registration, new_status: str, actor=None) -> Tuple[bool, str]:
    """
    Move a registration to ``new_status`` in memory. The caller saves.
    """
    can, reason = can_transition(registration, new_status)

    if not can:
        logger.warning(
            f"Invalid state transition attempted: registration={registration.id}, "
            f"from={registration.status}, to={new_status}, actor={getattr(actor, 'id', 'unknown')}. "
            f"Reason: {reason}"
        )
        return False, reason

    old_status = registration.status
    registration.status = new_status

    logger.info(
        f"Registration state transition: registration={registration.id}, "
        f"from={old_status}, to={new_status}, actor={getattr(actor, 'id', 'unknown')}"
    )
    return True, f"Transitioned from '{old_status}' to '{new_status}'"


def apply_review(registration: Registration, new_status: str, reviewer, reviewed_at) -> str:
    """
    Record an admin decision. Returns the previous status.
    """
    if new_status not in REVIEW_STATUSES:
        raise ValueError(f"Invalid review status: {new_status}")

    old_status = registration.status
    registration.status = new_status
    registration.reviewed_at = reviewed_at
    registration.reviewed_by = reviewer

    logger.info(
        f"Registration reviewed: registration={registration.id}, "
        f"from={old_status}, to={new_status}, reviewer={getattr(reviewer, 'id', 'unknown')}"
    )
    return old_status


def is_editable_by_registrant(registration: Registration) -> bool:
    return not registration.is_locked
