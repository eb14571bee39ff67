"""
Single source of truth for contract status order and valid transitions.
All status changes must go through ContractLifecycleService.transition_status().
"""
from __future__ import annotations

from typing import Dict, FrozenSet, List, Optional

from contracthub.models import ContractStatus

# Valid next status(es) from each status; revocation only before signing
VALID_NEXT: Dict[ContractStatus, List[ContractStatus]] = {
    ContractStatus.CREATED: [ContractStatus.APPROVED, ContractStatus.REVOKED],
    ContractStatus.APPROVED: [ContractStatus.SENT],
    ContractStatus.SENT: [ContractStatus.SIGNED, ContractStatus.REVOKED],
    ContractStatus.SIGNED: [ContractStatus.LOCKED],
    ContractStatus.LOCKED: [],
    ContractStatus.REVOKED: [],
}

TERMINAL_STATUSES: FrozenSet[ContractStatus] = frozenset({ContractStatus.LOCKED, ContractStatus.REVOKED})


def parse_status(value: Optional[str]) -> Optional[ContractStatus]:
    """Return the ContractStatus whose value is exactly `value`, else None."""
    if not isinstance(value, str):
        return None
    try:
        return ContractStatus(value)
    except ValueError:
        return None


def is_terminal(status: ContractStatus) -> bool:
    """Locked and Revoked contracts never change again."""
    return status in TERMINAL_STATUSES


def allowed_transitions(status: ContractStatus) -> List[ContractStatus]:
    return list(VALID_NEXT.get(status, []))


def can_transition(from_status: ContractStatus, to_status: ContractStatus) -> bool:
    """Check if from_status -> to_status is allowed. Staying put is always allowed (no-op)."""
    if from_status == to_status:
        return True
    return to_status in VALID_NEXT.get(from_status, [])
