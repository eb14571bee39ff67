from typing import Dict, FrozenSet, List, Optional

from contracthub.models import ContractRole, ContractStatus


# Target statuses each role may move a contract into. Unknown roles get nothing.
ROLE_PERMISSIONS: Dict[str, FrozenSet[ContractStatus]] = {
    ContractRole.ADMIN.value: frozenset(ContractStatus),
    ContractRole.APPROVER.value: frozenset({ContractStatus.APPROVED, ContractStatus.SENT}),
    ContractRole.SIGNER.value: frozenset({ContractStatus.SIGNED}),
}


def role_allows(role: Optional[str], target: ContractStatus) -> bool:
    """Check if a role may transition a contract to target"""
    return target in ROLE_PERMISSIONS.get(role or "", frozenset())


def required_roles_for(target: ContractStatus) -> List[str]:
    """Roles permitted to reach target, least privileged first (admin last)"""
    roles = [r for r, targets in ROLE_PERMISSIONS.items() if target in targets and r != ContractRole.ADMIN.value]
    roles.append(ContractRole.ADMIN.value)
    return roles
