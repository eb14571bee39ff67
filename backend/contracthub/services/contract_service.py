"""
Contract lifecycle service: create contracts from blueprints and move them through the status graph.
Every check runs before any write; a rejected request leaves the stored contract untouched.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from contracthub.exceptions import (
    ImmutableStateError,
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from contracthub.models import Blueprint, Contract, ContractStatus
from contracthub.pipeline.state_machine import (
    allowed_transitions,
    can_transition,
    is_terminal,
    parse_status,
)
from contracthub.rbac import required_roles_for, role_allows
from contracthub.schemas import Actor
from contracthub.services.store import RecordStore
from contracthub.templates.blueprint_schema import BlueprintSchema
from contracthub.templates.field_validation import validate_field_data

logger = logging.getLogger(__name__)


def _format_ts(value: datetime) -> str:
    return value.isoformat(timespec="microseconds") + "Z"


def _parse_ts(value: str) -> datetime:
    return datetime.fromisoformat(value[:-1] if value.endswith("Z") else value)


def serialize_contract(contract: Contract, blueprint: Optional[Blueprint] = None) -> Dict[str, Any]:
    """Stored representation returned to callers, with the resolved blueprint summary."""
    return {
        "id": contract.id,
        "contract_name": f"Contract-{str(contract.id)[-6:]}",
        "blueprint_id": contract.blueprint_id,
        "blueprint": {"id": blueprint.id, "name": blueprint.name} if blueprint else None,
        "status": contract.status,
        "data": dict(contract.data_json or {}),
        "history": [dict(entry) for entry in contract.history_json or []],
        "created_at": contract.created_at,
        "updated_at": contract.updated_at,
    }


class ContractLifecycleService:
    def __init__(self, store: RecordStore, clock: Callable[[], datetime] = datetime.utcnow):
        self.store = store
        self.clock = clock

    def create_contract(self, blueprint_id: Optional[str], raw_data: Optional[Dict[str, Any]], actor: Actor) -> Dict[str, Any]:
        """
        Validate raw_data against the blueprint's fields and store a new contract in status Created
        with a single seed history entry.
        """
        if blueprint_id is None or not str(blueprint_id).strip():
            raise ValidationError("Blueprint ID is required")
        if raw_data is not None and not isinstance(raw_data, dict):
            raise ValidationError("Contract data must be an object")

        blueprint = self.store.get_blueprint(str(blueprint_id).strip())
        if blueprint is None:
            raise NotFoundError("Blueprint", str(blueprint_id))

        # Snapshot taken now; later blueprint edits never reach this contract
        schema = BlueprintSchema.from_record(blueprint)
        sanitized, missing = validate_field_data(schema, raw_data)
        if missing is not None:
            raise ValidationError(missing.message, details={"label": missing.label})

        contract = Contract(
            blueprint_id=blueprint.id,
            status=ContractStatus.CREATED,
            data_json=sanitized,
            history_json=[self._history_entry(ContractStatus.CREATED, self.clock(), actor, None)],
        )
        contract = self.store.create_contract(contract)
        logger.info(
            "Contract created",
            extra={
                "contract_id": str(contract.id),
                "blueprint_id": str(blueprint.id),
                "actor_id": actor.id,
                "role": actor.role,
                "to_status": ContractStatus.CREATED.value,
            },
        )
        return serialize_contract(contract, blueprint)

    def list_contracts(self) -> List[Dict[str, Any]]:
        blueprints: Dict[Any, Optional[Blueprint]] = {}
        result = []
        for contract in self.store.list_contracts():
            if contract.blueprint_id not in blueprints:
                blueprints[contract.blueprint_id] = self.store.get_blueprint(contract.blueprint_id)
            result.append(serialize_contract(contract, blueprints[contract.blueprint_id]))
        return result

    def get_contract(self, contract_id: str) -> Dict[str, Any]:
        contract = self._load_contract(contract_id)
        return serialize_contract(contract, self.store.get_blueprint(contract.blueprint_id))

    def transition_status(
        self,
        contract_id: str,
        target_status: Optional[str],
        actor: Actor,
        note: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Move a contract to target_status.
        Checks, first failure wins: status value, contract exists, not terminal, graph edge, role.
        A transition to the current status is a no-op: role still checked, history untouched.
        """
        if target_status is None or target_status == "":
            raise ValidationError("Status is required")
        target = parse_status(target_status)
        if target is None:
            valid = ", ".join(s.value for s in ContractStatus)
            raise ValidationError(
                f"Invalid status. Must be one of: {valid}",
                details={"status": target_status, "allowed_statuses": [s.value for s in ContractStatus]},
            )

        contract = self._load_contract(contract_id, for_update=True)
        current = contract.status
        log_extra = {
            "contract_id": str(contract.id),
            "actor_id": actor.id,
            "role": actor.role,
            "from_status": current.value,
            "to_status": target.value,
        }

        if is_terminal(current):
            logger.warning("Transition rejected: contract immutable", extra=log_extra)
            raise ImmutableStateError(current.value, target.value)
        if not can_transition(current, target):
            logger.warning("Transition rejected: invalid transition", extra=log_extra)
            raise InvalidTransitionError(
                current.value, target.value, [s.value for s in allowed_transitions(current)],
            )
        if not role_allows(actor.role, target):
            logger.warning("Transition rejected: permission denied", extra=log_extra)
            raise PermissionDeniedError(actor.role, target.value, required_roles_for(target))

        if target == current:
            logger.info("Transition is a no-op", extra=log_extra)
            return serialize_contract(contract, self.store.get_blueprint(contract.blueprint_id))

        history = list(contract.history_json or [])
        history.append(self._history_entry(target, self._next_timestamp(history), actor, note))
        contract.status = target
        contract.history_json = history
        contract = self.store.save_contract(contract)
        logger.info("Contract status updated", extra=log_extra)
        return serialize_contract(contract, self.store.get_blueprint(contract.blueprint_id))

    def _load_contract(self, contract_id: str, for_update: bool = False) -> Contract:
        contract = self.store.get_contract(contract_id, for_update=for_update)
        if contract is None:
            raise NotFoundError("Contract", str(contract_id))
        return contract

    def _next_timestamp(self, history: List[Dict[str, Any]]) -> datetime:
        """Now, but never earlier than the last entry so history stays nondecreasing."""
        now = self.clock()
        if history and history[-1].get("timestamp"):
            last = _parse_ts(history[-1]["timestamp"])
            if now < last:
                return last
        return now

    @staticmethod
    def _history_entry(status: ContractStatus, at: datetime, actor: Actor, note: Optional[str]) -> Dict[str, Any]:
        return {
            "status": status.value,
            "timestamp": _format_ts(at),
            "changed_by": actor.snapshot(),
            "note": note or "",
        }
