from fastapi import APIRouter, Depends, status
from contracthub.deps import get_contract_service, get_current_actor
from contracthub.schemas import (
    Actor,
    ContractCreate,
    ContractResponse,
    ContractStatusResponse,
    ContractStatusUpdate,
    ErrorResponse,
)
from contracthub.services.contract_service import ContractLifecycleService
from typing import List

router = APIRouter(
    prefix="/api/contracts",
    tags=["contracts"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.post("", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
def create_contract(
    data: ContractCreate,
    service: ContractLifecycleService = Depends(get_contract_service),
    actor: Actor = Depends(get_current_actor),
):
    """Create a contract from a blueprint. Unknown data keys are dropped; required fields must be filled."""
    return service.create_contract(data.blueprint_id, data.data, actor)


@router.get("", response_model=List[ContractResponse])
def list_contracts(service: ContractLifecycleService = Depends(get_contract_service)):
    """List contracts, newest first"""
    return service.list_contracts()


@router.get("/{contract_id}", response_model=ContractResponse)
def get_contract(contract_id: str, service: ContractLifecycleService = Depends(get_contract_service)):
    return service.get_contract(contract_id)


@router.patch(
    "/{contract_id}/status",
    response_model=ContractStatusResponse,
    responses={403: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def update_contract_status(
    contract_id: str,
    data: ContractStatusUpdate,
    service: ContractLifecycleService = Depends(get_contract_service),
    actor: Actor = Depends(get_current_actor),
):
    """
    Move a contract to a new status.

    - Created -> Approved, Revoked
    - Approved -> Sent
    - Sent -> Signed, Revoked
    - Signed -> Locked
    - Locked, Revoked: immutable

    admin may target any status, approver Approved/Sent, signer Signed.
    """
    contract = service.transition_status(contract_id, data.status, actor, data.note)
    return {**contract, "message": f"Contract status updated to '{contract['status'].value}'"}
