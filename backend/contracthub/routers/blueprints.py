from fastapi import APIRouter, Depends, Response, status
from contracthub.deps import get_blueprint_service
from contracthub.schemas import BlueprintCreate, BlueprintResponse, ErrorResponse
from contracthub.services.blueprint_service import BlueprintService
from typing import List

router = APIRouter(
    prefix="/api/blueprints",
    tags=["blueprints"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.post("", response_model=BlueprintResponse, status_code=status.HTTP_201_CREATED)
def create_blueprint(
    data: BlueprintCreate,
    service: BlueprintService = Depends(get_blueprint_service),
):
    """Create a blueprint (name + ordered fields)"""
    return service.create_blueprint(data.model_dump())


@router.get("", response_model=List[BlueprintResponse])
def list_blueprints(service: BlueprintService = Depends(get_blueprint_service)):
    """List blueprints, newest first"""
    return service.list_blueprints()


@router.get("/{blueprint_id}", response_model=BlueprintResponse)
def get_blueprint(blueprint_id: str, service: BlueprintService = Depends(get_blueprint_service)):
    return service.get_blueprint(blueprint_id)


@router.put("/{blueprint_id}", response_model=BlueprintResponse)
def replace_blueprint(
    blueprint_id: str,
    data: BlueprintCreate,
    service: BlueprintService = Depends(get_blueprint_service),
):
    """Replace name and fields. Existing contracts are not affected."""
    return service.replace_blueprint(blueprint_id, data.model_dump())


@router.delete("/{blueprint_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_blueprint(blueprint_id: str, service: BlueprintService = Depends(get_blueprint_service)):
    """Delete a blueprint. Contracts created from it are kept as they are."""
    service.delete_blueprint(blueprint_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
