from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Dict, Any
from datetime import datetime
from uuid import UUID

from contracthub.models import ContractStatus, FieldType


# ============= Actor =============
class Actor(BaseModel):
    """Caller identity handed in with every request. The role is trusted as given."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    role: str

    def snapshot(self) -> Dict[str, str]:
        """Identity captured by value into history entries."""
        return {"id": self.id, "name": self.name}


# ============= Blueprint Schemas =============
class FieldPositionSchema(BaseModel):
    x: float = 0
    y: float = 0


class FieldDefinitionSchema(BaseModel):
    label: str
    field_type: FieldType
    required: bool = False
    position: FieldPositionSchema = Field(default_factory=FieldPositionSchema)


class BlueprintCreate(BaseModel):
    # Loosely typed on purpose: checked by validate_blueprint_definition
    name: Optional[str] = None
    fields: Optional[List[Any]] = None


class BlueprintResponse(BaseModel):
    id: UUID
    name: str
    fields: List[FieldDefinitionSchema]
    created_at: datetime
    updated_at: datetime


class BlueprintSummary(BaseModel):
    id: UUID
    name: str


# ============= Contract Schemas =============
class ContractCreate(BaseModel):
    blueprint_id: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


class ContractStatusUpdate(BaseModel):
    status: Optional[str] = None
    note: Optional[str] = None


class ChangedBy(BaseModel):
    id: str
    name: str


class HistoryEntryResponse(BaseModel):
    status: ContractStatus
    timestamp: datetime
    changed_by: ChangedBy
    note: str = ""


class ContractResponse(BaseModel):
    id: UUID
    contract_name: str
    blueprint_id: UUID
    blueprint: Optional[BlueprintSummary] = None
    status: ContractStatus
    data: Dict[str, Any]
    history: List[HistoryEntryResponse]
    created_at: datetime
    updated_at: datetime


class ContractStatusResponse(ContractResponse):
    message: str


# ============= Error Schemas =============
class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Dict[str, Any] = {}
