import enum
from sqlalchemy import Column, String, DateTime, Enum, Integer, JSON, Uuid
from datetime import datetime
import uuid
from contracthub.db import Base


class ContractStatus(str, enum.Enum):
    CREATED = "Created"
    APPROVED = "Approved"
    SENT = "Sent"
    SIGNED = "Signed"
    LOCKED = "Locked"
    REVOKED = "Revoked"


class FieldType(str, enum.Enum):
    TEXT = "text"
    DATE = "date"
    SIGNATURE = "signature"
    CHECKBOX = "checkbox"


class ContractRole(str, enum.Enum):
    ADMIN = "admin"
    APPROVER = "approver"
    SIGNER = "signer"


class Blueprint(Base):
    __tablename__ = "blueprints"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    # Ordered list of {label, field_type, required, position: {x, y}}
    fields_json = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class Contract(Base):
    __tablename__ = "contracts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # Not a foreign key: deleting a blueprint leaves its contracts untouched
    blueprint_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    status = Column(Enum(ContractStatus), default=ContractStatus.CREATED, nullable=False)
    data_json = Column(JSON, nullable=False, default=dict)
    # Append-only list of {status, timestamp, changed_by: {id, name}, note}
    history_json = Column(JSON, nullable=False, default=list)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __mapper_args__ = {"version_id_col": version}
