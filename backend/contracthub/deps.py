from fastapi import Depends, Header
from sqlalchemy.orm import Session
from contracthub.db import get_db
from contracthub.config import settings
from contracthub.schemas import Actor
from contracthub.services.store import RecordStore, SqlRecordStore
from contracthub.services.contract_service import ContractLifecycleService
from contracthub.services.blueprint_service import BlueprintService
from typing import Optional


def get_store(db: Session = Depends(get_db)) -> RecordStore:
    return SqlRecordStore(db)


def get_contract_service(store: RecordStore = Depends(get_store)) -> ContractLifecycleService:
    return ContractLifecycleService(store)


def get_blueprint_service(store: RecordStore = Depends(get_store)) -> BlueprintService:
    return BlueprintService(store)


def get_current_actor(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    x_user_name: Optional[str] = Header(None, alias="X-User-Name"),
    x_user_role: Optional[str] = Header(None, alias="X-User-Role"),
) -> Actor:
    """
    Actor for this request from X-User-* headers, falling back to the configured default.
    Identity is not verified here; whatever sits in front of the API must establish trust.
    """
    return Actor(
        id=(x_user_id or "").strip() or settings.DEFAULT_ACTOR_ID,
        name=(x_user_name or "").strip() or settings.DEFAULT_ACTOR_NAME,
        role=(x_user_role or "").strip() or settings.DEFAULT_ACTOR_ROLE,
    )
