"""
Record store consumed by the lifecycle engine, and its SQLAlchemy implementation.
get_* return None for a well-formed but absent id and raise InvalidReferenceError for a malformed one.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from contracthub.exceptions import ConflictError, InvalidReferenceError
from contracthub.models import Blueprint, Contract

logger = logging.getLogger(__name__)


def parse_record_id(value: Any, resource: str) -> UUID:
    """Parse a store identifier or raise InvalidReferenceError."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise InvalidReferenceError(resource, str(value)) from None


class RecordStore(ABC):
    @abstractmethod
    def get_blueprint(self, blueprint_id: Any) -> Optional[Blueprint]:
        ...

    @abstractmethod
    def list_blueprints(self) -> List[Blueprint]:
        ...

    @abstractmethod
    def create_blueprint(self, record: Blueprint) -> Blueprint:
        ...

    @abstractmethod
    def save_blueprint(self, record: Blueprint) -> Blueprint:
        ...

    @abstractmethod
    def delete_blueprint(self, record: Blueprint) -> None:
        ...

    @abstractmethod
    def get_contract(self, contract_id: Any, for_update: bool = False) -> Optional[Contract]:
        ...

    @abstractmethod
    def list_contracts(self) -> List[Contract]:
        ...

    @abstractmethod
    def create_contract(self, record: Contract) -> Contract:
        ...

    @abstractmethod
    def save_contract(self, record: Contract) -> Contract:
        ...


class SqlRecordStore(RecordStore):
    """RecordStore over a SQLAlchemy session. Each create/save commits one record."""

    def __init__(self, db: Session):
        self.db = db

    def get_blueprint(self, blueprint_id: Any) -> Optional[Blueprint]:
        bid = parse_record_id(blueprint_id, "Blueprint")
        return self.db.query(Blueprint).filter(Blueprint.id == bid).first()

    def list_blueprints(self) -> List[Blueprint]:
        return self.db.query(Blueprint).order_by(Blueprint.created_at.desc()).all()

    def create_blueprint(self, record: Blueprint) -> Blueprint:
        self.db.add(record)
        self._commit(record)
        return record

    def save_blueprint(self, record: Blueprint) -> Blueprint:
        self._commit(record)
        return record

    def delete_blueprint(self, record: Blueprint) -> None:
        self.db.delete(record)
        self.db.commit()

    def get_contract(self, contract_id: Any, for_update: bool = False) -> Optional[Contract]:
        cid = parse_record_id(contract_id, "Contract")
        query = self.db.query(Contract).filter(Contract.id == cid)
        if for_update:
            # Row lock where supported; the version column catches the rest
            query = query.with_for_update()
        return query.first()

    def list_contracts(self) -> List[Contract]:
        return self.db.query(Contract).order_by(Contract.created_at.desc()).all()

    def create_contract(self, record: Contract) -> Contract:
        self.db.add(record)
        self._commit(record)
        return record

    def save_contract(self, record: Contract) -> Contract:
        self._commit(record)
        return record

    def _commit(self, record) -> None:
        kind = type(record).__name__
        record_id = getattr(record, "id", None)
        try:
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            logger.warning(
                "Stale write rejected for %s %s", kind, record_id,
            )
            raise ConflictError(
                f"{kind} was modified concurrently; reload and retry",
                details={"resource": kind, "identifier": str(record_id)},
            )
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(record)
