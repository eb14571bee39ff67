"""
Blueprint CRUD. A blueprint is replaced whole on edit; deleting one never touches its contracts.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from contracthub.exceptions import NotFoundError, ValidationError
from contracthub.models import Blueprint
from contracthub.services.store import RecordStore
from contracthub.templates.blueprint_schema import BlueprintSchema, validate_blueprint_definition

logger = logging.getLogger(__name__)


def serialize_blueprint(blueprint: Blueprint) -> Dict[str, Any]:
    return {
        "id": blueprint.id,
        "name": blueprint.name,
        "fields": list(blueprint.fields_json or []),
        "created_at": blueprint.created_at,
        "updated_at": blueprint.updated_at,
    }


def _checked_schema(payload: Dict[str, Any], allow_empty_fields: bool) -> BlueprintSchema:
    valid, errors = validate_blueprint_definition(payload, allow_empty_fields=allow_empty_fields)
    if not valid:
        raise ValidationError(errors[0], details={"errors": errors})
    return BlueprintSchema.from_dict(payload)


class BlueprintService:
    def __init__(self, store: RecordStore):
        self.store = store

    def create_blueprint(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        schema = _checked_schema(payload, allow_empty_fields=True)
        blueprint = self.store.create_blueprint(Blueprint(name=schema.name, fields_json=schema.fields_json()))
        logger.info("Blueprint created", extra={"blueprint_id": str(blueprint.id)})
        return serialize_blueprint(blueprint)

    def list_blueprints(self) -> List[Dict[str, Any]]:
        return [serialize_blueprint(b) for b in self.store.list_blueprints()]

    def get_blueprint(self, blueprint_id: str) -> Dict[str, Any]:
        return serialize_blueprint(self._load(blueprint_id))

    def replace_blueprint(self, blueprint_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Full replace of name and fields; existing contracts keep their data as stored."""
        schema = _checked_schema(payload, allow_empty_fields=False)
        blueprint = self._load(blueprint_id)
        blueprint.name = schema.name
        blueprint.fields_json = schema.fields_json()
        blueprint = self.store.save_blueprint(blueprint)
        logger.info("Blueprint replaced", extra={"blueprint_id": str(blueprint.id)})
        return serialize_blueprint(blueprint)

    def delete_blueprint(self, blueprint_id: str) -> None:
        blueprint = self._load(blueprint_id)
        self.store.delete_blueprint(blueprint)
        logger.info("Blueprint deleted", extra={"blueprint_id": str(blueprint_id)})

    def _load(self, blueprint_id: str) -> Blueprint:
        blueprint = self.store.get_blueprint(blueprint_id)
        if blueprint is None:
            raise NotFoundError("Blueprint", str(blueprint_id))
        return blueprint
