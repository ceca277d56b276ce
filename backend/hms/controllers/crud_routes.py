"""
Shared route builders for resource blueprints.

``register_crud_routes`` binds the five CRUD endpoints of a resource::

    GET    /api/<resource>          <perm>.index
    GET    /api/<resource>/<id>     <perm>.show
    POST   /api/<resource>          <perm>.store
    PUT    /api/<resource>/<id>     <perm>.update
    DELETE /api/<resource>/<id>     <perm>.destroy

Each view opens its own session and closes it when the response is built.
"""

from typing import Callable, Type

from flask import Blueprint, request

from hms.core.api_utils import api_response
from hms.core.auth_decorators import require_permission
from hms.db.session import SessionLocal
from hms.schemas.dtos import MAX_INT, RequestDTO, to_response

# Ids past the 64-bit column range never match, so they 404 instead of overflowing
ID_CONVERTER = f"int(max={MAX_INT})"


def serialize(service, entity):
    return to_response(entity, **service.related_data(entity))


def register_crud_routes(
    bp: Blueprint,
    permission_prefix: str,
    request_cls: Type[RequestDTO],
    service_factory: Callable,
) -> None:
    def index():
        db = SessionLocal()
        try:
            service = service_factory(db)
            items = [serialize(service, entity) for entity in service.list_all()]
            return api_response(True, f"{service.label} list retrieved", items)
        finally:
            db.close()

    def show(entity_id: int):
        db = SessionLocal()
        try:
            service = service_factory(db)
            entity = service.get(entity_id)
            return api_response(
                True, f"{service.label} retrieved", serialize(service, entity)
            )
        finally:
            db.close()

    def store():
        dto = request_cls.from_payload(request.get_json(silent=True))
        db = SessionLocal()
        try:
            service = service_factory(db)
            created = service.create(dto.to_entity())
            return api_response(
                True,
                f"{service.label} created successfully",
                serialize(service, created),
                201,
            )
        finally:
            db.close()

    def update(entity_id: int):
        dto = request_cls.from_payload(request.get_json(silent=True), partial=True)
        db = SessionLocal()
        try:
            service = service_factory(db)
            updated = service.update(entity_id, dto.changes())
            return api_response(
                True,
                f"{service.label} updated successfully",
                serialize(service, updated),
            )
        finally:
            db.close()

    def destroy(entity_id: int):
        db = SessionLocal()
        try:
            service = service_factory(db)
            deleted = service.delete(entity_id)
            return api_response(
                True, f"{service.label} deleted successfully", to_response(deleted)
            )
        finally:
            db.close()

    routes = (
        ("", "index", index, "GET"),
        (f"/<{ID_CONVERTER}:entity_id>", "show", show, "GET"),
        ("", "store", store, "POST"),
        (f"/<{ID_CONVERTER}:entity_id>", "update", update, "PUT"),
        (f"/<{ID_CONVERTER}:entity_id>", "destroy", destroy, "DELETE"),
    )
    for rule, action, view, method in routes:
        bp.add_url_rule(
            rule,
            endpoint=action,
            view_func=require_permission(f"{permission_prefix}.{action}")(view),
            methods=[method],
            strict_slashes=False,
        )


def register_children_route(
    bp: Blueprint,
    permission_prefix: str,
    children: str,
    service_factory: Callable,
    child_repo_cls,
    foreign_key: str,
) -> None:
    """Bind ``GET /<id>/<children>``: 404 for a missing parent, else the list."""

    def list_children(entity_id: int):
        db = SessionLocal()
        try:
            service = service_factory(db)
            items = service.list_children(entity_id, child_repo_cls(db), foreign_key)
            return api_response(
                True,
                f"{children.replace('_', ' ').capitalize()} retrieved",
                [to_response(item) for item in items],
            )
        finally:
            db.close()

    bp.add_url_rule(
        f"/<{ID_CONVERTER}:entity_id>/{children.replace('_', '-')}",
        endpoint=children,
        view_func=require_permission(f"{permission_prefix}.{children}")(list_children),
        methods=["GET"],
    )
