"""
crudkit — FastAPI Integration
===============================

What:  Exposes a CrudService over HTTP and maps ApplicationError to JSON.
How:   register_exception_handlers() installs handlers on a FastAPI app;
       create_crud_router() builds an APIRouter whose handlers only parse
       the request, await the service and serialize the result.
Who:   Applications that serve CRUD resources with FastAPI.

Routes built by create_crud_router(service, prefix="/users"):
    POST   /users          → service.create         (201)
    GET    /users          → service.get_all
    POST   /users/bulk     → service.insert_many    (201)
    GET    /users/count    → service.count          (query params = filter)
    GET    /users/exists   → service.exists         (query params = filter)
    GET    /users/{id}     → service.get
    PATCH  /users/{id}     → service.update
    DELETE /users/{id}     → service.delete

Error response body:
    {"error": "not_found", "message": "User not found with id: 7", "status_code": 404}
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from fastapi import APIRouter, Body, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from crudkit.exceptions import ApplicationError
from crudkit.services.crud_service import CrudService

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map crudkit errors to HTTP responses.

        ApplicationError  → its own status_code, body from to_dict()
        Exception         → 500 with a generic message (details logged only)
    """

    @app.exception_handler(ApplicationError)
    async def handle_application_error(request: Request, exc: ApplicationError):
        if exc.status_code >= 500:
            logger.error("%s %s → %d: %s | Context: %s",
                         request.method, request.url.path, exc.status_code, exc.message, exc.context)
        else:
            logger.info("%s %s → %d: %s",
                        request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "status_code": 500,
            },
        )


def create_crud_router(
    service: CrudService,
    *,
    prefix: str,
    tags: Optional[Sequence[str]] = None,
    id_type: type = str,
    serializer: Callable[[Any], Any] = jsonable_encoder,
    filter_parser: Optional[Callable[[Dict[str, str]], Mapping[str, Any]]] = None,
) -> APIRouter:
    """
    Build an APIRouter exposing the eight service operations.

    Args:
        service:     The CrudService to expose
        prefix:      URL prefix, e.g. "/users" (must start with "/")
        tags:        OpenAPI tags (defaults to the prefix without "/")
        id_type:     Type of the {record_id} path parameter (str, int, UUID...)
        serializer:  Turns backend records into JSON-compatible values
        filter_parser: Converts the query string of /count and /exists into a
                     backend filter. Without one the filter holds the raw
                     string values, which only match string fields.
    """
    router = APIRouter(prefix=prefix, tags=list(tags or [prefix.strip("/")]))

    def build_filter(request: Request) -> Mapping[str, Any]:
        raw = dict(request.query_params)
        return filter_parser(raw) if filter_parser is not None else raw

    @router.post("", status_code=201)
    async def create_record(data: Dict[str, Any] = Body(...)):
        return serializer(await service.create(data))

    @router.get("")
    async def list_records():
        return serializer(await service.get_all())

    @router.post("/bulk", status_code=201)
    async def insert_records(records: List[Dict[str, Any]] = Body(...)):
        return serializer(await service.insert_many(records))

    @router.get("/count")
    async def count_records(request: Request):
        return {"count": await service.count(build_filter(request))}

    @router.get("/exists")
    async def record_exists(request: Request):
        indicator = await service.exists(build_filter(request))
        return {"exists": bool(indicator)}

    # Annotated with id_type so FastAPI parses and validates the path value
    @router.get("/{record_id}")
    async def get_record(record_id: id_type):
        return serializer(await service.get(record_id))

    @router.patch("/{record_id}")
    async def update_record(record_id: id_type, data: Dict[str, Any] = Body(...)):
        return serializer(await service.update(record_id, data))

    @router.delete("/{record_id}")
    async def delete_record(record_id: id_type):
        return serializer(await service.delete(record_id))

    return router
