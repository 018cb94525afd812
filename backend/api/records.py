"""
Record endpoints.

build_record_router() exposes one GenericRecordService over HTTP. The
service's envelope is returned verbatim as the body and its status_code
becomes the HTTP status. The router owns the request's unit of work:
successful mutations are committed, failures are rolled back.
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from constants import HTTPStatus, RequestMethod, ResponseMessage
from dtos.request import QueryRequest, RequestModel
from dtos.response import ResponseModel
from services.record_service import GenericRecordService

logger = logging.getLogger(__name__)


def _respond(service: GenericRecordService, envelope: ResponseModel) -> JSONResponse:
    db = service.repository.db
    if not envelope.is_success:
        db.rollback()
    elif envelope.method != RequestMethod.GET:
        try:
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Commit failed for {service.entity_name}: {e}", exc_info=True)
            envelope = ResponseModel.failure(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                envelope.method,
                ResponseMessage.FAILED + str(e)
            )
    return JSONResponse(status_code=envelope.status_code, content=envelope.model_dump(mode="json"))


def build_record_router(get_service: Callable[..., GenericRecordService], dto_class: type) -> APIRouter:
    """
    Create CRUD + query routes for one entity kind.

    Args:
        get_service: FastAPI dependency returning the service
        dto_class: Transfer class accepted in create/update bodies

    Returns:
        APIRouter to mount under the resource prefix
    """
    router = APIRouter()
    RecordRequest = RequestModel[dto_class]

    @router.get("/")
    def list_records(service: GenericRecordService = Depends(get_service)):
        return _respond(service, service.get_all())

    @router.post("/query")
    def query_records(body: QueryRequest, service: GenericRecordService = Depends(get_service)):
        return _respond(service, service.query_filter(body))

    @router.get("/{record_id}")
    def get_record(record_id: int, service: GenericRecordService = Depends(get_service)):
        return _respond(service, service.get_by_id(record_id))

    @router.post("/")
    def create_record(req: RecordRequest, service: GenericRecordService = Depends(get_service)):
        return _respond(service, service.create(req))

    @router.put("/")
    def update_record(req: RecordRequest, service: GenericRecordService = Depends(get_service)):
        return _respond(service, service.update(req))

    @router.delete("/{record_id}")
    def delete_record(record_id: int, service: GenericRecordService = Depends(get_service)):
        return _respond(service, service.delete(record_id))

    return router
