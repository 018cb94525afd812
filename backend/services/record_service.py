"""
Generic Record Service

CRUD plus filtered/paginated listing for any entity kind. One instance is
parameterized by an entity class, a transfer class, the transfer fields that
hold relational identifiers, and a display name for messages.

Every public operation returns a ResponseModel. Storage, mapping and query
errors are caught here and turned into FAILED envelopes; nothing is
re-raised to the caller. The service flushes through the repository but
never commits; the caller owns the unit of work.
"""

from typing import Any, Dict, Generic, Optional, Sequence, TypeVar

from constants import HTTPStatus, RequestMethod, ResponseMessage
from dtos.request import QueryRequest, RequestModel
from dtos.response import QueryResult, ResponseModel
from mapping import ObjectMapper, wrap_references
from repositories.record_repository import RecordRepository
from repositories.record_specifications import ColumnContainsSpec
from utils.logging_utils import StructuredLogger, log_operation

logger = StructuredLogger(__name__)

TEntity = TypeVar('TEntity')
TDto = TypeVar('TDto')


class GenericRecordService(Generic[TEntity, TDto]):
    """Service for record operations on one entity kind."""

    def __init__(
        self,
        repository: RecordRepository[TEntity],
        relational_fields: Sequence[str],
        entity_class: type,
        dto_class: type,
        entity_name: str,
        mapper: Optional[ObjectMapper] = None
    ):
        """
        Initialize GenericRecordService.

        Args:
            repository: Storage for the entity kind
            relational_fields: Transfer fields holding related ids
            entity_class: SQLAlchemy model class
            dto_class: Pydantic transfer class
            entity_name: Name used in response messages
            mapper: Object mapper; defaults to one resolving references
                through the repository
        """
        self.repository = repository
        self.relational_fields = list(relational_fields)
        self.entity_class = entity_class
        self.dto_class = dto_class
        self.entity_name = entity_name
        self.mapper = mapper or ObjectMapper(reference_loader=repository.get_reference)

    def _get_mapped_object(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Payload with relational ids wrapped as references."""
        return wrap_references(data, self.relational_fields)

    def _payload(self, req: RequestModel) -> Dict[str, Any]:
        data = req.data
        if hasattr(data, "model_dump"):
            return data.model_dump(exclude_unset=True)
        return dict(data or {})

    def _failed(self, method: RequestMethod, error: Exception) -> ResponseModel:
        return ResponseModel.failure(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            method,
            ResponseMessage.FAILED + str(error)
        )

    @log_operation("get_all")
    def get_all(self) -> ResponseModel:
        try:
            data = self.repository.find_all()
            return ResponseModel.success(
                HTTPStatus.OK,
                RequestMethod.GET,
                ResponseMessage.SUCCESS,
                self.mapper.to_dto(self.dto_class, data)
            )
        except Exception as e:
            logger.warning(f"Listing {self.entity_name} failed: {e}", extra={"entity": self.entity_name})
            return self._failed(RequestMethod.GET, e)

    @log_operation("get_by_id")
    def get_by_id(self, id: Any) -> ResponseModel:
        # Not-found is reported like any other storage failure (500)
        try:
            data = self.repository.find_by_id(id)
            return ResponseModel.success(
                HTTPStatus.OK,
                RequestMethod.GET,
                ResponseMessage.SUCCESS,
                self.mapper.to_dto(self.dto_class, data)
            )
        except Exception as e:
            logger.warning(
                f"Fetching {self.entity_name} {id} failed: {e}",
                extra={"entity": self.entity_name, "record_id": id}
            )
            return self._failed(RequestMethod.GET, e)

    @log_operation("create")
    def create(self, req: RequestModel) -> ResponseModel:
        try:
            body = self._get_mapped_object(self._payload(req))
            entity = self.mapper.to_instance(self.entity_class, body)
            obj = self.repository.create(entity)
            created = self.repository.save(obj)
            logger.info(
                f"Created {self.entity_name} {created.id}",
                extra={"entity": self.entity_name, "record_id": created.id}
            )
            return ResponseModel.success(
                HTTPStatus.CREATED,
                RequestMethod.POST,
                ResponseMessage.SUCCESS + f"Created {self.entity_name} successfully",
                self.mapper.to_dto(self.dto_class, created)
            )
        except Exception as e:
            logger.error(
                f"Creating {self.entity_name} failed: {e}",
                extra={"entity": self.entity_name},
                exc_info=True
            )
            return self._failed(RequestMethod.POST, e)

    @log_operation("update")
    def update(self, req: RequestModel) -> ResponseModel:
        try:
            payload = self._payload(req)
            id = payload.get("id")
            if not id:
                return ResponseModel.failure(
                    HTTPStatus.BAD_REQUEST,
                    RequestMethod.PUT,
                    ResponseMessage.FAILED + f"Unable to find {self.entity_name} with id: {id}."
                )

            existing = self.repository.find_by_id(id)
            body = self._get_mapped_object(payload)
            merged = {**self.mapper.to_plain(existing), **body}
            updated = self.repository.save(self.mapper.to_instance(self.entity_class, merged))
            logger.info(
                f"Updated {self.entity_name} {id}",
                extra={"entity": self.entity_name, "record_id": id}
            )
            return ResponseModel.success(
                HTTPStatus.OK,
                RequestMethod.PUT,
                ResponseMessage.SUCCESS + f"Updated {self.entity_name} with id: {id} successfully",
                self.mapper.to_dto(self.dto_class, updated)
            )
        except Exception as e:
            logger.warning(f"Updating {self.entity_name} failed: {e}", extra={"entity": self.entity_name})
            return self._failed(RequestMethod.PUT, e)

    @log_operation("delete")
    def delete(self, id: Any) -> ResponseModel:
        try:
            obj = self.repository.find_by_id(id)
            deleted = self.repository.remove(obj)
            logger.info(
                f"Deleted {self.entity_name} {id}",
                extra={"entity": self.entity_name, "record_id": id}
            )
            return ResponseModel.success(
                HTTPStatus.OK,
                RequestMethod.DELETE,
                f"Deleted {self.entity_name} with id: {id}",
                self.mapper.to_dto(self.dto_class, deleted)
            )
        except Exception as e:
            logger.warning(
                f"Deleting {self.entity_name} {id} failed: {e}",
                extra={"entity": self.entity_name, "record_id": id}
            )
            return self._failed(RequestMethod.DELETE, e)

    @log_operation("query_filter")
    def query_filter(self, body: QueryRequest) -> ResponseModel:
        """
        Filtered, ordered, paginated listing.

        The search term is matched (case-sensitive substring) against every
        condition column, OR-ed together; no conditions means no filter.
        ``count`` is the number of matches before paging.
        """
        page_size = body.filter.page.page_size
        offset = (body.filter.page.page_number - 1) * page_size
        search = body.filter.search_term
        children = list(body.children or [])
        try:
            builder = self.repository.create_query_builder()
            for condition in body.filter.conditions:
                builder.or_where(ColumnContainsSpec(condition.column_name, search, condition.column_type))
            builder.order_by(body.filter.order_by_field, body.filter.order_by)

            entity_count = builder.get_count()

            builder.offset(offset).limit(page_size)
            for child in children:
                builder.left_join_and_select(child)
            data = builder.get_many()

            logger.debug(
                f"Filtered {self.entity_name}: {len(data)} of {entity_count}",
                extra={"entity": self.entity_name}
            )
            result = QueryResult(
                count=entity_count,
                list=self.mapper.to_dto(self.dto_class, data, include=children)
            )
            return ResponseModel.success(HTTPStatus.OK, RequestMethod.GET, ResponseMessage.SUCCESS, result)
        except Exception as e:
            logger.error(
                f"Filtering {self.entity_name} failed: {e}",
                extra={"entity": self.entity_name},
                exc_info=True
            )
            return self._failed(RequestMethod.GET, e)
