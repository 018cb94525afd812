import pytest
from pydantic import ValidationError

from config.app_config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from constants import HTTPStatus, RequestMethod, ResponseStatus
from dtos.request import PageRequest, QueryRequest, RequestModel
from dtos.response import QueryResult, ResponseModel
from dtos.transfer import DepartmentDTO, EmployeeDTO


class TestResponseModel:
    def test_success_carries_data(self):
        res = ResponseModel.success(HTTPStatus.OK, RequestMethod.GET, "ok", data=[1, 2])

        assert res.is_success
        assert res.status == ResponseStatus.SUCCESS
        assert res.data == [1, 2]

    def test_failure_has_no_data(self):
        res = ResponseModel.failure(HTTPStatus.BAD_REQUEST, RequestMethod.PUT, "nope")

        assert not res.is_success
        assert res.data is None

    def test_failed_envelope_rejects_data(self):
        with pytest.raises(ValidationError, match="cannot carry data"):
            ResponseModel(
                status_code=500,
                status=ResponseStatus.FAILED,
                method=RequestMethod.GET,
                message="boom",
                data={"id": 1}
            )

    def test_serializes_tags_as_strings(self):
        res = ResponseModel.success(HTTPStatus.CREATED, RequestMethod.POST, "made", DepartmentDTO(id=1, name="A"))

        assert res.model_dump(mode="json") == {
            "status_code": 201,
            "status": "SUCCESS",
            "method": "POST",
            "message": "made",
            "data": {"id": 1, "name": "A", "code": None},
        }

    def test_query_result_defaults_to_empty_page(self):
        assert QueryResult(count=0).list == []


class TestRequestModels:
    def test_page_defaults(self):
        req = QueryRequest()

        assert req.filter.page.page_number == 1
        assert req.filter.page.page_size == DEFAULT_PAGE_SIZE
        assert req.filter.search_term == ""
        assert req.filter.order_by_field == "id"
        assert req.filter.order_by == "ASC"
        assert req.children == []

    @pytest.mark.parametrize("kwargs", [
        {"page_number": 0},
        {"page_size": 0},
        {"page_size": MAX_PAGE_SIZE + 1},
    ])
    def test_page_bounds(self, kwargs):
        with pytest.raises(ValidationError):
            PageRequest(**kwargs)

    def test_schema_example_is_valid(self):
        example = QueryRequest.model_json_schema()["example"]

        req = QueryRequest.model_validate(example)

        assert req.filter.page.page_number == 2
        assert [c.column_type for c in req.filter.conditions] == ["string", "number"]

    def test_request_envelope_parses_relation_ids(self):
        req = RequestModel[EmployeeDTO].model_validate(
            {"data": {"name": "Eve", "department": 2, "skills": [1, 3]}}
        )

        assert req.data.department == 2
        assert req.data.skills == [1, 3]
        assert req.data.model_dump(exclude_unset=True) == {"name": "Eve", "department": 2, "skills": [1, 3]}
