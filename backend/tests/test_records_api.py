import pytest
from fastapi.testclient import TestClient

from database import get_db
from main import create_app


@pytest.fixture
def client(db_session, staff):
    app = create_app(log_dir=None)

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


class TestHealth:
    def test_lists_resources(self, client):
        res = client.get("/api/health")

        assert res.status_code == 200
        assert res.json() == {"status": "healthy", "resources": ["departments", "employees", "skills"]}


class TestRecordRoutes:
    def test_list(self, client):
        res = client.get("/api/employees/")

        body = res.json()
        assert res.status_code == 200
        assert body["status"] == "SUCCESS"
        assert body["method"] == "GET"
        assert len(body["data"]) == 25
        assert body["data"][0]["skills"] == [1, 2]

    def test_get_by_id(self, client):
        res = client.get("/api/skills/3")

        assert res.status_code == 200
        assert res.json()["data"] == {"id": 3, "name": "Go", "level": 2}

    def test_unknown_id_is_500(self, client):
        res = client.get("/api/employees/999")

        body = res.json()
        assert res.status_code == 500
        assert body["status"] == "FAILED"
        assert body["data"] is None

    def test_create_is_committed(self, client, db_session):
        res = client.post("/api/employees/", json={
            "data": {"name": "Eve Adams", "email": "eve@example.com", "department": 2, "skills": [3]}
        })

        body = res.json()
        assert res.status_code == 201
        assert body["message"] == "Successfully processed the request. Created Employee successfully"
        assert body["data"]["department"] == 2

        db_session.rollback()
        assert client.get(f"/api/employees/{body['data']['id']}").status_code == 200

    def test_update_without_id_is_400(self, client):
        res = client.put("/api/departments/", json={"data": {"name": "Nameless"}})

        assert res.status_code == 400
        assert res.json()["message"].endswith("Unable to find Department with id: None.")

    def test_update(self, client):
        res = client.put("/api/departments/", json={"data": {"id": 2, "code": "SLS"}})

        assert res.status_code == 200
        assert res.json()["data"] == {"id": 2, "name": "Sales", "code": "SLS"}

    def test_failed_delete_is_rolled_back(self, client):
        res = client.delete("/api/departments/2")

        assert res.status_code == 500
        assert "FOREIGN KEY" in res.json()["message"]
        assert client.get("/api/departments/2").status_code == 200

    def test_delete(self, client):
        res = client.delete("/api/employees/3")

        assert res.status_code == 200
        assert res.json()["message"] == "Deleted Employee with id: 3"
        assert client.get("/api/employees/3").status_code == 500

    def test_query(self, client):
        res = client.post("/api/employees/query", json={
            "filter": {
                "page": {"page_number": 1, "page_size": 2},
                "search_term": "Foo",
                "conditions": [{"column_name": "name", "column_type": "string"}]
            },
            "children": ["department"]
        })

        body = res.json()
        assert res.status_code == 200
        assert body["data"]["count"] == 2
        assert [e["department"]["code"] for e in body["data"]["list"]] == ["ENG", "ENG"]

    def test_query_search_is_case_sensitive(self, client):
        res = client.post("/api/employees/query", json={
            "filter": {
                "search_term": "foo",
                "conditions": [{"column_name": "name", "column_type": "string"}]
            }
        })

        assert res.status_code == 200
        assert res.json()["data"] == {"count": 0, "list": []}

    def test_query_with_unknown_column_is_500(self, client):
        res = client.post("/api/employees/query", json={
            "filter": {"search_term": "x", "conditions": [{"column_name": "salary"}]}
        })

        assert res.status_code == 500
        assert 'has no attribute "salary"' in res.json()["message"]

    def test_invalid_page_is_rejected_before_the_service(self, client):
        res = client.post("/api/employees/query", json={"filter": {"page": {"page_number": 0}}})

        assert res.status_code == 422
