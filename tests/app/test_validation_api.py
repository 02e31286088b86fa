"""Tests for the validation API endpoints."""


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestValidateInline:
    """Test POST /api/v1/validate."""

    def test_valid_value(self, client):
        response = client.post(
            "/api/v1/validate",
            json={"schema": {"type": ["string", "null"]}, "data": None},
        )
        assert response.status_code == 200
        assert response.json() == {"valid": True, "data": None, "errors": []}

    def test_unknown_keys_stripped_from_output(self, client):
        response = client.post(
            "/api/v1/validate",
            json={
                "schema": {
                    "type": "object",
                    "properties": {"name": {"type": "string"}},
                    "required": ["name"],
                    "additionalProperties": True,
                },
                "data": {"name": "John", "age": 30},
            },
        )
        assert response.json()["data"] == {"name": "John"}

    def test_invalid_value(self, client):
        response = client.post(
            "/api/v1/validate",
            json={"schema": {"type": "string", "enum": ["Alice", "Bob"]}, "data": "Charlie"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert "Value must be one of: Alice, Bob" in data["errors"][0]

    def test_unconvertible_schema_returns_400(self, client):
        response = client.post(
            "/api/v1/validate",
            json={"schema": {"type": "object", "properties": {"tags": {"type": "array"}}}, "data": {}},
        )
        assert response.status_code == 400
        body = response.json()
        assert "items" in body["detail"]
        assert body["path"] == "#/properties/tags"

    def test_missing_schema_returns_422(self, client):
        response = client.post("/api/v1/validate", json={"data": 1})
        assert response.status_code == 422

    def test_missing_data_returns_422(self, client):
        response = client.post("/api/v1/validate", json={"schema": {}})
        assert response.status_code == 422


class TestStoredSchemas:
    """Test /api/v1/schemas endpoints."""

    def test_list_schemas(self, client):
        response = client.get("/api/v1/schemas")
        assert response.status_code == 200
        assert response.json() == {"schemas": ["broken", "person", "tags"]}

    def test_validate_with_stored_schema(self, client):
        response = client.post(
            "/api/v1/schemas/person/validate",
            json={"data": {"name": "Ada", "age": 36}},
        )
        assert response.status_code == 200
        assert response.json() == {"valid": True, "data": {"name": "Ada", "age": 36}, "errors": []}

    def test_stored_schema_rejects_value(self, client):
        response = client.post(
            "/api/v1/schemas/person/validate",
            json={"data": {"age": 36}},
        )
        data = response.json()
        assert data["valid"] is False
        assert data["errors"] == ["name: Field required"]

    def test_unknown_schema_returns_404(self, client):
        response = client.post("/api/v1/schemas/nonexistent/validate", json={"data": 1})
        assert response.status_code == 404

    def test_broken_stored_schema_returns_400(self, client):
        response = client.post("/api/v1/schemas/broken/validate", json={"data": []})
        assert response.status_code == 400

    def test_corrupt_stored_schema_is_server_error(self, client, schemas_dir):
        (schemas_dir / "corrupt.schema.json").write_text("{not json", encoding="utf-8")
        response = client.post("/api/v1/schemas/corrupt/validate", json={"data": 1})
        assert response.status_code == 500
        assert "Unreadable schema document" in response.json()["detail"]

    def test_unsafe_schema_name_returns_404(self, client):
        response = client.post("/api/v1/schemas/.hidden/validate", json={"data": 1})
        assert response.status_code == 404


class TestInlineConstructionErrors:
    def test_non_object_all_of_branch_returns_400(self, client):
        response = client.post(
            "/api/v1/validate",
            json={"schema": {"allOf": [{"type": "string"}, "bad"]}, "data": "x"},
        )
        assert response.status_code == 400
        assert response.json()["path"] == "#/allOf/1"

    def test_integral_float_accepted_for_integer(self, client):
        response = client.post("/api/v1/validate", json={"schema": {"type": "integer"}, "data": 5.0})
        assert response.json()["valid"] is True
