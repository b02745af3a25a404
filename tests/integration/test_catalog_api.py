"""
Integration tests for the catalog service endpoints.
"""

import pytest
from loguru import logger

pytestmark = pytest.mark.asyncio


class TestSystemEndpoints:
    """Tests for root banner and health check."""

    async def test_health_check(self, catalog_client):
        response = await catalog_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "catalog"

    async def test_root_banner(self, catalog_client):
        response = await catalog_client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "running"
        assert data["docs"] == "/docs"
        assert "version" in data

    async def test_request_id_is_echoed(self, catalog_client):
        response = await catalog_client.get("/livres", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    async def test_error_log_carries_request_id(self, catalog_client):
        messages = []
        sink_id = logger.add(messages.append, format="{message}")
        try:
            response = await catalog_client.get("/livres/99999", headers={"X-Request-ID": "req-42"})
        finally:
            logger.remove(sink_id)

        assert response.status_code == 404
        assert any("request_id=req-42" in m and "NOT_FOUND" in m for m in messages)


class TestBooksEndpoints:
    """Tests for book CRUD endpoints."""

    async def test_create_book(self, catalog_client, sample_book_data):
        response = await catalog_client.post("/livres", json=sample_book_data)

        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["id"], int)
        assert data["title"] == sample_book_data["title"]
        assert data["author"] == sample_book_data["author"]
        assert data["year"] == 1925
        assert "createdAt" in data
        assert "updatedAt" in data

    async def test_create_then_get_round_trips(self, catalog_client, sample_book_data):
        created = (await catalog_client.post("/livres", json=sample_book_data)).json()

        response = await catalog_client.get(f"/livres/{created['id']}")

        assert response.status_code == 200
        data = response.json()
        for field in ("title", "author", "year"):
            assert data[field] == sample_book_data[field]

    async def test_create_without_year(self, catalog_client):
        response = await catalog_client.post("/livres", json={"title": "Beowulf", "author": "Unknown"})

        assert response.status_code == 201
        assert response.json()["year"] is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"author": "Frank Herbert"},
            {"title": "Dune"},
            {"title": "", "author": "Frank Herbert"},
            {"title": "Dune", "author": "Frank Herbert", "year": "nineteen"},
            {},
        ],
    )
    async def test_create_invalid_input(self, catalog_client, payload):
        response = await catalog_client.post("/livres", json=payload)

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "INVALID_INPUT"
        assert "timestamp" in data

    async def test_list_books_in_insertion_order(self, catalog_client, sample_books_batch):
        for book in sample_books_batch:
            await catalog_client.post("/livres", json=book)

        response = await catalog_client.get("/livres")

        assert response.status_code == 200
        assert [b["title"] for b in response.json()] == [b["title"] for b in sample_books_batch]

    async def test_list_books_empty(self, catalog_client):
        response = await catalog_client.get("/livres")

        assert response.status_code == 200
        assert response.json() == []

    async def test_get_nonexistent_book(self, catalog_client):
        response = await catalog_client.get("/livres/99999")

        assert response.status_code == 404
        data = response.json()
        assert data["code"] == "NOT_FOUND"
        assert data["error"] == "Book not found"

    async def test_get_non_numeric_id(self, catalog_client):
        response = await catalog_client.get("/livres/abc")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"

    async def test_update_year_only(self, catalog_client, sample_book_data):
        created = (await catalog_client.post("/livres", json=sample_book_data)).json()

        response = await catalog_client.put(f"/livres/{created['id']}", json={"year": 1926})

        assert response.status_code == 200
        data = response.json()
        assert data["year"] == 1926
        assert data["title"] == created["title"]
        assert data["author"] == created["author"]

    async def test_update_null_title_is_ignored(self, catalog_client, sample_book_data):
        created = (await catalog_client.post("/livres", json=sample_book_data)).json()

        response = await catalog_client.put(
            f"/livres/{created['id']}", json={"title": None, "author": "F. S. Fitzgerald"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == created["title"]
        assert data["author"] == "F. S. Fitzgerald"

    async def test_update_null_year_clears_it(self, catalog_client, sample_book_data):
        created = (await catalog_client.post("/livres", json=sample_book_data)).json()

        response = await catalog_client.put(f"/livres/{created['id']}", json={"year": None})

        assert response.status_code == 200
        assert response.json()["year"] is None

    @pytest.mark.parametrize("payload", [{}, {"title": None}, {"isbn": "123"}])
    async def test_update_without_fields(self, catalog_client, sample_book_data, payload):
        created = (await catalog_client.post("/livres", json=sample_book_data)).json()

        response = await catalog_client.put(f"/livres/{created['id']}", json=payload)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"

    async def test_update_unknown_book_reports_not_found_first(self, catalog_client):
        response = await catalog_client.put("/livres/99999", json={})

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    async def test_delete_book(self, catalog_client, sample_book_data):
        created = (await catalog_client.post("/livres", json=sample_book_data)).json()

        response = await catalog_client.delete(f"/livres/{created['id']}")

        assert response.status_code == 204
        assert response.content == b""

        response = await catalog_client.get(f"/livres/{created['id']}")
        assert response.status_code == 404

    async def test_delete_nonexistent_book(self, catalog_client):
        response = await catalog_client.delete("/livres/99999")

        assert response.status_code == 404


class TestRoutingErrors:
    """Framework-level errors use the same envelope."""

    async def test_unknown_path(self, catalog_client):
        response = await catalog_client.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["code"] == "HTTP_ERROR"

    async def test_wrong_method(self, catalog_client):
        response = await catalog_client.patch("/livres/1", json={"year": 1})

        assert response.status_code == 405
        assert response.json()["code"] == "HTTP_ERROR"
