"""HTTP tests for /api/categories: public listing and admin-gated mutations."""

import unittest
from unittest.mock import patch

from news_api.models import Category
from tests.support import ApiTestCase


class TestCategoryReads(ApiTestCase):
    def test_list_is_public(self) -> None:
        self.add_category("Politics")
        self.add_category("Economy")
        resp = self.client.get("/api/categories")
        self.assertEqual(resp.status_code, 200)
        names = [c["name"] for c in resp.json()["categories"]]
        self.assertEqual(names, ["Politics", "Economy"])


class TestCategoryGate(ApiTestCase):
    @patch("news_api.services.categories.create_category")
    def test_missing_token_is_forbidden_and_handler_not_run(self, mock_create) -> None:
        resp = self.client.post("/api/categories", json={"name": "Sports"})
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"message": "Access denied"})
        mock_create.assert_not_called()

    @patch("news_api.services.categories.delete_category")
    def test_non_admin_is_forbidden(self, mock_delete) -> None:
        user_id = self.add_user()
        category_id = self.add_category("Sports")
        resp = self.client.delete(f"/api/categories/{category_id}", headers=self.bearer(user_id))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"message": "Admin access required"})
        mock_delete.assert_not_called()

    def test_garbage_token_is_unauthorized(self) -> None:
        resp = self.client.put(
            "/api/categories/1",
            json={"name": "Sports"},
            headers={"Authorization": "Bearer garbage"},
        )
        self.assertEqual(resp.status_code, 401)


class TestGateBeforeBody(ApiTestCase):
    """A malformed body must not leak past the gate as a validation error."""

    def _post_malformed(self, headers: dict[str, str] | None = None):
        return self.client.post(
            "/api/categories",
            content=b"{not json",
            headers={"Content-Type": "application/json", **(headers or {})},
        )

    def test_malformed_body_without_token_is_forbidden(self) -> None:
        resp = self._post_malformed()
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"message": "Access denied"})

    def test_malformed_body_with_garbage_token_is_unauthorized(self) -> None:
        resp = self._post_malformed({"Authorization": "Bearer garbage"})
        self.assertEqual(resp.status_code, 401)

    def test_malformed_body_from_non_admin_is_forbidden(self) -> None:
        resp = self._post_malformed(self.bearer(self.add_user()))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"message": "Admin access required"})

    def test_invalid_body_without_token_is_forbidden(self) -> None:
        resp = self.client.post("/api/categories", json={})
        self.assertEqual(resp.status_code, 403)

    def test_malformed_body_from_admin_is_invalid(self) -> None:
        resp = self._post_malformed(self.bearer(self.add_admin()))
        self.assertEqual(resp.status_code, 422)


class TestCategoryMutations(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.headers = self.bearer(self.add_admin())

    def test_create(self) -> None:
        resp = self.client.post("/api/categories", json={"name": "Sports"}, headers=self.headers)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["category"]["name"], "Sports")

    def test_duplicate_name_conflicts(self) -> None:
        self.add_category("Sports")
        resp = self.client.post("/api/categories", json={"name": "Sports"}, headers=self.headers)
        self.assertEqual(resp.status_code, 400)

    def test_blank_name_is_invalid(self) -> None:
        resp = self.client.post("/api/categories", json={"name": ""}, headers=self.headers)
        self.assertEqual(resp.status_code, 422)

    def test_whitespace_name_is_invalid(self) -> None:
        resp = self.client.post("/api/categories", json={"name": "   "}, headers=self.headers)
        self.assertEqual(resp.status_code, 422)
        category_id = self.add_category("Sports")
        resp = self.client.put(
            f"/api/categories/{category_id}", json={"name": "  \t "}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 422)
        with self.session_factory() as db:
            self.assertEqual(db.query(Category).count(), 1)

    def test_name_is_stored_trimmed(self) -> None:
        resp = self.client.post(
            "/api/categories", json={"name": "  Sports "}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["category"]["name"], "Sports")

    def test_update(self) -> None:
        category_id = self.add_category("Sprots")
        resp = self.client.put(
            f"/api/categories/{category_id}", json={"name": "Sports"}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["category"], {"id": category_id, "name": "Sports"})

    def test_update_missing_is_not_found(self) -> None:
        resp = self.client.put("/api/categories/999", json={"name": "X"}, headers=self.headers)
        self.assertEqual(resp.status_code, 404)

    def test_delete(self) -> None:
        category_id = self.add_category("Sports")
        resp = self.client.delete(f"/api/categories/{category_id}", headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        with self.session_factory() as db:
            self.assertIsNone(db.get(Category, category_id))
        again = self.client.delete(f"/api/categories/{category_id}", headers=self.headers)
        self.assertEqual(again.status_code, 404)


if __name__ == "__main__":
    unittest.main()
