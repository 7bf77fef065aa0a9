# tests/api/test_employee_routes.py
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from employee_console.db.models.sales import Lead, LeadPurchase
from employee_console.db.models.vendor import State, City
from employee_console.services.auth_service import AuthService
from employee_console.services.image_service import CATEGORY_IMAGE_MAX_BYTES, build_data_url


def test_health_check(test_client):
    response = test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Request-ID" in response.headers


def test_detailed_health_check(test_client):
    response = test_client.get("/health/detailed")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["dependencies"]["database"]["status"] == "healthy"
    assert data["dependencies"]["storage"]["status"] == "healthy"


def test_detailed_health_check_reports_storage_failure(test_client, s3_client):
    s3_client.head_bucket.side_effect = RuntimeError("bucket gone")

    data = test_client.get("/health/detailed").json()

    assert data["status"] == "unhealthy"
    assert "bucket gone" in data["dependencies"]["storage"]["message"]


class TestProfile:
    def test_requires_bearer_token(self, test_client):
        response = test_client.get("/api/employee/me")

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Not authenticated"}

    def test_rejects_unknown_token(self, test_client):
        response = test_client.get("/api/employee/me", headers={"Authorization": "Bearer ecs_nope"})

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Invalid or expired session"}

    def test_returns_profile(self, test_client, sales_headers):
        response = test_client.get("/api/employee/me", headers=sales_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["employee"]["email"] == "sales@example.com"
        assert data["employee"]["role"] == "SALES"
        assert data["can_access_sales"] is True

    def test_identity_without_profile(self, test_client, db_session):
        auth_service = AuthService(db_session)
        user = auth_service.sign_up("vendor@example.com", "secret123")
        token, _ = auth_service.issue_session(user.id)

        response = test_client.get("/api/employee/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 404
        assert response.json()["error"] == "Employee profile not found"


class TestSales:
    def test_data_entry_is_refused(self, test_client, data_entry_headers):
        response = test_client.get("/api/employee/sales/stats", headers=data_entry_headers)

        assert response.status_code == 403
        assert response.json() == {"success": False, "error": "Sales access required"}

    def test_stats_use_camel_case(self, test_client, sales_headers, db_session):
        now = datetime.now(timezone.utc)
        db_session.add_all([
            Lead(name="Fresh", status="NEW", created_at=now - timedelta(hours=1)),
            LeadPurchase(amount=Decimal("1234.00"), purchase_date=now - timedelta(hours=1)),
        ])
        db_session.commit()

        response = test_client.get("/api/employee/sales/stats", headers=sales_headers)

        assert response.status_code == 200
        stats = response.json()["stats"]
        assert stats["totalLeads"] == 1
        assert stats["newLeads7d"] == 1
        assert stats["newLeadsTrendPct"] is None
        assert stats["revenue7d"] == 1234
        assert stats["revenue7dFmt"] == "₹1,234"

    def test_update_lead_status(self, test_client, sales_headers, db_session):
        lead = Lead(name="Prospect", status="NEW")
        db_session.add(lead)
        db_session.commit()

        response = test_client.patch(
            f"/api/employee/sales/leads/{lead.id}/status", json={"status": "converted"}, headers=sales_headers
        )

        assert response.status_code == 200
        assert response.json()["lead"]["status"] == "CONVERTED"

    def test_update_unknown_lead(self, test_client, sales_headers):
        response = test_client.patch(
            f"/api/employee/sales/leads/{uuid.uuid4()}/status", json={"status": "NEW"}, headers=sales_headers
        )
        assert response.status_code == 404

    def test_update_lead_without_status(self, test_client, sales_headers):
        response = test_client.patch(
            f"/api/employee/sales/leads/{uuid.uuid4()}/status", json={"status": " "}, headers=sales_headers
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Lead id and status are required"

    def test_leads_and_pricing_rules(self, test_client, sales_headers):
        assert test_client.get("/api/employee/sales/leads", headers=sales_headers).json() == {
            "success": True, "leads": []
        }
        assert test_client.get("/api/employee/sales/pricing-rules", headers=sales_headers).json() == {
            "success": True, "rules": []
        }


class TestCategories:
    def test_requires_session(self, test_client):
        response = test_client.get("/api/employee/categories/head")

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Not authenticated"}

    def test_list_with_malformed_parent(self, test_client, data_entry_headers):
        for name in ("Electronics", "Apparel"):
            head = test_client.post("/api/employee/categories/head", json={"name": name}, headers=data_entry_headers)
            test_client.post(
                "/api/employee/categories/sub",
                json={"name": f"{name} Accessories", "parent_id": head.json()["category"]["id"]},
                headers=data_entry_headers,
            )

        response = test_client.get(
            "/api/employee/categories/sub", params={"parent_id": "garbage"}, headers=data_entry_headers
        )
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid parent id"}

        unknown = test_client.get(
            "/api/employee/categories/sub", params={"parent_id": str(uuid.uuid4())}, headers=data_entry_headers
        )
        assert unknown.json()["categories"] == []

    def test_unknown_level(self, test_client, data_entry_headers):
        assert test_client.get("/api/employee/categories/mega", headers=data_entry_headers).status_code == 422

    def test_category_lifecycle(self, test_client, data_entry_headers):
        head = test_client.post(
            "/api/employee/categories/head", json={"name": "Electronics"}, headers=data_entry_headers
        )
        assert head.status_code == 201
        head_id = head.json()["category"]["id"]
        assert head.json()["category"]["slug"] == "electronics"

        sub = test_client.post(
            "/api/employee/categories/sub",
            json={"name": "Mobile Phones", "parent_id": head_id},
            headers=data_entry_headers,
        )
        assert sub.status_code == 201
        sub_id = sub.json()["category"]["id"]

        listed = test_client.get(
            "/api/employee/categories/sub", params={"parent_id": head_id}, headers=data_entry_headers
        )
        assert [c["name"] for c in listed.json()["categories"]] == ["Mobile Phones"]

        count = test_client.get(f"/api/employee/categories/head/{head_id}/child-count", headers=data_entry_headers)
        assert count.json() == {"success": True, "count": 1}

        refused = test_client.delete(f"/api/employee/categories/head/{head_id}", headers=data_entry_headers)
        assert refused.status_code == 409
        assert refused.json()["child_count"] == 1
        assert refused.json()["error"] == "Cannot delete. This head category has 1 sub-categories."

        updated = test_client.put(
            f"/api/employee/categories/sub/{sub_id}",
            json={"name": "Smart Phones", "parent_id": head_id},
            headers=data_entry_headers,
        )
        assert updated.json() == {"success": True, "id": sub_id}

        micro = test_client.post(
            "/api/employee/categories/micro",
            json={"name": "Cases", "parent_id": sub_id},
            headers=data_entry_headers,
        )
        micro_id = micro.json()["category"]["id"]
        refused_sub = test_client.delete(f"/api/employee/categories/sub/{sub_id}", headers=data_entry_headers)
        assert refused_sub.json()["error"] == "Cannot delete. This sub-category has 1 micro-categories."
        test_client.delete(f"/api/employee/categories/micro/{micro_id}", headers=data_entry_headers)

        assert test_client.delete(f"/api/employee/categories/sub/{sub_id}", headers=data_entry_headers).json() == {
            "success": True
        }
        assert test_client.delete(f"/api/employee/categories/head/{head_id}", headers=data_entry_headers).status_code == 200

    def test_duplicate_slug(self, test_client, data_entry_headers):
        test_client.post("/api/employee/categories/head", json={"name": "Toys"}, headers=data_entry_headers)
        response = test_client.post("/api/employee/categories/head", json={"name": "Toys"}, headers=data_entry_headers)

        assert response.status_code == 409
        assert "toys" in response.json()["error"]

    def test_sub_with_missing_parent(self, test_client, data_entry_headers):
        response = test_client.post(
            "/api/employee/categories/sub",
            json={"name": "Orphan", "parent_id": str(uuid.uuid4())},
            headers=data_entry_headers,
        )
        assert response.status_code == 404

    def test_update_missing_category(self, test_client, data_entry_headers):
        response = test_client.put(
            f"/api/employee/categories/head/{uuid.uuid4()}", json={"name": "Ghost"}, headers=data_entry_headers
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Head category not found. Please refresh and try again."

    def test_invalid_form(self, test_client, data_entry_headers):
        response = test_client.post("/api/employee/categories/head", json={"name": "%%%"}, headers=data_entry_headers)

        assert response.status_code == 422
        assert response.json()["success"] is False
        assert response.json()["error"] == "Name is required"


class TestUploads:
    def test_upload_returns_public_url(self, test_client, data_entry_headers, s3_client, image_bytes):
        body = image_bytes(200 * 1024)
        response = test_client.post(
            "/api/employee/category-image-upload",
            json={
                "level": "head",
                "slug": "electronics",
                "fileName": "e.png",
                "contentType": "image/png",
                "dataUrl": build_data_url("image/png", body),
            },
            headers=data_entry_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["bucket"] == "avatars"
        assert data["publicUrl"].startswith("https://cdn.example.com/avatars/category-images/head/electronics-")
        s3_client.put_object.assert_called_once()

    def test_oversized_upload(self, test_client, data_entry_headers, s3_client, image_bytes):
        response = test_client.post(
            "/api/employee/category-image-upload",
            json={
                "level": "head",
                "slug": "electronics",
                "content_type": "image/png",
                "data_url": build_data_url("image/png", image_bytes(CATEGORY_IMAGE_MAX_BYTES + 1)),
            },
            headers=data_entry_headers,
        )

        assert response.status_code == 413
        assert response.json()["success"] is False
        s3_client.put_object.assert_not_called()


class TestVendors:
    @pytest.fixture
    def location(self, db_session):
        state = State(name="Karnataka")
        db_session.add(state)
        db_session.flush()
        city = City(name="Bengaluru", state_id=state.id)
        db_session.add(city)
        db_session.commit()
        return state, city

    def test_states_and_cities(self, test_client, data_entry_headers, location):
        state, city = location

        states = test_client.get("/api/employee/vendors/states", headers=data_entry_headers).json()["states"]
        cities = test_client.get(
            f"/api/employee/vendors/states/{state.id}/cities", headers=data_entry_headers
        ).json()["cities"]

        assert states == [{"id": str(state.id), "name": "Karnataka"}]
        assert [c["name"] for c in cities] == ["Bengaluru"]

    def test_onboard_and_lookup(self, test_client, data_entry_headers, location):
        state, city = location
        response = test_client.post(
            "/api/employee/vendors/onboard",
            json={
                "company_name": "Bright Lights",
                "owner_name": "Asha Rao",
                "email": "asha@brightlights.example",
                "phone": "9123456780",
                "state_id": str(state.id),
                "city_id": str(city.id),
                "temp_password": "TempPass1!",
            },
            headers=data_entry_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["vendor_id"].startswith("VND-")
        assert data["vendor"]["city_name"] == "Bengaluru"
        assert "temp_password" not in data["vendor"]

        lookup = test_client.get(
            f"/api/employee/vendors/by-user/{data['vendor']['user_id']}", headers=data_entry_headers
        )
        assert lookup.json()["vendor"]["vendor_id"] == data["vendor_id"]

    def test_onboard_duplicate_email(self, test_client, data_entry_headers):
        form = {
            "company_name": "Dup Co",
            "owner_name": "Dup Owner",
            "email": "entry@example.com",
            "phone": "9123456780",
        }
        response = test_client.post("/api/employee/vendors/onboard", json=form, headers=data_entry_headers)

        assert response.status_code == 409
        assert response.json()["error"] == "User already registered"

    def test_unknown_vendor(self, test_client, data_entry_headers):
        response = test_client.get(f"/api/employee/vendors/by-user/{uuid.uuid4()}", headers=data_entry_headers)
        assert response.status_code == 404
