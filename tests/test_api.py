"""
End-to-end tests for the HTTP API.
Requests go through the full middleware stack against an in-memory database.
"""

import uuid
from httpx import AsyncClient

from stayhub.models.profile import AppRole
from tests.conftest import TEST_PASSWORD, auth_headers

API = "/api/v1"


class TestAuthEndpoints:
    """Test sign-up, sign-in and session endpoints."""

    async def test_register_and_session(self, async_client: AsyncClient):
        response = await async_client.post(f"{API}/auth/register", json={
            "email": "new@example.com",
            "password": TEST_PASSWORD,
            "full_name": "New Guest"
        })

        assert response.status_code == 201
        data = response.json()
        assert data["user"]["role"] == "user"

        session = await async_client.get(
            f"{API}/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"}
        )
        assert session.status_code == 200
        assert session.json()["roles"] == ["user"]
        assert session.json()["is_admin"] is False

    async def test_register_duplicate(self, async_client: AsyncClient, test_user):
        response = await async_client.post(f"{API}/auth/register", json={
            "email": "guest@example.com",
            "password": TEST_PASSWORD
        })

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    async def test_login_and_refresh(self, async_client: AsyncClient, test_realtor):
        login = await async_client.post(f"{API}/auth/login", json={
            "email": "realtor@example.com",
            "password": TEST_PASSWORD
        })
        assert login.status_code == 200
        assert login.json()["user"]["role"] == "realtor"

        refresh = await async_client.post(f"{API}/auth/refresh", json={
            "refresh_token": login.json()["refresh_token"]
        })
        assert refresh.status_code == 200
        assert refresh.json()["token_type"] == "bearer"

    async def test_login_bad_password(self, async_client: AsyncClient, test_user):
        response = await async_client.post(f"{API}/auth/login", json={
            "email": "guest@example.com",
            "password": "wrongpassword"
        })

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    async def test_session_requires_token(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/auth/me")

        assert response.status_code == 401


class TestCurrencyEndpoints:
    """Test the display currency preference."""

    async def test_default_currency(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/currency")

        assert response.status_code == 200
        assert response.json()["currency"] == "KES"

    async def test_set_currency_stores_cookie(self, async_client: AsyncClient):
        response = await async_client.put(f"{API}/currency", json={"currency": "USD"})

        assert response.status_code == 200
        assert response.json()["currency"] == "USD"
        assert "currency=USD" in response.headers["set-cookie"]

    async def test_prices_follow_cookie(self, async_client: AsyncClient, rental):
        response = await async_client.get(
            f"{API}/properties/{rental.id}", headers={"Cookie": "currency=USD"}
        )

        assert response.status_code == 200
        assert response.json()["display_price"] == "$1,170"

    async def test_unknown_currency_rejected(self, async_client: AsyncClient):
        response = await async_client.put(f"{API}/currency", json={"currency": "EUR"})

        assert response.status_code == 422


class TestListingEndpoints:
    """Test the rentals and short-stays pages."""

    async def test_rentals_page(self, async_client: AsyncClient, rental, short_stay):
        response = await async_client.get(f"{API}/rentals")

        assert response.status_code == 200
        data = response.json()
        assert data["property_type"] == "long-term"
        assert [card["title"] for card in data["properties"]] == ["Modern Luxury Apartment in Westlands"]
        assert data["locations"] == ["All Locations", "Westlands"]
        assert data["active_filters"] == 0

    async def test_rentals_price_filter(self, async_client: AsyncClient, rental):
        response = await async_client.get(f"{API}/rentals", params={"min_price": 200000, "max_price": 300000})

        data = response.json()
        assert data["count"] == 0
        assert data["total"] == 1
        assert data["active_filters"] == 1

    async def test_airbnb_page_with_dates(self, async_client: AsyncClient, short_stay):
        response = await async_client.get(f"{API}/airbnb", params={
            "check_in": "2024-06-01",
            "check_out": "2024-06-04",
            "search": "villa"
        })

        assert response.status_code == 200
        card = response.json()["properties"][0]
        assert card["nights"] == 3
        assert card["display_stay_total"] == "KES 75,000"

    async def test_invalid_bedrooms(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/rentals", params={"bedrooms": "many"})

        assert response.status_code == 422


class TestPropertyEndpoints:
    """Test the public property detail and quote."""

    async def test_detail(self, async_client: AsyncClient, short_stay):
        response = await async_client.get(f"{API}/properties/{short_stay.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["bookable"] is True
        assert data["guest_options"] == [1, 2, 3, 4, 5, 6]
        assert len(data["gallery"]) == 2

    async def test_detail_not_found(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/properties/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    async def test_quote(self, async_client: AsyncClient, short_stay):
        response = await async_client.get(f"{API}/properties/{short_stay.id}/quote", params={
            "check_in": "2024-06-01",
            "check_out": "2024-06-04"
        })

        assert response.status_code == 200
        data = response.json()
        assert data["nights"] == 3
        assert data["subtotal"] == 75000
        assert data["service_fee"] == 7500
        assert data["total"] == 82500
        assert data["display_total"] == "KES 82,500"

    async def test_amenities(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/properties/amenities")

        assert response.status_code == 200
        assert "WiFi" in response.json()["amenities"]


class TestBookingEndpoints:
    """Test booking requests."""

    def payload(self, property_id, **overrides):
        data = {
            "property_id": str(property_id),
            "check_in": "2024-06-01",
            "check_out": "2024-06-04",
            "guests": 2
        }
        data.update(overrides)
        return data

    async def test_booking_requires_sign_in(self, async_client: AsyncClient, short_stay):
        response = await async_client.post(f"{API}/bookings", json=self.payload(short_stay.id))

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Please sign in to book this property"

    async def test_booking_requires_dates(self, async_client: AsyncClient, short_stay, test_user):
        response = await async_client.post(
            f"{API}/bookings",
            json=self.payload(short_stay.id, check_in=None, check_out=None),
            headers=auth_headers(test_user)
        )

        assert response.status_code == 422
        assert response.json()["error"]["message"] == "Please select check-in and check-out dates"

    async def test_rental_booking_rejected(self, async_client: AsyncClient, rental, test_user):
        detail = await async_client.get(f"{API}/properties/{rental.id}")
        assert detail.json()["bookable"] is False

        response = await async_client.post(
            f"{API}/bookings",
            json=self.payload(rental.id),
            headers=auth_headers(test_user)
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BAD_REQUEST"

        mine = await async_client.get(f"{API}/bookings/me", headers=auth_headers(test_user))
        assert mine.json()["total"] == 0

    async def test_rental_quote_rejected(self, async_client: AsyncClient, rental):
        response = await async_client.get(f"{API}/properties/{rental.id}/quote", params={
            "check_in": "2024-06-01",
            "check_out": "2024-06-04"
        })

        assert response.status_code == 400

    async def test_booking_guest_limit(self, async_client: AsyncClient, short_stay, test_user):
        response = await async_client.post(
            f"{API}/bookings",
            json=self.payload(short_stay.id, guests=7),
            headers=auth_headers(test_user)
        )

        assert response.status_code == 422
        assert response.json()["error"]["details"][0]["field"] == "guests"

    async def test_create_booking(self, async_client: AsyncClient, short_stay, test_user):
        response = await async_client.post(
            f"{API}/bookings",
            json=self.payload(short_stay.id, notes="Arriving late"),
            headers=auth_headers(test_user)
        )

        assert response.status_code == 201
        data = response.json()
        assert data["total_price"] == 82500
        assert data["status"] == "pending"
        assert data["nights"] == 3

        mine = await async_client.get(f"{API}/bookings/me", headers=auth_headers(test_user))
        assert mine.json()["total"] == 1


class TestAdminEndpoints:
    """Test the role-gated admin API."""

    async def test_dashboard_requires_sign_in(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/admin/dashboard")

        assert response.status_code == 401

    async def test_plain_user_forbidden(self, async_client: AsyncClient, test_user):
        response = await async_client.get(f"{API}/admin/dashboard", headers=auth_headers(test_user))

        assert response.status_code == 403

    async def test_realtor_sees_dashboard(self, async_client: AsyncClient, test_realtor, rental, short_stay):
        response = await async_client.get(f"{API}/admin/dashboard", headers=auth_headers(test_realtor))

        assert response.status_code == 200
        assert response.json() == {
            "total_properties": 2,
            "long_term_rentals": 1,
            "short_stays": 1,
            "available_properties": 2,
        }

    async def test_realtor_cannot_manage_users(self, async_client: AsyncClient, test_realtor):
        response = await async_client.get(f"{API}/admin/users", headers=auth_headers(test_realtor))

        assert response.status_code == 403

    async def test_property_crud(self, async_client: AsyncClient, test_admin):
        headers = auth_headers(test_admin)

        created = await async_client.post(f"{API}/admin/properties", headers=headers, json={
            "title": "Penthouse in Kilimani",
            "property_type": "long-term",
            "price": 220000,
            "location": "Kilimani, Nairobi",
            "bedrooms": 3,
            "amenities": ["Pool", "Gym"],
            "images": [{"image_url": "https://images.example.com/penthouse.jpg"}]
        })
        assert created.status_code == 201
        property_id = created.json()["id"]
        assert created.json()["images"][0]["is_primary"] is True

        updated = await async_client.put(
            f"{API}/admin/properties/{property_id}", headers=headers, json={"featured": True, "images": []}
        )
        assert updated.status_code == 200
        assert updated.json()["featured"] is True
        assert updated.json()["images"] == []

        toggled = await async_client.patch(
            f"{API}/admin/properties/{property_id}/availability", headers=headers, json={"is_available": False}
        )
        assert toggled.json()["is_available"] is False

        rows = await async_client.get(f"{API}/admin/properties", headers=headers)
        assert [row["id"] for row in rows.json()] == [property_id]

        deleted = await async_client.delete(f"{API}/admin/properties/{property_id}", headers=headers)
        assert deleted.status_code == 204

        missing = await async_client.get(f"{API}/admin/properties/{property_id}", headers=headers)
        assert missing.status_code == 404

    async def test_create_rejects_unknown_amenity(self, async_client: AsyncClient, test_admin):
        response = await async_client.post(f"{API}/admin/properties", headers=auth_headers(test_admin), json={
            "title": "Flat",
            "price": 50000,
            "location": "Kasarani, Nairobi",
            "amenities": ["Helipad"]
        })

        assert response.status_code == 422

    async def test_change_role(self, async_client: AsyncClient, test_admin, test_user):
        response = await async_client.put(
            f"{API}/admin/users/{test_user.id}/role",
            headers=auth_headers(test_admin),
            json={"role": "realtor"}
        )

        assert response.status_code == 200
        assert response.json()["role"] == "realtor"
        assert set(response.json()["roles"]) == {AppRole.USER.value, AppRole.REALTOR.value}

    async def test_cannot_change_own_role(self, async_client: AsyncClient, test_admin):
        response = await async_client.put(
            f"{API}/admin/users/{test_admin.id}/role",
            headers=auth_headers(test_admin),
            json={"role": "user"}
        )

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "You can't change your own role"


class TestNavigationEndpoints:
    """Test server-side route resolution."""

    async def test_signed_out_redirect(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/navigation/resolve", params={"path": "/admin/properties"})

        assert response.json() == {
            "path": "/admin/properties",
            "route": "admin_properties",
            "outcome": "redirect",
            "redirect_to": "/auth"
        }

    async def test_realtor_on_users_screen(self, async_client: AsyncClient, test_realtor):
        response = await async_client.get(
            f"{API}/navigation/resolve",
            params={"path": "/admin/users"},
            headers=auth_headers(test_realtor)
        )

        assert response.json()["redirect_to"] == "/admin"

    async def test_admin_menu_for_realtor(self, async_client: AsyncClient, test_realtor):
        response = await async_client.get(f"{API}/navigation/admin", headers=auth_headers(test_realtor))

        assert [item["href"] for item in response.json()["items"]] == ["/admin", "/admin/properties"]


class TestPlatformEndpoints:
    """Test health, root and request tracing."""

    async def test_health(self, async_client: AsyncClient):
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_request_id_header_echoed(self, async_client: AsyncClient):
        response = await async_client.get("/", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"
        assert "X-Processing-Time" in response.headers

    async def test_error_body_carries_request_id(self, async_client: AsyncClient):
        response = await async_client.get(
            f"{API}/properties/{uuid.uuid4()}", headers={"X-Request-ID": "trace-404"}
        )

        error = response.json()["error"]
        assert error["request_id"] == "trace-404"
        assert "timestamp" in error
