"""
Integration tests for the HTTP API.
Exercises the routers end to end over an in-memory database.
"""

import pytest
import uuid
from httpx import AsyncClient

from estate_api.models.listing import Listing, ListingType
from estate_api.models.user import User
from estate_api.repositories.listing import ListingRepository
from tests.conftest import ListingFactory, TEST_PASSWORD, auth_headers


class TestAuthEndpoints:
    """Test sign-up, sign-in and sign-out."""

    @pytest.mark.asyncio
    async def test_signup(self, async_client: AsyncClient):
        response = await async_client.post("/api/auth/signup", json={
            "username": "janedoe",
            "email": "Jane@Example.com",
            "password": "securepassword123"
        })

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "jane@example.com"
        assert data["username"] == "janedoe"
        assert "password" not in data and "passwordHash" not in data
        assert "createdAt" in data

    @pytest.mark.asyncio
    async def test_signup_duplicate_email(self, async_client: AsyncClient, test_user: User):
        response = await async_client.post("/api/auth/signup", json={
            "username": "copycat",
            "email": test_user.email,
            "password": "securepassword123"
        })

        assert response.status_code == 400
        assert response.json()["message"] == "Email is already registered"

    @pytest.mark.asyncio
    async def test_signup_short_password(self, async_client: AsyncClient):
        response = await async_client.post("/api/auth/signup", json={
            "username": "janedoe",
            "email": "jane@example.com",
            "password": "short"
        })

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_signin_sets_cookie_and_returns_token(self, async_client: AsyncClient, test_user: User):
        response = await async_client.post("/api/auth/signin", json={
            "email": test_user.email,
            "password": TEST_PASSWORD
        })

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(test_user.id)
        assert data["tokenType"] == "bearer"
        assert data["accessToken"]
        assert "passwordHash" not in data

        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"access_token={data['accessToken']}")
        assert "httponly" in set_cookie.lower()

    @pytest.mark.asyncio
    async def test_signin_wrong_password(self, async_client: AsyncClient, test_user: User):
        response = await async_client.post("/api/auth/signin", json={
            "email": test_user.email,
            "password": "wrongpassword"
        })

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_signout_clears_cookie(self, async_client: AsyncClient):
        response = await async_client.get("/api/auth/signout")

        assert response.status_code == 200
        assert response.json() == {"message": "User has been logged out!"}
        assert 'access_token=""' in response.headers["set-cookie"]

    @pytest.mark.asyncio
    async def test_cookie_authenticates_requests(self, async_client: AsyncClient, test_user: User):
        signin = await async_client.post("/api/auth/signin", json={
            "email": test_user.email,
            "password": TEST_PASSWORD
        })
        token = signin.json()["accessToken"]
        async_client.cookies.clear()

        response = await async_client.post(
            "/api/listings",
            json=ListingFactory.create_listing_payload(),
            headers={"Cookie": f"access_token={token}"}
        )

        assert response.status_code == 201
        assert response.json()["ownerRef"] == str(test_user.id)


class TestListingEndpoints:
    """Test listing CRUD and search over HTTP."""

    @pytest.mark.asyncio
    async def test_create_then_fetch_round_trips(self, async_client: AsyncClient, test_user: User):
        payload = ListingFactory.create_listing_payload(
            name="Harbour loft",
            description="Top floor loft with harbour views",
            address="5 Quay Street",
            regularPrice=2500,
            discountPrice=2100,
            bathrooms=2,
            bedrooms=3,
            furnished=True,
            parking=True,
            type="sale",
            offer=True,
            imageUrls=["https://example.com/a.jpg", "data:image/png;base64,iVBORw0KGgo="]
        )

        created = await async_client.post("/api/listings", json=payload, headers=auth_headers(test_user))
        assert created.status_code == 201

        fetched = await async_client.get(f"/api/listings/{created.json()['id']}")
        assert fetched.status_code == 200

        data = fetched.json()
        for field, value in payload.items():
            assert data[field] == value
        assert data["ownerRef"] == str(test_user.id)
        assert data["coverImage"] == "https://example.com/a.jpg"
        assert data["effectivePrice"] == 2100

    @pytest.mark.asyncio
    async def test_create_requires_authentication(self, async_client: AsyncClient):
        response = await async_client.post("/api/listings", json=ListingFactory.create_listing_payload())

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_create_discount_above_regular_price(self, async_client: AsyncClient, test_user: User):
        response = await async_client.post(
            "/api/listings",
            json=ListingFactory.create_listing_payload(regularPrice=50000, discountPrice=60000, offer=True),
            headers=auth_headers(test_user)
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["statusCode"] == 400
        assert body["message"] == "Discount price must be less than regular price"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("overrides", [
        {"regularPrice": 1000, "discountPrice": "NaN", "offer": True},
        {"regularPrice": "Infinity"},
        {"regularPrice": 1000, "discountPrice": "-Infinity"},
    ])
    async def test_create_with_non_finite_price(self, async_client: AsyncClient, test_user: User, overrides):
        response = await async_client.post(
            "/api/listings",
            json=ListingFactory.create_listing_payload(**overrides),
            headers=auth_headers(test_user)
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert "finite number" in body["message"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{"regularPrice": "NaN"}, {"discountPrice": "Infinity"}])
    async def test_update_with_non_finite_price(
        self, async_client: AsyncClient, test_user: User, test_listing: Listing, payload
    ):
        response = await async_client.put(
            f"/api/listings/{test_listing.id}", json=payload, headers=auth_headers(test_user)
        )

        assert response.status_code == 400
        assert "finite number" in response.json()["message"]

        fetched = await async_client.get(f"/api/listings/{test_listing.id}")
        assert fetched.json()["regularPrice"] == 1500
        assert fetched.json()["discountPrice"] == 1200

    @pytest.mark.asyncio
    async def test_create_with_too_many_images(self, async_client: AsyncClient, test_user: User):
        urls = [f"https://example.com/{i}.jpg" for i in range(11)]
        response = await async_client.post(
            "/api/listings",
            json=ListingFactory.create_listing_payload(imageUrls=urls),
            headers=auth_headers(test_user)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "You can only upload up to 10 images per listing"

    @pytest.mark.asyncio
    async def test_create_with_blank_name(self, async_client: AsyncClient, test_user: User):
        response = await async_client.post(
            "/api/listings",
            json=ListingFactory.create_listing_payload(name="   "),
            headers=auth_headers(test_user)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "All fields are required!"

    @pytest.mark.asyncio
    async def test_owner_cannot_be_set_on_create(
        self, async_client: AsyncClient, test_user: User, other_user: User
    ):
        payload = ListingFactory.create_listing_payload(ownerRef=str(other_user.id))
        response = await async_client.post("/api/listings", json=payload, headers=auth_headers(test_user))

        assert response.status_code == 201
        assert response.json()["ownerRef"] == str(test_user.id)

    @pytest.mark.asyncio
    async def test_get_listing_not_found(self, async_client: AsyncClient):
        response = await async_client.get(f"/api/listings/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["message"] == "Listing not found!"

    @pytest.mark.asyncio
    async def test_get_listing_malformed_id(self, async_client: AsyncClient):
        response = await async_client.get("/api/listings/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_update_listing(self, async_client: AsyncClient, test_user: User, test_listing: Listing):
        response = await async_client.put(
            f"/api/listings/{test_listing.id}",
            json={"name": "Updated flat", "bedrooms": 3},
            headers=auth_headers(test_user)
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Updated flat"
        assert data["bedrooms"] == 3
        assert data["regularPrice"] == 1500

    @pytest.mark.asyncio
    async def test_update_listing_offer_rule(self, async_client: AsyncClient, test_user: User, test_listing: Listing):
        response = await async_client.put(
            f"/api/listings/{test_listing.id}",
            json={"discountPrice": 1600},
            headers=auth_headers(test_user)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Discount price must be less than regular price"

    @pytest.mark.asyncio
    async def test_update_listing_not_owner(
        self, async_client: AsyncClient, other_user: User, test_listing: Listing
    ):
        response = await async_client.put(
            f"/api/listings/{test_listing.id}",
            json={"name": "Taken over"},
            headers=auth_headers(other_user)
        )

        assert response.status_code == 403
        assert response.json()["message"] == "You can only update your own listings!"

    @pytest.mark.asyncio
    async def test_delete_listing_not_owner(
        self, async_client: AsyncClient, other_user: User, test_listing: Listing
    ):
        response = await async_client.delete(
            f"/api/listings/{test_listing.id}",
            headers=auth_headers(other_user)
        )

        assert response.status_code == 403
        assert response.json()["message"] == "You can only delete your own listings!"

    @pytest.mark.asyncio
    async def test_delete_listing(self, async_client: AsyncClient, test_user: User, test_listing: Listing):
        response = await async_client.delete(
            f"/api/listings/{test_listing.id}",
            headers=auth_headers(test_user)
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Listing has been deleted!"}

        response = await async_client.get(f"/api/listings/{test_listing.id}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_search_rent_with_limit(
        self, async_client: AsyncClient, listing_repository: ListingRepository, test_user: User
    ):
        for i in range(6):
            await ListingFactory.create_listing(
                listing_repository, owner_ref=test_user.id, name=f"Rent {i}", type=ListingType.RENT
            )
        await ListingFactory.create_listing(
            listing_repository, owner_ref=test_user.id, name="For sale", type=ListingType.SALE
        )

        response = await async_client.get("/api/listings", params={"type": "rent", "limit": 4})

        assert response.status_code == 200
        data = response.json()
        assert [item["name"] for item in data] == ["Rent 5", "Rent 4", "Rent 3", "Rent 2"]
        assert all(item["type"] == "rent" for item in data)

    @pytest.mark.asyncio
    async def test_search_query_parameters(
        self, async_client: AsyncClient, listing_repository: ListingRepository, test_user: User
    ):
        await ListingFactory.create_listing(
            listing_repository, owner_ref=test_user.id, name="Cheap parking spot", regular_price=100, parking=True
        )
        await ListingFactory.create_listing(
            listing_repository, owner_ref=test_user.id, name="Pricey parking spot", regular_price=900, parking=True
        )
        await ListingFactory.create_listing(
            listing_repository, owner_ref=test_user.id, name="Street parking only", regular_price=50
        )

        response = await async_client.get("/api/listings", params={
            "searchTerm": "spot",
            "parking": "true",
            "sort": "regularPrice",
            "order": "asc",
            "startIndex": 1
        })

        assert response.status_code == 200
        assert [item["name"] for item in response.json()] == ["Pricey parking spot"]

    @pytest.mark.asyncio
    async def test_search_no_matches(self, async_client: AsyncClient, test_listing: Listing):
        response = await async_client.get("/api/listings", params={"searchTerm": "nothing like this"})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_search_invalid_sort(self, async_client: AsyncClient):
        response = await async_client.get("/api/listings", params={"sort": "passwordHash"})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_search_invalid_limit(self, async_client: AsyncClient):
        response = await async_client.get("/api/listings", params={"limit": 0})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_owner_listings_route(
        self, async_client: AsyncClient, test_user: User, other_user: User, test_listing: Listing
    ):
        response = await async_client.get(
            f"/api/listings/user/{test_user.id}", headers=auth_headers(test_user)
        )
        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [str(test_listing.id)]

        response = await async_client.get(
            f"/api/listings/user/{test_user.id}", headers=auth_headers(other_user)
        )
        assert response.status_code == 401
        assert response.json()["message"] == "You can only view your own listings!"


class TestUserEndpoints:
    """Test user profile endpoints."""

    @pytest.mark.asyncio
    async def test_get_user_is_public(self, async_client: AsyncClient, test_user: User):
        response = await async_client.get(f"/api/users/{test_user.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == test_user.email
        assert "passwordHash" not in data

    @pytest.mark.asyncio
    async def test_get_user_not_found(self, async_client: AsyncClient):
        response = await async_client.get(f"/api/users/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["message"] == "User not found!"

    @pytest.mark.asyncio
    async def test_update_own_account(self, async_client: AsyncClient, test_user: User):
        response = await async_client.put(
            f"/api/users/{test_user.id}",
            json={"username": "renamed", "avatar": "https://example.com/me.png"},
            headers=auth_headers(test_user)
        )

        assert response.status_code == 200
        data = response.json()
        assert data["username"] == "renamed"
        assert data["avatar"] == "https://example.com/me.png"

    @pytest.mark.asyncio
    async def test_update_own_account_clears_avatar(self, async_client: AsyncClient, test_user: User):
        await async_client.put(
            f"/api/users/{test_user.id}",
            json={"avatar": "https://example.com/me.png"},
            headers=auth_headers(test_user)
        )

        response = await async_client.put(
            f"/api/users/{test_user.id}",
            json={"avatar": None},
            headers=auth_headers(test_user)
        )

        assert response.status_code == 200
        assert response.json()["avatar"] is None

    @pytest.mark.asyncio
    async def test_update_other_account(self, async_client: AsyncClient, test_user: User, other_user: User):
        response = await async_client.put(
            f"/api/users/{test_user.id}",
            json={"username": "hijack"},
            headers=auth_headers(other_user)
        )

        assert response.status_code == 401
        assert response.json()["message"] == "You can update only your own account!"

    @pytest.mark.asyncio
    async def test_delete_other_account(self, async_client: AsyncClient, test_user: User, other_user: User):
        response = await async_client.delete(
            f"/api/users/{test_user.id}",
            headers=auth_headers(other_user)
        )

        assert response.status_code == 401
        assert response.json()["message"] == "You can delete only your own account!"

    @pytest.mark.asyncio
    async def test_delete_account_cascades_listings(
        self, async_client: AsyncClient, test_user: User, test_listing: Listing
    ):
        response = await async_client.delete(
            f"/api/users/{test_user.id}",
            headers=auth_headers(test_user)
        )

        assert response.status_code == 200
        assert response.json() == {"message": "User has been deleted!"}
        assert 'access_token=""' in response.headers["set-cookie"]

        assert (await async_client.get(f"/api/users/{test_user.id}")).status_code == 404
        assert (await async_client.get(f"/api/listings/{test_listing.id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_user_listings_route(
        self, async_client: AsyncClient, test_user: User, other_user: User, test_listing: Listing
    ):
        response = await async_client.get(
            f"/api/users/{test_user.id}/listings", headers=auth_headers(test_user)
        )
        assert response.status_code == 200
        assert len(response.json()) == 1

        response = await async_client.get(
            f"/api/users/{test_user.id}/listings", headers=auth_headers(other_user)
        )
        assert response.status_code == 401
