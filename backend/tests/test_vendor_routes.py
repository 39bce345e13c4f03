"""
VendorHub Backend — /vendor Endpoint Tests
============================================
"""

import uuid

import pytest


@pytest.mark.asyncio
async def test_register_returns_201(test_client):
    response = await test_client.post(
        "/vendor/register",
        json={"userName": "Asha", "email": "asha@example.com", "password": "pw-123"},
    )
    assert response.status_code == 201
    assert response.json() == {"message": "Vendor registered successfully"}
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_register_duplicate_email(test_client, registered_vendor):
    response = await test_client.post(
        "/vendor/register",
        json={"userName": "Other", "email": registered_vendor["email"], "password": "x"},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "duplicate_email"
    assert body["message"] == "Email already taken"
    assert body["request_id"] == response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_register_rejects_bad_email(test_client):
    response = await test_client.post(
        "/vendor/register",
        json={"userName": "Asha", "email": "not-an-email", "password": "pw"},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "validation_error"
    assert any(err["field"] == "email" for err in body["details"]["errors"])


@pytest.mark.asyncio
async def test_login_success(test_client, registered_vendor):
    response = await test_client.post(
        "/vendor/login",
        json={"email": registered_vendor["email"], "password": registered_vendor["password"]},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] == "Login successful"
    assert body["vendorId"] == registered_vendor["vendor_id"]
    assert body["token"]


@pytest.mark.asyncio
@pytest.mark.parametrize("email, password", [
    ("asha@example.com", "wrong-password"),
    ("ghost@example.com", "s3cret-pass"),
])
async def test_login_failures_are_uniform(test_client, registered_vendor, email, password):
    response = await test_client.post("/vendor/login", json={"email": email, "password": password})

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    body = response.json()
    assert body["error"] == "invalid_credentials"
    assert body["message"] == "Invalid username or password"
    # Which branch failed stays server-side
    assert "details" not in body


@pytest.mark.asyncio
async def test_all_vendors_hides_passwords(test_client, registered_vendor):
    response = await test_client.get("/vendor/all-vendors")

    assert response.status_code == 200
    vendors = response.json()["vendor"]
    assert len(vendors) == 1
    assert vendors[0]["userName"] == "Asha"
    assert vendors[0]["firm"] == []
    assert "password" not in vendors[0]


@pytest.mark.asyncio
async def test_single_vendor(test_client, registered_vendor):
    response = await test_client.get(f"/vendor/single-vendor/{registered_vendor['vendor_id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["vendorId"] == registered_vendor["vendor_id"]
    assert body["vendorFirmId"] is None
    assert body["vendor"]["email"] == registered_vendor["email"]


@pytest.mark.asyncio
async def test_single_vendor_not_found(test_client):
    response = await test_client.get(f"/vendor/single-vendor/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_single_vendor_malformed_id(test_client):
    response = await test_client.get("/vendor/single-vendor/12345")
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_id"


@pytest.mark.asyncio
async def test_client_request_id_is_echoed(test_client):
    response = await test_client.get("/vendor/all-vendors", headers={"X-Request-ID": "trace-42"})
    assert response.headers["X-Request-ID"] == "trace-42"


@pytest.mark.asyncio
async def test_login_with_malformed_email_is_unauthorized(test_client, registered_vendor):
    response = await test_client.post(
        "/vendor/login",
        json={"email": "not-an-email", "password": registered_vendor["password"]},
    )
    assert response.status_code == 401
    assert response.json()["error"] == "invalid_credentials"
