from controlpanel.models import Volume


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_root_redirects_to_settings(client):
    response = await client.get("/")

    assert response.status_code == 302
    assert response.headers["location"] == "/settings"


async def test_anonymous_is_sent_to_login(client):
    response = await client.get("/settings/general")

    assert response.status_code == 302
    assert response.headers["location"] == "/login?next=/settings/general"


async def test_anonymous_json_request_gets_401(client):
    response = await client.get("/settings/email", headers={"Accept": "application/json"})

    assert response.status_code == 401
    assert response.json()["status"] == "error"


async def test_non_admin_is_forbidden(editor_client):
    for path in ("/settings", "/settings/general", "/settings/email", "/settings/globals/new"):
        response = await editor_client.get(path)
        assert response.status_code == 403, path
        assert "Administrative privileges are required" in response.text


async def test_non_admin_cannot_post(editor_client):
    response = await editor_client.post("/settings/general", data={"on": "1", "timezone": "UTC"})

    assert response.status_code == 403


async def test_mutating_actions_reject_get(admin_client):
    assert (await admin_client.get("/settings/email/test")).status_code == 405


async def test_login_sets_cookie(client, admin_user):
    response = await client.post(
        "/login",
        data={"email": "admin@example.com", "password": "password123", "next": "/settings/email"},
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/settings/email"
    assert "access_token" in response.cookies

    page = await client.get("/settings/email")
    assert page.status_code == 200


async def test_login_rejects_bad_password(client, admin_user):
    response = await client.post("/login", data={"email": "admin@example.com", "password": "wrong"})

    assert response.status_code == 400
    assert "Invalid email or password." in response.text


async def test_login_ignores_external_next(client, admin_user):
    response = await client.post(
        "/login",
        data={"email": "admin@example.com", "password": "password123", "next": "https://evil.example.com/"},
    )

    assert response.headers["location"] == "/settings"


async def test_logout_clears_cookie(admin_client):
    response = await admin_client.get("/logout")

    assert response.status_code == 302
    assert response.headers["location"] == "/login"


async def test_index_lists_tools_without_volumes(admin_client):
    response = await admin_client.get("/settings")

    assert response.status_code == 200
    assert "Clear Caches" in response.text
    assert "Rebuild Search Indexes" in response.text
    assert "Update Asset Indexes" not in response.text


async def test_index_offers_asset_indexing_when_volumes_exist(admin_client, db_session):
    db_session.add(Volume(name="Uploads", handle="uploads", settings={}))
    await db_session.commit()

    response = await admin_client.get("/settings")

    assert response.status_code == 200
    assert response.text.index("Update Asset Indexes") < response.text.index("Clear Caches")
