from tests.helpers import signup


async def test_get_profile_includes_client_details(client):
    mary = await signup(client, "mary@example.com", first_name="Mary")

    response = await client.get("/user/profile", headers=mary["headers"])

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "mary@example.com"
    assert body["role"] == "client"
    assert body["client_profile"]["address"] is None


async def test_caregiver_profile_has_no_client_details(client):
    sarah = await signup(client, "sarah@example.com", role="caregiver")

    body = (await client.get("/user/profile", headers=sarah["headers"])).json()

    assert body["role"] == "caregiver"
    assert body["client_profile"] is None


async def test_update_profile_ignores_missing_fields(client):
    mary = await signup(client, "mary@example.com", first_name="Mary", last_name="Hill")

    response = await client.put("/user/profile", headers=mary["headers"], json={"phone": "555-0199"})

    assert response.status_code == 200
    body = response.json()
    assert body["phone"] == "555-0199"
    assert body["first_name"] == "Mary"
    assert body["last_name"] == "Hill"


async def test_update_client_profile(client):
    mary = await signup(client, "mary@example.com")

    response = await client.put("/user/client-profile", headers=mary["headers"], json={
        "address": "14 Orchard Lane",
        "emergency_contact_name": "Tom Hill",
        "medical_conditions": ["diabetes"],
    })

    assert response.status_code == 200
    assert response.json()["medical_conditions"] == ["diabetes"]
    profile = (await client.get("/user/profile", headers=mary["headers"])).json()
    assert profile["client_profile"]["address"] == "14 Orchard Lane"
    assert profile["client_profile"]["emergency_contact_name"] == "Tom Hill"


async def test_client_profile_update_needs_client_role(client):
    sarah = await signup(client, "sarah@example.com", role="caregiver")

    response = await client.put("/user/client-profile", headers=sarah["headers"], json={"address": "x"})

    assert response.status_code == 404
    assert response.json() == {"detail": "Client profile not found"}


async def test_profile_requires_session(client):
    assert (await client.get("/user/profile")).status_code == 401
