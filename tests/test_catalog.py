async def test_list_services_ordered_by_name(client, catalog):
    response = await client.get("/services")

    assert response.status_code == 200
    body = response.json()
    names = [s["name"] for s in body["services"]]
    assert names == sorted(names)
    assert body["total"] == 5

    personal_care = next(s for s in body["services"] if s["name"] == "Personal Care")
    assert personal_care["base_price"] == 30


async def test_list_certifications(client, catalog):
    response = await client.get("/services/certifications")

    assert response.status_code == 200
    names = [c["name"] for c in response.json()["certifications"]]
    assert "CPR Certification" in names
    assert "Alzheimer's/Dementia Care Training" in names


async def test_empty_catalog(client):
    response = await client.get("/services")

    assert response.status_code == 200
    assert response.json() == {"services": [], "total": 0}
