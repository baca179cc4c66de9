API = "/api/v1"


def test_register_farm_requires_token(client, farm_data):
    response = client.post(f"{API}/farms/", json=farm_data)
    assert response.status_code == 401


def test_register_farm_with_invalid_token(client, farm_data):
    response = client.post(
        f"{API}/farms/", json=farm_data, headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401


def test_unauthorized_caller_gets_403(client, outsider_headers, farm_data):
    response = client.post(f"{API}/farms/", json=farm_data, headers=outsider_headers)
    assert response.status_code == 403
    assert response.json() == {
        "detail": "AccessControl: Not authorized",
        "error": "access_control",
    }
    assert client.get(f"{API}/farms/total").json()["total_farms"] == 0


def test_owner_authorizes_writer(client, owner_headers, writer_headers, farm_data):
    response = client.post(
        f"{API}/access/authorize", json={"identity": "0xWRITER"}, headers=owner_headers
    )
    assert response.status_code == 200
    assert response.json()["authorized"] is True

    response = client.post(f"{API}/farms/", json=farm_data, headers=writer_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["farm_code"] == "FARM001"
    assert body["is_active"] is True
    assert body["images"] == farm_data["images"]


def test_non_admin_cannot_manage_roles(client, writer_headers):
    response = client.post(
        f"{API}/access/authorize", json={"identity": "0xX"}, headers=writer_headers
    )
    assert response.status_code == 403
    assert response.json()["detail"] == "AccessControl: Only admin allowed"


def test_roles_endpoint(client):
    response = client.get(f"{API}/access/roles/0xOWNER")
    assert response.status_code == 200
    roles = response.json()
    assert roles["is_owner"] and roles["is_admin"]
    assert roles["authorized"] and roles["farm_owner"] and roles["product_verifier"]


def test_farm_validation_errors(client, owner_headers, farm_data):
    response = client.post(
        f"{API}/farms/", json={**farm_data, "area": 0}, headers=owner_headers
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Validation: Invalid area"

    client.post(f"{API}/farms/", json=farm_data, headers=owner_headers)
    response = client.post(f"{API}/farms/", json=farm_data, headers=owner_headers)
    assert response.status_code == 409
    assert response.json()["error"] == "conflict"


def test_get_missing_farm(client):
    response = client.get(f"{API}/farms/NONEXISTENT")
    assert response.status_code == 404
    assert response.json()["detail"] == "FarmManagement: Farm not found"


def test_farm_image_endpoints(client, owner_headers, farm_data):
    client.post(f"{API}/farms/", json=farm_data, headers=owner_headers)

    response = client.post(
        f"{API}/farms/FARM001/images", json={"url": "c.jpg"}, headers=owner_headers
    )
    assert response.status_code == 201
    assert client.get(f"{API}/farms/FARM001/images").json()[-1] == "c.jpg"

    response = client.delete(f"{API}/farms/FARM001/images/0", headers=owner_headers)
    assert response.status_code == 200
    assert response.json()["images"] == [farm_data["images"][1], "c.jpg"]

    response = client.delete(f"{API}/farms/FARM001/images/5", headers=owner_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "out_of_range"


def test_farm_queries(client, owner_headers, farm_data):
    client.post(f"{API}/farms/", json=farm_data, headers=owner_headers)

    assert len(client.get(f"{API}/farms/").json()) == 1
    by_user = client.get(f"{API}/farms/by-user/USER001").json()
    assert [f["farm_code"] for f in by_user] == ["FARM001"]
    assert client.get(f"{API}/farms/users/USER001/exists").json()["exists"] is True
    assert client.get(f"{API}/farms/users/NOBODY/exists").json()["exists"] is False


def test_update_and_deactivate_farm(client, owner_headers, farm_data):
    client.post(f"{API}/farms/", json=farm_data, headers=owner_headers)
    response = client.put(
        f"{API}/farms/FARM001",
        json={"name_farm": "New Farm", "description": "d", "location": "l", "area": 8000, "images": []},
        headers=owner_headers,
    )
    assert response.status_code == 200
    assert response.json()["area"] == 8000

    response = client.post(f"{API}/farms/FARM001/deactivate", headers=owner_headers)
    assert response.status_code == 200
    assert response.json()["is_active"] is False
    assert client.get(f"{API}/farms/FARM001").json()["is_active"] is False


def test_partial_update_body_is_rejected(client, owner_headers, farm_data, product_data):
    client.post(f"{API}/farms/", json=farm_data, headers=owner_headers)
    client.post(f"{API}/products/", json=product_data, headers=owner_headers)

    response = client.put(
        f"{API}/farms/FARM001", json={"name_farm": "X", "area": 10}, headers=owner_headers
    )
    assert response.status_code == 422
    farm = client.get(f"{API}/farms/FARM001").json()
    assert farm["images"] == farm_data["images"]
    assert farm["area"] == farm_data["area"]

    response = client.put(
        f"{API}/products/PROD001", json={"name": "Renamed"}, headers=owner_headers
    )
    assert response.status_code == 422
    product = client.get(f"{API}/products/PROD001").json()
    assert product["name"] == product_data["name"]
    assert product["batch_code"] == product_data["batch_code"]


def test_product_endpoints(client, owner_headers, farm_data, product_data):
    response = client.post(f"{API}/products/", json=product_data, headers=owner_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Farm not found"

    client.post(f"{API}/farms/", json=farm_data, headers=owner_headers)
    response = client.post(f"{API}/products/", json=product_data, headers=owner_headers)
    assert response.status_code == 201
    assert response.json()["status"] == 0

    response = client.put(
        f"{API}/products/PROD001/status", json={"status": 2}, headers=owner_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == 2

    by_farm = client.get(f"{API}/products/by-farm/FARM001").json()
    assert [p["product_code"] for p in by_farm] == ["PROD001"]
    assert client.get(f"{API}/products/total").json()["total_products"] == 1


def test_category_endpoints(client, writer_headers):
    response = client.post(
        f"{API}/categories/", json={"name": "Fruit", "user_id": "USER001"}, headers=writer_headers
    )
    assert response.status_code == 201
    assert client.get(f"{API}/categories/").json()[0]["name"] == "Fruit"
    assert client.get(f"{API}/categories/by-user/USER001").json()[0]["name"] == "Fruit"
    assert client.get(f"{API}/categories/Fruit/exists").json()["exists"] is True

    response = client.post(
        f"{API}/categories/", json={"name": "Fruit", "user_id": "USER002"}, headers=writer_headers
    )
    assert response.status_code == 409


def test_process_update_requires_existing_record(client, owner_headers, farm_data, product_data):
    client.post(f"{API}/farms/", json=farm_data, headers=owner_headers)
    client.post(f"{API}/products/", json=product_data, headers=owner_headers)

    response = client.put(
        f"{API}/processes/medicine/PROD001",
        json={"name_medicine": "BT"},
        headers=owner_headers,
    )
    assert response.status_code == 404
    assert client.get(f"{API}/processes/medicine/PROD001").status_code == 404


def test_registry_info(client):
    info = client.get(f"{API}/registry/info").json()
    assert info == {
        "name": "AgriculturalTraceabilitySystem",
        "version": "1.0.0",
        "total_farms": 0,
        "total_products": 0,
        "owner": "0xOWNER",
    }


def test_registry_constants(client):
    assert client.get(f"{API}/registry/constants").json() == {
        "max_area": 1_000_000,
        "min_area": 1,
        "max_images": 10,
        "max_quantity": 1_000_000,
    }
