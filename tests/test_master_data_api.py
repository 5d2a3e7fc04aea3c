"""
API tests for administrator reference data: regions, directors, rep firms
and customers.
"""


class TestRegions:
    """/api/regions"""

    def test_create_and_list(self, client):
        response = client.post("/api/regions", json={"name": "  North  "})

        assert response.status_code == 201
        assert response.json()["name"] == "North"
        assert [r["name"] for r in client.get("/api/regions").json()] == ["North"]

    def test_list_sorted(self, client):
        for name in ("South", "East", "North"):
            client.post("/api/regions", json={"name": name})

        assert [r["name"] for r in client.get("/api/regions").json()] == ["East", "North", "South"]

    def test_name_required(self, client):
        response = client.post("/api/regions", json={"name": ""})

        assert response.status_code == 400
        assert response.json() == {"error": "Name is required"}

    def test_duplicate_name(self, client, region):
        response = client.post("/api/regions", json={"name": "West"})

        assert response.status_code == 409
        assert response.json() == {"error": "A region with this name already exists"}

    def test_update(self, client, region):
        response = client.put(f"/api/regions/{region.id}", json={"name": "Pacific"})

        assert response.status_code == 200
        assert client.get(f"/api/regions/{region.id}").json()["name"] == "Pacific"

    def test_delete_blocked_by_director(self, client, director, region):
        response = client.delete(f"/api/regions/{region.id}")

        assert response.status_code == 409
        assert response.json() == {"error": "Cannot delete region: it has directors assigned to it"}

    def test_delete(self, client, region):
        assert client.delete(f"/api/regions/{region.id}").json() == {"success": True}
        assert client.get(f"/api/regions/{region.id}").status_code == 404


class TestDirectors:
    """/api/directors"""

    def test_create_normalizes_email(self, client, region):
        response = client.post("/api/directors", json={
            "name": "Alex Kim",
            "email": "  Alex.Kim@Example.COM ",
            "regionId": region.id,
        })

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "alex.kim@example.com"
        assert data["region"] == "West"
        assert data["regions"] == {"id": region.id, "name": "West"}

    def test_create_without_region(self, client):
        data = client.post("/api/directors", json={"name": "Alex Kim", "email": "alex@example.com"}).json()

        assert data["region"] == ""
        assert data["region_id"] is None
        assert data["regions"] is None

    def test_duplicate_email(self, client, director):
        response = client.post("/api/directors", json={"name": "Other", "email": "DANA@example.com"})

        assert response.status_code == 409
        assert response.json() == {"error": "A director with this email already exists"}

    def test_email_required(self, client):
        response = client.post("/api/directors", json={"name": "Alex Kim"})

        assert response.status_code == 400
        assert response.json() == {"error": "Email is required"}

    def test_update_changes_region_name(self, client, director):
        east = client.post("/api/regions", json={"name": "East"}).json()

        data = client.put(f"/api/directors/{director.id}", json={
            "name": "Dana Reyes",
            "email": "dana@example.com",
            "regionId": east["id"],
        }).json()

        assert data["region"] == "East"
        assert data["region_id"] == east["id"]

    def test_delete_blocked_by_reports(self, client, director):
        client.post("/api/reports", json={"directorId": director.id, "month": "2025-03"})

        response = client.delete(f"/api/directors/{director.id}")

        assert response.status_code == 409
        assert response.json() == {"error": "Cannot delete director: they have reports in the system"}

    def test_delete(self, client, other_director):
        assert client.delete(f"/api/directors/{other_director.id}").json() == {"success": True}
        assert client.get(f"/api/directors/{other_director.id}").status_code == 404

    def test_unknown(self, client):
        response = client.get("/api/directors/missing")

        assert response.status_code == 404
        assert response.json() == {"error": "Director not found"}


class TestRepFirms:
    """/api/rep-firms"""

    def test_soft_delete(self, client, region):
        firm = client.post("/api/rep-firms", json={"name": "Rep Co", "regionId": region.id}).json()
        client.post("/api/rep-firms", json={"name": "Alpha Reps"})

        response = client.delete(f"/api/rep-firms/{firm['id']}")

        assert response.json() == {"success": True, "message": "Rep firm marked as inactive"}
        assert [r["name"] for r in client.get("/api/rep-firms").json()] == ["Alpha Reps"]

        everything = client.get("/api/rep-firms", params={"active": "false"}).json()
        assert {r["name"]: r["active"] for r in everything} == {"Alpha Reps": True, "Rep Co": False}

    def test_region_embedded(self, client, region):
        firm = client.post("/api/rep-firms", json={"name": "Rep Co", "regionId": region.id}).json()
        assert firm["regions"] == {"id": region.id, "name": "West"}

    def test_update_reactivates(self, client):
        firm = client.post("/api/rep-firms", json={"name": "Rep Co"}).json()
        client.delete(f"/api/rep-firms/{firm['id']}")

        data = client.put(f"/api/rep-firms/{firm['id']}", json={"name": "Rep Co", "active": True}).json()

        assert data["active"] is True

    def test_entity_type_defaults_to_rep_firm(self, client):
        firm = client.post("/api/rep-firms", json={"name": "Rep Co"}).json()
        assert firm["entity_type"] == "rep_firm"

    def test_entity_type(self, client):
        firm = client.post("/api/rep-firms", json={"name": "Supply Hub", "entityType": "distributor"}).json()
        assert firm["entity_type"] == "distributor"

        # Omitted on update keeps the stored type
        data = client.put(f"/api/rep-firms/{firm['id']}", json={"name": "Supply Hub Inc"}).json()
        assert data["entity_type"] == "distributor"

    def test_unknown_entity_type(self, client):
        response = client.post("/api/rep-firms", json={"name": "Rep Co", "entityType": "retailer"})

        assert response.status_code == 400
        assert response.json() == {
            "error": "Entity type must be one of: rep_firm, distributor, specialty_account"
        }


class TestCustomers:
    """/api/customers"""

    def test_crud(self, client):
        customer = client.post("/api/customers", json={"name": "Big Buyer"})
        assert customer.status_code == 201
        customer_id = customer.json()["id"]

        renamed = client.put(f"/api/customers/{customer_id}", json={"name": "Bigger Buyer"}).json()
        assert renamed["name"] == "Bigger Buyer"
        assert renamed["active"] is True

        response = client.delete(f"/api/customers/{customer_id}")
        assert response.json() == {"success": True, "message": "Customer marked as inactive"}
        assert client.get("/api/customers").json() == []
        assert client.get(f"/api/customers/{customer_id}").json()["active"] is False

    def test_name_required(self, client):
        assert client.post("/api/customers", json={}).status_code == 400
