def test_create_and_get_medicine(client, make_medicine):
    med = make_medicine(name="  Amoxicillin ", dosage="250 mg",
                        type="capsule", manufacturer="Cipla")
    assert med["name"] == "Amoxicillin"

    r = client.get(f"/api/medicines/{med['id']}")
    assert r.status_code == 200
    assert r.json()["type"] == "capsule"


def test_list_medicines_by_name(client, make_medicine):
    make_medicine(name="Zinc")
    make_medicine(name="Aspirin")

    names = [m["name"] for m in client.get("/api/medicines").json()]
    assert names == ["Aspirin", "Zinc"]


def test_unknown_type_is_rejected(client):
    r = client.post("/api/medicines",
                    json={
                        "name": "Paracetamol",
                        "dosage": "500 mg",
                        "type": "powder",
                        "manufacturer": "GSK",
                    })
    assert r.status_code == 422
    assert r.json() == {
        "status": False,
        "data": None,
        "error": {
            "msg": "Validation error"
        },
    }


def test_short_name_is_rejected(client):
    r = client.post("/api/medicines",
                    json={
                        "name": "P",
                        "dosage": "500 mg",
                        "type": "tablet",
                        "manufacturer": "GSK",
                    })
    assert r.status_code == 422


def test_missing_medicine_is_404(client):
    r = client.get("/api/medicines/999")
    assert r.status_code == 404
    assert r.json()["error"]["msg"] == "Medicine not found"


def test_partial_update_keeps_other_fields(client, make_medicine):
    med = make_medicine()
    r = client.patch(f"/api/medicines/{med['id']}", json={"dosage": "650 mg"})
    assert r.status_code == 200
    body = r.json()
    assert body["dosage"] == "650 mg"
    assert body["name"] == med["name"]
    assert body["manufacturer"] == med["manufacturer"]


def test_empty_update_is_noop(client, make_medicine):
    med = make_medicine()
    r = client.patch(f"/api/medicines/{med['id']}", json={})
    assert r.status_code == 200
    assert r.json()["dosage"] == med["dosage"]


def test_delete_medicine(client, make_medicine):
    med = make_medicine()
    assert client.delete(f"/api/medicines/{med['id']}").status_code == 204
    assert client.get(f"/api/medicines/{med['id']}").status_code == 404
    assert client.delete(f"/api/medicines/{med['id']}").status_code == 404
