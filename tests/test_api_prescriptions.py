def _create_rx(client, lines):
    r = client.post("/api/prescriptions", json={"medicines": lines})
    assert r.status_code == 201, r.text
    return r.json()


def test_create_prescription(client, make_medicine):
    med = make_medicine()
    rx = _create_rx(client, [{
        "medicine_id": med["id"],
        "timing": ["night", "morning", "night"],
        "instruction": "1 tablet",
        "meal": "none",
    }])

    assert len(rx["rx_number"]) == 32
    line = rx["medicines"][0]
    assert line["timing"] == ["night", "morning"]
    assert line["meal"] is None
    assert line["instruction"] == "1 tablet"


def test_prescription_needs_a_medicine(client):
    r = client.post("/api/prescriptions", json={"medicines": []})
    assert r.status_code == 422


def test_line_needs_a_time_of_day(client, make_medicine):
    med = make_medicine()
    r = client.post("/api/prescriptions",
                    json={"medicines": [{
                        "medicine_id": med["id"],
                        "timing": []
                    }]})
    assert r.status_code == 422


def test_unknown_medicine_is_rejected(client):
    r = client.post("/api/prescriptions",
                    json={"medicines": [{
                        "medicine_id": 42,
                        "timing": ["morning"]
                    }]})
    assert r.status_code == 404
    assert r.json()["error"]["msg"] == "Medicine not found: 42"


def test_list_newest_first_with_schedule(client, make_medicine):
    med = make_medicine()
    first = _create_rx(client, [{
        "medicine_id": med["id"],
        "timing": ["morning"]
    }])
    second = _create_rx(client, [
        {
            "medicine_id": med["id"],
            "timing": ["morning", "night"],
            "instruction": "2 puffs"
        },
        {
            "medicine_id": med["id"],
            "timing": ["night"],
            "dosage": "5 ml"
        },
    ])

    rows = client.get("/api/prescriptions").json()
    assert [r["id"] for r in rows] == [second["id"], first["id"]]
    assert rows[0]["medicine_count"] == 2
    assert rows[0]["schedule"] == {
        "morning": ["2 puffs"],
        "night": ["2 puffs", "5 ml"],
    }
    assert rows[1]["schedule"] == {"morning": ["Standard dose"]}


def test_details_resolve_medicines(client, make_medicine):
    med = make_medicine(name="Cetirizine", dosage="10 mg")
    rx = _create_rx(client, [{"medicine_id": med["id"], "timing": ["night"]}])

    body = client.get(f"/api/prescriptions/{rx['id']}/details").json()
    assert body["medicines"][0]["medicine_details"]["name"] == "Cetirizine"


def test_deleted_medicine_degrades_to_placeholder(client, make_medicine):
    med = make_medicine(name="Cetirizine")
    rx = _create_rx(client, [{"medicine_id": med["id"], "timing": ["night"]}])
    client.delete(f"/api/medicines/{med['id']}")

    body = client.get(f"/api/prescriptions/{rx['id']}/details").json()
    assert body["medicines"][0]["medicine_details"] is None

    layout = client.get(f"/api/prescriptions/{rx['id']}/layout").json()
    assert "Unknown Medicine" in [op.get("text") for op in layout["ops"]]
    assert client.get(f"/api/prescriptions/{rx['id']}/pdf").status_code == 200


def test_layout_endpoint_returns_draw_ops(client, make_medicine):
    med = make_medicine(name="Paracetamol", dosage="500 mg")
    rx = _create_rx(client, [{
        "medicine_id": med["id"],
        "timing": ["afternoon"],
        "meal": "after"
    }])

    layout = client.get(f"/api/prescriptions/{rx['id']}/layout").json()
    assert layout["filename"] == f"prescription-{rx['rx_number'][-8:]}.pdf"
    text_ops = [op["text"] for op in layout["ops"] if op["kind"] == "text"]
    assert text_ops[-5:-1] == [
        "AFTERNOON", "Paracetamol", "500 mg", "AFTER MEAL"
    ]
    assert [op["kind"] for op in layout["ops"]].count("panel") == 1


def test_download_pdf(client, make_medicine):
    med = make_medicine()
    rx = _create_rx(client, [{"medicine_id": med["id"], "timing": ["morning"]}])

    r = client.get(f"/api/prescriptions/{rx['id']}/pdf")
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert f"prescription-{rx['rx_number'][-8:]}.pdf" in \
        r.headers["content-disposition"]
    assert r.content.startswith(b"%PDF")


def test_preview_pdf_is_not_saved(client, make_medicine):
    med = make_medicine()
    r = client.post("/api/prescriptions/preview/pdf",
                    json={"medicines": [{
                        "medicine_id": med["id"],
                        "timing": ["morning"]
                    }]})
    assert r.status_code == 200
    assert 'filename="prescription.pdf"' in r.headers["content-disposition"]
    assert client.get("/api/prescriptions").json() == []


def test_delete_prescription(client, make_medicine):
    med = make_medicine()
    rx = _create_rx(client, [{"medicine_id": med["id"], "timing": ["morning"]}])

    assert client.delete(f"/api/prescriptions/{rx['id']}").status_code == 204
    r = client.get(f"/api/prescriptions/{rx['id']}")
    assert r.status_code == 404
    assert r.json()["error"]["msg"] == "Prescription not found"


def test_health(client):
    assert client.get("/").json()["version"] == "v1"
