import io


CSV = b"Name,SKU,Price,Variants\nTee,TEE,10,size:S\nMug,MUG,4.5,\n"


def test_import_raw_body(client):
    resp = client.post("/api/v1/import", data=CSV, content_type="text/csv")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["loaded_count"] == 2
    assert body["failed_count"] == 0
    assert body["dry_run"] is False


def test_import_multipart(client):
    resp = client.post(
        "/api/v1/import?dummy=1",
        data={"csv_file": (io.BytesIO(CSV), "products.csv")},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 200
    assert resp.get_json()["dry_run"] is True
    assert client.get("/api/v1/products").get_json()["total"] == 0


def test_import_missing_mandatory(client):
    resp = client.post("/api/v1/import?mandatory=Name,Weight", data=CSV,
                       content_type="text/csv")
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["kind"] == "MissingMandatoryColumn"
    assert "Weight" in body["error"]


def test_import_empty_body(client):
    resp = client.post("/api/v1/import", data=b"", content_type="text/csv")
    assert resp.status_code == 400


def test_list_and_get_products(client):
    client.post("/api/v1/import", data=CSV, content_type="text/csv")

    listing = client.get("/api/v1/products?q=tee").get_json()
    assert listing["total"] == 1
    tee = listing["products"][0]
    assert tee["sku"] == "TEE"
    assert tee["variants"][0]["option_values"] == ["size:S"]

    detail = client.get(f"/api/v1/products/{tee['id']}").get_json()
    assert detail["name"] == "Tee"


def test_product_not_found(client):
    resp = client.get("/api/v1/products/999")
    assert resp.status_code == 404
