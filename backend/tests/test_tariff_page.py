from sqlalchemy.exc import SQLAlchemyError

from app.services import tariff_service


def _page(client):
    res = client.get("/api/tariffPage")
    assert res.status_code == 200, res.text
    return res.json()["data"]


SAMPLE = {
    "exchangeRate": 279.5,
    "exchangeDate": "2024-02-01",
    "allowUserHistoricalRates": False,
    "companies": [
        {
            "name": "QICT",
            "tables": [
                {"title": "Import 20ft", "columns": ["Item", "USD"], "rows": [["THC", 120], ["Storage", 15.5]]},
            ],
        }
    ],
}


def test_get_before_first_write_is_404(client):
    res = client.get("/api/tariffPage")
    assert res.status_code == 404
    assert res.json() == {"success": False, "error": "Tariff page not found"}


def test_put_replaces_whole_document(client, admin_headers):
    body = {**SAMPLE, "_id": "abc", "__v": 3, "createdAt": "x"}
    res = client.put("/api/tariffPage", json=body, headers=admin_headers)
    assert res.status_code == 200, res.text
    page = _page(client)
    assert page["exchangeRate"] == 279.5
    assert page["companies"][0]["tables"][0]["rows"] == [["THC", 120], ["Storage", 15.5]]

    client.put("/api/tariffPage", json={"companies": []}, headers=admin_headers)
    page = _page(client)
    assert page["companies"] == []
    # Fields not sent are kept
    assert page["exchangeDate"] == "2024-02-01"


def test_put_rejects_ragged_rows(client, admin_headers):
    body = {
        "companies": [{"name": "QICT", "tables": [{"title": "T", "columns": ["a", "b"], "rows": [["1"]]}]}],
    }
    res = client.put("/api/tariffPage", json=body, headers=admin_headers)
    assert res.status_code == 400
    assert "details" in res.json()


def test_put_rejects_non_list_companies(client, admin_headers):
    res = client.put("/api/tariffPage", json={"companies": "QICT"}, headers=admin_headers)
    assert res.status_code == 400


def test_put_requires_admin(client, user_headers):
    assert client.put("/api/tariffPage", json=SAMPLE).status_code == 401
    assert client.put("/api/tariffPage", json=SAMPLE, headers=user_headers).status_code == 403


def test_patch_exchange_updates_page_and_history(client, admin_headers):
    res = client.patch(
        "/api/tariffPage/exchange",
        json={"exchangeDate": "2024-03-01", "exchangeRate": 290},
        headers=admin_headers,
    )
    assert res.status_code == 200, res.text

    page = _page(client)
    assert page["exchangeDate"] == "2024-03-01"
    assert page["exchangeRate"] == 290

    res = client.get("/api/exchange-rates/effective/2024-03-01", headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["data"]["sourceDate"] == "2024-03-01"
    assert res.json()["data"]["rate"] == 290


def test_patch_exchange_is_idempotent(client, admin_headers):
    body = {"exchangeDate": "2024-03-01", "exchangeRate": 290}
    client.patch("/api/tariffPage/exchange", json=body, headers=admin_headers)
    client.patch("/api/tariffPage/exchange", json=body, headers=admin_headers)
    res = client.get("/api/exchange-rates", headers=admin_headers)
    assert [(r["date"], r["rate"]) for r in res.json()["data"]] == [("2024-03-01", 290)]


def test_patch_exchange_itemizes_validation_errors(client, admin_headers):
    res = client.patch("/api/tariffPage/exchange", json={}, headers=admin_headers)
    assert res.status_code == 400
    fields = {d["field"] for d in res.json()["details"]}
    assert fields == {"exchangeDate", "exchangeRate"}

    res = client.patch(
        "/api/tariffPage/exchange",
        json={"exchangeDate": "1/3/2024", "exchangeRate": -1},
        headers=admin_headers,
    )
    assert res.status_code == 400
    assert len(res.json()["details"]) == 2


def test_editor_endpoints_build_a_table(client, admin_headers):
    h = admin_headers
    assert client.post("/api/tariffPage/companies", json={"name": "KICT"}, headers=h).status_code == 201
    assert client.post("/api/tariffPage/companies/0/tables", json={"title": "Reefer"}, headers=h).status_code == 201

    base = "/api/tariffPage/companies/0/tables/0"
    client.post(f"{base}/columns", json={"header": "USD"}, headers=h)
    client.post(f"{base}/rows", headers=h)
    table = _page(client)["companies"][0]["tables"][0]
    assert table == {"title": "Reefer", "columns": ["Column 1", "USD"], "rows": [["", ""], ["", ""]]}

    res = client.post(f"{base}/resize", json={"rows": 3, "cols": 4}, headers=h)
    assert res.status_code == 200
    table = _page(client)["companies"][0]["tables"][0]
    assert len(table["rows"]) == 3
    assert all(len(r) == 4 for r in table["rows"])

    res = client.put(base, json={"title": "Reefer", "columns": ["Item", "USD"], "rows": [["Plug", 40]]}, headers=h)
    assert res.status_code == 200
    assert _page(client)["companies"][0]["tables"][0]["rows"] == [["Plug", 40]]


def test_resize_over_cap_is_rejected_without_change(client, admin_headers):
    h = admin_headers
    client.post("/api/tariffPage/companies", json={"name": "KICT"}, headers=h)
    client.post("/api/tariffPage/companies/0/tables", json={}, headers=h)
    before = _page(client)

    res = client.post("/api/tariffPage/companies/0/tables/0/resize", json={"rows": 101, "cols": 2}, headers=h)
    assert res.status_code == 400
    assert res.json()["error"] == "Maximum size allowed is 100 rows × 20 columns"
    assert _page(client) == before


def test_deleting_last_row_or_column_is_noop(client, admin_headers):
    h = admin_headers
    client.post("/api/tariffPage/companies", json={"name": "KICT"}, headers=h)
    client.post("/api/tariffPage/companies/0/tables", json={}, headers=h)
    before = _page(client)

    assert client.delete("/api/tariffPage/companies/0/tables/0/rows/0", headers=h).status_code == 200
    assert client.delete("/api/tariffPage/companies/0/tables/0/columns/0", headers=h).status_code == 200
    after = _page(client)
    assert after["companies"] == before["companies"]
    assert after["version"] == before["version"]


def test_company_rename_duplicates_and_delete(client, admin_headers):
    h = admin_headers
    client.post("/api/tariffPage/companies", json={"name": "QICT"}, headers=h)
    client.post("/api/tariffPage/companies", json={"name": "SAPT"}, headers=h)
    assert client.post("/api/tariffPage/companies", json={"name": "sapt"}, headers=h).status_code == 400
    assert client.patch("/api/tariffPage/companies/1", json={"name": "KGTL"}, headers=h).status_code == 200
    assert client.delete("/api/tariffPage/companies/0", headers=h).status_code == 200
    assert [c["name"] for c in _page(client)["companies"]] == ["KGTL"]
    assert client.delete("/api/tariffPage/companies/5", headers=h).status_code == 404


def test_stale_version_is_rejected(client, admin_headers):
    h = admin_headers
    client.put("/api/tariffPage", json=SAMPLE, headers=h)
    version = _page(client)["version"]

    # Another admin edits first
    client.post("/api/tariffPage/companies", json={"name": "SAPT"}, headers=h)

    res = client.put("/api/tariffPage", json={**SAMPLE, "version": version}, headers=h)
    assert res.status_code == 409
    res = client.post(f"/api/tariffPage/companies?version={version}", json={"name": "KGTL"}, headers=h)
    assert res.status_code == 409

    current = _page(client)["version"]
    res = client.post(f"/api/tariffPage/companies?version={current}", json={"name": "KGTL"}, headers=h)
    assert res.status_code == 201
    assert _page(client)["version"] == current + 1


def test_patch_exchange_rejects_non_numeric_rates(client, admin_headers):
    for bad in (True, "290"):
        res = client.patch(
            "/api/tariffPage/exchange",
            json={"exchangeDate": "2024-03-01", "exchangeRate": bad},
            headers=admin_headers,
        )
        assert res.status_code == 400, bad
        assert [d["field"] for d in res.json()["details"]] == ["exchangeRate"]
    assert client.get("/api/tariffPage").status_code == 404


def test_put_rejects_boolean_rate(client, admin_headers):
    res = client.put("/api/tariffPage", json={**SAMPLE, "exchangeRate": True}, headers=admin_headers)
    assert res.status_code == 400


def test_patch_exchange_keeps_page_when_history_write_fails(client, admin_headers, monkeypatch):
    async def failing_upsert(db, date, rate):
        raise SQLAlchemyError("history table unavailable")

    monkeypatch.setattr(tariff_service, "upsert_rate", failing_upsert)
    res = client.patch(
        "/api/tariffPage/exchange",
        json={"exchangeDate": "2024-03-01", "exchangeRate": 290},
        headers=admin_headers,
    )
    assert res.status_code == 200, res.text

    page = _page(client)
    assert page["exchangeDate"] == "2024-03-01"
    assert page["exchangeRate"] == 290
    assert client.get("/api/exchange-rates/2024-03-01", headers=admin_headers).status_code == 404


def test_put_without_changes_keeps_version(client, admin_headers):
    first = client.put("/api/tariffPage", json=SAMPLE, headers=admin_headers).json()["data"]
    assert first["version"] == 1

    again = client.put("/api/tariffPage", json=SAMPLE, headers=admin_headers).json()["data"]
    assert again["version"] == 1
    empty = client.put("/api/tariffPage", json={}, headers=admin_headers).json()["data"]
    assert empty["version"] == 1

    changed = client.put("/api/tariffPage", json={"exchangeRate": 281}, headers=admin_headers).json()["data"]
    assert changed["version"] == 2
    assert changed["companies"] == first["companies"]


def test_empty_put_creates_page_at_version_one(client, admin_headers):
    res = client.put("/api/tariffPage", json={}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["data"]["version"] == 1


def test_title_header_and_cell_endpoints(client, admin_headers):
    h = admin_headers
    client.put("/api/tariffPage", json=SAMPLE, headers=h)
    base = "/api/tariffPage/companies/0/tables/0"

    res = client.patch(base, json={"title": "Import 40ft"}, headers=h)
    assert res.json()["data"]["companies"][0]["tables"][0]["title"] == "Import 40ft"

    res = client.patch(f"{base}/columns/1", json={"header": "PKR"}, headers=h)
    assert res.json()["data"]["companies"][0]["tables"][0]["columns"] == ["Item", "PKR"]

    res = client.patch(f"{base}/cells/1/1", json={"value": 18.25}, headers=h)
    table = res.json()["data"]["companies"][0]["tables"][0]
    assert table["rows"] == [["THC", 120], ["Storage", 18.25]]
    assert res.json()["data"]["version"] == 4

    assert client.patch(f"{base}/cells/5/0", json={"value": "x"}, headers=h).status_code == 404
    assert client.patch(f"{base}/columns/7", json={"header": "x"}, headers=h).status_code == 404
    assert _page(client)["version"] == 4
