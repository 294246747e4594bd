"""
HTTP tests against the FastAPI app with an isolated record store.
"""
ENROLLMENT_CSV = (
    "date,state,district,pincode,age_0_5,age_5_17,age_18_greater\n"
    "01-03-2025,Kerala,Ernakulam,682001,1000,200,34\n"
    "02-03-2025,KL,Thrissur,680001,0,0,1000\n"
    "01-04-2025,Punjab,Ludhiana,141001,500,500,0\n"
)


def upload(client, vertical, *files):
    return client.post(
        f"/api/records/{vertical}/upload",
        files=[("files", (name, content, "text/csv")) for name, content in files],
    )


def test_root_and_health(client):
    assert client.get("/").json()["endpoints"]["records"] == "/api/records"

    health = client.get("/api/health").json()
    assert health["status"] == "healthy"
    assert health["records"] == {"enrollment": 0, "demographic": 0, "biometric": 0}


def test_upload_and_counts(client):
    response = upload(client, "enrollment", ("e.csv", ENROLLMENT_CSV))

    assert response.status_code == 200
    body = response.json()
    assert body["records_added"] == 3
    assert body["files"] == [{"filename": "e.csv", "success": True, "records": 3, "error": None}]

    counts = client.get("/api/records/counts").json()
    assert counts["enrollment"] == 3
    assert counts["total"] == 3

    activity = client.get("/api/records/activity").json()["activity"]
    assert activity[0]["title"] == "Enrollment Data Loaded"


def test_bad_file_does_not_stop_batch(client):
    response = upload(
        client, "enrollment",
        ("broken.csv", "a,b\n1,2\n3,4,5,6\n"),
        ("good.csv", ENROLLMENT_CSV),
    )

    files = response.json()["files"]
    assert files[0]["success"] is False
    assert "broken.csv" in files[0]["error"]
    assert files[1]["success"] is True
    assert response.json()["records_added"] == 3


def test_non_utf8_file_reported(client):
    response = client.post(
        "/api/records/biometric/upload",
        files=[("files", ("bin.csv", b"\xff\xfe\xfa", "text/csv"))],
    )
    assert response.json()["files"][0]["success"] is False


def test_unknown_vertical_rejected(client):
    assert client.post("/api/records/passport", json=[]).status_code == 422


def test_append_json_records(client):
    response = client.post("/api/records/demographic", json=[
        {"date": "01-03-2025", "state": "pb", "district": "Ludhiana", "demo_age_5_17": "100", "demo_age_17_": 200},
    ])

    assert response.json()["records_added"] == 1
    states = client.get("/api/aggregates/states").json()["states"]
    assert states == [{"name": "Punjab", "enrollments": 0, "demographics": 300, "biometrics": 0, "total": 300}]


def test_aggregate_endpoints(client):
    upload(client, "enrollment", ("e.csv", ENROLLMENT_CSV))

    ranked = client.get("/api/aggregates/states", params={"ranked": True}).json()["states"]
    assert [s["name"] for s in ranked] == ["Kerala", "Punjab"]

    districts = client.get("/api/aggregates/states/kl/districts").json()
    assert districts["state"] == "Kerala"
    assert [d["name"] for d in districts["districts"]] == ["Ernakulam", "Thrissur"]

    pincodes = client.get("/api/aggregates/states/Kerala/districts/Thrissur/pincodes").json()
    assert pincodes["pincodes"][0]["pincode"] == "680001"

    monthly = client.get("/api/aggregates/monthly").json()["trend"]
    assert [p["full_month"] for p in monthly] == ["2025-03", "2025-04"]

    assert client.get("/api/aggregates/daily").json()["count"] == 3
    assert client.get("/api/aggregates/totals").json()["enrollments"] == 3234
    assert client.get("/api/aggregates/age-distribution").json()["enrollment"]["0-5"] == 1500
    assert client.get("/api/aggregates/data-quality").json()["data_completeness"] == 100

    choropleth = client.get("/api/aggregates/choropleth", params={"category": "enrollment"}).json()
    assert {s["state"]: s["level"] for s in choropleth["states"]} == {"Kerala": 4, "Punjab": 2}


def test_forecast_without_history(client):
    body = client.get("/api/forecast/monthly").json()
    assert body["forecast"] == []
    assert body["message"] == "Insufficient data for predictions"


def test_forecast_with_history(client):
    upload(client, "enrollment", ("e.csv", ENROLLMENT_CSV))

    body = client.get("/api/forecast/monthly", params={"vertical": "enrollment"}).json()

    assert len(body["forecast"]) == 6
    assert body["history_months"] == 2
    assert {p["type"] for p in body["forecast"]} == {"enrollment"}

    states = client.get("/api/forecast/states").json()
    assert states["states"][0]["state"] == "Kerala"


def test_anomaly_endpoint(client):
    rows = "\n".join(
        f"{day:02d}-01-2025,Bihar,Patna,800001,0,0,{1000 if day == 20 else 10}"
        for day in range(1, 21)
    )
    upload(client, "enrollment", ("spike.csv", "date,state,district,pincode,age_0_5,age_5_17,age_18_greater\n" + rows))

    body = client.get("/api/anomaly/detect").json()
    assert body["total_count"] == 1
    assert body["anomalies"][0]["severity"] == "high"
    assert body["severity_breakdown"] == {"high": 1, "medium": 0, "low": 0}

    assert client.get("/api/anomaly/detect", params={"vertical": "biometric"}).json()["total_count"] == 0


def test_insight_endpoints(client):
    upload(client, "enrollment", ("e.csv", ENROLLMENT_CSV))

    answer = client.post("/api/insights/query", json={"question": "total enrollments"}).json()["answer"]
    assert answer.startswith("Total Enrollments: 3,234")

    insights = client.get("/api/insights").json()["insights"]
    assert insights[0]["title"] == "Dominant Activity in Kerala"

    reasons = client.get("/api/insights/reasons").json()["reasons"]
    assert [r["factor"] for r in reasons] == ["Academic Cycle", "Digital India Initiatives"]

    report = client.get("/api/insights/report").json()
    assert report["data_quality"]["total_records"] == 3
    assert len(report["enrollment_forecast"]) == 6


def test_query_requires_question(client):
    assert client.post("/api/insights/query", json={}).status_code == 422


def test_same_extract_uploaded_twice(client):
    csv_text = (
        "date,state,district,pincode,age_0_5,age_5_17,age_18_greater\n"
        "2024-06-01,Maharashtra,Pune,411001,10,20,5\n"
    )
    upload(client, "enrollment", ("june.csv", csv_text))
    upload(client, "enrollment", ("june.csv", csv_text))

    states = client.get("/api/aggregates/states").json()["states"]
    assert states == [{"name": "Maharashtra", "enrollments": 70, "demographics": 0, "biometrics": 0, "total": 70}]

    quality = client.get("/api/aggregates/data-quality").json()
    assert quality["total_records"] == 2
    assert quality["duplicates"] == 1


def test_upload_with_trailing_commas(client):
    csv_text = (
        "date,state,district,pincode,age_0_5,age_5_17,age_18_greater\n"
        "2024-06-01,Maharashtra,Pune,411001,10,20,5,\n"
    )

    response = upload(client, "enrollment", ("export.csv", csv_text))

    assert response.json()["records_added"] == 1
    assert client.get("/api/aggregates/totals").json()["enrollments"] == 35
    assert client.get("/api/aggregates/states").json()["states"][0]["name"] == "Maharashtra"
