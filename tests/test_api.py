from __future__ import annotations

import io

import pytest

from src.catering_payroll.catering_payroll.container import wire
from src.catering_payroll.catering_payroll.main import create_app


@pytest.fixture()
def client(staff_repo, events_repo, worklogs_repo, availability_repo):
    container = wire(
        staff_repo=staff_repo,
        events_repo=events_repo,
        worklogs_repo=worklogs_repo,
        availability_repo=availability_repo,
    )
    app = create_app(container=container, settings_module="config.testing")
    return app.test_client()


ROW = {"staffName": "王小明", "date": "2024-01-15", "clockOut": "14:00"}
BAD_ROW = {"staffName": "路人甲", "date": "2024-01-15", "clockOut": "14:00"}


def test_import_preview(client):
    res = client.post("/api/v1/worklogs/import", json={"rows": [ROW]})

    assert res.status_code == 200
    body = res.get_json()
    assert body["preview"] is True
    assert body["summary"] == {"total": 1, "valid": 1, "errors": 0, "warnings": 0, "totalSalary": 2300}
    assert body["results"][0]["hours"] == 5
    assert body["results"][0]["startTime"] == "09:00"
    assert body["results"][0]["status"] == "VALID"


def test_import_confirm_then_list(client):
    res = client.post("/api/v1/worklogs/import", json={"rows": [ROW], "confirm": True})

    assert res.status_code == 200
    assert res.get_json() == {"success": True, "imported": 1, "totalSalary": 2300}

    logs = client.get("/api/v1/worklogs").get_json()
    assert len(logs) == 1
    assert logs[0]["source"] == "IMPORT"
    assert logs[0]["eventId"] == 1
    assert logs[0]["totalSalary"] == 2300


def test_import_confirm_with_error_rows_is_rejected(client, worklogs_repo):
    res = client.post("/api/v1/worklogs/import", json={"rows": [ROW, BAD_ROW], "confirm": True})

    assert res.status_code == 400
    body = res.get_json()
    assert body["summary"] == {"valid": 1, "errors": 1}
    assert body["results"][1]["errorCode"] == "UNKNOWN_STAFF"
    assert worklogs_repo.all() == []


def test_import_requires_rows(client):
    assert client.post("/api/v1/worklogs/import", json={"rows": []}).status_code == 400
    assert client.post("/api/v1/worklogs/import", json={"rows": [ROW], "overtimeRate": "-5"}).status_code == 400


def test_import_upload_csv(client):
    csv = "員工姓名,日期,下班時間\n王小明,2024/1/15,14:00\n,,\n".encode("utf-8")

    res = client.post(
        "/api/v1/worklogs/import/upload",
        data={"file": (io.BytesIO(csv), "timesheet.csv")},
        content_type="multipart/form-data",
    )

    assert res.status_code == 200
    body = res.get_json()
    assert body["summary"]["total"] == 1
    assert body["summary"]["totalSalary"] == 2300


def test_import_upload_rejects_unknown_file_type(client):
    res = client.post(
        "/api/v1/worklogs/import/upload",
        data={"file": (io.BytesIO(b"hello"), "notes.pdf")},
        content_type="multipart/form-data",
    )

    assert res.status_code == 400


def test_manual_worklog_adjust_and_delete(client):
    res = client.post(
        "/api/v1/worklogs",
        json={"staffId": 2, "date": "2024-01-16", "startTime": "08:30", "endTime": "13:10", "allowance": 100},
    )
    assert res.status_code == 201
    created = res.get_json()
    assert created["totalSalary"] == 2100
    assert created["hours"] == 4.7

    res = client.patch(f"/api/v1/worklogs/{created['id']}", json={"overtimePay": 0})
    assert res.status_code == 200
    assert res.get_json()["totalSalary"] == 1900

    assert client.delete(f"/api/v1/worklogs/{created['id']}").status_code == 200
    assert client.get(f"/api/v1/worklogs/{created['id']}").status_code == 404


def test_manual_worklog_validation(client):
    assert client.post("/api/v1/worklogs", json={"date": "2024-01-16"}).status_code == 400
    res = client.post(
        "/api/v1/worklogs",
        json={"staffId": 1, "date": "2024-01-16", "startTime": "08:30", "endTime": "13:10", "source": "IMPORT"},
    )
    assert res.status_code == 400


def test_salary_report(client):
    client.post("/api/v1/worklogs/import", json={"rows": [ROW], "confirm": True})

    res = client.get("/api/v1/reports/salary?startDate=2024-01-01&endDate=2024-01-31&groupBy=month")
    assert res.status_code == 200
    body = res.get_json()
    assert body["groupBy"] == "month"
    assert body["groups"][0]["key"] == "2024-01"
    assert body["grandTotal"]["totalSalary"] == 2300

    assert client.get("/api/v1/reports/salary?groupBy=week").status_code == 400
    assert client.get("/api/v1/reports/salary?startDate=01/01/2024").status_code == 400


def test_availability_endpoints(client):
    res = client.post("/api/v1/staff/2/availability", json={"date": "2024-01-15", "available": False, "reason": "sick"})
    assert res.status_code == 200

    body = client.get("/api/v1/availability?date=2024-01-15").get_json()
    assert [s["id"] for s in body["unavailable"]] == [2]
    assert body["summary"]["total"] == 3

    assert client.get("/api/v1/availability").status_code == 400
    assert client.post("/api/v1/staff/99/availability", json={"date": "2024-01-15", "available": True}).status_code == 404
    assert client.delete("/api/v1/staff/2/availability?date=2024-01-15").status_code == 200


def test_event_assignment_endpoint(client):
    res = client.post("/api/v1/events/2/staff", json={"staffId": 1})
    assert res.status_code == 201
    assert [c["eventId"] for c in res.get_json()["conflicts"]] == [1]

    assert client.post("/api/v1/events/2/staff", json={"staffId": 1}).status_code == 409
    assert client.post("/api/v1/events/99/staff", json={"staffId": 1}).status_code == 404


def test_unknown_route_is_json_404(client):
    res = client.get("/api/v1/nope")

    assert res.status_code == 404
    assert "error" in res.get_json()
