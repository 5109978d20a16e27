import pytest

from agroscore.core.celery_app import celery
from agroscore.core.errors import PersistenceError
from agroscore.models import MonthlyReport
from agroscore.services import report_service, report_task
from tests.conftest import TestingSessionLocal

API = "/api/v1"


class TestSwitchSuggestion:
    def test_requires_field_id(self, client, auth_headers):
        response = client.get(f"{API}/crops/switch-suggestion", headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "fieldId is required"}

    def test_suggests_best_soil_match(self, client, auth_headers, field_setup, crop_references):
        response = client.get(
            f"{API}/crops/switch-suggestion",
            params={"fieldId": field_setup["field"].id},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json() == {
            "shouldSwitch": True,
            "currentCrop": "Rice",
            "suggestedCrop": "Maize",
            "reason": "Switch from Rice to Maize - lower risk alternative available.",
        }

    def test_other_users_field_is_denied(self, client, other_headers, field_setup):
        response = client.get(
            f"{API}/crops/switch-suggestion",
            params={"fieldId": field_setup["field"].id},
            headers=other_headers,
        )
        assert response.status_code == 403

    def test_high_risk_alert_without_safer_alternative(
        self, client, db, auth_headers, field_setup, crop_references, add_reading,
    ):
        field = field_setup["field"]
        field.soil_type = "loamy"
        db.commit()
        millet = client.post(
            f"{API}/crops", json={"fieldId": field.id, "name": "Millet"}, headers=auth_headers,
        ).json()
        add_reading(field.id, temperature=25, humidity=85, soil_moisture=50, soil_ph=7)
        logged = client.post(
            f"{API}/actions",
            json={"actionType": "scouting", "fieldId": field.id, "cropId": millet["id"], "cropSpacing": "narrow"},
            headers=auth_headers,
        ).json()
        assert logged["alerts"][0]["severity"] == "high"

        response = client.get(
            f"{API}/crops/switch-suggestion", params={"fieldId": field.id}, headers=auth_headers,
        )
        assert response.json() == {
            "shouldSwitch": False,
            "message": "No better alternatives found at this time.",
        }


class TestCompare:
    def test_compare(self, client, auth_headers, field_setup, crop_references):
        response = client.post(f"{API}/crops/compare", json={"crops": ["Wheat", "Maize"]}, headers=auth_headers)
        assert response.status_code == 200
        wheat, maize = response.json()["crops"]
        assert wheat["profitRange"] == "₹40k-60k"
        assert wheat["marketPrice"] == 2275
        assert maize["soilSuitability"] == 90
        assert maize["marketPrice"] is None

    def test_compare_requires_crops(self, client, auth_headers):
        response = client.post(f"{API}/crops/compare", json={"crops": []}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "Crops array is required"}


class TestReports:
    def test_report_is_cached_until_regenerated(self, client, db, auth_headers, field_setup, add_reading):
        first = client.get(f"{API}/reports", headers=auth_headers).json()
        assert first["summary"]["totalActions"] == 0
        assert first["rewardsTier"] == "none"

        add_reading(field_setup["field"].id, temperature=15, humidity=50, soil_moisture=80, soil_ph=7)
        client.post(f"{API}/actions", json={"actionType": "weeding", "fieldId": field_setup["field"].id},
                    headers=auth_headers)

        cached = client.get(f"{API}/reports", params={"month": first["month"]}, headers=auth_headers).json()
        assert cached["id"] == first["id"]
        assert cached["summary"]["totalActions"] == 0

        generated = client.post(f"{API}/reports/generate", headers=auth_headers)
        assert generated.status_code == 200
        body = generated.json()
        assert body["success"] is True
        assert body["message"] == "Report generated successfully"
        assert body["reportId"] != first["id"]
        assert body["report"]["summary"]["totalActions"] == 1
        assert body["report"]["rewardsTier"] == "gold"
        assert db.query(MonthlyReport).count() == 1

    def test_invalid_month(self, client, auth_headers):
        response = client.get(f"{API}/reports", params={"month": "2024-13"}, headers=auth_headers)
        assert response.status_code == 400

    def test_reports_are_per_user(self, client, auth_headers, other_headers):
        mine = client.get(f"{API}/reports", params={"month": "2024-01"}, headers=auth_headers).json()
        theirs = client.get(f"{API}/reports", params={"month": "2024-01"}, headers=other_headers).json()
        assert mine["id"] != theirs["id"]
        assert theirs["userId"] == "user-uuid-9999"

    def test_deferred_generation_runs_task(self, client, db, auth_headers, monkeypatch):
        monkeypatch.setattr(celery.conf, "task_always_eager", True)
        monkeypatch.setattr(celery.conf, "task_eager_propagates", True)
        monkeypatch.setattr(report_task, "SessionLocal", TestingSessionLocal)

        response = client.post(
            f"{API}/reports/generate", json={"month": "2024-02", "defer": True}, headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Report generation queued"
        assert body["taskId"]
        assert "report" not in body
        db.expire_all()
        stored = db.query(MonthlyReport).filter(MonthlyReport.month == "2024-02").one()
        assert stored.user_id == "user-uuid-1234"


def test_generate_task_returns_tier(db, monkeypatch):
    monkeypatch.setattr(report_task, "SessionLocal", TestingSessionLocal)
    result = report_task.generate_report_task.run("user-uuid-1234", "2023-11")
    assert result["status"] == "ok"
    assert result["rewards_tier"] == "none"
    assert report_service.get_monthly_report(db, "user-uuid-1234", "2023-11").id == result["report_id"]


@pytest.mark.parametrize("month", ["2024-1", "24-01"])
def test_generate_rejects_bad_month(client, auth_headers, month):
    response = client.post(f"{API}/reports/generate", json={"month": month}, headers=auth_headers)
    assert response.status_code == 400


def test_repeated_report_reads_are_identical(client, auth_headers):
    first = client.get(f"{API}/reports", params={"month": "2024-04"}, headers=auth_headers)
    second = client.get(f"{API}/reports", params={"month": "2024-04"}, headers=auth_headers)
    assert first.content == second.content


def test_dashboard_is_stable_on_unchanged_data(client, auth_headers, field_setup, add_reading):
    add_reading(field_setup["field"].id, temperature=22, humidity=65, soil_moisture=45, soil_ph=6.2)
    first = client.get(f"{API}/dashboard/summary", headers=auth_headers)
    second = client.get(f"{API}/dashboard/summary", headers=auth_headers)
    assert first.content == second.content


def test_generate_task_retries_store_failures(db, monkeypatch):
    monkeypatch.setattr(report_task, "SessionLocal", TestingSessionLocal)
    real_generate = report_service.generate_report
    calls = []

    def flaky_generate(session, user_id, month):
        calls.append(month)
        if len(calls) == 1:
            raise PersistenceError("Failed to generate report")
        return real_generate(session, user_id, month)

    monkeypatch.setattr(report_service, "generate_report", flaky_generate)

    result = report_task.generate_report_task.apply(args=("user-uuid-1234", "2023-10"))

    assert result.successful()
    assert result.result["status"] == "ok"
    assert calls == ["2023-10", "2023-10"]
