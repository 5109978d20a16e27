from types import SimpleNamespace

from agroscore.models import AlertType, Severity
from agroscore.services.alert_generator import evaluate_alerts
from agroscore.services.weed_risk import WeedRiskResult, risk_level, risk_message


def _risk(score):
    level = risk_level(score)
    return WeedRiskResult(score=score, level=level, message=risk_message(score, level))


def test_high_weed_risk_alert():
    (alert,) = evaluate_alerts(_risk(75), None)
    assert alert.type == AlertType.WEED_RISK
    assert alert.severity == Severity.HIGH
    assert alert.risk_score == 75
    assert alert.message == "Weed Risk: 75/100 (high) - Early weeding required."
    assert alert.suggested_action == "Schedule weeding activity immediately"


def test_score_of_seventy_is_medium():
    (alert,) = evaluate_alerts(_risk(70), None)
    assert alert.severity == Severity.MEDIUM
    assert alert.suggested_action == "Monitor field closely for weed growth"


def test_low_risk_and_moist_soil_raise_nothing():
    assert evaluate_alerts(_risk(40), SimpleNamespace(soil_moisture=30)) == []


def test_water_stress_alert():
    (alert,) = evaluate_alerts(_risk(10), SimpleNamespace(soil_moisture=25))
    assert alert.type == AlertType.WATER_STRESS
    assert alert.severity == Severity.MEDIUM
    assert alert.risk_score is None
    assert alert.message == "Low soil moisture detected (25%) - consider irrigation"
    assert alert.suggested_action == "Schedule irrigation within 24 hours"


def test_missing_moisture_raises_no_water_alert():
    assert evaluate_alerts(_risk(10), SimpleNamespace(soil_moisture=None)) == []


def test_both_rules_fire_independently():
    alerts = evaluate_alerts(_risk(90), SimpleNamespace(soil_moisture=12.5))
    assert [a.type for a in alerts] == [AlertType.WEED_RISK, AlertType.WATER_STRESS]
    assert alerts[1].message == "Low soil moisture detected (12.5%) - consider irrigation"
