"""Dashboard tests run through Streamlit's AppTest with the backend faked out."""

from pathlib import Path

import pytest
import requests
from streamlit.testing.v1 import AppTest

APP_PATH = str(Path(__file__).parent.parent / "streamlit_app.py")

MEDICATIONS = [
    {"id": 1, "name": "Testamox", "generic_name": "Amoxicillin", "species": "dog",
     "category": "Antibiotic", "description": None,
     "guidelines": [{"min_weight_kg": 1, "max_weight_kg": 10, "dosage_mg_per_kg": 4,
                     "frequency_per_day": 2, "duration_days": 7, "notes": None}]},
    {"id": 2, "name": "Whiskerol", "generic_name": None, "species": "cat",
     "category": "NSAID", "description": None,
     "guidelines": [{"min_weight_kg": 1, "max_weight_kg": 8, "dosage_mg_per_kg": 1,
                     "frequency_per_day": 1, "duration_days": None, "notes": None}]},
]


class FakeResponse:

    def __init__(self, status_code, body):
        self.status_code = status_code
        self._body = body
        self.text = str(body)

    def json(self):
        return self._body


def fake_get(url, params=None, timeout=None):
    if url.endswith("/medications"):
        species = (params or {}).get("species")
        meds = [m for m in MEDICATIONS if species in (None, m["species"]) or m["species"] == "both"]
        return FakeResponse(200, meds)
    if "/favorites/" in url:
        return FakeResponse(200, {"user_id": url.rsplit("/", 1)[-1], "medication_ids": []})
    return FakeResponse(404, {"detail": "Not Found"})


def fake_post(url, json=None, timeout=None):
    if url.endswith("/calculate"):
        weight = float(json["weight"])
        return FakeResponse(200, {"status": "ok", "weight_kg": weight,
                                  "plan": {"total_dose_mg": weight * 4, "frequency_per_day": 2,
                                           "duration_days": 7, "notes": None}})
    return FakeResponse(200, {})


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setattr(requests, "get", fake_get)
    monkeypatch.setattr(requests, "post", fake_post)
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.secrets["api_base"] = "http://api.test"
    return at.run()


def calculate(at, weight):
    at.button(key="all-select-1").click().run()
    at.text_input(key="weight").set_value(weight).run()
    at.button(key="calculate").click().run()
    return at


def shown_results(at):
    return [s.value for s in at.success]


class TestSignedOut:

    def test_add_medication_hidden(self, app):
        assert "Add New Medication" not in [e.label for e in app.expander]

    def test_favorites_tab_asks_for_user(self, app):
        assert "Enter a user id in the sidebar to use favorites." in [i.value for i in app.info]

    def test_add_medication_shown_once_user_entered(self, app):
        app.text_input(key="user").set_value("vet-1").run()
        assert "Add New Medication" in [e.label for e in app.expander]


class TestCalculatorResult:

    def test_plan_is_shown(self, app):
        calculate(app, "5")
        assert any("20.00 mg" in s for s in shown_results(app))

    def test_cleared_when_weight_changes(self, app):
        calculate(app, "5")
        app.text_input(key="weight").set_value("6").run()
        assert shown_results(app) == []

    def test_cleared_when_unit_changes(self, app):
        calculate(app, "5")
        app.selectbox(key="weight_unit").set_value("lbs").run()
        assert shown_results(app) == []

    def test_cleared_when_selection_filtered_out(self, app):
        calculate(app, "5")
        app.selectbox(key="species").set_value("cat").run()
        assert shown_results(app) == []
