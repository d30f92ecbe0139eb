"""
Shared fixtures for the Civic Pulse test suite.
"""
import os

import pytest

# Force the in-memory mock database BEFORE importing the app
os.environ["USE_MOCK_DB"] = "true"
os.environ["MOCK_DB_PATH"] = ""

from fastapi.testclient import TestClient

from app.config import firebase
from app.config.mock_firestore import MockFirestore
from app.main import app as fastapi_app
from app.models.report import Location, Report
from app.models.user import UserLogin
from app.models.weather import WeatherSnapshot
from app.services import report_store as report_store_module
from app.services import user_service as user_service_module
from app.services.geocoding import resolver as geocoding_resolver
from app.services.weather import resolver as weather_resolver
from app.services.report_store import ReportStore
from app.services.user_service import UserService


@pytest.fixture
def db(monkeypatch):
    """Fresh in-memory Firestore per test, with service singletons reset."""
    mock_db = MockFirestore(None)
    monkeypatch.setattr(firebase, "db", mock_db)
    monkeypatch.setattr(report_store_module, "_report_store", None)
    monkeypatch.setattr(user_service_module, "_user_service", None)
    monkeypatch.setattr(geocoding_resolver, "_provider_instance", None)
    monkeypatch.setattr(weather_resolver, "_provider_instance", None)
    return mock_db


@pytest.fixture
def store(db):
    return ReportStore(db)


@pytest.fixture
def user_service(db):
    return UserService(db)


@pytest.fixture
def citizen(user_service):
    return user_service.authenticate(UserLogin(email="asha@example.com", name="Asha", role="citizen"))


@pytest.fixture
def authority(user_service):
    return user_service.authenticate(UserLogin(email="ward@example.com", name="Ward Office", role="authority"))


@pytest.fixture
def weather():
    """Weather returned by the patched lookup; tests mutate .condition."""
    return {"condition": "clear"}


@pytest.fixture
def fake_lookups(monkeypatch, weather):
    """Replace the external address and weather lookups with deterministic fakes."""
    calls = []

    def fake_reverse_geocode(lat, lng):
        calls.append(("geocode", lat, lng))
        return "MG Road, Bengaluru"

    def fake_check_weather(lat, lng):
        calls.append(("weather", lat, lng))
        return WeatherSnapshot(condition=weather["condition"], provider="test")

    monkeypatch.setattr("app.services.report_service.reverse_geocode", fake_reverse_geocode)
    monkeypatch.setattr("app.services.report_service.check_weather", fake_check_weather)
    return calls


@pytest.fixture
def client(db, fake_lookups):
    return TestClient(fastapi_app)


def as_user(user):
    return {"X-User-Email": user.email}


def make_report(report_id="r1", lat=12.0, lng=77.0, **overrides):
    data = {
        "id": report_id,
        "type": "pothole",
        "title": "Pothole",
        "description": "Large pothole in the left lane",
        "location": Location(lat=lat, lng=lng, address="Somewhere"),
        "reported_by": "Asha",
        "reported_by_email": "asha@example.com",
    }
    data.update(overrides)
    return Report(**data)
