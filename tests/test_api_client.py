import pytest
import requests

from api_client import SymptomApiClient
from errors import NetworkError, PayloadError
from pydantic_models import PatientSubmission
from conftest import FakeResponse, FakeSession

BASE = "http://api.test"


def client_for(routes=None, error=None):
    session = FakeSession(routes, error)
    return SymptomApiClient(base_url=BASE, session=session), session


def test_list_symptoms_parses_catalog():
    client, session = client_for({
        ("GET", "/sintomas"): FakeResponse(200, [
            {"id": 1, "name": "Fever", "categories": ["general"],
             "solutions": [{"painLevel": [1, 5], "recommendations": ["Rest"], "alert": False}]},
        ]),
    })
    symptoms = client.list_symptoms()
    assert symptoms[0].name == "Fever"
    assert symptoms[0].solutions[0].pain_level_range == (1, 5)
    assert session.calls[0]["url"] == f"{BASE}/sintomas"


def test_list_patients_parses_wire_timestamps(make_patient):
    client, _ = client_for({("GET", "/pacientes"): FakeResponse(200, [make_patient("a", 100, 5)])})
    [patient] = client.list_patients()
    assert patient.fecha.seconds == 100
    assert patient.sintoma_nombre == "Fever"


def test_submit_sends_wire_body_once():
    client, session = client_for({
        ("POST", "/pacientes"): FakeResponse(200, {
            "id": "x", "nombre": "Ana", "sintoma": "Fever", "recomendaciones": ["Rest"], "alerta": False,
        }),
    })
    rec = client.submit_symptom_report(PatientSubmission(name="Ana", symptom_id=1, pain_level=7))
    assert len(session.calls) == 1
    assert session.calls[0]["method"] == "POST"
    assert session.calls[0]["json"] == {"nombre": "Ana", "sintomaId": 1, "nivelDolor": 7}
    assert rec.recomendaciones == ["Rest"]
    assert rec.alerta is False


@pytest.mark.parametrize("status", [500, 302, 304])
@pytest.mark.parametrize("call,route", [
    ("list_symptoms", ("GET", "/sintomas")),
    ("list_patients", ("GET", "/pacientes")),
])
def test_non_success_status_raises_network_error(call, route, status):
    client, session = client_for({route: FakeResponse(status, [])})
    with pytest.raises(NetworkError) as exc:
        getattr(client, call)()
    assert exc.value.status_code == status
    assert exc.value.operation == call
    assert len(session.calls) == 1


def test_submit_non_success_status():
    client, _ = client_for({("POST", "/pacientes"): FakeResponse(404, {})})
    with pytest.raises(NetworkError):
        client.submit_symptom_report(PatientSubmission(name="Ana", symptom_id=9, pain_level=5))


def test_transport_failure_is_single_attempt():
    client, session = client_for(error=requests.ConnectionError("down"))
    with pytest.raises(NetworkError) as exc:
        client.list_symptoms()
    assert exc.value.status_code is None
    assert len(session.calls) == 1


def test_non_json_body(not_json):
    client, _ = client_for({("GET", "/sintomas"): FakeResponse(200, not_json)})
    with pytest.raises(NetworkError):
        client.list_symptoms()


def test_out_of_range_timestamp_is_payload_error(make_patient):
    client, _ = client_for({("GET", "/pacientes"): FakeResponse(200, [make_patient("a", 1, 1_000_000_000)])})
    with pytest.raises(PayloadError) as exc:
        client.list_patients()
    assert isinstance(exc.value, NetworkError)


def test_timeout_passed_through():
    session = FakeSession({("GET", "/sintomas"): FakeResponse(200, [])})
    SymptomApiClient(base_url=BASE + "/", session=session, timeout=4.0).list_symptoms()
    assert session.calls[0]["timeout"] == 4.0
    assert session.calls[0]["url"] == f"{BASE}/sintomas"


def test_round_trip_through_mock_api(flask_session):
    client = SymptomApiClient(base_url=BASE, session=flask_session)
    symptoms = client.list_symptoms()
    fever = next(s for s in symptoms if s.id == 1)

    rec = client.submit_symptom_report(PatientSubmission(name="Ana", symptom_id=fever.id, pain_level=8))
    assert rec.alerta is True
    assert rec.sintoma == fever.name

    [patient] = client.list_patients()
    assert patient.nombre == "Ana"
    assert patient.nivel_dolor == 8


def test_far_future_timestamp_is_payload_error(make_patient):
    client, _ = client_for({("GET", "/pacientes"): FakeResponse(200, [make_patient("a", 10**12)])})
    with pytest.raises(PayloadError):
        client.list_patients()
