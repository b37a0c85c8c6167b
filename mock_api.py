# mock_api.py — Flask stand-in for the remote symptom service (local development only)
import logging
import time
import uuid

from flask import Flask, jsonify, request
from pydantic import ValidationError as ModelValidationError

from pydantic_models import PatientSubmission, Symptom
from settings import configure_logging, get_settings

logger = logging.getLogger("mock_api")

FIXTURE_SYMPTOMS = [
    {
        "id": 1,
        "name": "Fiebre",
        "categories": ["general"],
        "solutions": [
            {"painLevel": [1, 6], "recommendations": ["Reposo", "Hidratación abundante"], "alert": False},
            {"painLevel": [7, 10], "recommendations": ["Acudir a urgencias"], "alert": True},
        ],
    },
    {
        "id": 2,
        "name": "Dolor de cabeza",
        "categories": ["neurológico"],
        "solutions": [
            {"painLevel": [1, 7], "recommendations": ["Descansar en un lugar oscuro"], "alert": False},
            {"painLevel": [8, 10], "recommendations": ["Consultar a un médico de inmediato"], "alert": True},
        ],
    },
]


def _now_wire() -> dict:
    ns = time.time_ns()
    return {"_seconds": ns // 1_000_000_000, "_nanoseconds": ns % 1_000_000_000}


def create_app(symptoms=None) -> Flask:
    app = Flask(__name__)
    catalog = {s.id: s for s in (Symptom.model_validate(x) for x in (symptoms or FIXTURE_SYMPTOMS))}
    patients = []
    app.config["PATIENTS"] = patients

    @app.route("/", methods=["GET"])
    def index():
        return "ROMI Express mock API — GET /sintomas, GET /pacientes, POST /pacientes with {'nombre','sintomaId','nivelDolor'}"

    @app.route("/sintomas", methods=["GET"])
    def list_symptoms():
        return jsonify([s.model_dump(by_alias=True) for s in catalog.values()])

    @app.route("/pacientes", methods=["GET"])
    def list_patients():
        return jsonify(patients)

    @app.route("/pacientes", methods=["POST"])
    def create_patient():
        data = request.get_json(force=True, silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Please POST JSON with 'nombre', 'sintomaId' and 'nivelDolor'."}), 400
        try:
            sub = PatientSubmission.model_validate(data)
        except ModelValidationError as e:
            return jsonify({"error": "invalid body", "details": e.errors(include_url=False, include_context=False)}), 400

        symptom = catalog.get(sub.symptom_id)
        if symptom is None:
            return jsonify({"error": f"unknown sintomaId {sub.symptom_id}"}), 404

        solution = next(
            (s for s in symptom.solutions if s.pain_level_range[0] <= sub.pain_level <= s.pain_level_range[1]),
            None,
        )
        record = {
            "id": uuid.uuid4().hex,
            "nombre": sub.name,
            "sintomaId": symptom.id,
            "nivelDolor": sub.pain_level,
            "fecha": _now_wire(),
            "sintomaNombre": symptom.name,
        }
        patients.append(record)
        logger.info("stored patient %s (sintomaId=%s, nivelDolor=%s)", record["id"], symptom.id, sub.pain_level)

        return jsonify({
            "id": record["id"],
            "nombre": sub.name,
            "sintoma": symptom.name,
            "recomendaciones": list(solution.recommendations) if solution else [],
            "alerta": solution.alert if solution else False,
        })

    return app


if __name__ == "__main__":
    configure_logging()
    create_app().run(host="0.0.0.0", port=get_settings().mock_api_port)
