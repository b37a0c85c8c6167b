# api_client.py — requests client for the remote symptom service
import logging
from typing import Any, List, Optional

import requests
from pydantic import TypeAdapter
from pydantic import ValidationError as ModelValidationError

from errors import NetworkError, PayloadError
from pydantic_models import Patient, PatientSubmission, RecommendationResponse, Symptom
from settings import get_settings

logger = logging.getLogger(__name__)

_SYMPTOMS = TypeAdapter(List[Symptom])
_PATIENTS = TypeAdapter(List[Patient])


class SymptomApiClient:
    """
    Thin client over the three endpoints of the remote service.

    Every call is a single attempt: no retry, no caching. Failures surface as
    NetworkError (or PayloadError when a 2xx body does not validate).
    """

    def __init__(self, base_url: Optional[str] = None, session=None, timeout: Optional[float] = None):
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.api_timeout

    def _request(self, operation: str, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("%s failed (url=%s): %s", operation, url, e)
            raise NetworkError(f"{operation}: transport error", operation) from e

        if not 200 <= resp.status_code < 300:
            logger.error("%s failed (url=%s, status=%s)", operation, url, resp.status_code)
            raise NetworkError(f"{operation}: HTTP {resp.status_code}", operation, resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            logger.error("%s returned a non-JSON body (url=%s)", operation, url)
            raise NetworkError(f"{operation}: invalid JSON body", operation, resp.status_code) from e

        logger.info("%s ok (url=%s, status=%s)", operation, url, resp.status_code)
        return data

    def list_symptoms(self) -> List[Symptom]:
        data = self._request("list_symptoms", "GET", "/sintomas")
        return _validate("list_symptoms", lambda: _SYMPTOMS.validate_python(data))

    def list_patients(self) -> List[Patient]:
        data = self._request("list_patients", "GET", "/pacientes")
        return _validate("list_patients", lambda: _PATIENTS.validate_python(data))

    def submit_symptom_report(self, submission: PatientSubmission) -> RecommendationResponse:
        # names stay out of the logs
        logger.info("submitting report (sintomaId=%s, nivelDolor=%s)", submission.symptom_id, submission.pain_level)
        data = self._request("submit_symptom_report", "POST", "/pacientes", json=submission.to_wire())
        return _validate("submit_symptom_report", lambda: RecommendationResponse.model_validate(data))


def _validate(operation: str, parse):
    try:
        return parse()
    except ModelValidationError as e:
        logger.error("%s returned an unexpected payload: %s", operation, e.errors()[:3])
        raise PayloadError(f"{operation}: unexpected payload", operation) from e
