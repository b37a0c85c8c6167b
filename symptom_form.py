# symptom_form.py — form state for the intake page
import time
from enum import Enum
from typing import Callable, Iterable, Optional

from errors import ValidationError
from pydantic_models import PatientSubmission, Symptom

PAIN_MIN = 1
PAIN_MAX = 10
PAIN_DEFAULT = 5
MISSING_FIELDS_MSG = "Por favor completa todos los campos"


class FormStatus(str, Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    EDITING_WITH_ERROR = "editing-with-error"


def pain_band(level: int) -> str:
    if level <= 3:
        return "leve"
    if level <= 7:
        return "moderado"
    return "severo"


class SymptomForm:
    """
    editing -> submitting -> (success | editing-with-error)

    Validation errors stay here: submit() records the message and raises
    ValidationError; the message clears itself after `error_seconds`.
    """

    def __init__(self, symptoms: Iterable[Symptom], error_seconds: float = 3.0,
                 clock: Callable[[], float] = time.monotonic):
        self.symptoms = {s.id: s for s in symptoms}
        self.error_seconds = error_seconds
        self._clock = clock
        self.name = ""
        self.symptom_id: Optional[int] = None
        self.pain_level = PAIN_DEFAULT
        self._status = FormStatus.EDITING
        self._error: Optional[str] = None
        self._error_at = 0.0

    # --- fields ---
    def set_name(self, name: str):
        self.name = name or ""

    def select_symptom(self, symptom_id: Optional[int]):
        if symptom_id is not None and symptom_id not in self.symptoms:
            raise ValidationError("Unknown symptom", "symptom_id", symptom_id)
        self.symptom_id = symptom_id

    @property
    def selected_symptom(self) -> Optional[Symptom]:
        return self.symptoms.get(self.symptom_id)

    def increment_pain(self):
        if self.pain_level < PAIN_MAX:
            self.pain_level += 1

    def decrement_pain(self):
        if self.pain_level > PAIN_MIN:
            self.pain_level -= 1

    def set_pain(self, value: int):
        self.pain_level = max(PAIN_MIN, min(PAIN_MAX, int(value)))

    # --- state ---
    @property
    def status(self) -> FormStatus:
        self._expire_error()
        return self._status

    @property
    def error(self) -> Optional[str]:
        self._expire_error()
        return self._error

    def _expire_error(self):
        if self._error and self._clock() - self._error_at >= self.error_seconds:
            self._error = None
            if self._status == FormStatus.EDITING_WITH_ERROR:
                self._status = FormStatus.EDITING

    def _reject(self, message: str, field: str, value):
        self._error = message
        self._error_at = self._clock()
        self._status = FormStatus.EDITING_WITH_ERROR
        raise ValidationError(message, field, value)

    def submit(self) -> PatientSubmission:
        if self._status == FormStatus.SUBMITTING:
            raise ValidationError("Submission already in progress", "status", self._status.value)
        name = self.name.strip()
        if not name:
            self._reject(MISSING_FIELDS_MSG, "name", self.name)
        if self.symptom_id is None:
            self._reject(MISSING_FIELDS_MSG, "symptom_id", None)

        self._error = None
        self._status = FormStatus.SUBMITTING
        return PatientSubmission(name=name, symptom_id=self.symptom_id, pain_level=self.pain_level)

    def mark_success(self):
        if self._status == FormStatus.SUBMITTING:
            self._status = FormStatus.SUCCESS

    def mark_failed(self):
        if self._status == FormStatus.SUBMITTING:
            self._status = FormStatus.EDITING
