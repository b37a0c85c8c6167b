# app_controller.py — top level view state machine
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from errors import InvalidTransition, NetworkError, UnhandledError
from pydantic_models import Patient, RecommendationResponse, Symptom
from settings import Settings, get_settings
from symptom_form import SymptomForm
from timestamps import sort_patients_by_date

logger = logging.getLogger(__name__)

SYMPTOMS_ERROR = "Error al cargar síntomas"
PATIENTS_ERROR = "Error al cargar pacientes"
SUBMIT_ERROR = "Error al procesar síntomas"
UNHANDLED_ERROR = "Ha ocurrido un error inesperado"


class View(str, Enum):
    SPLASH = "loading-splash"
    FORM = "form"
    PATIENTS = "patients"
    RESULT = "result"
    ERROR = "error"


TRANSITIONS = {
    View.SPLASH: {View.FORM, View.ERROR},
    View.FORM: {View.PATIENTS, View.RESULT, View.ERROR},
    View.PATIENTS: {View.FORM, View.ERROR},
    View.RESULT: {View.FORM, View.ERROR},
    View.ERROR: set(),
}


@dataclass(frozen=True)
class FetchToken:
    generation: int
    view: View


class AppController:
    """
    Owns the current view, the symptom catalog, the patient snapshot and the
    displayed recommendation. Collections are replaced wholesale, never edited.

    Every fetch (and the splash timer) holds a FetchToken; a response whose
    token is no longer current is dropped.
    """

    def __init__(self, client, settings: Optional[Settings] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.monotonic):
        settings = settings or get_settings()
        self.client = client
        self.splash_delay = settings.splash_delay
        self.patients_delay = settings.patients_delay
        self.form_error_seconds = settings.form_error_seconds
        self._sleep = sleep
        self._clock = clock

        self._view = View.SPLASH
        self._generation = 0
        self.loading = True
        self.error_message = ""
        self.last_error: Optional[Exception] = None
        self.symptoms: Tuple[Symptom, ...] = ()
        self.patients: Tuple[Patient, ...] = ()
        self.recommendation: Optional[RecommendationResponse] = None
        self.form = self._new_form()

    @property
    def view(self) -> View:
        return self._view

    def can_go(self, target: View) -> bool:
        return target in TRANSITIONS[self._view]

    def _check(self, target: View):
        if not self.can_go(target):
            raise InvalidTransition(self._view.value, target.value)

    def _go(self, target: View):
        self._check(target)
        logger.info("view %s -> %s", self._view.value, target.value)
        self._view = target

    def _new_form(self) -> SymptomForm:
        return SymptomForm(self.symptoms, error_seconds=self.form_error_seconds, clock=self._clock)

    # --- fetch tokens ---
    def _begin_fetch(self) -> FetchToken:
        self._generation += 1
        return FetchToken(self._generation, self._view)

    def is_current(self, token: FetchToken) -> bool:
        return token.generation == self._generation and token.view == self._view

    def cancel_pending(self):
        """Invalidate any outstanding fetch or timer, e.g. when the view is torn down."""
        self._generation += 1
        self.loading = False

    def _accept(self, token: FetchToken, operation: str) -> bool:
        if self.is_current(token):
            return True
        logger.warning("discarding stale %s response (view=%s)", operation, self._view.value)
        return False

    def _network_failure(self, token: FetchToken, exc: NetworkError, message: str):
        if not self._accept(token, exc.operation):
            return
        logger.error("%s: %s", message, exc)
        self.loading = False
        self.error_message = message
        self.last_error = exc
        self._go(View.ERROR)

    # --- operations ---
    def start(self):
        """Splash delay, then the form with the symptom catalog loaded."""
        self._check(View.FORM)
        token = self._begin_fetch()
        if self.splash_delay:
            self._sleep(self.splash_delay)
        if not self._accept(token, "splash"):
            return
        self._go(View.FORM)
        self.load_symptoms()

    def load_symptoms(self):
        self.loading = True
        token = self._begin_fetch()
        try:
            symptoms = self.client.list_symptoms()
        except NetworkError as e:
            return self._network_failure(token, e, SYMPTOMS_ERROR)
        if not self._accept(token, "list_symptoms"):
            return
        self.symptoms = tuple(symptoms)
        self.form = self._new_form()
        self.loading = False

    def show_patients(self):
        self._check(View.PATIENTS)
        self.loading = True
        token = self._begin_fetch()
        if self.patients_delay:
            self._sleep(self.patients_delay)
        if not self._accept(token, "patients_delay"):
            return
        try:
            patients = self.client.list_patients()
        except NetworkError as e:
            return self._network_failure(token, e, PATIENTS_ERROR)
        if not self._accept(token, "list_patients"):
            return
        self.patients = tuple(sort_patients_by_date(patients))
        self.loading = False
        self._go(View.PATIENTS)

    def show_form(self):
        self._go(View.FORM)

    def submit(self, form: Optional[SymptomForm] = None):
        """
        Post the form. ValidationError from the form propagates untouched and
        leaves the view where it was.
        """
        form = form or self.form
        self._check(View.RESULT)
        submission = form.submit()
        self.loading = True
        token = self._begin_fetch()
        try:
            rec = self.client.submit_symptom_report(submission)
        except NetworkError as e:
            form.mark_failed()
            return self._network_failure(token, e, SUBMIT_ERROR)
        if not self._accept(token, "submit_symptom_report"):
            form.mark_failed()
            return
        form.mark_success()
        self.recommendation = rec
        self.loading = False
        self._go(View.RESULT)

    def reset(self):
        self._go(View.FORM)
        self.recommendation = None
        self.form = self._new_form()

    def fail(self, exc: Exception):
        """Terminal error view for anything not handled above."""
        logger.exception("unhandled error in view %s", self._view.value, exc_info=exc)
        self.cancel_pending()
        self.error_message = UNHANDLED_ERROR
        self.last_error = UnhandledError(str(exc) or type(exc).__name__)
        self._view = View.ERROR
