import logging

import streamlit as st

from api_client import SymptomApiClient
from app_controller import UNHANDLED_ERROR, AppController, View
from errors import ValidationError
from result_presenter import render_result
from settings import configure_logging
from symptom_form import PAIN_MAX, PAIN_MIN, pain_band
from timestamps import format_timestamp, patients_frame

logger = logging.getLogger("app_streamlit")

st.set_page_config(page_title="ROMI Express", page_icon="🏥", layout="centered")

BAND_COLORS = {"leve": "green", "moderado": "orange", "severo": "red"}
FORM_KEYS = ("name_input", "symptom_select", "pain_slider")


def get_controller() -> AppController:
    if "controller" not in st.session_state:
        configure_logging()
        st.session_state["controller"] = AppController(SymptomApiClient())
    return st.session_state["controller"]


def clear_form_widgets():
    for key in FORM_KEYS:
        st.session_state.pop(key, None)


def render_splash(ctl: AppController) -> bool:
    placeholder = st.empty()
    with placeholder.container():
        st.title("🏥 ROMI Express")
        st.write("Cargando...")
    ctl.start()
    placeholder.empty()
    return True


def render_form(ctl: AppController) -> bool:
    form = ctl.form
    st.title("🏥 Sistema de Diagnóstico Médico ROMI Express")
    st.write(
        "Esta aplicación te ayuda a evaluar tus síntomas y obtener recomendaciones médicas "
        "preliminares. Por favor, completa el formulario a continuación."
    )
    st.subheader("🩺 Registro de Síntomas")

    if form.error:
        st.error(form.error)

    form.set_name(st.text_input("Nombre del Paciente", placeholder="Ingresa tu nombre y apellido", key="name_input"))

    options = [None] + list(form.symptoms)
    chosen = st.selectbox(
        "Síntoma Principal",
        options,
        format_func=lambda sid: "Selecciona un síntoma" if sid is None else form.symptoms[sid].name,
        key="symptom_select",
    )
    form.select_symptom(chosen)

    # stepper buttons and slider share the form's pain level
    st.session_state.setdefault("pain_slider", form.pain_level)

    def step(delta: int):
        if delta > 0:
            form.increment_pain()
        else:
            form.decrement_pain()
        st.session_state["pain_slider"] = form.pain_level

    def slide():
        form.set_pain(st.session_state["pain_slider"])

    color = BAND_COLORS[pain_band(form.pain_level)]
    st.markdown(f"**Nivel de Dolor:** :{color}[{form.pain_level}/10]")
    minus, slider, plus = st.columns([1, 6, 1])
    minus.button("➖", on_click=step, args=(-1,), disabled=form.pain_level <= PAIN_MIN)
    slider.slider("Nivel de dolor", PAIN_MIN, PAIN_MAX, step=1, key="pain_slider",
                  on_change=slide, label_visibility="collapsed")
    plus.button("➕", on_click=step, args=(1,), disabled=form.pain_level >= PAIN_MAX)
    st.caption("Leve (1-3) · Moderado (4-7) · Severo (8-10)")

    if st.button("📄 Obtener Recomendación", type="primary", disabled=ctl.loading):
        try:
            with st.spinner("Analizando..."):
                ctl.submit()
        except ValidationError as e:
            # the form keeps the message; shown above on rerun
            logger.info("submission rejected (field=%s)", e.field)
        return True

    if st.button("👥 Ver casos registrados"):
        with st.spinner("Cargando..."):
            ctl.show_patients()
        return True
    return False


def render_patients(ctl: AppController) -> bool:
    if st.button("⬅️ Volver al formulario"):
        ctl.show_form()
        return True

    st.subheader("👥 Casos registrados")
    if not ctl.patients:
        st.info("🤖 No hay pacientes registrados")
        return False

    for p in ctl.patients:
        with st.expander(f"👤 {p.nombre} — 🕒 {format_timestamp(p.fecha, 'date')}"):
            st.markdown(f"**Síntoma:** {p.sintoma_nombre}")
            st.markdown(f"**Nivel de dolor:** {p.nivel_dolor}/10")
            st.caption(f"Fecha y hora de registro: {format_timestamp(p.fecha, 'full')}")

    with st.expander("📊 Vista de tabla"):
        st.dataframe(patients_frame(ctl.patients), hide_index=True)
    return False


def render_error(ctl: AppController) -> bool:
    st.error(ctl.error_message or "Error")
    return False


def main() -> bool:
    ctl = get_controller()
    if ctl.view == View.SPLASH:
        return render_splash(ctl)
    if ctl.view == View.FORM:
        return render_form(ctl)
    if ctl.view == View.PATIENTS:
        return render_patients(ctl)
    if ctl.view == View.RESULT:
        if render_result(ctl.recommendation):
            ctl.reset()
            clear_form_widgets()
            return True
        return False
    return render_error(ctl)


try:
    needs_rerun = main()
except Exception as e:
    ctl = st.session_state.get("controller")
    if ctl is None:
        # settings or logging failed before a controller existed
        logger.exception("startup failed")
        st.error(UNHANDLED_ERROR)
        needs_rerun = False
    else:
        ctl.fail(e)
        needs_rerun = True

if needs_rerun:
    st.rerun()
