# result_presenter.py — recommendation view
from dataclasses import dataclass
from typing import List

import streamlit as st

from pydantic_models import RecommendationResponse

ALERT_MSG = "Se recomienda atención médica inmediata"
OK_MSG = "Estas son algunas recomendaciones generales para tu condición"
DISCLAIMER = (
    "Recuerda que esta es una recomendación automatizada. Si los síntomas persisten "
    "o empeoran, consulta a un profesional de la salud."
)


@dataclass(frozen=True)
class ResultView:
    patient: str
    symptom: str
    banner_level: str  # "alert" | "ok"
    banner_message: str
    recommendations: List[str]
    disclaimer: str = DISCLAIMER


def build_result_view(rec: RecommendationResponse) -> ResultView:
    return ResultView(
        patient=rec.nombre,
        symptom=rec.sintoma,
        banner_level="alert" if rec.alerta else "ok",
        banner_message=ALERT_MSG if rec.alerta else OK_MSG,
        recommendations=list(rec.recomendaciones),
    )


def render_result(rec: RecommendationResponse) -> bool:
    """Draw the recommendation card. Returns True when the user asks for a new form."""
    view = build_result_view(rec)

    st.subheader("🩺 Recomendación Médica")
    st.markdown(f"**Paciente:** {view.patient}  \n**Síntoma:** {view.symptom}")
    if view.banner_level == "alert":
        st.error(view.banner_message, icon="🚨")
    else:
        st.success(view.banner_message, icon="✅")

    st.markdown("**Recomendaciones:**")
    for item in view.recommendations:
        st.write("•", item)
    st.caption(view.disclaimer)

    return st.button("🔄 Realizar otro diagnóstico")
