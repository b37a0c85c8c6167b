from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import List, Tuple

# 9999-12-31T23:59:59Z, less a day so any display zone stays representable
MAX_WIRE_SECONDS = 253_402_300_799 - 86_400


class WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class WireTimestamp(WireModel):
    # Firestore export keys; plain names accepted too
    seconds: int = Field(
        ge=0,
        le=MAX_WIRE_SECONDS,
        validation_alias=AliasChoices("_seconds", "seconds"),
        serialization_alias="_seconds",
    )
    nanoseconds: int = Field(
        default=0,
        ge=0,
        lt=1_000_000_000,
        validation_alias=AliasChoices("_nanoseconds", "nanoseconds"),
        serialization_alias="_nanoseconds",
    )


class Solution(WireModel):
    pain_level_range: Tuple[int, int] = Field(
        validation_alias=AliasChoices("painLevel", "painLevelRange"),
        serialization_alias="painLevel",
    )
    recommendations: List[str] = []
    alert: bool = False


class Symptom(WireModel):
    id: int
    name: str
    categories: List[str] = []
    solutions: List[Solution] = []


class PatientSubmission(WireModel):
    name: str = Field(min_length=1, alias="nombre")
    symptom_id: int = Field(alias="sintomaId")
    pain_level: int = Field(ge=1, le=10, alias="nivelDolor")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class Patient(WireModel):
    id: str
    nombre: str
    sintoma_id: int = Field(alias="sintomaId")
    nivel_dolor: int = Field(alias="nivelDolor")
    fecha: WireTimestamp
    sintoma_nombre: str = Field(default="", alias="sintomaNombre")


class RecommendationResponse(WireModel):
    id: str = ""
    nombre: str
    sintoma: str
    recomendaciones: List[str] = []
    alerta: bool = False
