"""
Wire timestamp handling and the patient history ordering.

Provides:
- make_timestamp: validated construction of a WireTimestamp
- to_millis / to_datetime / format_timestamp: normalization and display
- sort_patients_by_date: most recent first, stable
- patients_frame: sorted history as a pandas DataFrame for the table view
"""

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Iterable, List, Optional
from zoneinfo import ZoneInfo

import pandas as pd

from errors import TimestampError
from pydantic_models import MAX_WIRE_SECONDS, Patient, WireTimestamp
from settings import get_settings

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MILLI = 1_000_000

# es-ES presentations used across the UI
FORMATS = {
    "date": "%d/%m/%Y",
    "time": "%H:%M",
    "full": "%d/%m/%Y, %H:%M",
}

FRAME_COLUMNS = ["Paciente", "Síntoma", "Nivel de dolor", "Fecha"]


def make_timestamp(seconds: int, nanoseconds: int = 0) -> WireTimestamp:
    if isinstance(seconds, bool) or not isinstance(seconds, int) or not 0 <= seconds <= MAX_WIRE_SECONDS:
        raise TimestampError("seconds must be an integer in [0, MAX_WIRE_SECONDS]", "seconds", seconds)
    if isinstance(nanoseconds, bool) or not isinstance(nanoseconds, int) or not 0 <= nanoseconds < NANOS_PER_SECOND:
        raise TimestampError("nanoseconds must be an integer in [0, 1e9)", "nanoseconds", nanoseconds)
    return WireTimestamp(seconds=seconds, nanoseconds=nanoseconds)


def to_millis(ts: WireTimestamp) -> int:
    return ts.seconds * 1000 + ts.nanoseconds // NANOS_PER_MILLI


def display_timezone() -> Optional[tzinfo]:
    name = get_settings().display_timezone
    return ZoneInfo(name) if name else None


def to_datetime(ts: WireTimestamp, tz: Optional[tzinfo] = None) -> datetime:
    """Aware datetime for `ts`; without `tz` the configured zone, else the local one."""
    instant = datetime.fromtimestamp(ts.seconds, timezone.utc) + timedelta(
        milliseconds=ts.nanoseconds // NANOS_PER_MILLI
    )
    tz = tz or display_timezone()
    return instant.astimezone(tz) if tz else instant.astimezone()


def format_timestamp(ts: WireTimestamp, fmt: str = "full", tz: Optional[tzinfo] = None) -> str:
    if fmt not in FORMATS:
        raise ValueError(f"Unknown timestamp format: {fmt}")
    return to_datetime(ts, tz).strftime(FORMATS[fmt])


def sort_patients_by_date(patients: Iterable[Patient]) -> List[Patient]:
    # sorted() is stable, so equal instants keep their input order
    return sorted(patients, key=lambda p: to_millis(p.fecha), reverse=True)


def patients_frame(patients: Iterable[Patient], tz: Optional[tzinfo] = None) -> pd.DataFrame:
    rows = [
        {
            "Paciente": p.nombre,
            "Síntoma": p.sintoma_nombre,
            "Nivel de dolor": p.nivel_dolor,
            "Fecha": format_timestamp(p.fecha, "full", tz),
        }
        for p in sort_patients_by_date(patients)
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)
