"""
Registro único de íconos de la interfaz.

Los tokens son los nombres Font Awesome que usa el front; cada tarjeta o
badge referencia un token de aquí en lugar de declarar su propio mapa.
"""

import enum


class Icon(str, enum.Enum):
    VIAL = "fa-vial"
    CHECK_CIRCLE = "fa-check-circle"
    CHECK = "fa-check"
    CLOCK = "fa-clock"
    FLASK = "fa-flask"
    USERS = "fa-users"
    POWER_OFF = "fa-power-off"
    FILE_ALT = "fa-file-alt"
    SPINNER = "fa-spinner"
    CHART_LINE = "fa-chart-line"
    CALENDAR = "fa-calendar"
    MICROSCOPE = "fa-microscope"
    PAPER_PLANE = "fa-paper-plane"
    TRASH = "fa-trash"
    EYE = "fa-eye"
    EDIT = "fa-edit"
    PRINT = "fa-print"
    UNDO = "fa-undo"
    HISTORY = "fa-history"
    FILE_PDF = "fa-file-pdf"
    CLIPBOARD = "fa-clipboard"


# Emoji usados en el resumen de estado de una muestra
STATUS_EMOJI: dict[int, str] = {
    1: "📝",
    2: "📥",
    3: "🔬",
    4: "✅",
    5: "👀",
    6: "✔️",
    7: "❌",
    8: "🔧",
    9: "🎉",
    10: "📤",
    11: "📦",
    12: "📁",
}
DEFAULT_STATUS_EMOJI = "📋"
