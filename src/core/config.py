"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = PROJECT_ROOT / "data" / "db" / "clinic-calendar.db"
OUTPUT_DIR = PROJECT_ROOT / "output"


# =============================================================================
# REMOTE CLINIC API
# =============================================================================


def normalize_api_url(url: str) -> str:
    """Make sure the base URL always ends with /api."""
    if url.endswith("/api"):
        return url
    if url.endswith("/"):
        return f"{url}api"
    return f"{url}/api"


CLINIC_API_URL = normalize_api_url(os.environ.get("CLINIC_API_URL", "http://localhost:3000/api"))
CLINIC_API_TOKEN = os.environ.get("CLINIC_API_TOKEN", "")
REQUEST_TIMEOUT_SECONDS = float(os.environ.get("REQUEST_TIMEOUT_SECONDS", "15"))

DEFAULT_PAGE_LIMIT = 10
CALENDAR_FETCH_LIMIT = 100  # One page is enough for a week of appointments

# =============================================================================
# CALENDAR CONFIGURATION
# =============================================================================

DAY_SPAN = 7
GRID_START_HOUR = 8
GRID_END_HOUR = 23  # Inclusive
ROW_HEIGHT = 64  # Pixels per hour row
MIN_BLOCK_HEIGHT = 24  # Shortest event block, in pixels

# Display color per appointment type
CATEGORY_COLORS = {
    "CONSULTATION": "#3b82f6",
    "TREATMENT": "#22c55e",
    "PROCEDURE": "#a855f7",
    "FOLLOW_UP": "#06b6d4",
    "EMERGENCY": "#ef4444",
    "MAINTENANCE": "#eab308",
    "EVALUATION": "#f97316",
    "OTHER": "#6b7280",
}
DEFAULT_EVENT_COLOR = "#64748b"

# =============================================================================
# LABELS (pt-BR)
# =============================================================================

STATUS_LABELS = {
    "SCHEDULED": "Agendado",
    "CONFIRMED": "Confirmado",
    "IN_PROGRESS": "Em andamento",
    "COMPLETED": "Concluído",
    "CANCELLED": "Cancelado",
    "NO_SHOW": "Não compareceu",
    "RESCHEDULED": "Remarcado",
    "WAITING": "Aguardando",
}

TYPE_LABELS = {
    "CONSULTATION": "Consulta",
    "TREATMENT": "Tratamento",
    "PROCEDURE": "Procedimento",
    "FOLLOW_UP": "Retorno",
    "EMERGENCY": "Emergência",
    "MAINTENANCE": "Manutenção",
    "EVALUATION": "Avaliação",
    "OTHER": "Outro",
}

WEEKDAY_LABELS = ["Seg", "Ter", "Qua", "Qui", "Sex", "Sáb", "Dom"]

# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

AGENDA_SHEET_NAME = "Agenda"
DETAIL_SHEET_NAME = "Detalhes"
SUMMARY_SHEET_NAME = "Resumo"
DETAIL_HEADERS = ["Data", "Início", "Fim", "Cliente", "Status", "Tipo"]
SUMMARY_ROW_LABELS = [
    "Hoje",
    "Semana",
    "Total",
    "Confirmados",
]

# =============================================================================
# API CONFIGURATION
# =============================================================================

CONSOLE_API_KEY = os.environ.get("CONSOLE_API_KEY", "")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
