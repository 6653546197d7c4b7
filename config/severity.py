"""
config/severity.py
──────────────────
Channel severity states, ordering, and display configuration.
"""

from enum import Enum


class Severity(str, Enum):
    NORMAL = "normal"
    AUTO_FIX = "auto-fix"
    ALERT = "alert"
    EMERGENCY = "emergency"


# Severity ordering for aggregation (higher = more urgent).
# alert outranks auto-fix.
SEVERITY_ORDER: dict[str, int] = {
    Severity.NORMAL: 0,
    Severity.AUTO_FIX: 1,
    Severity.ALERT: 2,
    Severity.EMERGENCY: 3,
}

SEVERITY_COLORS: dict[str, str] = {
    Severity.NORMAL: "#48BB78",
    Severity.AUTO_FIX: "#ECC94B",
    Severity.ALERT: "#ED8936",
    Severity.EMERGENCY: "#F56565",
}

SEVERITY_LABELS: dict[str, str] = {
    Severity.NORMAL: "Normal",
    Severity.AUTO_FIX: "Auto-fix",
    Severity.ALERT: "Alert",
    Severity.EMERGENCY: "Emergency",
}
