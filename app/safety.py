import re
from typing import List, Tuple

# NOTE: This is a demo. For real use, apply medically-reviewed triage logic.
# Plain substring checks against the lowercased message; no word boundaries.
EMERGENCY_KEYWORDS: Tuple[str, ...] = (
    "chest pain",
    "can't breathe",
    "severe pain",
    "bleeding",
    "unconscious",
    "emergency",
)

GREETING_KEYWORDS: Tuple[str, ...] = ("hello", "hi")


def find_emergency_keywords(text: str) -> List[str]:
    """
    Returns the emergency keywords contained in text, in table order.
    """
    if not text:
        return []
    t = text.lower()
    return [k for k in EMERGENCY_KEYWORDS if k in t]


def is_emergency(text: str) -> bool:
    return bool(find_emergency_keywords(text))


def is_greeting(text: str) -> bool:
    # "hi" matches inside words such as "this" or "within"; kept on purpose.
    t = (text or "").lower()
    return any(k in t for k in GREETING_KEYWORDS)


# Extremely naive PII redaction, applied before any message text reaches the logs.
_EMAIL_RE = re.compile(r"[\w\.-]+@[\w\.-]+\.\w+")
_PHONE_RE = re.compile(r"\b(\+?\d[\d\s\-]{7,}\d)\b")
_ADDRESS_RE = re.compile(r"\b(\d{1,5}\s+\w+(\s+\w+){1,5}\s+(st|street|rd|road|ave|avenue|blvd|boulevard|dr|drive|ln|lane|ct|court)\b)", re.IGNORECASE)

def redact_pii_basic(text: str) -> str:
    if not text:
        return text
    text = _EMAIL_RE.sub("[REDACTED_EMAIL]", text)
    text = _PHONE_RE.sub("[REDACTED_PHONE]", text)
    text = _ADDRESS_RE.sub("[REDACTED_ADDRESS]", text)
    return text
