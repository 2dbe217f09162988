from dataclasses import dataclass
from typing import Literal, Mapping, Optional, Sequence, Tuple

from app.prompts import (
    CLARIFY_TEXT,
    DIAGNOSIS_TEMPLATE,
    EMERGENCY_TEXT,
    GENERIC_TEMPLATE,
    GREETING_TEXT,
)
from app.safety import is_emergency, is_greeting
from app.symptoms import DIAGNOSES, SYMPTOMS, Diagnosis, best_diagnosis, detect_symptoms

Role = Literal["user", "assistant"]
ReplyKind = Literal["greeting", "emergency", "clarify", "diagnosis", "generic"]


@dataclass(frozen=True)
class Turn:
    role: Role
    content: str


@dataclass(frozen=True)
class Reply:
    kind: ReplyKind
    text: str
    symptoms: Tuple[str, ...] = ()
    diagnosis: Optional[str] = None
    match_count: int = 0


def evaluate(
    message: str,
    history: Sequence[object],
    *,
    symptoms: Mapping[str, Sequence[str]] = SYMPTOMS,
    diagnoses: Mapping[str, Diagnosis] = DIAGNOSES,
) -> Reply:
    """
    Picks the reply for one user message. The first rule that applies wins:
    greeting, emergency, no symptoms, best diagnosis, generic.

    Only the length of history is consulted.
    """
    message = message or ""

    if history is None or len(history) == 0 or is_greeting(message):
        return Reply(kind="greeting", text=GREETING_TEXT)

    if is_emergency(message):
        return Reply(kind="emergency", text=EMERGENCY_TEXT)

    detected = tuple(detect_symptoms(message, symptoms))
    if not detected:
        return Reply(kind="clarify", text=CLARIFY_TEXT)

    joined = ", ".join(detected)
    match = best_diagnosis(detected, diagnoses)
    if match is not None:
        return Reply(
            kind="diagnosis",
            text=DIAGNOSIS_TEMPLATE.format(symptoms=joined, advice=match.diagnosis.advice),
            symptoms=detected,
            diagnosis=match.diagnosis.name,
            match_count=match.count,
        )

    return Reply(kind="generic", text=GENERIC_TEMPLATE.format(symptoms=joined), symptoms=detected)


def respond(
    message: str,
    history: Sequence[object],
    *,
    symptoms: Mapping[str, Sequence[str]] = SYMPTOMS,
    diagnoses: Mapping[str, Diagnosis] = DIAGNOSES,
) -> str:
    return evaluate(message, history, symptoms=symptoms, diagnoses=diagnoses).text
