"""
Static symptom and diagnosis tables plus the two lookups over them.

Both tables are read-only mappings built once at import. Iteration order is
insertion order and is part of the contract: detected symptoms are reported in
SYMPTOMS order, and on equal scores the earlier DIAGNOSES entry wins.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Diagnosis:
    name: str
    symptoms: Tuple[str, ...]
    advice: str


@dataclass(frozen=True)
class DiagnosisMatch:
    diagnosis: Diagnosis
    count: int


SYMPTOMS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "fever": ("high temperature", "fever", "hot", "burning up"),
    "cough": ("cough", "coughing", "chest pain"),
    "headache": ("headache", "head pain", "migraine"),
    "soreThroat": ("sore throat", "throat pain", "swallowing pain"),
    "fatigue": ("tired", "fatigue", "exhausted", "weakness"),
    "nausea": ("nausea", "vomiting", "sick", "stomach"),
    "breathlessness": ("breathless", "breathing", "shortness of breath", "wheezing"),
})


def _table(*diagnoses: Diagnosis) -> Mapping[str, Diagnosis]:
    return MappingProxyType({d.name: d for d in diagnoses})


DIAGNOSES: Mapping[str, Diagnosis] = _table(
    Diagnosis(
        name="flu",
        symptoms=("fever", "cough", "headache", "fatigue"),
        advice=(
            "You may have the flu. I recommend rest, staying hydrated, and taking over-the-counter "
            "fever reducers. If symptoms worsen or persist beyond 7 days, please consult a "
            "healthcare provider."
        ),
    ),
    Diagnosis(
        name="cold",
        symptoms=("cough", "soreThroat", "headache"),
        advice=(
            "Your symptoms suggest a common cold. Get plenty of rest, drink warm fluids, and "
            "consider using throat lozenges. Most colds resolve within 7-10 days. If symptoms "
            "worsen, consult a doctor."
        ),
    ),
    Diagnosis(
        name="stomachBug",
        symptoms=("nausea", "fatigue", "headache"),
        advice=(
            "You might have a stomach bug or gastroenteritis. Stay hydrated with clear fluids, "
            "eat bland foods when you can, and rest. If symptoms persist beyond 48 hours or you "
            "show signs of dehydration, seek medical attention."
        ),
    ),
    Diagnosis(
        name="respiratory",
        symptoms=("cough", "breathlessness", "fever"),
        advice=(
            "Your symptoms suggest a respiratory infection. Please seek medical attention soon "
            "for proper evaluation. In the meantime, rest and monitor your breathing. If "
            "breathing difficulties worsen, seek emergency care."
        ),
    ),
)


def detect_symptoms(message: str, table: Mapping[str, Sequence[str]] = SYMPTOMS) -> List[str]:
    """
    Returns the symptom keys whose trigger phrases occur in message.

    Matching is substring containment on the lowercased message. The result
    follows table order, each key at most once.
    """
    lower = (message or "").lower()
    return [key for key, phrases in table.items() if any(p in lower for p in phrases)]


def best_diagnosis(
    detected: Iterable[str],
    table: Mapping[str, Diagnosis] = DIAGNOSES,
) -> Optional[DiagnosisMatch]:
    """
    Scores every diagnosis by how many of its symptoms were detected.

    A later diagnosis replaces the current best only with a strictly higher
    count, so ties go to the one listed first. Zero never qualifies.
    """
    found = set(detected)
    best: Optional[DiagnosisMatch] = None
    for diagnosis in table.values():
        count = sum(1 for s in diagnosis.symptoms if s in found)
        if count > 0 and (best is None or count > best.count):
            best = DiagnosisMatch(diagnosis=diagnosis, count=count)
    return best
