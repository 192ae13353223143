"""
Intent Labels

Intent and entity vocabulary of the LUIS application the
dialog is trained against. Labels must match the model exactly.
"""

from enum import StrEnum


class IntentLabel(StrEnum):
    """Intent names returned by the recognizer."""

    POSITIVE_ANSWER = "Panswer"
    NEGATIVE_ANSWER = "Nanswer"
    POSITIVE_FEELING = "Pfeeling"
    NEGATIVE_FEELING = "Nfeeling"
    ALONE = "Alone"
    FREQUENCY = "Frequency"
    PRIORITY_DANGER = "Priority_Danger"
    NONE = "None"


# Frequency words recognized as entities, with their risk delta
# CLINICAL_VALIDATION_REQUIRED
FREQUENCY_DELTAS: dict[str, int] = {
    "전혀": 0,  # never
    "가끔": 1,  # sometimes
    "자주": 2,  # often
    "항상": 3,  # always
}
