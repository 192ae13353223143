"""
Classified Intent

Output contract of the external intent recognizer for one utterance.
Produced fresh every turn and never persisted.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ClassifiedIntent:
    """
    Top-scoring intent for a user message.

    Attributes:
        label: Intent name, empty when nothing was recognized
        confidence: Recognizer score in [0, 1]
        entities: Recognized entity texts keyed by entity type
    """

    label: str = ""
    confidence: float = 0.0
    entities: dict[str, list[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be within [0, 1], got {self.confidence}")

    @classmethod
    def empty(cls) -> "ClassifiedIntent":
        """Recognizer failure or no intent returned."""
        return cls()

    def is_usable(self, threshold: float) -> bool:
        """Usable iff a label is present and confidence is strictly above threshold."""
        return bool(self.label) and self.confidence > threshold

    def matches(self, label: str, threshold: float) -> bool:
        return self.label == label and self.is_usable(threshold)

    def all_entity_values(self) -> list[str]:
        return [value for values in self.entities.values() for value in values]

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "confidence": round(self.confidence, 3),
            "entity_types": sorted(self.entities),
        }
