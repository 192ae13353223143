"""
User Profile Domain Model

Per-conversation profile accumulated by the risk assessment dialog.

PRIVACY: name and frequency are what the user typed and must
not be logged.
"""

from dataclasses import dataclass, replace
from typing import Optional

from gilgrimi.domain.enums.dialog import FeelingTone


@dataclass
class UserProfile:
    """
    Profile owned by conversation state storage.

    Attributes:
        name: Name the user gave at the start of counseling
        suicidal_risk: Signed risk accumulator, starts at 0
        frequency: Frequency word captured at the try-suicide step
        feeling_intent: Intent label recorded for the user's feeling
        feeling_tone: Explicit tag for the reported feeling
    """

    name: Optional[str] = None
    suicidal_risk: int = 0
    frequency: Optional[str] = None
    feeling_intent: Optional[str] = None
    feeling_tone: Optional[FeelingTone] = None

    def with_risk_delta(self, delta: int) -> "UserProfile":
        """Return a copy with the risk accumulator moved by delta."""
        return replace(self, suicidal_risk=self.suicidal_risk + delta)

    def reset_assessment(self) -> "UserProfile":
        """Return a copy ready for a new assessment. The name is kept."""
        return UserProfile(name=self.name)

    def to_dict(self) -> dict:
        """Serialize profile to dictionary."""
        return {
            "name": self.name,
            "suicidal_risk": self.suicidal_risk,
            "frequency": self.frequency,
            "feeling_intent": self.feeling_intent,
            "feeling_tone": self.feeling_tone.value if self.feeling_tone else None,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "UserProfile":
        """Create profile from dictionary. Missing fields take defaults."""
        data = data or {}
        tone = data.get("feeling_tone")
        return cls(
            name=data.get("name"),
            suicidal_risk=int(data.get("suicidal_risk") or 0),
            frequency=data.get("frequency"),
            feeling_intent=data.get("feeling_intent"),
            feeling_tone=FeelingTone(tone) if tone else None,
        )
