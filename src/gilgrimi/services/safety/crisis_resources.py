"""
Crisis Resources

Youth crisis contacts appended to every crisis referral.
Built-in Korean resources, overridable with a JSON file.

LEGAL_REVIEW_REQUIRED: Contact numbers must be verified
before each deployment.
"""

from dataclasses import dataclass, field
from typing import Optional
import json
import os

from gilgrimi.config.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class CrisisResource:
    """
    A single crisis contact.

    Attributes:
        name: Resource name shown to the user
        resource_type: hotline, text or website
        contact: Number, short code or URL
        available_24_7: Whether the line is always staffed
    """

    name: str
    resource_type: str
    contact: str
    description: str = ""
    available_24_7: bool = True

    def format_for_user(self) -> str:
        availability = "(24시간)" if self.available_24_7 else ""
        return f"• {self.name}: {self.contact} {availability}".rstrip()

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.resource_type,
            "contact": self.contact,
            "description": self.description,
            "available_24_7": self.available_24_7,
        }


@dataclass
class CrisisResourceSet:
    """Crisis contacts plus the general emergency numbers."""

    resources: list[CrisisResource] = field(default_factory=list)
    emergency_numbers: list[str] = field(default_factory=list)


class CrisisResourceResolver:
    """
    Resolves the crisis contacts shown in referrals.

    Usage:
        resolver = CrisisResourceResolver()
        text = resolver.format_crisis_message()
    """

    # LEGAL_REVIEW_REQUIRED: Verify all numbers before production
    BUILT_IN_RESOURCES: CrisisResourceSet = CrisisResourceSet(
        emergency_numbers=["112", "119"],
        resources=[
            CrisisResource(
                name="청소년상담전화",
                resource_type="hotline",
                contact="1388",
                description="청소년 고민 상담",
            ),
            CrisisResource(
                name="자살예방상담전화",
                resource_type="hotline",
                contact="109",
                description="자살 위기 상담",
            ),
            CrisisResource(
                name="정신건강위기상담전화",
                resource_type="hotline",
                contact="1577-0199",
                description="정신건강 위기 상담",
            ),
            CrisisResource(
                name="청소년 문자상담",
                resource_type="text",
                contact="#1388",
                description="문자로 하는 청소년 상담",
            ),
        ],
    )

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Initialize resolver.

        Args:
            config_path: Optional path to a JSON file replacing the built-in list
        """
        self._resources = self.BUILT_IN_RESOURCES

        if config_path and os.path.exists(config_path):
            self._load_config(config_path)

    def _load_config(self, config_path: str) -> None:
        """Load resources from JSON config file."""
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)

            self._resources = CrisisResourceSet(
                resources=[CrisisResource(**r) for r in data.get("resources", [])],
                emergency_numbers=list(data.get("emergency_numbers", [])),
            )

            logger.info(
                "Loaded crisis resources config",
                path=config_path,
                resource_count=len(self._resources.resources),
            )
        except (OSError, ValueError, TypeError) as e:
            # Built-in list stays in place
            logger.error("Failed to load crisis resources config", path=config_path, error=str(e))

    @property
    def resources(self) -> CrisisResourceSet:
        return self._resources

    def format_crisis_message(self, include_emergency: bool = True, limit: int = 3) -> str:
        """
        Format the contact list appended to referrals.

        Args:
            include_emergency: Whether to list the emergency numbers
            limit: Maximum number of contacts listed
        """
        lines = ["지금 바로 도움을 받을 수 있는 곳이에요."]

        if include_emergency and self._resources.emergency_numbers:
            lines.append(f"• 긴급신고: {', '.join(self._resources.emergency_numbers)}")

        for resource in self._resources.resources[:limit]:
            lines.append(resource.format_for_user())

        lines.append("혼자 견디지 않아도 괜찮아요.")
        return "\n".join(lines)
