from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_BASE_URL = "https://api.pqlint.com/uat/v1"
DEFAULT_SUBSCRIPTION_KEY_ENV = "PQLINT_SUBSCRIPTION_KEY"
DEFAULT_USER_AGENT = "pqlint-client/0.1"


@dataclass(frozen=True)
class ClientSettings:
    base_url: str = DEFAULT_BASE_URL
    subscription_key_env: str = DEFAULT_SUBSCRIPTION_KEY_ENV
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True)
class LintReference:
    link: str | None
    description: str | None

    @classmethod
    def from_dict(cls, item: dict) -> LintReference:
        return cls(link=item.get("link"), description=item.get("description"))

    def to_dict(self) -> dict[str, Any]:
        return {"link": self.link, "description": self.description}


@dataclass(frozen=True)
class LintRule:
    """A rule from the service catalog, kept exactly as the service sent it."""

    id: str
    name: str | None
    category: str | None
    description: str | None
    references: tuple[LintReference, ...]
    severity: Any = None
    min_license_level: Any = None

    @classmethod
    def from_dict(cls, item: dict) -> LintRule:
        references = item.get("references") or []
        return cls(
            id=item["id"],
            name=item.get("name"),
            category=item.get("category"),
            description=item.get("description"),
            references=tuple(
                LintReference.from_dict(ref) for ref in references if isinstance(ref, dict)
            ),
            severity=item.get("severity"),
            min_license_level=item.get("minLicenseLevel"),
        )

    @property
    def severity_level(self) -> int | None:
        return severity_level(self.severity)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "references": [ref.to_dict() for ref in self.references],
            "severity": self.severity,
            "minLicenseLevel": self.min_license_level,
        }


@dataclass(frozen=True)
class LintRequest:
    """Body of a single lint submission.

    ``rules`` is only sent for a non-empty ``rule_ids``, and ``options`` only
    when severity or format carries a value; the service must never receive an
    empty options object.
    """

    code: str
    rule_ids: tuple[str, ...] = ()
    severity: str | None = None
    format: str | None = None

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"code": self.code}
        if self.rule_ids:
            body["rules"] = list(self.rule_ids)

        options: dict[str, str] = {}
        if self.severity is not None and self.severity.strip():
            options["severity"] = self.severity
        if self.format is not None and self.format.strip():
            options["format"] = self.format
        if options:
            body["options"] = options
        return body


@dataclass(frozen=True)
class ErrorInformation:
    location: Any = None
    file_path: str | None = None

    @classmethod
    def from_dict(cls, item: dict) -> ErrorInformation:
        return cls(location=item.get("location"), file_path=item.get("filePath"))

    def to_dict(self) -> dict[str, Any]:
        return {"location": self.location, "filePath": self.file_path}


@dataclass(frozen=True)
class LintResultItem:
    id: str
    name: str | None
    category: str | None
    description: str | None
    severity: Any
    error_information: ErrorInformation | None

    @classmethod
    def from_dict(cls, item: dict) -> LintResultItem:
        error_information = item.get("errorInformation")
        return cls(
            id=item["id"],
            name=item.get("name"),
            category=item.get("category"),
            description=item.get("description"),
            severity=item.get("severity"),
            error_information=(
                ErrorInformation.from_dict(error_information)
                if isinstance(error_information, dict)
                else None
            ),
        )

    @property
    def severity_level(self) -> int | None:
        return severity_level(self.severity)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "severity": self.severity,
            "errorInformation": (
                self.error_information.to_dict() if self.error_information else None
            ),
        }


SEVERITY_NAMES = {"error": 3, "warning": 2, "info": 1}


def severity_level(value: object) -> int | None:
    """Ordinal for a wire severity (Error=3, Warning=2, Info=1), None if unrecognized."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if text.lower() in SEVERITY_NAMES:
        return SEVERITY_NAMES[text.lower()]
    try:
        return int(text)
    except ValueError:
        return None
