"""
Content Page Editor - Page Field Validation

Checks a page's title and body before any mutating call is sent to the
content API.  Validation failures are returned as data, never raised:

- ``validate_title()``   — a single ``ValidationError`` or ``None``
- ``validate_body()``    — a single ``ValidationError`` or ``None``
- ``validate_content()`` — both checks, collected into a ``ValidationResult``

The lower bounds measure the stripped string; the upper bounds measure the
raw string.  Messages are fixed user-facing strings.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from src.config import BODY_MAX_LENGTH, BODY_MIN_LENGTH, TITLE_MAX_LENGTH

TITLE_TOO_SHORT = "タイトルは1文字以上で入力してください"
TITLE_TOO_LONG = f"タイトルは{TITLE_MAX_LENGTH}文字以下で入力してください"
BODY_TOO_SHORT = f"本文は{BODY_MIN_LENGTH}文字以上で入力してください"
BODY_TOO_LONG = f"本文は{BODY_MAX_LENGTH}文字以下で入力してください"


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass
class ValidationError:
    """A single failed field check."""

    field: str  # "title" | "body"
    message: str

    def __str__(self) -> str:
        return f"[{self.field}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "message": self.message}


@dataclass
class ValidationResult:
    """Aggregated result of ``validate_content()``."""

    errors: List[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def message_for(self, field_name: str) -> Optional[str]:
        """Return the message for *field_name*, or None if it passed."""
        for error in self.errors:
            if error.field == field_name:
                return error.message
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
        }


# ---------------------------------------------------------------------------
# Field validators
# ---------------------------------------------------------------------------


def validate_title(title: Optional[str]) -> Optional[ValidationError]:
    """
    Title must be 1–50 characters.

    Whitespace-only titles count as empty.  The short check runs first, so
    a long run of spaces is reported as too short rather than too long.
    """
    if not title or len(title.strip()) == 0:
        return ValidationError(field="title", message=TITLE_TOO_SHORT)
    if len(title) > TITLE_MAX_LENGTH:
        return ValidationError(field="title", message=TITLE_TOO_LONG)
    return None


def validate_body(body: Optional[str]) -> Optional[ValidationError]:
    """
    Body must be 10–2000 characters.

    Leading/trailing whitespace does not count toward the minimum but does
    count toward the maximum.
    """
    if not body or len(body.strip()) < BODY_MIN_LENGTH:
        return ValidationError(field="body", message=BODY_TOO_SHORT)
    if len(body) > BODY_MAX_LENGTH:
        return ValidationError(field="body", message=BODY_TOO_LONG)
    return None


def validate_content(title: Optional[str], body: Optional[str]) -> ValidationResult:
    """Run both validators and collect every failure, title first."""
    result = ValidationResult()

    title_error = validate_title(title)
    if title_error:
        result.errors.append(title_error)

    body_error = validate_body(body)
    if body_error:
        result.errors.append(body_error)

    return result
