"""
Validation Models

Form input is checked before any store mutation is issued.
The validator reports issues; it never silently fixes input.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from smartledger.models.ledger import TransactionDraft


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Form field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'invalid_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating one form submission.

    When is_valid is True, exactly one of draft / limit is populated
    with the parsed value, ready to hand to a store.
    """

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    # Parsed values
    draft: Optional[TransactionDraft] = None
    limit: Optional[Decimal] = None

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        """Messages of non-blocking issues."""
        return [issue.message for issue in self.issues if issue.severity == "warning"]
