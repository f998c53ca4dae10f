"""
Form Validation

DESIGN DECISION: Raw form input is validated at the boundary, before any
store mutation is issued. A rejected submission changes nothing.

Checks for a transaction:
- Amount present, numeric, finite and greater than zero
- Category selected and registered for the chosen type
- Date present and a real calendar date (ISO YYYY-MM-DD)

Checks for a budget limit:
- Numeric, finite and not negative (zero means "remove the budget")

IMPORTANT: Validation NEVER silently fixes input.
It reports issues so the form can show them.
"""

from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from pydantic import BaseModel

from smartledger.models.category import get_category
from smartledger.models.ledger import TransactionDraft, TransactionType
from smartledger.models.validation import ValidationIssue, ValidationResult


RawAmount = Union[str, int, float, Decimal, None]
RawDate = Union[str, date, None]

# Dates further ahead than this are accepted but flagged
FUTURE_DATE_TOLERANCE_DAYS = 1


class TransactionForm(BaseModel):
    """Unparsed values from the transaction entry form."""

    type: TransactionType = TransactionType.EXPENSE
    amount: RawAmount = None
    category: Optional[str] = None
    date: RawDate = None
    note: str = ""


def parse_amount(raw: RawAmount) -> Optional[Decimal]:
    """
    Parse user-entered money.

    Returns None when the input is blank, not a number, or not finite.
    Floats go through str() so 0.1 stays 0.1.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip().replace(",", "")
        if not raw:
            return None
    try:
        value = raw if isinstance(raw, Decimal) else Decimal(str(raw))
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def parse_date(raw: RawDate) -> Optional[date]:
    """Parse an ISO calendar date; None when blank or invalid."""
    if raw is None:
        return None
    if isinstance(raw, date):
        return raw
    raw = raw.strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None


class TransactionFormValidator:
    """
    Validates transaction and budget forms.

    today is injectable so future-date warnings are testable.
    """

    def __init__(self, today: Optional[date] = None):
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    def _validate_amount(self, raw: RawAmount) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return None, [ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
                severity="error",
                suggested_fix="Enter how much money moved",
            )]

        amount = parse_amount(raw)
        if amount is None:
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"Amount '{raw}' is not a number",
                severity="error",
                suggested_fix="Use digits only, e.g. 42.50",
            )]

        if amount <= 0:
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
                suggested_fix="Choose income or expense instead of entering a negative amount",
            )]

        return amount, []

    def _validate_category(
        self,
        category_id: Optional[str],
        transaction_type: TransactionType,
    ) -> list[ValidationIssue]:
        if not category_id or not category_id.strip():
            return [ValidationIssue(
                field="category",
                issue_type="missing",
                message="Please choose a category",
                severity="error",
            )]

        category = get_category(category_id.strip())
        if category is None:
            return [ValidationIssue(
                field="category",
                issue_type="invalid_value",
                message=f"Unknown category '{category_id}'",
                severity="error",
            )]

        if category.type != transaction_type:
            return [ValidationIssue(
                field="category",
                issue_type="invalid_value",
                message=f"'{category.label}' is not an {transaction_type.value} category",
                severity="error",
                suggested_fix=f"Pick one of the {transaction_type.value} categories",
            )]

        return []

    def _validate_date(self, raw: RawDate) -> tuple[Optional[date], list[ValidationIssue]]:
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return None, [ValidationIssue(
                field="date",
                issue_type="missing",
                message="Date is required",
                severity="error",
            )]

        parsed = parse_date(raw)
        if parsed is None:
            return None, [ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=f"Date '{raw}' is not a valid calendar date",
                severity="error",
                suggested_fix="Use the format YYYY-MM-DD",
            )]

        issues = []
        if parsed > self.today + timedelta(days=FUTURE_DATE_TOLERANCE_DAYS):
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({parsed}) is in the future",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            ))
        return parsed, issues

    def validate_transaction(self, form: TransactionForm) -> ValidationResult:
        """
        Validate a transaction form.

        On success the result carries the parsed TransactionDraft.
        """
        issues: list[ValidationIssue] = []

        amount, amount_issues = self._validate_amount(form.amount)
        issues.extend(amount_issues)

        issues.extend(self._validate_category(form.category, form.type))

        parsed_date, date_issues = self._validate_date(form.date)
        issues.extend(date_issues)

        is_valid = not any(issue.severity == "error" for issue in issues)
        if not is_valid:
            return ValidationResult(is_valid=False, issues=issues)

        draft = TransactionDraft(
            amount=amount,
            type=form.type,
            category=form.category.strip(),
            date=parsed_date,
            note=form.note.strip(),
        )
        return ValidationResult(is_valid=True, issues=issues, draft=draft)

    def validate_budget_limit(self, raw: RawAmount) -> ValidationResult:
        """
        Validate a budget limit.

        Blank input and zero both mean "no budget" and are valid.
        """
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return ValidationResult(is_valid=True, limit=Decimal("0"))

        limit = parse_amount(raw)
        if limit is None:
            return ValidationResult(is_valid=False, issues=[ValidationIssue(
                field="limit",
                issue_type="invalid_format",
                message=f"Budget '{raw}' is not a number",
                severity="error",
            )])

        if limit < 0:
            return ValidationResult(is_valid=False, issues=[ValidationIssue(
                field="limit",
                issue_type="invalid_value",
                message="Budget cannot be negative",
                severity="error",
                suggested_fix="Enter 0 to remove the budget",
            )])

        return ValidationResult(is_valid=True, limit=limit)

    @staticmethod
    def get_user_friendly_summary(result: ValidationResult) -> str:
        """
        One message for the form, listing every issue.
        """
        if result.is_valid and not result.warnings:
            return "✅ Saved."

        lines = []

        if result.has_errors:
            lines.append("❌ Please fix the following:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     💡 {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please verify:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
