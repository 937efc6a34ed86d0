"""Query parameter helpers shared by the routers."""

from datetime import datetime, timezone
from typing import Optional

from focusflow.errors import ValidationError
from focusflow.models.validation import FieldError


def parse_date_param(value: Optional[str], field: str) -> Optional[datetime]:
    """Parse an ISO-8601 date or datetime query value into naive UTC.

    Date-only values (YYYY-MM-DD) mean midnight UTC of that day.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(
            f"Invalid {field}",
            errors=[FieldError(field=field, message=f"{field} must be an ISO-8601 date or datetime")],
        )
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
