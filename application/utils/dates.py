from datetime import date, datetime

DATE_FORMATS = (
    "%Y-%m-%d",  # YYYY-MM-DD
    "%d-%m-%Y",  # DD-MM-YYYY
    "%m/%d/%Y",  # MM/DD/YYYY
    "%Y/%m/%d",  # YYYY/MM/DD
    "%d %b %Y",  # DD Mon YYYY
)


def parse_date(value: str) -> date:
    """Parse a statement date written in any of the supported formats."""
    text = (value or "").strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValueError(f"failed to parse date {value!r}") from None
