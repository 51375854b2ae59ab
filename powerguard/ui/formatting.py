"""Display formatting for durations and dates."""
from ..models import EventRecord, parse_event_date


def format_duration(hours: float) -> str:
    """Hours as 'Xh Ym', e.g. 2.5 -> '2h 30m'."""
    whole_hours, minutes = divmod(int(round(hours * 60)), 60)
    return f"{whole_hours}h {minutes}m"


def describe_duration(event: EventRecord) -> str:
    """Actual duration once resolved, otherwise the estimate."""
    if event.resolved and event.actual_duration:
        return f"{format_duration(event.actual_duration)} (actual)"
    return f"{format_duration(event.estimated_duration)} (est.)"


def format_date(value: str, with_time: bool = False) -> str:
    """Stored ISO date in local time, e.g. 'Jan 05, 2024' or 'Jan 05, 2024 3:07 PM'."""
    if not value:
        return ""
    local = parse_event_date(value).astimezone()
    text = local.strftime("%b %d, %Y")
    if with_time:
        hour = local.hour % 12 or 12
        text += f" {hour}:{local.minute:02d} {'AM' if local.hour < 12 else 'PM'}"
    return text


def event_line(event: EventRecord) -> str:
    """One-line list entry for an event."""
    status = "Resolved" if event.resolved else "Active"
    parts = [format_date(event.date), event.location, describe_duration(event), status]
    if event.causes:
        parts.append(", ".join(event.causes))
    return "  |  ".join(parts)
