from datetime import datetime
from typing import Optional


def format_relative_time(moment: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Short label for message timestamps: 'Just now', '5m ago', '3h ago', '2d ago' or a date."""
    if moment is None:
        return ""
    now = now or datetime.utcnow()
    seconds = (now - moment).total_seconds()

    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days < 7:
        return f"{days}d ago"
    return moment.strftime("%d/%m/%Y")
