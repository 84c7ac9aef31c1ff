"""
Shipping deadline urgency for outgoing parcels.

Buckets are whole calendar days between today and the deadline date; the time
of day is ignored, so a deadline is "today" for the whole of that day.
"""
from datetime import date, datetime
from typing import Optional, Union

from packtrack.schemas.shipment import DeadlineInfo


def days_until(deadline: date, now: Union[date, datetime]) -> int:
    if isinstance(deadline, datetime):
        deadline = deadline.date()
    if isinstance(now, datetime):
        now = now.date()
    return (deadline - now).days


def classify_deadline(
    deadline: Optional[Union[date, datetime]],
    now: Optional[Union[date, datetime]] = None,
) -> Optional[DeadlineInfo]:
    if deadline is None:
        return None
    days = days_until(deadline, now or datetime.now())

    if days < 0:
        return DeadlineInfo(label="Expired!", color="red", days_left=days)
    if days == 0:
        return DeadlineInfo(label="Today!", color="red", days_left=days)
    if days == 1:
        return DeadlineInfo(label="1 day left", color="orange", days_left=days)
    if days <= 3:
        return DeadlineInfo(label=f"{days} days left", color="orange", days_left=days)
    return DeadlineInfo(label=f"{days} days left", color="green", days_left=days)
