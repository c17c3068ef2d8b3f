# /app/services/calendar_helpers/attendees.py

"""
Attendee (RSVP) bookkeeping and event status transitions.

Both operate on a `CalendarEvent` model in memory. The attendee list is
always replaced with a new list rather than mutated in place, so the change
is visible to the persistence layer when the event is written back.
"""

from typing import Dict, FrozenSet, List

from ...core.exceptions import InvalidInputError, InvalidStatusTransitionError, NotFoundError
from ...models.calendar_model import Attendee, AttendeeStatus, EventStatus


def add_attendees(event, student_ids: List[str]) -> List[str]:
    """
    Invites each student that is not yet an attendee. Repeated ids, within
    the call or across calls, never produce a second entry.

    Returns:
        The ids that were newly added, in request order.
    """
    present = {attendee.student for attendee in event.attendees}
    added = []
    for student_id in student_ids:
        if student_id in present:
            continue
        present.add(student_id)
        added.append(student_id)
    event.attendees = list(event.attendees) + [
        Attendee(student=student_id, status=AttendeeStatus.INVITED) for student_id in added
    ]
    return added


def set_attendee_status(event, student_id: str, status) -> Attendee:
    """
    Raises:
        InvalidInputError: if `status` is not an attendee status.
        NotFoundError: if the student is not an attendee of the event.
    """
    try:
        new_status = AttendeeStatus(status)
    except ValueError:
        raise InvalidInputError("Invalid status")

    for index, attendee in enumerate(event.attendees):
        if attendee.student == student_id:
            updated = attendee.model_copy(update={"status": new_status})
            attendees = list(event.attendees)
            attendees[index] = updated
            event.attendees = attendees
            return updated
    raise NotFoundError("Attendee not found")


# --- Event status ---

ALLOWED_STATUS_TRANSITIONS: Dict[EventStatus, FrozenSet[EventStatus]] = {
    EventStatus.SCHEDULED: frozenset({EventStatus.IN_PROGRESS, EventStatus.CANCELLED, EventStatus.POSTPONED}),
    EventStatus.IN_PROGRESS: frozenset({EventStatus.COMPLETED, EventStatus.CANCELLED, EventStatus.POSTPONED}),
    EventStatus.POSTPONED: frozenset({EventStatus.SCHEDULED, EventStatus.CANCELLED}),
    EventStatus.COMPLETED: frozenset(),
    EventStatus.CANCELLED: frozenset(),
}


def validate_status_transition(current, target) -> None:
    """
    Setting the current status again is always allowed.

    Raises:
        InvalidStatusTransitionError: if `target` is not reachable from `current`.
    """
    current, target = EventStatus(current), EventStatus(target)
    if current == target:
        return
    if target not in ALLOWED_STATUS_TRANSITIONS[current]:
        raise InvalidStatusTransitionError(
            f"Cannot change event status from '{current.value}' to '{target.value}'"
        )
