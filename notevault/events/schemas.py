"""
Event Schemas.

Standardized event envelope and change-notification event types.
Other sessions subscribe to these and refetch; the payload only says
what changed, never the new state.

Naming convention for event_type: domain.entity.action (dot notation)
Stream naming convention: {domain}:{entity}-changed (colon-separated)
"""

from uuid import uuid4

from pydantic import BaseModel, Field

from notevault.core.utils import utc_now


class EventEnvelope(BaseModel):
    """Base event envelope; all events inherit from this.

    Fields:
        event_id: Unique event identifier (auto-generated UUID)
        event_type: Domain event type in dot notation (e.g. notes.note.created)
        event_version: Schema version for forward compatibility
        timestamp: ISO 8601 UTC timestamp
        source: Service that published the event
        correlation_id: Request ID for tracing across services
        owner_id: User whose data changed (subscribers filter on it)
        trace_id: OpenTelemetry trace ID, when tracing is active
        payload: Event-specific data
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    event_type: str
    event_version: int = 1
    timestamp: str = Field(default_factory=lambda: utc_now().isoformat())
    source: str
    correlation_id: str
    owner_id: str
    trace_id: str | None = None
    payload: dict


class NoteCreated(EventEnvelope):
    event_type: str = "notes.note.created"


class NoteUpdated(EventEnvelope):
    """Published for content, flag and category changes on a note."""

    event_type: str = "notes.note.updated"


class NoteDeleted(EventEnvelope):
    event_type: str = "notes.note.deleted"


class CategoryCreated(EventEnvelope):
    event_type: str = "notes.category.created"


class CategoryUpdated(EventEnvelope):
    event_type: str = "notes.category.updated"


class CategoryDeleted(EventEnvelope):
    """Published after a category is removed and its notes reconciled."""

    event_type: str = "notes.category.deleted"
