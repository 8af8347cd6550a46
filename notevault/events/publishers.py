"""
Event Publishers.

Change notifications for notes and categories. Services record an event
for every successful mutation on the request's database session; the
events are sent only once that session has committed, so a subscriber
that refetches on an event always sees the new state. A rolled-back
transaction sends nothing.

Sending checks the events_publish_enabled feature flag first and is
best-effort: a broker failure is logged and never raised.

Usage:
    from notevault.events.publishers import ChangePublisher

    publisher = ChangePublisher(session)
    publisher.note_created(owner_id, note.id)
    ...
    await session.commit()
    await publish_pending_events(session)
"""

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from notevault.core.logging import get_logger, log_with_source
from notevault.events.schemas import (
    CategoryCreated,
    CategoryDeleted,
    CategoryUpdated,
    EventEnvelope,
    NoteCreated,
    NoteDeleted,
    NoteUpdated,
)

logger = get_logger(__name__)

PENDING_EVENTS_KEY = "notevault.pending_events"


def _get_trace_id() -> str | None:
    """Extract current OpenTelemetry trace ID if available."""
    try:
        from opentelemetry import trace

        span = trace.get_current_span()
        if span and span.is_recording():
            return format(span.get_span_context().trace_id, "032x")
    except ImportError:
        pass
    return None


def _get_correlation_id() -> str:
    """Request ID bound by RequestContextMiddleware, if any."""
    return structlog.contextvars.get_contextvars().get("request_id", "internal")


class ChangePublisher:
    """Records note and category change notifications on a session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _envelope(
        self,
        event_cls: type[EventEnvelope],
        owner_id: str,
        payload: dict[str, Any],
    ) -> EventEnvelope:
        from notevault.core.config import get_app_config

        return event_cls(
            source=get_app_config().events.source,
            correlation_id=_get_correlation_id(),
            owner_id=owner_id,
            trace_id=_get_trace_id(),
            payload=payload,
        )

    def _queue(self, stream: str, event: EventEnvelope) -> None:
        self.session.info.setdefault(PENDING_EVENTS_KEY, []).append((stream, event))

    def _queue_note(self, event: EventEnvelope) -> None:
        from notevault.core.config import get_app_config

        self._queue(get_app_config().events.streams.note_changed, event)

    def _queue_category(self, event: EventEnvelope) -> None:
        from notevault.core.config import get_app_config

        self._queue(get_app_config().events.streams.category_changed, event)

    def note_created(self, owner_id: str, note_id: str) -> None:
        self._queue_note(self._envelope(NoteCreated, owner_id, {"note_id": note_id}))

    def note_updated(self, owner_id: str, note_id: str, fields: list[str]) -> None:
        self._queue_note(
            self._envelope(
                NoteUpdated, owner_id, {"note_id": note_id, "fields_updated": fields},
            )
        )

    def note_deleted(self, owner_id: str, note_id: str) -> None:
        self._queue_note(self._envelope(NoteDeleted, owner_id, {"note_id": note_id}))

    def category_created(self, owner_id: str, category_id: str) -> None:
        self._queue_category(
            self._envelope(CategoryCreated, owner_id, {"category_id": category_id})
        )

    def category_updated(self, owner_id: str, category_id: str) -> None:
        self._queue_category(
            self._envelope(CategoryUpdated, owner_id, {"category_id": category_id})
        )

    def category_deleted(
        self,
        owner_id: str,
        category_id: str,
        reassigned_to: str | None,
        notes_moved: int,
    ) -> None:
        """Notes were repointed too, so note listings must refresh as well."""
        self._queue_category(
            self._envelope(
                CategoryDeleted,
                owner_id,
                {
                    "category_id": category_id,
                    "reassigned_to": reassigned_to,
                    "notes_moved": notes_moved,
                },
            )
        )


def discard_pending_events(session: AsyncSession) -> None:
    """Drop recorded events; call when the transaction rolls back."""
    session.info.pop(PENDING_EVENTS_KEY, None)


async def publish_pending_events(session: AsyncSession) -> None:
    """Send the events recorded on session. Call only after a successful commit."""
    for stream, event in session.info.pop(PENDING_EVENTS_KEY, []):
        await publish_event(stream, event)


async def publish_event(stream: str, event: EventEnvelope) -> None:
    """Publish one event if the feature flag is enabled."""
    from notevault.core.config import get_app_config

    app_config = get_app_config()
    if not app_config.features.events_publish_enabled:
        return

    from notevault.events.broker import get_event_broker

    try:
        broker = get_event_broker()
        await broker.publish(
            event.model_dump(),
            stream=stream,
            maxlen=app_config.events.streams.default_maxlen,
        )
    except Exception as e:
        log_with_source(
            logger,
            "events",
            "warning",
            "Event publish failed",
            stream=stream,
            event_type=event.event_type,
            error=str(e),
        )
        return

    logger.debug(
        "Event published",
        extra={"stream": stream, "event_type": event.event_type, "event_id": event.event_id},
    )
