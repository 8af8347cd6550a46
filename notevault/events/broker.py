"""
Event Broker.

FastStream RedisBroker setup with lazy initialization.

Usage:
    from notevault.events.broker import get_event_broker

    broker = get_event_broker()
"""

from faststream.redis import RedisBroker

from notevault.core.logging import get_logger

logger = get_logger(__name__)

_broker: RedisBroker | None = None


def create_event_broker() -> RedisBroker:
    """Create a new RedisBroker using the project's Redis URL."""
    from notevault.core.config import get_redis_url

    broker = RedisBroker(get_redis_url())
    logger.info("Event broker created")
    return broker


def get_event_broker() -> RedisBroker:
    """Get the shared event broker (lazy initialization)."""
    global _broker
    if _broker is None:
        _broker = create_event_broker()
    return _broker
