"""
notevault.

Note-taking backend: owner-scoped notes and categories with filtered,
paginated listings and revision-checked content updates.

- api/: FastAPI routers (health, v1 notes and categories)
- core/: Configuration, logging, database, security, errors
- models/: SQLAlchemy models
- repositories/: Owner-scoped data access
- services/: Business rules, query building, reconciliation
- events/: Change notifications (FastStream / Redis Streams)
"""

__version__ = "0.1.0"
