"""
Microblog Backend — Application Package Initializer
=====================================================

What: Marks the `microblog` directory as a Python package.
Who:  Imported by uvicorn (`microblog.main:app`), pytest, and the console script.

Architecture Note:
    The service is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← POST /posts, GET /posts
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← emptiness check, id generation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Store (Persistence)          │  ← async SQLAlchemy over SQLite
    └─────────────────────────────────────┘

    The store is constructed once by the application factory and handed to
    route handlers through FastAPI's dependency injection.
"""

__version__ = "1.0.0"
