"""
Homebase Backend: Application Package
=====================================

What:  Per-user collections of properties and movies over a JSON HTTP API.
Who:   Imported by uvicorn (`uvicorn homebase.main:app`) and by pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, auth, path ids
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, ownership, SQL
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Database component, sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
