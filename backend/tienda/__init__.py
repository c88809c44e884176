"""
Tienda API: Application Package Initializer
===========================================

What: Marks the `tienda` directory as a Python package.
Why:  Enables module imports like `from tienda.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend is a thin CRUD layer over an existing PostgreSQL schema:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (validators, store, catalog) │  ← Validation, orchestration
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Validators can be exercised without HTTP or a database; the repository
    and catalog reader only ever see a session handed to them.
"""

__version__ = "1.0.0"
