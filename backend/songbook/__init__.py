"""
Songbook Backend - Application Package Initializer
===================================================

What: Marks the `songbook` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is a single-resource CRUD service laid out in layers:

    ┌─────────────────────────────────────┐
    │   Routes + Encoders (HTTP Layer)    │  ← parse requests, encode responses
    ├─────────────────────────────────────┤
    │  Controller + Validation (Services) │  ← CRUD semantics, input rules
    ├─────────────────────────────────────┤
    │      Song Store (Adapter Layer)     │  ← domain records ↔ stored rows
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Each layer only talks to the one directly beneath it, so the controller
    can be exercised against an in-memory store and the store against SQLite.
"""

__version__ = "1.0.0"
