"""
Blog API Backend — Application Package Initializer
====================================================

What: Marks the `blogapi` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn blogapi.main:app`), Alembic and pytest.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← method, headers, path, body
    ├─────────────────────────────────────┤
    │      Services (Data Access Layer)   │  ← one statement per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Records)    │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← app-owned async engine
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
