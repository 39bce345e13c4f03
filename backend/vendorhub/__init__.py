"""
VendorHub Backend — Application Package Initializer
===================================================

What: Marks the `vendorhub` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn vendorhub.main:app`), Alembic and pytest.

Architecture Note:
    The backend is layered the same way top to bottom:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← /vendor, /firm, /product, /uploads
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← credentials, tokens, uploads, CRUD
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never talk to the database directly; services never see HTTP
    objects. Every service takes its configuration at construction time.
"""

__version__ = "1.0.0"
