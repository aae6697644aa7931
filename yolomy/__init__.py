"""
Yolomy Products Backend — Application Package Initializer
==========================================================

What: Marks the `yolomy` directory as a Python package.
Who:  Used by uvicorn (`uvicorn yolomy.main:app`), pytest, and the `yolomy`
      console script.

Architecture Note:
    The backend is a thin HTTP-to-database proxy, layered as:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Repository, Images)     │  ← one database call per operation
    ├─────────────────────────────────────┤
    │  Models (mongoengine) & Schemas     │  ← documents + Pydantic contracts
    ├─────────────────────────────────────┤
    │   Database (connection handle)      │  ← owned by the app lifespan
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
