"""
NoteStore — Application Package Initializer
============================================

What: Marks the `notestore` directory as a Python package.
Why:  Enables module imports like `from notestore.config import Settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service follows a small layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Schemas (Request Boundary)      │  ← Body parsing, validation
    ├─────────────────────────────────────┤
    │      NoteStore (Persistence)        │  ← One file per note
    └─────────────────────────────────────┘

    - Routes translate HTTP details (status codes, content types) and delegate
    - Schemas turn raw bodies into explicit request models exactly once
    - NoteStore owns every filesystem call and raises typed exceptions
"""

__version__ = "1.0.0"
