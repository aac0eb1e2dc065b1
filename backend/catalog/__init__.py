"""
Library Catalog — Application Package
======================================

What: Server-rendered catalog pages for managing book genres.

Layers:
    ┌─────────────────────────────────────┐
    │           Routes (HTTP Layer)       │  ← forms in, HTML or redirects out
    ├─────────────────────────────────────┤
    │     Controllers (Request Handling)  │  ← validate, query, pick a view
    ├─────────────────────────────────────┤
    │   Repositories & Renderer (Ports)   │  ← storage and templates
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async SQLAlchemy sessions
    └─────────────────────────────────────┘

Controllers only see the repository and renderer interfaces, so they can be
exercised in tests against in-memory fakes.
"""

__version__ = "1.0.0"
