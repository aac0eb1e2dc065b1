"""
Library Catalog — Middleware Package
=====================================

Middleware Chain:
    Request → [Request ID] → [Access Log] → [GZip] → Route Handler

    The request id is assigned first so the access log line carries it.
"""
