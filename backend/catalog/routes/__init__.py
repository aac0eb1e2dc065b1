"""
Library Catalog — Routes Package
=================================

Route Inventory:
    - genres.py:  /catalog/genres and /catalog/genre/... (HTML pages)
    - health.py:  GET /health (service health check, JSON)

Routes are thin: they read path and form values, call the controller, and
turn its outcome into an HTTP response.
"""
