"""API Layer: FastAPI routes, middleware stack and error handlers.

Design Decisions:
    - Thin routes delegate to core.classify (ADR: functional core, imperative shell)
"""
