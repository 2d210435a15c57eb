"""Infrastructure Layer: logging setup and the uvicorn launcher.

Invariants:
    - Infrastructure never imports from api/ (the app is passed in, not imported)
"""
