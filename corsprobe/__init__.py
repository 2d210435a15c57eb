"""corsprobe: HTTP fixture that checks CORS headers survive every response status.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "0.1.0"
