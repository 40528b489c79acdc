"""Domain layer (pure logic).

- Keep board geometry and scoring rules here.
- Avoid I/O: no Redis, no HTTP/FastAPI.
- Prefer deterministic functions (time/random passed in as arguments if needed).
"""
