"""
Core application utilities: settings, logging, security and FastAPI dependencies.

This package provides:
- Application-level settings (separate from DB settings)
- Structured logging with request correlation ids
- Password hashing and JWT helpers
- Dependency helpers (token claims, role checks, service providers)
"""
