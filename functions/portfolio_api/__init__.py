"""
Backend package for the portfolio API.

Exposes a FastAPI application serving portfolio projects and contact-form
submissions, with a pluggable storage adapter (SQLAlchemy or offline no-op).
"""
