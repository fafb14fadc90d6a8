"""SQLAlchemy-backed repository implementations.

Import concrete repositories from their modules; this package does not
re-export them so domain services and repositories can import each other's
models without cycles.
"""
