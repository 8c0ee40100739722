"""
Service layer.

Each service wraps a single record-store operation per method and
translates store failures into the errors defined in
``core.errors``.  Services receive the ``Database`` they operate on
explicitly; they never look it up globally.
"""
