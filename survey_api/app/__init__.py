"""
Application package for the Survey API.

Each resource (surveys, locations, users) exposes a router defined in
``api/endpoints``, a pydantic schema module in ``schemas`` and a
service class in ``services``.  Cross-cutting concerns such as
configuration, logging, persistence, security and errors live in
``core``.
"""
