"""
HTTP layer: resource routers, route binding and error handlers.

``router.router`` aggregates the resource routers and is mounted by
``main.create_app`` under the ``/api`` prefix.
"""
