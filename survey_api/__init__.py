"""
Top-level package for the Survey API.

The package provides no public exports; all functionality lives in
submodules under ``app``.  The ASGI application can be served with::

    uvicorn survey_api.app.main:app
"""

__all__ = []
