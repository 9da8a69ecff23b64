"""
CV builder API package.

Provides the FastAPI application factory (``api.app.create_app``), the
service container and the request middleware.
"""
