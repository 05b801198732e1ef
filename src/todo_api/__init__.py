"""
Todo API package.

The application factory lives in ``todo_api.main.create_app``; the served
instance is ``todo_api.main:app`` (built lazily on first access).
"""
