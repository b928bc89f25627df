"""
Web application package for the Vision chess AI.

Provides a FastAPI-based REST API for playing against the engine from a
browser board or any HTTP client.
"""
