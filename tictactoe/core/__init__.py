"""Core gameplay primitives shared by the engine and the service layer.

Kept free of FastAPI and redis concerns so the engine can be exercised
directly from tests.
"""
