"""Lawyer Agent REST API package.

FastAPI layer over the retrieval engine in the app package. Exposes the
question endpoint consumed by the chat UI plus knowledge-base browsing
and health checks.
"""

__version__ = "1.0.0"
