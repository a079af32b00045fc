# Middleware package init
"""
StudyMate Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation id for logs and error bodies
    2. Logging: method, path, status, duration with the request id
    3. CORS: FastAPI's CORSMiddleware (any origin by default)
"""
