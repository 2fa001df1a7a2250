# Middleware package init
"""
Songbook Backend - Middleware Package
======================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: sets the correlation ID used by every later log line
    2. Logging: logs method, path, status and duration with that ID
    3. GZip / CORS: FastAPI's built-in middleware
"""
