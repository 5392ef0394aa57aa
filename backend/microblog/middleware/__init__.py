# Middleware package init
"""
Microblog Backend — Middleware Package
========================================

Middleware Chain:
    Request → [Request ID + Logging] → Route Handler

    RequestLoggingMiddleware assigns the correlation ID before its entry
    line, so every log line of a request carries the same ID.
"""
