"""
Todo API Backend: Middleware Package
======================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    The request ID is bound first so the access log line and every log
    record written while handling the request carry it.
"""
