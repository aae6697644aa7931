# Middleware package init
"""
Yolomy Products Backend — Middleware Package
=============================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → [Unhandled Errors]
            → Route Handler

The request ID is assigned first so the access log line and any error
response for the request carry the same ID.
"""
