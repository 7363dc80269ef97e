# Middleware package init
"""
Noteful Backend — Middleware Package
======================================

Request path (outermost first):
    [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

Rate limiting rejects abusive clients before any other work. The request id
is set before logging so every access line carries it.
"""
