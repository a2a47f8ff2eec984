# Middleware package init
"""
Blog API Backend — Middleware Package
=======================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    RequestIDMiddleware is added last so it runs first: the access log line
    written by RequestLoggingMiddleware already carries the request ID, and
    every response (errors included) gets an X-Request-ID header.
"""
