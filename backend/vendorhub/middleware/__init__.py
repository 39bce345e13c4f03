# Middleware package init
"""
VendorHub Backend — Middleware Package
========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Rate Limit] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs and error bodies (429s included)
    2. Logging: method, path, status, duration with the request ID
    3. Rate Limit: reject credential guessing before the route does any work

Authentication is not middleware: `auth.require_vendor` is a FastAPI
dependency attached only to the routes that need a logged-in vendor.
"""
