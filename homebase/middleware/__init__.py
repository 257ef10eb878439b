# Middleware package init
"""
Homebase Backend: Middleware Package
====================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first so every log line of the request can carry it
    2. Logging measures the full handler duration and the final status
    3. CORS is FastAPI's CORSMiddleware (handles preflight)

Authentication is not middleware: it is the `CurrentUser` dependency in
homebase.auth, declared by each route that needs a caller.
"""
