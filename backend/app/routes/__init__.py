# Routes package init
"""
PasteBin Backend - API Routes Package
======================================

Route Inventory:
    - auth.py:    POST   /api/auth/signup
                  POST   /api/auth/login
    - pastes.py:  POST   /api/pastes
                  GET    /api/pastes
                  GET    /api/pastes/{uuid}
                  DELETE /api/pastes/{uuid}
    - health.py:  GET    /health

Routes stay thin: extract request data, resolve identity, call a service.
Status codes for failures come from the exception handlers in main.py.
"""
