# Services package init
"""
PasteBin Backend - Services Layer
==================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Stateless singletons; each call receives the request's AsyncSession.

Service Inventory:
    - TokenService: Issues and verifies signed bearer tokens
    - AuthService:  Signup/login, password policy, credential checks
    - PasteService: Create, fetch, list and delete pastes
"""
