"""
API Layer - FastAPI Presentation Layer

Responsibility:
    HTTP interface for the application. Handles requests, responses,
    and queues background payments on Celery. No business logic.

Contains:
    - FastAPI routers (carts, orders)
    - Request/Response models (Pydantic)
    - Dependency injection setup
    - Middleware configuration (CORS, logging)

Does NOT contain:
    - Business logic (belongs to Domain layer)
    - Data processing (belongs to Application layer)
    - Database operations (belongs to Infrastructure layer)
"""
