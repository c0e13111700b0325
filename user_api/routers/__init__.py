"""
FastAPI routers grouped by resource.

Each module exposes an APIRouter that the application factory (app.py)
includes. Endpoints stay thin: they parse the request and delegate to a
service.
"""
