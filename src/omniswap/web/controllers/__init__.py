"""FastAPI routers for the web layer."""
