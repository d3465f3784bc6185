"""
FastAPI routers for all API endpoints.

Each module defines a router for one area (auth, profile, recommendations,
health); main.py registers them.
"""
