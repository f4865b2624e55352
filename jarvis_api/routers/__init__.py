"""
FastAPI routers grouped by resource (health, products, faqs, contact, seed).

Each module exposes an APIRouter that app.py mounts under the rate-limited
``/api`` prefix; ``pages`` holds the API 404 fallback and the SPA shell and is
mounted last.
"""
