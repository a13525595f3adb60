# gst_compliance/api/v1/__init__.py
"""
Versioned API v1: aggregates all sub-routers under ``/api/v1``.

Usage in ``main.py``::

    from gst_compliance.api.v1 import v1_router
    app.include_router(v1_router)
"""

from fastapi import APIRouter

from gst_compliance.api.v1.routes.businesses import router as businesses_router
from gst_compliance.api.v1.routes.invoices import router as invoices_router
from gst_compliance.api.v1.routes.purchases import router as purchases_router
from gst_compliance.api.v1.routes.filing_returns import router as filing_returns_router
from gst_compliance.api.v1.routes.payments import router as payments_router
from gst_compliance.api.v1.routes.reports import router as reports_router
from gst_compliance.api.v1.routes.tools import router as tools_router
from gst_compliance.api.v1.routes.health import router as health_router

v1_router = APIRouter(prefix="/api/v1")

# Business-scoped resources
v1_router.include_router(businesses_router)
v1_router.include_router(invoices_router)
v1_router.include_router(purchases_router)
v1_router.include_router(filing_returns_router)
v1_router.include_router(payments_router)
v1_router.include_router(reports_router)

# Stateless calculators and reference tables
v1_router.include_router(tools_router)
v1_router.include_router(health_router)

__all__ = ["v1_router"]
