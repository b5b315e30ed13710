"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from endorseme.backend.api.v1.endpoints import app, auth, endorsements, webapp

router = APIRouter()

router.include_router(app.router, prefix="/app", tags=["app"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(webapp.router, prefix="/webapp", tags=["webapp"])
router.include_router(endorsements.router, prefix="/endorsements", tags=["endorsements"])
