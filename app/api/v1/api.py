from fastapi import APIRouter

from app.api.v1.endpoints import density, health, ingest, locations, samples

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(ingest.router, prefix="/ingest", tags=["ingest"])
api_router.include_router(density.router, prefix="/density", tags=["density"])
api_router.include_router(locations.router, prefix="/locations", tags=["locations"])
api_router.include_router(samples.router, prefix="/samples", tags=["samples"])
