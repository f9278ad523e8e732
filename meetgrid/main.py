import logging

logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from meetgrid.config import get_settings
from meetgrid.controllers.events import public_router as events_public_router
from meetgrid.controllers.events import router as events_router
from meetgrid.controllers.health import router as health_router
from meetgrid.errors import register_exception_handlers
from meetgrid.lifespan import lifespan
from meetgrid.middleware import HTTPLogMiddleware

settings = get_settings()

app = FastAPI(title="meetgrid", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_origin_regex=settings.cors.origins_regex or None,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.debug.request:
    logging.getLogger("meetgrid.http").setLevel(logging.DEBUG)
    app.add_middleware(HTTPLogMiddleware)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(events_router, prefix="/w2m")
app.include_router(events_public_router, prefix="/w2m")

Instrumentator().instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)
