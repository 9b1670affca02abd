# storerating/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Your configuration and DB
from storerating.config import settings
from storerating.core.db import init_db, close_db
from storerating.core.errors import register_exception_handlers

from storerating.api.routers import auth, admin, stores, ratings, store_owner

from storerating.core.bootstrap import ensure_default_admin

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# CORS (bearer tokens, no cookies)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# {"message": ..., "errors": [...]} envelope for every failure
register_exception_handlers(app)

@app.on_event("startup")
async def on_startup():
    await init_db(generate_schemas=settings.generate_schemas)
    # Ensure there's a default admin account on first run
    await ensure_default_admin()
    logger.info("[startup] %s ready (env=%s, prefix=%s)", settings.APP_NAME, settings.env, settings.api_prefix)

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(admin.router, prefix=settings.api_prefix)
app.include_router(stores.router, prefix=settings.api_prefix)
app.include_router(ratings.router, prefix=settings.api_prefix)
app.include_router(store_owner.router, prefix=settings.api_prefix)

@app.get("/healthz")
def healthz():
    return {"ok": True}


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("storerating.main:app", host=settings.host, port=settings.port)
