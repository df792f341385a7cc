from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cars import repository as car_repository
from cars import router as cars_router
from core import db, errors, settings
from core.log import setup_logging

setup_logging(settings.log_level())


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        await car_repository.ensure_schema()
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="car", lifespan=lifespan)

# Allow the frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[
        "Location",
        "Link",
        "X-Total-Count",
        f"X-{settings.application_name()}-alert",
        f"X-{settings.application_name()}-error",
        f"X-{settings.application_name()}-params",
    ],
)

errors.install_exception_handlers(app)

app.include_router(cars_router.router, tags=["cars"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "car api"}
