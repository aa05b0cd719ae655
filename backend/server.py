import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, APIRouter, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_settings
from database import client, ensure_indexes, get_db
from routers import admin, auth, dashboard, donors, inventory, notifications, requests, users
from services import ServiceError, fail
from services.accounts import seed_admin

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # honour test overrides of the database dependency
    db = app.dependency_overrides.get(get_db, get_db)()
    await ensure_indexes(db)
    await seed_admin(db, settings)
    logger.info("Blood Donation Coordination API started")
    yield
    client.close()


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return fail(exc.message, exc.status_code, exc.data)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return fail(str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [{"loc": list(e.get("loc", [])), "msg": e.get("msg")} for e in exc.errors()]
        return fail("Invalid request", 400, errors)

    @app.exception_handler(DuplicateKeyError)
    async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
        return fail("Already exists", 409)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return fail("Something went wrong", 500)


def create_app() -> FastAPI:
    app = FastAPI(title="Blood Donation Coordination API", lifespan=lifespan)

    api_router = APIRouter(prefix="/api")
    for module in (dashboard, auth, requests, donors, inventory, notifications, users, admin):
        api_router.include_router(module.router)
    app.include_router(api_router)

    app.add_middleware(
        CORSMiddleware,
        allow_credentials=True,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("server:app", host="0.0.0.0", port=settings.port)
