from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dinner_menu.api.routes import router as api_router
from dinner_menu.config import settings
from dinner_menu.exceptions import MenuApiError
from dinner_menu.logging import configure_logging, get_logger
from dinner_menu.storage.db import create_db_and_tables

app = FastAPI(title="Weekly Dinner Menu API")
logger = get_logger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS", "PATCH", "DELETE", "POST", "PUT"],
    allow_headers=[
        "X-CSRF-Token",
        "X-Requested-With",
        "Accept",
        "Accept-Version",
        "Content-Length",
        "Content-MD5",
        "Content-Type",
        "Date",
        "X-Api-Version",
    ],
)


@app.exception_handler(MenuApiError)
async def menu_api_error_handler(request: Request, exc: MenuApiError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log("request.failed path=%s status=%s error=%s", request.url.path, exc.http_status, exc.error)
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    try:
        title = HTTPStatus(exc.status_code).phrase
    except ValueError:
        title = "Error"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": title, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.on_event("startup")
def on_startup() -> None:
    configure_logging()
    logger.info("startup: env=%s model=%s", settings.env, settings.llm_model)
    if not settings.gemini_api_key:
        logger.warning("startup: GEMINI_API_KEY not set; menu generation will fail until configured")
    create_db_and_tables()


app.include_router(api_router)
