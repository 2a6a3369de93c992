import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from outreach.core.config import settings
from outreach.core.errors import FormsError, ValidationFailed
from outreach.core.http_hardening import install_http_hardening, request_id_of
from outreach.api.public.router import router as public_router
from outreach.api.admin.router import router as admin_router

_LOG = logging.getLogger("outreach.errors")

app = FastAPI(title=settings.APP_NAME, version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
install_http_hardening(app)

app.include_router(public_router, prefix="/api/public")
app.include_router(admin_router, prefix="/api/admin")


@app.exception_handler(FormsError)
async def forms_error_handler(request: Request, exc: FormsError):
    if isinstance(exc, ValidationFailed):
        _LOG.info("validation failed path=%s fields=%s", request.url.path, [e.field_id for e in exc.errors])
    return JSONResponse(status_code=exc.status_code, content=exc.payload())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return JSONResponse(status_code=422, content={"error": "; ".join(problems) or "Invalid request"})


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    _LOG.error(
        "storage failure %s %s request_id=%s",
        request.method,
        request.url.path,
        request_id_of(request),
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": "Something went wrong. Please try again later."})


@app.get("/", include_in_schema=False)
def landing():
    return JSONResponse({"service": settings.APP_NAME, "status": "ok"})

@app.get("/health")
def health():
    return {"status": "ok"}
