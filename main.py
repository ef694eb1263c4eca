import logging

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# --- Import your project logic ---
from authorization import PaymentGate, PaymentRequiredError, get_payment_gate
from config import Settings, get_settings
from pdffilling import fill_w4_pdf
from schemas import GenerateW4Request
from sourcedocument import fetch_source_pdf

settings = get_settings()

logger = logging.getLogger("w4-api")
logging.basicConfig(level=settings.log_level)

# --- Initialize the FastAPI App ---
app = FastAPI(
    title="W-4 Generation API",
    description="Fills the IRS Form W-4 with the user's answers and returns it as a flattened PDF.",
    version="2.0.0",
)

# --- Add CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


# --- Error rendering: every failure is a JSON object with an "error" key ---
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        content = {"error": "Method not allowed"}
    elif isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_: Request, exc: RequestValidationError):
    details = [{"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()]
    return JSONResponse(status_code=400, content={"error": "Invalid request body", "details": details})


@app.exception_handler(Exception)
async def unhandled_error_handler(_: Request, exc: Exception):
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Failed to generate PDF"})


# --- Helper Functions ---
def build_w4_document(payload: GenerateW4Request, settings: Settings) -> bytes:
    source_pdf = fetch_source_pdf(settings.source_pdf_url, timeout=settings.fetch_timeout)
    return fill_w4_pdf(source_pdf, payload.user_data, payload.calc_results)


# --- API Endpoint ---
@app.post("/api/generate-w4")
async def generate_w4(
    payload: GenerateW4Request,
    gate: PaymentGate = Depends(get_payment_gate),
    settings: Settings = Depends(get_settings),
):
    try:
        gate.authorize(payload.auth_token)
    except PaymentRequiredError as e:
        raise HTTPException(status_code=403, detail={"error": "Payment required", "message": str(e)})

    try:
        pdf_bytes = await run_in_threadpool(build_w4_document, payload, settings)
    except Exception as e:
        logger.exception("W-4 generation failed")
        raise HTTPException(status_code=500, detail=str(e) or "Failed to generate PDF")

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{settings.download_filename}"'},
    )


@app.options("/api/generate-w4", include_in_schema=False)
async def generate_w4_options():
    return Response(status_code=200)


@app.get("/", include_in_schema=False)
async def root():
    return {"message": "W-4 Generation API. POST your answers to /api/generate-w4."}
