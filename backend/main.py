from functools import lru_cache

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import check_api_keys_on_startup, logger
from exceptions import CleanNewsException
from middleware.context import RequestContextMiddleware, get_request_id
from models.claims import VerificationRequest
from models.verdicts import VerificationResponse
from services.verification_service import VerificationService, build_verification_service

app = FastAPI(title="CleanNews Verification API")


@app.on_event("startup")
async def startup_event():
    check_api_keys_on_startup()


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestContextMiddleware)


@lru_cache(maxsize=1)
def get_verification_service() -> VerificationService:
    # one instance per process so the search cache is shared across requests
    return build_verification_service()


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = [f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()]
    logger.warning(f"[{get_request_id()}] Request validation failed: {messages}")
    return JSONResponse(status_code=400, content={"error": "VALIDATION_ERROR", "message": messages})


@app.exception_handler(CleanNewsException)
async def cleannews_exception_handler(request: Request, exc: CleanNewsException):
    logger.error(f"[{get_request_id()}] {exc.__class__.__name__}: {exc.message}")
    return JSONResponse(status_code=500, content=exc.to_dict())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"[{get_request_id()}] Unhandled error during verification")
    return JSONResponse(status_code=500, content={"error": "INTERNAL_ERROR", "message": str(exc)})


@app.get("/")
async def health_check():
    return {"status": "ok", "message": "CleanNews API is running."}


@app.post("/api/v1/verify", response_model=VerificationResponse, response_model_by_alias=True)
async def verify(
    req: VerificationRequest,
    service: VerificationService = Depends(get_verification_service),
) -> VerificationResponse:
    """Verify a social-media post and return verdict, confidence and ranked evidence."""
    return await service.verify(req)
