from functools import lru_cache

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import logger, settings, check_persistence_on_startup
from exceptions import AuthenticityException
from middleware.context import RequestContextMiddleware, get_request_id
from models import (
    Modality,
    TextValidationRequest,
    ImageValidationRequest,
    VideoValidationRequest,
    URLValidationRequest,
)
from services import ValidationService

app = FastAPI(title="Authenticity Validation API")

@app.on_event("startup")
async def startup_event():
    check_persistence_on_startup()

app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@lru_cache(maxsize=1)
def get_validation_service() -> ValidationService:
    return ValidationService()

@app.exception_handler(AuthenticityException)
async def authenticity_exception_handler(request: Request, exc: AuthenticityException):
    if exc.status_code >= 500:
        logger.error(
            f"Request failed: {exc.__class__.__name__}",
            extra={"request_id": get_request_id(), "path": request.url.path}
        )
        body = {"error": exc.__class__.__name__, "message": "Internal server error", "details": {}}
    else:
        body = exc.to_dict()
    return JSONResponse(status_code=exc.status_code, content=body)

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error while serving %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "InternalFailureException", "message": "Internal server error", "details": {}},
    )

@app.get("/")
async def health_check():
    return {"status": "ok", "message": "Authenticity validation API is running."}

@app.post("/validate/text")
async def validate_text(
    req: TextValidationRequest,
    service: ValidationService = Depends(get_validation_service)
):
    return await service.validate(Modality.TEXT, req.text)

@app.post("/validate/image")
async def validate_image(
    req: ImageValidationRequest,
    service: ValidationService = Depends(get_validation_service)
):
    return await service.validate(Modality.IMAGE, req.image_url)

@app.post("/validate/video")
async def validate_video(
    req: VideoValidationRequest,
    service: ValidationService = Depends(get_validation_service)
):
    return await service.validate(Modality.VIDEO, req.video_url)

@app.post("/validate/url")
async def validate_url(
    req: URLValidationRequest,
    service: ValidationService = Depends(get_validation_service)
):
    return await service.validate(Modality.URL, req.url)
