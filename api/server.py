"""server.py
Server to launch a FastAPI / Swagger UI instance.
"""
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import Body, Depends, FastAPI, HTTPException, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from resume_builder.auth.account_service import AccountService
from resume_builder.auth.token_service import TokenService
from resume_builder.config import BUILDER_DEFAULTS
from resume_builder.delivery import (
    PDF_MEDIA_TYPE,
    attachment_headers,
    read_for_delivery,
    temporary_resume_file,
)
from resume_builder.exceptions import (
    AccountError,
    AuthConfigError,
    DeliveryError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    RenderError,
    ResumeValidationError,
    SuggestionRequestError,
    UpstreamGenerationError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from resume_builder.layout.layout_engine import LayoutEngine
from resume_builder.logging import LoggerFactory
from resume_builder.models import ResumeData
from resume_builder.suggestions.suggestion_service import SuggestionService
from resume_builder.validation import validate_resume_data


app = FastAPI(title="Resume Builder API", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=BUILDER_DEFAULTS.ALLOWED_ORIGINS,
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
    allow_credentials=True,
)

logger = LoggerFactory().get_logger(name="api_server")

# auto_error=False so a missing header reaches our handler (401) instead of FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


class SignupInputs(BaseModel):
    name: str
    email: str
    password: str

class LoginInputs(BaseModel):
    email: str
    password: str

class AuthResponse(BaseModel):
    name: str
    token: str

class SuggestInputs(BaseModel):
    prompt: str
    section: str
    context: Optional[Dict[str, Any]] = None


# --------------------------------------------------------------
# DEPENDENCIES
# --------------------------------------------------------------
@lru_cache(maxsize=None)
def get_token_service() -> TokenService:
    return TokenService()

@lru_cache(maxsize=None)
def get_account_service() -> AccountService:
    return AccountService(token_service=get_token_service())

@lru_cache(maxsize=None)
def get_suggestion_service() -> SuggestionService:
    return SuggestionService()

def get_layout_engine() -> LayoutEngine:
    return LayoutEngine()


def require_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    token_service: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    """
    Resolve the bearer token into its payload.
    Missing token -> 401, invalid or expired token -> 403.
    """
    try:
        return token_service.verify(credentials.credentials if credentials else None)
    except MissingTokenError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except InvalidTokenError as e:
        logger.info(f"Rejected bearer token: {e.reason}")
        raise HTTPException(status_code=403, detail=str(e))


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(AuthConfigError)
async def auth_config_error_handler(request, exc: AuthConfigError) -> JSONResponse:
    logger.error(f"Auth misconfigured: {exc}")
    return error_response(500, "Server Error.")


# --------------------------------------------------------------
# ROUTES
# --------------------------------------------------------------
@app.post(
    "/signup",
    response_model=AuthResponse,
    status_code=201,
    summary="Create an account and return a bearer token",
)
def signup(
    inputs: SignupInputs,
    account_service: AccountService = Depends(get_account_service),
):
    try:
        return account_service.signup(
            name=inputs.name,
            email=inputs.email,
            password=inputs.password,
        )
    except UserAlreadyExistsError as e:
        return error_response(409, str(e))


@app.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in and return a bearer token",
)
def login(
    inputs: LoginInputs,
    account_service: AccountService = Depends(get_account_service),
):
    try:
        return account_service.login(email=inputs.email, password=inputs.password)
    except UserNotFoundError as e:
        return error_response(404, str(e))
    except InvalidCredentialsError as e:
        return error_response(400, str(e))
    except AccountError as e:
        logger.error(f"Error during login: {e}")
        return error_response(500, "Server Error.")


@app.post(
    "/submit",
    summary="Render submitted resume data to a PDF",
    description="Validates the resume JSON body, renders it and returns `resume.pdf` as an attachment.",
    response_class=Response,
)
def submit(
    payload: Dict[str, Any] = Body(...),
    user: Dict[str, Any] = Depends(require_user),
    engine: LayoutEngine = Depends(get_layout_engine),
):
    """
    Render the posted resume and send it back as a file attachment.
    The temporary file written during delivery is removed on every path.
    """
    resume_data = ResumeData.from_dict(payload)

    # ---- Validate form data ----
    try:
        validate_resume_data(resume_data)
    except ResumeValidationError as e:
        return error_response(422, str(e), errors=e.errors)

    # ---- Render ----
    try:
        pdf_bytes = engine.render(resume_data)
    except RenderError as e:
        logger.warning(f"Render failed for user {user.get('sub')}: {e}")
        return error_response(400, str(e))
    except Exception as e:
        logger.error(f"Error generating PDF for user {user.get('sub')}: {e}")
        return error_response(500, "Server Error")

    # ---- Deliver via temp file ----
    try:
        with temporary_resume_file(pdf_bytes) as pdf_path:
            content = read_for_delivery(pdf_path)
    except DeliveryError as e:
        logger.error(f"Error delivering file: {e}")
        return error_response(500, "Error downloading File")

    return Response(
        content=content,
        media_type=PDF_MEDIA_TYPE,
        headers=attachment_headers(),
    )


@app.post(
    "/suggest",
    summary="Suggest resume content for a form section",
)
def suggest(
    inputs: SuggestInputs,
    user: Dict[str, Any] = Depends(require_user),
    suggestion_service: SuggestionService = Depends(get_suggestion_service),
):
    try:
        return suggestion_service.suggest(
            prompt=inputs.prompt,
            section=inputs.section,
            context=inputs.context,
        )
    except SuggestionRequestError as e:
        return JSONResponse(status_code=400, content={"success": False, "message": str(e)})
    except UpstreamGenerationError as e:
        logger.error(f"Suggestion failed for user {user.get('sub')}: {e}")
        return JSONResponse(
            status_code=502,
            content={"success": False, "message": "Error generating suggestions."},
        )
