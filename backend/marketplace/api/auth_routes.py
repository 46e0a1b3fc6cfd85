"""
Name: Auth Routes (JWT)

Responsibilities:
  - Register new users and log existing users in
  - Return the session token in the Authorization response header

Collaborators:
  - application.use_cases: RegisterUserUseCase, LoginUserUseCase
  - container.py: use case factories
  - exception_handlers.py: maps domain errors to HTTP status codes
"""

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from ..application.use_cases import LoginUserUseCase, RegisterUserUseCase
from ..container import get_login_user_use_case, get_register_user_use_case

router = APIRouter(tags=["auth"])

AUTHORIZATION_HEADER = "Authorization"


class UserRequest(BaseModel):
    # R: Missing fields decode as "" and are reported by the field rules
    username: str = ""
    password: str = ""


class RegisterResponse(BaseModel):
    username: str


class LoginResponse(BaseModel):
    token: str


def _set_token(response: Response, token: str) -> None:
    response.headers[AUTHORIZATION_HEADER] = f"Bearer {token}"


@router.post("/register", status_code=201, response_model=RegisterResponse)
def register(
    req: UserRequest,
    response: Response,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    """
    R: Create an account and start a session.

    Errors:
        400: Field rules failed (errors maps field -> message)
        409: Username already taken
    """
    token = use_case.execute(username=req.username, password=req.password)
    _set_token(response, token)
    return RegisterResponse(username=req.username)


@router.post("/login", response_model=LoginResponse)
def login(
    req: UserRequest,
    response: Response,
    use_case: LoginUserUseCase = Depends(get_login_user_use_case),
):
    """
    R: Exchange credentials for a session token.

    Errors:
        404: Unknown username
        500: Wrong password
    """
    token = use_case.execute(username=req.username, password=req.password)
    _set_token(response, token)
    return LoginResponse(token=token)
