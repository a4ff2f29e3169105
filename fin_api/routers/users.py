from fastapi import APIRouter, Depends, status

from fin_api.dependencies import authorize, get_user_usecase
from fin_api.errors import FinApiError
from fin_api.models import user as user_models
from fin_api.routers.common import http_error
from fin_api.usecase import UserUsecase

router = APIRouter(
    tags=["users"],
)


@router.get("/profile", response_model=user_models.User)
async def read_profile(
    user_id: int = Depends(authorize),
    usecase: UserUsecase = Depends(get_user_usecase),
):
    """
    Retrieve the profile of the authenticated user.
    """
    try:
        return await usecase.fetch_by_id(user_id)
    except FinApiError as e:
        raise http_error(e) from e


@router.post("/register", response_model=user_models.User, status_code=status.HTTP_201_CREATED)
async def register_user(
    registration: user_models.UserRegister,
    usecase: UserUsecase = Depends(get_user_usecase),
):
    """
    Create a new user. The echoed user carries the password digest.
    """
    try:
        return await usecase.register(registration)
    except FinApiError as e:
        raise http_error(e) from e


@router.post("/login", response_model=user_models.Token)
async def login_for_access_token(
    credentials: user_models.UserLogin,
    usecase: UserUsecase = Depends(get_user_usecase),
):
    """
    Authenticate user and return a bearer token.
    """
    try:
        token = await usecase.login(credentials)
    except FinApiError as e:
        raise http_error(e) from e
    return {"token": token}
