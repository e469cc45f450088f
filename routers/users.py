from fastapi import APIRouter, Request
from starlette import status

from middleware.rate_limiter import limiter, REGISTER_LIMIT, LOGIN_LIMIT
from schemas.user_schemas import CreateUserRequest, LoginRequest, UserResponse
from services.user_service import UserService
from utils.deps import storage_dependency
from utils.logger import get_logger

logger = get_logger(__name__)


router = APIRouter(
    prefix="/api/users",
    tags=["users"]
)


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
@limiter.limit(REGISTER_LIMIT)
def register(request: Request, body: CreateUserRequest, storage: storage_dependency):
    user = UserService.create_user(storage, body)
    # response_model drops the password hash
    return user


@router.post("/login", response_model=UserResponse)
@limiter.limit(LOGIN_LIMIT)
def login(request: Request, body: LoginRequest, storage: storage_dependency):
    user = UserService.authenticate_user(storage, body.username, body.password)

    logger.info("User logged in", extra={"user_id": user.id})

    return user
