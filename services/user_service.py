from fastapi import HTTPException
from starlette import status

from core.exceptions import ConflictError
from schemas.user_schemas import CreateUserRequest, UserInsert, UserRead
from storage import Storage
from utils.hashing import hash_password, verify_password
from utils.logger import get_logger, sanitize_log_data

logger = get_logger(__name__)


class UserService:

    @staticmethod
    def create_user(storage: Storage, request: CreateUserRequest) -> UserRead:
        """
        Register a new user.

        Uniqueness of username and email is left to the store (a unique
        constraint), so two simultaneous registrations cannot both succeed.
        The password is stored only as a bcrypt hash.
        """
        data = UserInsert(
            hashed_password=hash_password(request.password),
            **request.model_dump(exclude={"password"}),
        )
        try:
            user = storage.create_user(data)
        except ConflictError:
            detail = "Email already exists"
            if storage.get_user_by_username(request.username) is not None:
                detail = "Username already exists"
            logger.warning(
                "Registration rejected - duplicate user",
                extra=sanitize_log_data({"username": request.username, "email": request.email,
                                         "password": request.password, "reason": detail})
            )
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

        logger.info("User registered", extra={"user_id": user.id, "username": user.username})
        return user

    @staticmethod
    def authenticate_user(storage: Storage, username: str, password: str) -> UserRead:
        user = storage.get_user_by_username(username)

        if user is None:
            logger.warning("Login failed - user not found", extra={"username": username})
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                                detail="Invalid credentials")

        if not verify_password(password, user.hashed_password):
            logger.warning("Login failed - invalid password", extra={"user_id": user.id})
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                                detail="Invalid credentials")

        logger.debug("User authenticated", extra={"user_id": user.id})
        return user
