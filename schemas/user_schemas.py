from pydantic import EmailStr, Field, field_validator
from schemas.base import CamelModel
import phonenumbers
import re


class CreateUserRequest(CamelModel):
    username: str = Field(min_length=3, max_length=50)
    password: str
    email: EmailStr
    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    phone: str | None = None

    @field_validator('username', mode='before')
    @classmethod
    def strip_username(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower()

    @field_validator('password')
    @classmethod
    def validate_password(cls, value):
        """
        Password must be at least 8 characters and contain:
        - At least one letter
        - At least one digit
        """
        if len(value) < 8:
            raise ValueError('Password must be at least 8 characters')

        if not re.search(r'[A-Za-z]', value):
            raise ValueError('Password must contain at least one letter')

        if not re.search(r'\d', value):
            raise ValueError('Password must contain at least one digit')

        return value

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, value):
        """
        Optional. When given it must be an international number (+201234567890)
        and is stored in E.164 form.
        """
        if value is None or not value.strip():
            return None
        try:
            parsed = phonenumbers.parse(value, None)
        except phonenumbers.NumberParseException:
            raise ValueError('Phone number must include country code (e.g.: +966xxxxxxxxx, +20xxxxxxxxxx)')

        if not phonenumbers.is_valid_number(parsed):
            raise ValueError('Invalid phone number')

        return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


class LoginRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserResponse(CamelModel):
    """Public view of a user. Never carries the password hash."""
    id: int
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    phone: str | None = None


class UserInsert(CamelModel):
    username: str
    email: str
    hashed_password: str
    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    phone: str | None = None


class UserRead(UserInsert):
    id: int


class UserUpdate(CamelModel):
    email: str | None = None
    hashed_password: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    phone: str | None = None
