from pydantic import Field, field_validator, model_validator
from schemas.base import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    description: str | None = None
    image: str | None = None


class CategoryRead(CategoryCreate):
    id: int


class CategoryUpdate(CamelModel):
    name: str | None = Field(None, min_length=1)
    slug: str | None = Field(None, min_length=1)
    description: str | None = None
    image: str | None = None


def _check_sale_price(price, sale_price):
    if price is not None and sale_price is not None and sale_price >= price:
        raise ValueError("salePrice must be lower than price")


class ProductCreate(CamelModel):
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    description: str | None = None
    price: float = Field(ge=0)
    sale_price: float | None = Field(None, ge=0)
    image: str | None = None
    images: list[str] = Field(default_factory=list)
    featured: bool = False
    new_arrival: bool = False
    rating: float = Field(0, ge=0, le=5)
    num_reviews: int = Field(0, ge=0)
    stock: int = Field(0, ge=0)
    category_id: int | None = None

    @field_validator("images", mode="before")
    @classmethod
    def default_images(cls, value):
        return value or []

    @model_validator(mode="after")
    def validate_sale_price(self):
        _check_sale_price(self.price, self.sale_price)
        return self


class ProductRead(ProductCreate):
    id: int


class ProductUpdate(CamelModel):
    """Mutable product fields. Only the fields explicitly set are applied."""
    name: str | None = Field(None, min_length=1)
    slug: str | None = Field(None, min_length=1)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    sale_price: float | None = Field(None, ge=0)
    image: str | None = None
    images: list[str] | None = None
    featured: bool | None = None
    new_arrival: bool | None = None
    rating: float | None = Field(None, ge=0, le=5)
    num_reviews: int | None = Field(None, ge=0)
    stock: int | None = Field(None, ge=0)
    category_id: int | None = None

    @model_validator(mode="after")
    def validate_sale_price(self):
        _check_sale_price(self.price, self.sale_price)
        return self
