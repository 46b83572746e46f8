from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

OrderStatus = Literal["pending", "preparing", "ready", "delivered", "cancelled"]
DietaryType = Literal["VEG", "NON_VEG", "VEGAN"]


class SMenuCategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""


class SMenuCategoryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None


class SMenuCategory(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    outlet_id: str
    name: str
    description: str


class SSubCategoryCreate(BaseModel):
    category_id: str
    name: str = Field(min_length=1)
    description: str = ""


class SSubCategoryUpdate(BaseModel):
    category_id: str | None = None
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None


class SSubCategory(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    outlet_id: str
    category_id: str
    name: str
    description: str


class SMenuItemVariantIn(BaseModel):
    name: str = Field(min_length=1)
    price: float = Field(gt=0)
    stock_count: int = Field(default=0, ge=0)
    is_active: bool = True


class SMenuItemVariant(SMenuItemVariantIn):
    model_config = ConfigDict(from_attributes=True)

    id: int


class SMenuItemCreate(BaseModel):
    name: str = Field(min_length=1)
    sku: str = ""
    description: str = ""
    price: float = Field(gt=0)
    discount_price: float | None = Field(default=None, ge=0)
    dietary_type: DietaryType = "VEG"
    is_available: bool = True
    category_ids: list[str] = []
    sub_category_id: str | None = None
    variants: list[SMenuItemVariantIn] = []

    @model_validator(mode="after")
    def discount_below_price(self):
        if self.discount_price is not None and self.discount_price > self.price:
            raise ValueError("discount_price cannot exceed price.")
        return self


class SMenuItemUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    sku: str | None = None
    description: str | None = None
    price: float | None = Field(default=None, gt=0)
    discount_price: float | None = Field(default=None, ge=0)
    dietary_type: DietaryType | None = None
    is_available: bool | None = None
    category_ids: list[str] | None = None
    sub_category_id: str | None = None
    variants: list[SMenuItemVariantIn] | None = None


class SMenuItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    outlet_id: str
    name: str
    sku: str
    description: str
    price: float
    discount_price: float | None
    dietary_type: DietaryType
    is_available: bool
    category_ids: list[str]
    sub_category_id: str | None
    has_variants: bool
    variants: list[SMenuItemVariant]


class SOrderLine(BaseModel):
    menu_item_id: str
    quantity: int = 1

    @field_validator("quantity")
    def at_least_one(cls, v):
        return max(1, v)


class SOrderCreate(BaseModel):
    customer_name: str = Field(min_length=1)
    items: list[SOrderLine] = Field(min_length=1)


class SOrderUpdate(BaseModel):
    customer_name: str | None = Field(default=None, min_length=1)
    status: OrderStatus | None = None


class SOrderItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    menu_item_id: str
    quantity: int
    unit_price: float


class SOrder(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    outlet_id: str
    order_number: str
    customer_name: str
    status: OrderStatus
    total_price: float
    items: list[SOrderItem]
    created_at: datetime
    next_action: str | None = None


class SKitchenBoard(BaseModel):
    pending: list[SOrder]
    preparing: list[SOrder]
    ready: list[SOrder]
