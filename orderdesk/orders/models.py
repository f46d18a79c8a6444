"""
Order data model.
Field aliases match the camelCase document fields of the content store.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Named statuses an admin can assign; anything else is shown as unknown
ORDER_STATUSES = ('pending', 'dispatch', 'success')


class CartItem(BaseModel):
    """Dereferenced product line of an order (read-only)."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    product_name: str = Field(default='', alias='productName')
    image: Optional[Any] = None
    image_url: Optional[str] = Field(default=None, alias='imageUrl')

    @field_validator('product_name', mode='before')
    @classmethod
    def _none_to_empty(cls, value):
        return '' if value is None else value


class Order(BaseModel):
    """Customer order as projected by the dashboard query."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(alias='_id')
    first_name: str = Field(default='', alias='firstName')
    last_name: str = Field(default='', alias='lastName')
    phone: str = ''
    email: str = ''
    address: str = ''
    city: str = ''
    zip_code: str = Field(default='', alias='zipCode')
    total: float = 0.0
    discount: float = 0.0
    order_date: Optional[str] = Field(default=None, alias='orderDate')
    status: Optional[str] = None
    cart_items: List[CartItem] = Field(default_factory=list, alias='cartItems')

    @field_validator('first_name', 'last_name', 'phone', 'email', 'address', 'city', 'zip_code', mode='before')
    @classmethod
    def _text_or_empty(cls, value):
        if value is None:
            return ''
        return str(value)

    @field_validator('total', 'discount', mode='before')
    @classmethod
    def _amount_or_zero(cls, value):
        return 0.0 if value is None else value

    @field_validator('cart_items', mode='before')
    @classmethod
    def _drop_broken_references(cls, value):
        # A dangling reference dereferences to null
        if value is None:
            return []
        return [item for item in value if item is not None]

    def with_status(self, status: str) -> 'Order':
        """Copy of this order with only the status replaced."""
        return self.model_copy(update={'status': status})
