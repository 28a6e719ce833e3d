# storefront/domain/errors.py


class StorefrontError(Exception):
    """Base for every error the domain services raise on purpose."""


class NotFoundError(StorefrontError, LookupError):
    pass


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class CartNotFoundError(NotFoundError):
    def __init__(self, cart_id: str):
        self.cart_id = cart_id
        super().__init__(f"Cart {cart_id} not found")


class CartItemNotFoundError(NotFoundError):
    def __init__(self, cart_id: str, product_id: str):
        self.cart_id = cart_id
        self.product_id = product_id
        super().__init__(f"Product {product_id} is not in cart {cart_id}")


class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class ValidationError(StorefrontError, ValueError):
    pass


class InsufficientStockError(ValidationError):
    def __init__(self, product_id: str, requested: int, available: int, product_name: str | None = None):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        label = product_name or product_id
        super().__init__(
            f"Insufficient stock for {label}: requested {requested}, available {available}"
        )


class EmptyCartError(ValidationError):
    def __init__(self, cart_id: str | None = None):
        self.cart_id = cart_id
        super().__init__("Cart is empty")


class InvalidStatusTransitionError(ValidationError):
    def __init__(self, order_id: str, current: str, requested: str):
        self.order_id = order_id
        self.current = current
        self.requested = requested
        super().__init__(f"Order {order_id} cannot move from {current} to {requested}")


class UserExistsError(StorefrontError):
    def __init__(self, email: str):
        self.email = email
        super().__init__("User already exists")


class LockUnavailableError(StorefrontError, RuntimeError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Resource {key} is busy, try again")
