import uuid

from storefront.domain.errors import (
    CartItemNotFoundError,
    CartNotFoundError,
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from storefront.domain.schemas import Cart, CartItem
from storefront.repos.base import CartRepo
from storefront.services.catalog_service import CatalogService
from storefront.services.lock_service import LockService, cart_key
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart use cases
    commands (create, add, update, remove, clear) modify state under the cart lock
    query (get) is read only

    Stock policy: a line may hold at most the product's current stock,
    so asking for exactly the remaining stock succeeds.
    """

    def __init__(
        self,
        carts: CartRepo,
        catalog: CatalogService,
        lock_service: LockService,
    ):
        self.repo = carts
        self.catalog = catalog
        self.lock_service = lock_service

    #query
    def get_cart(self, cart_id: str) -> Cart | None:
        return self.repo.get(cart_id)

    #commands
    def create_cart(self, user_id: str | None = None, cart_id: str | None = None) -> Cart:
        cart = Cart(id=cart_id or str(uuid.uuid4()), user_id=user_id)
        self.repo.put(cart)
        logger.info(f"Created cart {cart.id} for user {user_id}")
        return cart

    def get_or_create_cart(self, cart_id: str, user_id: str | None = None) -> Cart:
        with self.lock_service.lock(cart_key(cart_id)):
            cart = self.repo.get(cart_id)
            if cart:
                return cart
            return self.create_cart(user_id=user_id, cart_id=cart_id)

    def add_item(
        self,
        cart_id: str | None,
        product_id: str,
        quantity: int = 1,
        user_id: str | None = None,
    ) -> Cart:
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        cart_id = cart_id or str(uuid.uuid4())

        with self.lock_service.lock(cart_key(cart_id)):
            cart = self.repo.get(cart_id) or self.create_cart(user_id=user_id, cart_id=cart_id)

            product = self.catalog.get_product(product_id)
            if not product:
                raise ProductNotFoundError(product_id)

            existing_item = cart.find_item(product_id)
            in_cart = existing_item.quantity if existing_item else 0

            if in_cart + quantity > product.stock:
                logger.warning(
                    f"Cart {cart_id}: {in_cart} + {quantity} of product {product_id} "
                    f"exceeds stock {product.stock}"
                )
                raise InsufficientStockError(
                    product_id, in_cart + quantity, product.stock, product.name
                )

            if existing_item:
                logger.info(
                    f"Product {product_id} already in cart {cart_id}, quantity "
                    f"{existing_item.quantity} -> {existing_item.quantity + quantity}"
                )
                existing_item.quantity += quantity
                existing_item.product = product  # refresh price
            else:
                logger.info(f"Adding product {product_id} to cart {cart_id}")
                cart.items.append(CartItem(product=product, quantity=quantity))

            cart.recalculate()
            return self.repo.put(cart)

    def update_quantity(self, cart_id: str, product_id: str, quantity: int) -> Cart:
        if quantity <= 0:
            return self.remove_item(cart_id, product_id)

        with self.lock_service.lock(cart_key(cart_id)):
            cart = self.repo.get(cart_id)
            if not cart:
                raise CartNotFoundError(cart_id)

            item = cart.find_item(product_id)
            if not item:
                raise CartItemNotFoundError(cart_id, product_id)

            product = self.catalog.get_product(product_id)
            if not product:
                raise ProductNotFoundError(product_id)

            if quantity > product.stock:
                raise InsufficientStockError(product_id, quantity, product.stock, product.name)

            item.quantity = quantity
            item.product = product
            cart.recalculate()

            logger.info(f"Cart {cart_id}: product {product_id} quantity set to {quantity}")
            return self.repo.put(cart)

    def remove_item(self, cart_id: str, product_id: str) -> Cart:
        with self.lock_service.lock(cart_key(cart_id)):
            cart = self.repo.get(cart_id)
            if not cart:
                raise CartNotFoundError(cart_id)

            cart.items = [i for i in cart.items if i.product.id != product_id]
            cart.recalculate()

            logger.info(f"Removed product {product_id} from cart {cart_id}")
            return self.repo.put(cart)

    def clear(self, cart_id: str) -> Cart:
        with self.lock_service.lock(cart_key(cart_id)):
            cart = self.repo.get(cart_id)
            if not cart:
                raise CartNotFoundError(cart_id)

            cart.items = []
            cart.recalculate()

            logger.info(f"Cleared cart {cart_id}")
            return self.repo.put(cart)
