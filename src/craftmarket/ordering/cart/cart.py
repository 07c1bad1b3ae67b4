"""Shopping Cart aggregate: one per user, mapping products to quantities.

Adding a product that is already in the cart grows its line instead of
creating a second one. Lines are removed one by one or all at once when an
order is placed.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from craftmarket.domain import marketplace
from craftmarket.ordering.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
)


@marketplace.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()
    updated_at = DateTime()


@marketplace.aggregate
class ShoppingCart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def _find_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ValidationError({"item_id": ["Item not found in cart"]})
        return item

    def add_item(self, product_id, quantity):
        """Add a product, or increase the quantity of its existing line."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = next((i for i in self.items if str(i.product_id) == str(product_id)), None)
        now = datetime.now(UTC)

        if existing:
            existing.quantity = existing.quantity + quantity
            existing.updated_at = now
            item = existing
        else:
            item = CartItem(product_id=product_id, quantity=quantity, added_at=now, updated_at=now)
            self.add_items(item)

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=item.quantity,
            )
        )
        return item

    def update_item_quantity(self, item_id, new_quantity):
        if new_quantity is None or new_quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        item = self._find_item(item_id)
        previous_quantity = item.quantity
        now = datetime.now(UTC)
        item.quantity = new_quantity
        item.updated_at = now
        self.updated_at = now

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, item_id):
        item = self._find_item(item_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(cart_id=str(self.id), item_id=str(item_id)))

    def clear(self):
        removed = len(self.items)
        if removed:
            self.remove_items(list(self.items))
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id), items_removed=removed))
