"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Identifier, Integer

from craftmarket.domain import marketplace


@marketplace.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was added to the cart, or its line grew by `quantity`."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@marketplace.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    """The quantity of a cart line was overwritten."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@marketplace.event(part_of="ShoppingCart")
class CartItemRemoved:
    """A line was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)


@marketplace.event(part_of="ShoppingCart")
class CartCleared:
    """Every line of the cart was removed, by the buyer or by checkout."""

    __version__ = 1

    cart_id = Identifier(required=True)
    items_removed = Integer(required=True)
