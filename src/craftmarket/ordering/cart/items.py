"""Cart item management: commands and handler.

Every user has at most one cart; it is created on the first add.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from craftmarket.catalogue.product import Product
from craftmarket.domain import marketplace
from craftmarket.identity.seller import Seller
from craftmarket.ordering.cart.cart import ShoppingCart


@marketplace.command(part_of="ShoppingCart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@marketplace.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    new_quantity = Integer(required=True)


@marketplace.command(part_of="ShoppingCart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@marketplace.command(part_of="ShoppingCart")
class ClearCart:
    user_id = Identifier(required=True)


def find_cart(user_id):
    carts = current_domain.repository_for(ShoppingCart)._dao.query.filter(user_id=str(user_id)).all().items
    return carts[0] if carts else None


def _require_cart(user_id):
    cart = find_cart(user_id)
    if cart is None:
        raise ValidationError({"cart": ["Cart is empty"]})
    return cart


def _assert_purchasable(product_id):
    product = current_domain.repository_for(Product).get(product_id)
    if not product.is_available:
        raise ValidationError({"product_id": ["Product is not available"]})

    seller = current_domain.repository_for(Seller).get(product.seller_id)
    if not seller.is_approved:
        raise ValidationError({"product_id": ["Seller is not verified"]})
    return product


@marketplace.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        _assert_purchasable(command.product_id)

        repo = current_domain.repository_for(ShoppingCart)
        cart = find_cart(command.user_id) or ShoppingCart.create(user_id=command.user_id)
        item = cart.add_item(product_id=command.product_id, quantity=command.quantity)
        repo.add(cart)
        return str(item.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        cart = _require_cart(command.user_id)
        cart.update_item_quantity(item_id=command.item_id, new_quantity=command.new_quantity)
        current_domain.repository_for(ShoppingCart).add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = _require_cart(command.user_id)
        cart.remove_item(item_id=command.item_id)
        current_domain.repository_for(ShoppingCart).add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = find_cart(command.user_id)
        if cart is None:
            return
        cart.clear()
        current_domain.repository_for(ShoppingCart).add(cart)
