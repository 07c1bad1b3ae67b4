"""Product listing: sellers add, edit and hide their products."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from craftmarket.catalogue.category import Category
from craftmarket.catalogue.product import EDITABLE_FIELDS, Product
from craftmarket.catalogue.storage import get_storage, product_image_path
from craftmarket.domain import marketplace
from craftmarket.identity.seller import Seller
from craftmarket.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="Product")
class AddProduct:
    user_id: Identifier(required=True)
    title: String(required=True, max_length=255)
    category_id: Identifier(required=True)
    price: Float(required=True)
    description: Text()
    stock_quantity: Integer(default=0, min_value=0)
    ingredients: Text()
    handmade_process: Text()
    images: Text()  # JSON array of image URLs


@marketplace.command(part_of="Product")
class UpdateProduct:
    """Edit a product. Fields left empty are kept; `images` replaces the whole list."""

    product_id: Identifier(required=True)
    user_id: Identifier(required=True)
    title: String(max_length=255)
    description: Text()
    category_id: Identifier()
    price: Float()
    stock_quantity: Integer(min_value=0)
    ingredients: Text()
    handmade_process: Text()
    is_available: Boolean()
    images: Text()


@marketplace.command(part_of="Product")
class ToggleProductAvailability:
    product_id: Identifier(required=True)
    user_id: Identifier(required=True)


def upload_product_images(user_id, files):
    """Upload (filename, content) pairs and return their URLs in the same order."""
    storage = get_storage()
    return [storage.upload(content, product_image_path(user_id, filename)) for filename, content in files]


def _assert_category_exists(category_id):
    found = current_domain.repository_for(Category)._dao.query.filter(id=str(category_id)).all().items
    if not found:
        raise ValidationError({"category_id": ["Unknown category"]})


def _owned_product(product_id, user_id):
    product = current_domain.repository_for(Product).get(product_id)
    if not product.is_owned_by(user_id):
        raise ValidationError({"product": ["Only the owning seller can change this product"]})
    return product


@marketplace.command_handler(part_of=Product)
class ProductListingHandler:
    @handle(AddProduct)
    def add_product(self, command):
        sellers = current_domain.repository_for(Seller)._dao.query.filter(user_id=str(command.user_id)).all().items
        if not sellers:
            raise ValidationError({"seller": ["Seller profile not found"]})
        _assert_category_exists(command.category_id)

        product = Product.create(
            seller_id=str(sellers[0].id),
            user_id=command.user_id,
            title=command.title,
            category_id=command.category_id,
            price=command.price,
            description=command.description,
            stock_quantity=command.stock_quantity or 0,
            ingredients=command.ingredients,
            handmade_process=command.handmade_process,
            images=json.loads(command.images) if command.images else [],
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_added", product_id=str(product.id), seller_id=str(product.seller_id))
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        product = _owned_product(command.product_id, command.user_id)
        if command.category_id is not None:
            _assert_category_exists(command.category_id)

        changes = {
            name: getattr(command, name) for name in EDITABLE_FIELDS if getattr(command, name) is not None
        }
        if command.images is not None:
            changes["images"] = json.loads(command.images)

        product.update_details(**changes)
        current_domain.repository_for(Product).add(product)

    @handle(ToggleProductAvailability)
    def toggle_availability(self, command):
        product = _owned_product(command.product_id, command.user_id)
        product.toggle_availability()
        current_domain.repository_for(Product).add(product)
        return product.is_available
