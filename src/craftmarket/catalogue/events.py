"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from craftmarket.domain import marketplace


@marketplace.event(part_of="Product")
class ProductAdded:
    """A seller listed a new product."""

    __version__ = 1

    product_id: Identifier(required=True)
    seller_id: Identifier(required=True)
    title: String(required=True)
    category_id: Identifier(required=True)
    price: Float(required=True)
    added_at: DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductUpdated:
    """A seller edited a product's details, price, stock or images."""

    __version__ = 1

    product_id: Identifier(required=True)
    updated_at: DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductAvailabilityToggled:
    """A product was shown to or hidden from buyers."""

    __version__ = 1

    product_id: Identifier(required=True)
    is_available: Boolean(required=True)


@marketplace.event(part_of="Product")
class ProductRated:
    """A review was folded into the product's rating."""

    __version__ = 1

    product_id: Identifier(required=True)
    rating: Integer(required=True)
    rating_average: Float(required=True)
    total_reviews: Integer(required=True)
