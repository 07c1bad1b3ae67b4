"""Product aggregate: a handmade item offered by exactly one seller.

Images are stored as a JSON array of public URLs; the first URL is the
cover image. Rating fields are maintained by the review workflow.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from craftmarket.catalogue.events import (
    ProductAdded,
    ProductAvailabilityToggled,
    ProductRated,
    ProductUpdated,
)
from craftmarket.domain import marketplace
from craftmarket.shared.ratings import running_mean

_UNSET = object()

# Fields a seller may change through an edit
EDITABLE_FIELDS = (
    "title",
    "description",
    "category_id",
    "price",
    "stock_quantity",
    "ingredients",
    "handmade_process",
    "is_available",
)


@marketplace.aggregate
class Product:
    seller_id: Identifier(required=True)
    user_id: Identifier(required=True)
    title: String(required=True, max_length=255)
    description: Text()
    category_id: Identifier(required=True)
    price: Float(required=True)
    images: Text()  # JSON array of image URLs, cover first
    ingredients: Text()
    handmade_process: Text()
    is_available: Boolean(default=True)
    stock_quantity: Integer(default=0, min_value=0)
    rating_average: Float(default=0.0)
    total_reviews: Integer(default=0)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["Price must be greater than zero"]})

    @invariant.post
    def images_must_be_a_list_of_urls(self):
        if not self.images:
            return
        try:
            urls = json.loads(self.images)
        except ValueError:
            raise ValidationError({"images": ["Images must be a JSON list of URLs"]})
        if not isinstance(urls, list) or not all(isinstance(url, str) for url in urls):
            raise ValidationError({"images": ["Images must be a JSON list of URLs"]})

    @classmethod
    def create(
        cls,
        seller_id,
        user_id,
        title,
        category_id,
        price,
        description=None,
        stock_quantity=0,
        ingredients=None,
        handmade_process=None,
        images=None,
    ):
        now = datetime.now(UTC)
        product = cls(
            seller_id=seller_id,
            user_id=user_id,
            title=title,
            description=description,
            category_id=category_id,
            price=price,
            stock_quantity=stock_quantity,
            ingredients=ingredients,
            handmade_process=handmade_process,
            images=json.dumps(list(images or [])),
            is_available=True,
            rating_average=0.0,
            total_reviews=0,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                seller_id=seller_id,
                title=title,
                category_id=category_id,
                price=price,
                added_at=now,
            )
        )
        return product

    @property
    def image_urls(self):
        return json.loads(self.images) if self.images else []

    @property
    def cover_image(self):
        urls = self.image_urls
        return urls[0] if urls else None

    def is_owned_by(self, user_id):
        return str(self.user_id) == str(user_id)

    def update_details(self, images=_UNSET, **changes):
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError({"product": [f"Fields cannot be edited: {', '.join(sorted(unknown))}"]})

        for field, value in changes.items():
            setattr(self, field, value)
        if images is not _UNSET:
            self.images = json.dumps(list(images or []))

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(ProductUpdated(product_id=self.id, updated_at=now))

    def toggle_availability(self):
        """Flip the availability flag and nothing else."""
        self.is_available = not self.is_available
        self.raise_(
            ProductAvailabilityToggled(
                product_id=self.id,
                is_available=self.is_available,
            )
        )

    def record_rating(self, rating):
        self.rating_average = running_mean(self.rating_average, self.total_reviews, rating)
        self.total_reviews = (self.total_reviews or 0) + 1
        self.raise_(
            ProductRated(
                product_id=self.id,
                rating=rating,
                rating_average=self.rating_average,
                total_reviews=self.total_reviews,
            )
        )
