"""Generic record access over the marketplace's named collections.

Each collection is backed by a Protean aggregate, so every record read or
written through the client is decoded and validated against that aggregate's
schema. Filtering is equality-only; ordering takes a field name with an
optional leading `-` for descending order.
"""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from protean.utils.reflection import declared_fields

from craftmarket.catalogue.category import Category
from craftmarket.catalogue.product import Product
from craftmarket.identity.seller import Seller
from craftmarket.identity.user import User
from craftmarket.ordering.cart.cart import ShoppingCart
from craftmarket.ordering.checkout.checkout import Checkout
from craftmarket.ordering.order.order import Order
from craftmarket.reviews.review.review import Review
from craftmarket.utils.logging import get_logger

logger = get_logger(__name__)

COLLECTIONS = {
    "users": User,
    "sellers": Seller,
    "products": Product,
    "categories": Category,
    "carts": ShoppingCart,
    "orders": Order,
    "checkouts": Checkout,
    "reviews": Review,
}


class StoreClient:
    """CRUD accessor for the marketplace collections."""

    def __init__(self, domain=None):
        self._domain = domain

    @property
    def domain(self):
        return self._domain or current_domain

    def aggregate_for(self, collection):
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValidationError({"collection": [f"Unknown collection: {collection}"]})

    def _repository(self, collection):
        return self.domain.repository_for(self.aggregate_for(collection))

    def _check_fields(self, collection, names, key):
        known = declared_fields(self.aggregate_for(collection))
        unknown = sorted(name for name in names if name.lstrip("-") not in known)
        if unknown:
            raise ValidationError({key: [f"Unknown field(s) for {collection}: {', '.join(unknown)}"]})

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def get(self, collection, record_id):
        """Fetch one record. Raises ObjectNotFoundError if it does not exist."""
        return self._repository(collection).get(record_id)

    def list(self, collection, filters=None, order_by=None, limit=None):
        filters = filters or {}
        self._check_fields(collection, filters.keys(), "filters")

        query = self._repository(collection)._dao.query.filter(**filters)
        if order_by:
            self._check_fields(collection, [order_by], "order_by")
            query = query.order_by(order_by)
        # None lifts the aggregate default page size
        query = query.limit(limit)
        return query.all().items

    def first(self, collection, filters=None, order_by=None):
        records = self.list(collection, filters=filters, order_by=order_by, limit=1)
        return records[0] if records else None

    # -------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------
    def create(self, collection, fields):
        self._check_fields(collection, fields.keys(), "fields")

        record = self.aggregate_for(collection)(**fields)
        self._repository(collection).add(record)
        return record

    def create_many(self, collection, records):
        return [self.create(collection, fields) for fields in records]

    def update(self, collection, record_id, fields):
        self._check_fields(collection, fields.keys(), "fields")

        repo = self._repository(collection)
        record = repo.get(record_id)
        for name, value in fields.items():
            setattr(record, name, value)
        repo.add(record)
        return record

    def delete(self, collection, record_id):
        repo = self._repository(collection)
        record = repo.get(record_id)
        repo._dao.delete(record)

    def delete_many(self, collection, filters):
        """Delete every record matching `filters` and return how many went."""
        repo = self._repository(collection)
        deleted = 0
        while True:
            batch = self.list(collection, filters=filters)
            if not batch:
                break
            for record in batch:
                repo._dao.delete(record)
            deleted += len(batch)

        logger.debug("store_records_deleted", collection=collection, count=deleted)
        return deleted
