"""Order number generation."""

import os
from uuid import uuid4

DEFAULT_ORDER_NUMBER_PREFIX = "CRFT-"


def order_number_prefix():
    return os.environ.get("ORDER_NUMBER_PREFIX", DEFAULT_ORDER_NUMBER_PREFIX)


def generate_order_number():
    """Prefix followed by 12 upper-case hex characters of a UUID4.

    Uniqueness is enforced by the `unique` constraint on Order.order_number.
    """
    return f"{order_number_prefix()}{uuid4().hex[:12].upper()}"
