from typing import Annotated

from sdk.codefirst_sdk.annotations import content_type
from sdk.codefirst_sdk.validations import LinkContentType, Size

from .products import Product


@content_type(id="order", order=1)
class Order:
    number: int
    products: Annotated[list[Product], Size(min=1), LinkContentType("product")]
