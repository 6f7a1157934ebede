"""Error taxonomy shared by every store and the order placement workflow.

Each error carries the HTTP status it maps to. The API layer turns any
``ShopError`` into ``{"error": message}`` with that status.
"""


class ShopError(Exception):
    """Base class for all errors raised by the shop's stores and workflows."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ShopError):
    """Bad or missing input, detected before any write."""

    status_code = 400


class NotFoundError(ShopError):
    """A referenced entity does not exist."""

    status_code = 404


class InsufficientStockError(ShopError):
    """Requested quantity exceeds the product's current stock."""

    status_code = 400

    def __init__(self, product_id: str, product_name: str) -> None:
        super().__init__(f"Insufficient stock for {product_name}")
        self.product_id = product_id
        self.product_name = product_name


class PersistenceError(ShopError):
    """The storage layer failed while reading or writing."""

    status_code = 500


class InvalidOperationError(ShopError):
    """A unit of work was used outside of its active lifetime."""

    status_code = 500
