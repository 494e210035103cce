"""
Domain errors raised by the services layer.
Routers translate them into HTTP responses.
"""


class CaloricsError(Exception):
    """Base class for every domain failure."""
    pass


class UnknownFoodError(CaloricsError):
    """Raised when a food id does not exist in the catalog"""
    pass


class UnknownServingError(CaloricsError):
    """Raised when a serving description does not belong to the food"""
    pass


class BadDateError(CaloricsError):
    """Raised when a date is not in YYYY-MM-DD format"""
    pass


class NotFoundError(CaloricsError):
    """Raised when an entry or set is absent or owned by someone else"""
    pass


class EmailTakenError(CaloricsError):
    pass


class InvalidCredentialsError(CaloricsError):
    pass


class CatalogSeedError(CaloricsError):
    """Raised when the catalog is empty and the CSV seed cannot be read"""
    pass
