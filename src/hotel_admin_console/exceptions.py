"""Domain exceptions for the hotel admin console.

Storage failures are not raised; repositories report them through None/False
return values. Exceptions are reserved for input the store refuses to commit.
"""


class HotelAdminError(Exception):
    """Base class for hotel admin console errors."""


class ValidationError(HotelAdminError, ValueError):
    """Raised when a value cannot be committed to the entity store.

    Typically an unparseable, non-finite or negative menu item price.
    """
