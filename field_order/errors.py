"""Error taxonomy for the order form."""

from __future__ import annotations


class OrderFormError(Exception):
    """Base class for errors surfaced to the user as a notice."""

    title = "Error"


class InitializationFailure(OrderFormError):
    """Catalog fetch or parse failed."""

    title = "Initialization Error"


class PermissionDenied(OrderFormError):
    """Location or storage permission was not granted."""

    title = "Permission Denied"


class WriteFailure(OrderFormError):
    """Saving the export file failed; callers fall back to sharing."""

    title = "Save Failed"


class ShareFailure(OrderFormError):
    """The share action failed. Nothing else is attempted."""

    title = "Export Failed"


class NoProductsSelected(OrderFormError):
    title = "No Products"

    def __init__(self, message: str = "Please add quantities to at least one product") -> None:
        super().__init__(message)


class LocationUnavailable(OrderFormError):
    """A position could not be read."""

    title = "Location Unavailable"
