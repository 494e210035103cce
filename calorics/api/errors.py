from fastapi import HTTPException, status

from calorics.services.errors import (
    BadDateError,
    CaloricsError,
    EmailTakenError,
    InvalidCredentialsError,
    NotFoundError,
    UnknownFoodError,
    UnknownServingError,
)

INTERNAL_ERROR = "Internal server error"


def to_http_error(exc: CaloricsError) -> HTTPException:
    """
    Map a domain error onto the status code and message clients see.
    """
    if isinstance(exc, UnknownFoodError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid food ID")
    if isinstance(exc, UnknownServingError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid serving size")
    if isinstance(exc, (BadDateError, EmailTakenError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, InvalidCredentialsError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR)


def internal_error() -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR)
