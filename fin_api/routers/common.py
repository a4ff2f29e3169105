from typing import Annotated, Any, Dict

from fastapi import HTTPException, Path, Query, Request, status

from fin_api.errors import BadParamInput, Conflict, InternalServerError, NotFound
from fin_api.logging_config import get_logger
from fin_api.models.base import MAX_INTEGER, MIN_INTEGER

logger = get_logger(__name__)


STATUS_CODES = {
    NotFound: status.HTTP_404_NOT_FOUND,
    Conflict: status.HTTP_409_CONFLICT,
    BadParamInput: status.HTTP_400_BAD_REQUEST,
    InternalServerError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Query parameters with a structural meaning on list endpoints
RESERVED_PARAMS = ("limit", "offset", "keyword")

# Integers the store can hold; anything wider is rejected as bad input
RowId = Annotated[int, Path(ge=MIN_INTEGER, le=MAX_INTEGER)]
PageParam = Annotated[int, Query(ge=0, le=MAX_INTEGER)]


def get_status_code(error: Exception) -> int:
    if error is None:
        return status.HTTP_200_OK
    return STATUS_CODES.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)


def http_error(error: Exception) -> HTTPException:
    """Translate a domain error into its HTTP response, logging it on the way"""
    status_code = get_status_code(error)
    logger.error(f"{type(error).__name__}: {error}")
    return HTTPException(status_code=status_code, detail=str(error))


def query_filters(request: Request) -> Dict[str, Any]:
    """Every non-reserved query parameter is an equality filter (first value wins)"""
    params = request.query_params
    return {
        key: params.getlist(key)[0]
        for key in params.keys()
        if key not in RESERVED_PARAMS
    }
