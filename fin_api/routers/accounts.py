from fastapi import APIRouter, Depends, Request, Response, status

from fin_api.dependencies import authorize, get_account_usecase
from fin_api.errors import FinApiError
from fin_api.models import account as account_models
from fin_api.routers.common import PageParam, RowId, http_error, query_filters
from fin_api.usecase import AccountUsecase

router = APIRouter(
    prefix="/account",
    tags=["accounts"],
    dependencies=[Depends(authorize)],
)


@router.get("", response_model=account_models.AccountList)
async def read_accounts(
    request: Request,
    limit: PageParam,
    offset: PageParam,
    keyword: str = "",
    usecase: AccountUsecase = Depends(get_account_usecase),
):
    """
    List active accounts. Any query parameter other than limit, offset and
    keyword filters on the field of the same name.
    """
    try:
        accounts, total = await usecase.fetch_all(query_filters(request), keyword, limit, offset)
    except FinApiError as e:
        raise http_error(e) from e
    return {"data": accounts, "total": total}


@router.get("/{account_id}", response_model=account_models.Account)
async def read_account(
    account_id: RowId,
    usecase: AccountUsecase = Depends(get_account_usecase),
):
    try:
        return await usecase.fetch_by_id(account_id)
    except FinApiError as e:
        raise http_error(e) from e


@router.post("", response_model=account_models.Account, status_code=status.HTTP_201_CREATED)
async def create_account(
    account: account_models.AccountCreate,
    usecase: AccountUsecase = Depends(get_account_usecase),
):
    try:
        return await usecase.create(account)
    except FinApiError as e:
        raise http_error(e) from e


@router.patch("/{account_id}", response_model=account_models.Account)
async def update_account(
    account_id: RowId,
    account: account_models.AccountUpdate,
    usecase: AccountUsecase = Depends(get_account_usecase),
):
    """
    Update the provided fields of an active account.
    """
    try:
        return await usecase.update(account_id, account)
    except FinApiError as e:
        raise http_error(e) from e


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    account_id: RowId,
    usecase: AccountUsecase = Depends(get_account_usecase),
):
    """
    Soft delete: the account is flagged inactive and disappears from reads.
    """
    try:
        await usecase.delete(account_id)
    except FinApiError as e:
        raise http_error(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
