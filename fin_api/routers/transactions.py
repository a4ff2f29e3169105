from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from fin_api.dependencies import authorize, get_transaction_usecase
from fin_api.errors import FinApiError
from fin_api.models.transaction import (
    SummaryDaily,
    SummaryMonthly,
    Transaction,
    TransactionList,
    TransactionRequest,
)
from fin_api.routers.common import PageParam, RowId, http_error, query_filters
from fin_api.usecase import TransactionUsecase

router = APIRouter(
    prefix="/transaction",
    tags=["transactions"],
    dependencies=[Depends(authorize)],
)


@router.get("", response_model=TransactionList)
async def read_transactions(
    request: Request,
    limit: PageParam,
    offset: PageParam,
    keyword: str = "",
    usecase: TransactionUsecase = Depends(get_transaction_usecase),
):
    """
    List active transactions. Extra query parameters are equality filters,
    e.g. `type=out` or `accountId=3`.
    """
    try:
        transactions, total = await usecase.fetch_all(query_filters(request), keyword, limit, offset)
    except FinApiError as e:
        raise http_error(e) from e
    return {"data": transactions, "total": total}


@router.get("/daily", response_model=List[SummaryDaily])
async def read_daily_summary(usecase: TransactionUsecase = Depends(get_transaction_usecase)):
    try:
        return await usecase.daily_summary()
    except FinApiError as e:
        raise http_error(e) from e


@router.get("/monthly", response_model=List[SummaryMonthly])
async def read_monthly_summary(usecase: TransactionUsecase = Depends(get_transaction_usecase)):
    try:
        return await usecase.monthly_summary()
    except FinApiError as e:
        raise http_error(e) from e


@router.get("/{transaction_id}", response_model=Transaction)
async def read_transaction(
    transaction_id: RowId,
    usecase: TransactionUsecase = Depends(get_transaction_usecase),
):
    try:
        return await usecase.fetch_by_id(transaction_id)
    except FinApiError as e:
        raise http_error(e) from e


@router.post("", response_model=Transaction, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    payload: TransactionRequest,
    usecase: TransactionUsecase = Depends(get_transaction_usecase),
):
    """
    Create a transaction. `type` "in" fills amountIn, "out" fills amountOut.
    """
    try:
        return await usecase.create(payload.to_transaction())
    except FinApiError as e:
        raise http_error(e) from e


@router.patch("/{transaction_id}", response_model=Transaction)
async def update_transaction(
    transaction_id: RowId,
    payload: TransactionRequest,
    usecase: TransactionUsecase = Depends(get_transaction_usecase),
):
    try:
        return await usecase.update(payload.to_transaction(transaction_id))
    except FinApiError as e:
        raise http_error(e) from e


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: RowId,
    usecase: TransactionUsecase = Depends(get_transaction_usecase),
):
    try:
        await usecase.delete(transaction_id)
    except FinApiError as e:
        raise http_error(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
