from fin_api.usecase.accounts import AccountUsecase
from fin_api.usecase.transactions import TransactionUsecase
from fin_api.usecase.users import UserUsecase

__all__ = ["AccountUsecase", "TransactionUsecase", "UserUsecase"]
