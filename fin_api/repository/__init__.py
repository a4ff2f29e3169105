from fin_api.repository.interfaces import AccountRepository, TransactionRepository, UserRepository
from fin_api.repository.accounts import SQLAccountRepository
from fin_api.repository.transactions import SQLTransactionRepository
from fin_api.repository.users import SQLUserRepository

__all__ = [
    "AccountRepository",
    "TransactionRepository",
    "UserRepository",
    "SQLAccountRepository",
    "SQLTransactionRepository",
    "SQLUserRepository",
]
