"""
Tests for the SQL repositories against a real SQLite database

Covers storage round trips, status decoding, soft deletes, filter and keyword
pagination, and the daily/monthly summary aggregation.
"""

from datetime import datetime

import pytest
from sqlalchemy import inspect

from fin_api.db.core import AccountDB, TransactionDB
from fin_api.errors import BadParamInput, InternalServerError, NotFound
from fin_api.models.account import Account
from fin_api.models.transaction import Transaction, TransactionAccount
from fin_api.models.user import User
from fin_api.repository import SQLAccountRepository, SQLTransactionRepository, SQLUserRepository


NOW = datetime(2024, 3, 15, 10, 30)


def _account(name="Main", type_="bank", description="Daily spending") -> Account:
    return Account(name=name, type=type_, description=description, created_at=NOW, updated_at=NOW)


def _transaction(account_id, name="Coffee", type_="out", amount=3.5, created_at=NOW) -> Transaction:
    return Transaction(
        name=name,
        type=type_,
        description="test",
        amount_in=amount if type_ == "in" else 0,
        amount_out=amount if type_ == "out" else 0,
        account=TransactionAccount(id=account_id),
        created_at=created_at,
        updated_at=created_at,
    )


class TestSchema:

    def test_tables_declare_no_lazy_relationships(self):
        # joins are explicit in the repositories
        assert not inspect(AccountDB).relationships
        assert not inspect(TransactionDB).relationships


class TestUserRepository:

    @pytest.mark.asyncio
    async def test_store_and_fetch(self, session):
        repo = SQLUserRepository(session)
        user = User(email="A@B.com", password="digest", name="A", created_at=NOW, updated_at=NOW)

        user_id = await repo.store(user)

        by_id = await repo.fetch_by_id(user_id)
        by_email = await repo.fetch_by_email("a@b.com")
        assert by_id.email == "a@b.com"
        assert by_email.id == user_id
        assert by_id.status == "active"
        assert by_id.password == "digest"

    @pytest.mark.asyncio
    async def test_missing_user_not_found(self, session):
        repo = SQLUserRepository(session)
        with pytest.raises(NotFound):
            await repo.fetch_by_id(999)
        with pytest.raises(NotFound):
            await repo.fetch_by_email("nobody@example.com")


class TestAccountRepository:

    @pytest.mark.asyncio
    async def test_round_trip(self, session):
        repo = SQLAccountRepository(session)
        account_id = await repo.store(_account())

        fetched = await repo.fetch_by_id(account_id)
        assert fetched.name == "Main"
        assert fetched.type == "bank"
        assert fetched.description == "Daily spending"
        assert fetched.status == "active"
        assert fetched.created_at == NOW

    @pytest.mark.asyncio
    async def test_soft_delete_hides_account(self, session):
        repo = SQLAccountRepository(session)
        keep_id = await repo.store(_account(name="Keep"))
        drop_id = await repo.store(_account(name="Drop"))

        await repo.delete(drop_id)

        with pytest.raises(NotFound):
            await repo.fetch_by_id(drop_id)
        rows, total = await repo.fetch_all({}, "", 10, 0)
        assert total == 1
        assert [a.id for a in rows] == [keep_id]

    @pytest.mark.asyncio
    async def test_empty_table_total_is_zero(self, session):
        rows, total = await SQLAccountRepository(session).fetch_all({}, "", 10, 0)
        assert rows == []
        assert total == 0

    @pytest.mark.asyncio
    async def test_filters_keyword_and_pagination(self, session):
        repo = SQLAccountRepository(session)
        for name, type_ in [("Main Savings", "bank"), ("Holiday Savings", "bank"),
                            ("Wallet", "cash"), ("Savings Jar", "cash")]:
            await repo.store(_account(name=name, type_=type_))

        rows, total = await repo.fetch_all({"type": "bank"}, "Savings", 1, 0)
        assert total == 2
        assert len(rows) == 1

        rows, total = await repo.fetch_all({"type": "bank"}, "Savings", 10, 1)
        assert total == 2
        assert [a.name for a in rows] == ["Holiday Savings"]

        rows, total = await repo.fetch_all({}, "Savings", 10, 0)
        assert total == 3
        assert len(rows) == total

    @pytest.mark.asyncio
    async def test_filter_order_independent(self, session):
        repo = SQLAccountRepository(session)
        await repo.store(_account(name="A", type_="bank", description="x"))
        await repo.store(_account(name="A", type_="cash", description="x"))

        first, _ = await repo.fetch_all({"name": "A", "type": "cash"}, "", 10, 0)
        second, _ = await repo.fetch_all({"type": "cash", "name": "A"}, "", 10, 0)
        assert [a.id for a in first] == [a.id for a in second]
        assert len(first) == 1

    @pytest.mark.asyncio
    async def test_hostile_values_match_nothing(self, session):
        repo = SQLAccountRepository(session)
        await repo.store(_account())

        rows, total = await repo.fetch_all({"name": "\" OR 1=1 --"}, "' OR '1'='1", 10, 0)
        assert rows == []
        assert total == 0

    @pytest.mark.asyncio
    async def test_keyword_wildcards_are_literal(self, session):
        repo = SQLAccountRepository(session)
        await repo.store(_account(name="Main"))

        _, total = await repo.fetch_all({}, "%", 10, 0)
        assert total == 0

    @pytest.mark.asyncio
    async def test_unknown_filter_rejected(self, session):
        with pytest.raises(BadParamInput):
            await SQLAccountRepository(session).fetch_all({"colour": "red"}, "", 10, 0)

    @pytest.mark.asyncio
    async def test_update_changes_fields(self, session):
        repo = SQLAccountRepository(session)
        account_id = await repo.store(_account())
        account = await repo.fetch_by_id(account_id)

        await repo.update(account.model_copy(update={"name": "Renamed"}))

        assert (await repo.fetch_by_id(account_id)).name == "Renamed"

    @pytest.mark.asyncio
    async def test_update_inactive_account_fails(self, session):
        repo = SQLAccountRepository(session)
        account_id = await repo.store(_account())
        account = await repo.fetch_by_id(account_id)
        await repo.delete(account_id)

        with pytest.raises(InternalServerError):
            await repo.update(account)


class TestTransactionRepository:

    @pytest.mark.asyncio
    async def test_fetch_denormalizes_account(self, session):
        account_id = await SQLAccountRepository(session).store(_account(name="Wallet", type_="cash"))
        repo = SQLTransactionRepository(session)

        transaction_id = await repo.store(_transaction(account_id, type_="in", amount=20))
        fetched = await repo.fetch_by_id(transaction_id)

        assert fetched.amount_in == 20
        assert fetched.amount_out == 0
        assert fetched.status == "active"
        assert fetched.account.id == account_id
        assert fetched.account.name == "Wallet"
        assert fetched.account.type == "cash"
        assert fetched.account.status == "active"

    @pytest.mark.asyncio
    async def test_account_status_decoded_independently(self, session):
        accounts = SQLAccountRepository(session)
        account_id = await accounts.store(_account())
        repo = SQLTransactionRepository(session)
        transaction_id = await repo.store(_transaction(account_id))

        await accounts.delete(account_id)

        fetched = await repo.fetch_by_id(transaction_id)
        assert fetched.status == "active"
        assert fetched.account.status == "inactive"

    @pytest.mark.asyncio
    async def test_filter_by_account(self, session):
        accounts = SQLAccountRepository(session)
        first = await accounts.store(_account(name="First"))
        second = await accounts.store(_account(name="Second"))
        repo = SQLTransactionRepository(session)
        await repo.store(_transaction(first))
        await repo.store(_transaction(first, type_="in"))
        await repo.store(_transaction(second))

        rows, total = await repo.fetch_all({"accountId": str(first)}, "", 10, 0)
        assert total == 2
        assert {t.account.id for t in rows} == {first}

        rows, total = await repo.fetch_all({"accountId": str(first), "type": "in"}, "", 10, 0)
        assert total == 1
        assert rows[0].type == "in"

    @pytest.mark.asyncio
    async def test_soft_delete(self, session):
        account_id = await SQLAccountRepository(session).store(_account())
        repo = SQLTransactionRepository(session)
        transaction_id = await repo.store(_transaction(account_id))

        await repo.delete(transaction_id)

        with pytest.raises(NotFound):
            await repo.fetch_by_id(transaction_id)
        assert await repo.fetch_all({}, "", 10, 0) == ([], 0)

    @pytest.mark.asyncio
    async def test_daily_and_monthly_summary(self, session):
        account_id = await SQLAccountRepository(session).store(_account())
        repo = SQLTransactionRepository(session)
        first_day = datetime(2024, 1, 5, 9, 0)
        second_day = datetime(2024, 1, 20, 18, 0)
        next_month = datetime(2024, 2, 1, 8, 0)

        await repo.store(_transaction(account_id, type_="in", amount=100, created_at=first_day))
        await repo.store(_transaction(account_id, type_="in", amount=200, created_at=first_day))
        await repo.store(_transaction(account_id, type_="out", amount=50, created_at=first_day))
        await repo.store(_transaction(account_id, type_="in", amount=30, created_at=second_day))
        deleted_id = await repo.store(_transaction(account_id, type_="out", amount=10, created_at=next_month))
        await repo.delete(deleted_id)

        daily = await repo.daily_summary()
        assert [(d.year, d.month, d.day) for d in daily] == [(2024, 1, 5), (2024, 1, 20), (2024, 2, 1)]
        assert daily[0].average_in == pytest.approx(150)
        assert daily[0].average_out == pytest.approx(50)
        assert daily[1].average_in == pytest.approx(30)
        assert daily[1].average_out is None
        # inactive rows still count towards summaries
        assert daily[2].average_out == pytest.approx(10)

        monthly = await repo.monthly_summary()
        assert [(m.year, m.month) for m in monthly] == [(2024, 1), (2024, 2)]
        assert monthly[0].average_in == pytest.approx(110)
        assert monthly[0].average_out == pytest.approx(50)
        assert monthly[1].average_in is None

    @pytest.mark.asyncio
    async def test_summary_of_empty_table(self, session):
        repo = SQLTransactionRepository(session)
        assert await repo.daily_summary() == []
        assert await repo.monthly_summary() == []
