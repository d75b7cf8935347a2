from decimal import Decimal

import pytest

from paygate.infrastructure.database.repositories import SqlTradeRepository
from paygate.modules.payments import TokenCollisionError, TradeLedger, TradeNotFoundError, TradeStatus


async def _create(ledger: TradeLedger, user_id: str = "user-1", invoice_id: str = "inv-1"):
    return await ledger.create(user_id=user_id, amount=Decimal("50"), invoice_id=invoice_id, gateway="stripe")


class TestCreate:
    async def test_new_trade_is_pending(self, session):
        trade = await _create(TradeLedger.with_session(session))

        assert trade.status is TradeStatus.PENDING
        assert trade.amount == Decimal("50")
        assert trade.gateway == "stripe"
        assert trade.trade_no
        assert trade.paid_at is None

    async def test_trade_numbers_are_distinct(self, session):
        ledger = TradeLedger.with_session(session)
        trades = [await _create(ledger, invoice_id=f"inv-{i}") for i in range(50)]

        assert len({trade.trade_no for trade in trades}) == 50

    async def test_collision_is_fatal(self, session):
        ledger = TradeLedger(SqlTradeRepository(session), token_factory=lambda: "fixed-trade-no")
        await _create(ledger)
        await session.commit()

        with pytest.raises(TokenCollisionError):
            await _create(ledger, invoice_id="inv-2")


class TestLookup:
    async def test_find_by_token(self, session):
        ledger = TradeLedger.with_session(session)
        created = await _create(ledger)

        found = await ledger.find_by_token(created.trade_no)
        assert found.id == created.id

    async def test_unknown_token(self, session):
        with pytest.raises(TradeNotFoundError):
            await TradeLedger.with_session(session).find_by_token("missing")

    async def test_list_for_user(self, session):
        ledger = TradeLedger.with_session(session)
        await _create(ledger, user_id="user-1")
        await _create(ledger, user_id="user-2")

        trades = await ledger.list_for_user("user-1")
        assert [trade.user_id for trade in trades] == ["user-1"]


class TestTransitionToPaid:
    async def test_pending_trade_becomes_paid(self, session):
        ledger = TradeLedger.with_session(session)
        trade = await _create(ledger)

        assert await ledger.transition_to_paid(trade.trade_no) is True
        paid = await ledger.find_by_token(trade.trade_no)
        assert paid.status is TradeStatus.PAID
        assert paid.paid_at is not None

    async def test_second_transition_is_rejected(self, session):
        ledger = TradeLedger.with_session(session)
        trade = await _create(ledger)

        assert await ledger.transition_to_paid(trade.trade_no) is True
        assert await ledger.transition_to_paid(trade.trade_no) is False

    async def test_unknown_trade(self, session):
        assert await TradeLedger.with_session(session).transition_to_paid("missing") is False

    async def test_redelivery_through_separate_sessions(self, session, session_factory):
        trade = await _create(TradeLedger.with_session(session))
        await session.commit()

        results = []
        for _ in range(2):
            async with session_factory() as delivery_session:
                results.append(await TradeLedger.with_session(delivery_session).transition_to_paid(trade.trade_no))
                await delivery_session.commit()

        assert results == [True, False]
