"""Run scripts' main() against the in-memory database and check their output."""
import random
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
import requests
import stripe
from sqlalchemy import func, select

from conftest import failing_update, make_challenge, make_user
from models import Bot, Challenge, ChallengeTrade, PendingOrder, PlanHistory, Trade, User, UserChallengeStats
from scripts import (
    add_tokens_to_all_users,
    api_trades_smoke,
    check_bot_stats,
    check_challenge_trades,
    check_expired_challenges,
    check_pending_orders,
    check_user_trades,
    check_users,
    close_open_trade,
    create_token_transaction_table,
    list_trades,
    mock_pix_preview,
    seed_challenge_stats,
    seed_plan_history,
    seed_trades,
    simulate_trade,
    stripe_connection_check,
    stripe_payment_flow,
    stripe_pix_check,
    update_user_tokens,
    verify_token_logic,
)
from tokens import get_stats


@pytest.fixture
def use_db(db):
    """Point a script module at the test database."""
    patches = []

    def _use(module):
        p1 = patch.object(module, "get_db", return_value=db)
        p2 = patch.object(module, "close_db")
        patches.extend([p1, p2])
        p1.start()
        return p2.start()

    yield _use
    for p in patches:
        p.stop()


def test_add_tokens_to_all_users(db, use_db, capsys):
    with db.session() as s:
        make_user(s, tokens=0)
        make_user(s, tokens=500)
    close = use_db(add_tokens_to_all_users)

    assert add_tokens_to_all_users.main([]) == 0

    assert "Added 1000 tokens to 2 users" in capsys.readouterr().out
    close.assert_called_once()
    with db.session() as s:
        assert sorted(s.scalars(select(UserChallengeStats.tokens)).all()) == [1000, 1500]


def test_script_failure_returns_nonzero_and_disposes(use_db):
    close = use_db(add_tokens_to_all_users)
    with patch.object(add_tokens_to_all_users, "grant_tokens", side_effect=RuntimeError("db down")):
        assert add_tokens_to_all_users.main([]) == 1
    close.assert_called_once()


def test_update_user_tokens(db, use_db, capsys):
    with db.session() as s:
        make_user(s, name="Ana", tokens=12)
        make_user(s, name="Bia")
    use_db(update_user_tokens)

    assert update_user_tokens.main(["--amount", "1000"]) == 0

    out = capsys.readouterr().out
    assert "Found 2 active users" in out
    assert "User Ana updated with 1000 tokens" in out
    with db.session() as s:
        assert s.scalars(select(UserChallengeStats.tokens)).all() == [1000, 1000]


def test_check_expired_challenges(db, use_db, capsys):
    with db.session() as s:
        a, b = make_user(s), make_user(s)
        make_challenge(s, a, b, end_date=datetime(2020, 1, 1), end_time="10:00")
    use_db(check_expired_challenges)

    assert check_expired_challenges.main() == 0

    assert "1 expired challenges updated" in capsys.readouterr().out
    with db.session() as s:
        assert s.scalars(select(Challenge.status)).all() == ["completed"]


def test_check_expired_challenges_none_found(db, use_db, capsys):
    use_db(check_expired_challenges)
    assert check_expired_challenges.main() == 0
    assert "No expired challenges found" in capsys.readouterr().out


def test_create_token_transaction_table_reports_existing(capsys):
    fake_db = MagicMock()
    fake_db.ensure_token_transaction_table.return_value = False
    with patch.object(create_token_transaction_table, "get_db", return_value=fake_db), \
         patch.object(create_token_transaction_table, "close_db") as close:
        assert create_token_transaction_table.main() == 0
    assert "already exists" in capsys.readouterr().out
    close.assert_called_once()


def test_create_token_transaction_table_fails_on_other_errors():
    fake_db = MagicMock()
    fake_db.ensure_token_transaction_table.side_effect = RuntimeError("permission denied")
    with patch.object(create_token_transaction_table, "get_db", return_value=fake_db), \
         patch.object(create_token_transaction_table, "close_db"):
        assert create_token_transaction_table.main() == 1


def test_check_users_suggests_seed_when_no_stats(db, use_db, capsys):
    with db.session() as s:
        make_user(s, name="Ana")
    use_db(check_users)

    assert check_users.main() == 0

    out = capsys.readouterr().out
    assert "Total users: 1" in out
    assert "seed_challenge_stats" in out


def test_check_bot_stats_flags_orphans(db, use_db, capsys):
    with db.session() as s:
        user = make_user(s)
        bot = Bot(name="RSI Bot", total_trades=3, win_rate=0.5)
        s.add(bot)
        s.flush()
        s.add(Trade(user_id=user.id, bot_id=bot.id, symbol="BTCUSDT", side="buy", quantity=1, price=1, status="open"))
        s.add(Trade(user_id=user.id, bot_name="RSI Bot", trade_type="bot", symbol="BTCUSDT", side="buy",
                    quantity=1, price=1, status="closed"))
    use_db(check_bot_stats)

    assert check_bot_stats.main() == 0

    out = capsys.readouterr().out
    assert "Trades in database: 1" in out
    assert '1 trades found with botName="RSI Bot" but no botId' in out
    assert "1 orphan trades found" in out


def test_check_user_trades_groups_open_simulated(db, use_db, capsys):
    with db.session() as s:
        user = make_user(s)
        for symbol, env in (("BTCUSDT", "simulated"), ("BTCUSDT", "simulated"), ("ETHUSDT", "real")):
            s.add(Trade(user_id=user.id, symbol=symbol, side="buy", quantity=1, price=1,
                        environment=env, status="open"))
    use_db(check_user_trades)

    assert check_user_trades.main() == 0

    out = capsys.readouterr().out
    assert "Open simulated trades: 2" in out
    assert "Unique symbols: 1" in out
    assert "BTCUSDT: 2 trades" in out


def test_close_open_trade(db, use_db):
    with db.session() as s:
        user = make_user(s)
        s.add(Trade(user_id=user.id, symbol="BTCUSDT", side="buy", quantity=0.01, price=100000,
                    environment="simulated", status="open"))
    use_db(close_open_trade)

    assert close_open_trade.main([]) == 0

    with db.session() as s:
        trade = s.scalars(select(Trade)).one()
        assert trade.status == "closed"
        assert trade.exit_price == 117000
        assert trade.pnl == pytest.approx(170)


def test_close_open_trade_without_candidates(db, use_db, capsys):
    use_db(close_open_trade)
    assert close_open_trade.main([]) == 0
    assert "No open trade found" in capsys.readouterr().out


def test_simulate_trade_updates_challenger_balance(db, use_db):
    with db.session() as s:
        a, b = make_user(s, name="Ana"), make_user(s, name="Bia")
        make_challenge(s, a, b, end_date=datetime(2030, 1, 1), initial_balance=10000)
    use_db(simulate_trade)

    # random() == 0.75 -> profit of +25
    rng = MagicMock()
    rng.random.return_value = 0.75
    trade = simulate_trade.simulate_trade(rng)

    assert trade.profit == pytest.approx(25)
    with db.session() as s:
        challenge = s.scalars(select(Challenge)).one()
        assert challenge.challenger_current_balance == pytest.approx(10025)
        assert challenge.challenger_current_return == pytest.approx(0.25)
        assert s.scalar(select(func.count()).select_from(ChallengeTrade)) == 1


def test_seed_challenge_stats_skips_existing(db, use_db):
    with db.session() as s:
        make_user(s, tokens=42)
        make_user(s)
    use_db(seed_challenge_stats)

    assert seed_challenge_stats.seed_challenge_stats(random.Random(3)) == 1

    with db.session() as s:
        assert s.scalar(select(func.count()).select_from(UserChallengeStats)) == 2
        assert 42 in s.scalars(select(UserChallengeStats.tokens)).all()


def test_seed_plan_history(db, use_db):
    with db.session() as s:
        make_user(s, name="Ana")
    use_db(seed_plan_history)

    assert seed_plan_history.main() == 0

    with db.session() as s:
        assert s.scalar(select(func.count()).select_from(PlanHistory)) == 4
        user = s.scalars(select(User)).one()
        assert user.current_plan == "ENTUSIASTA BLACK"
        assert user.billing_cycle == "anual"


def test_seed_trades_links_known_bots(db, use_db, capsys):
    with db.session() as s:
        make_user(s)
        s.add(Bot(id="bot-rsi", name="RSI Strategy Bot"))
    use_db(seed_trades)

    assert seed_trades.main() == 0

    out = capsys.readouterr().out
    assert "Total trades: 8" in out
    assert "Closed trades: 6" in out
    assert "Open trades: 2" in out
    with db.session() as s:
        rsi = s.scalars(select(Trade).where(Trade.bot_name == "RSI Strategy Bot")).one()
        assert rsi.bot_id == "bot-rsi"
        macd = s.scalars(select(Trade).where(Trade.bot_name == "MACD Crossover Bot")).one()
        assert macd.bot_id is None


def test_verify_token_logic_reports_expected_balances(db, use_db, capsys):
    with db.session() as s:
        make_user(s, name="Ana", tokens=1000)
        make_user(s, name="Bia", tokens=1000)
    use_db(verify_token_logic)

    assert verify_token_logic.verify_token_logic(bet=100) is True

    out = capsys.readouterr().out
    assert "Ana: 1000 tokens (✅ correct)" in out
    assert "Bia: 800 tokens (✅ correct)" in out
    assert "Token leak: 200 tokens" in out


def test_verify_token_logic_needs_two_users(db, use_db, capsys):
    use_db(verify_token_logic)
    assert verify_token_logic.verify_token_logic() is False
    assert "At least 2 users" in capsys.readouterr().out


def test_stripe_payment_flow_succeeds():
    client = MagicMock()
    client.PaymentIntent.create.return_value = {"id": "pi_1"}
    client.PaymentIntent.confirm.return_value = {
        "id": "pi_1", "status": "succeeded", "amount": 5900,
        "metadata": {"plan": "ENTUSIASTA BLACK", "billingCycle": "anual", "userId": "test-user-123"},
    }

    assert stripe_payment_flow.run_payment_flow(client, now=datetime(2024, 1, 1)) is True
    client.PaymentIntent.confirm.assert_called_once_with("pi_1", payment_method="pm_card_visa")


def test_stripe_payment_flow_unconfirmed():
    client = MagicMock()
    client.PaymentIntent.create.return_value = {"id": "pi_1"}
    client.PaymentIntent.confirm.return_value = {"id": "pi_1", "status": "requires_action"}

    assert stripe_payment_flow.run_payment_flow(client) is False


def test_stripe_scripts_without_key_exit_nonzero():
    with patch("config.STRIPE_SECRET_KEY", None):
        assert stripe_payment_flow.main() == 1
        assert stripe_pix_check.main() == 1


def test_stripe_pix_check_reports_missing_qr(capsys):
    client = MagicMock()
    client.PaymentIntent.create.return_value = {"id": "pi_1", "status": "requires_payment_method",
                                                "amount": 5900, "next_action": None}

    assert stripe_pix_check.check_pix(client) is False
    assert "PIX was NOT generated" in capsys.readouterr().out


def test_stripe_pix_check_reports_qr(capsys):
    client = MagicMock()
    client.PaymentIntent.create.return_value = {
        "id": "pi_1", "status": "requires_action", "amount": 5900,
        "next_action": {"pix_display_qr_code": {"image_url_png": "https://example.test/qr.png"}},
    }

    assert stripe_pix_check.check_pix(client) is True
    assert "https://example.test/qr.png" in capsys.readouterr().out


def test_mock_pix_preview_stops_on_success():
    rng = MagicMock()
    rng.choice.return_value = "a"
    rng.random.side_effect = [0.1, 0.5, 0.9]
    sleep = MagicMock()

    code, status = mock_pix_preview.preview_mock_pix(59.0, attempts=5, delay=2.0, rng=rng, sleep=sleep)

    assert status == "success"
    assert "0000005900" in code
    assert sleep.call_count == 2


def test_api_trades_smoke_prints_body(capsys):
    response = MagicMock(ok=True, status_code=200)
    response.json.return_value = [{"id": "t1"}]
    with patch("scripts.api_trades_smoke.requests.get", return_value=response) as get:
        assert api_trades_smoke.main(["--base-url", "http://api.test/", "--token", "abc"]) == 0

    get.assert_called_once()
    assert get.call_args.args[0] == "http://api.test/api/trades"
    assert get.call_args.kwargs["headers"]["Authorization"] == "Bearer abc"
    assert "Data received" in capsys.readouterr().out


def test_api_trades_smoke_connection_error():
    with patch("scripts.api_trades_smoke.requests.get", side_effect=requests.ConnectionError("refused")):
        assert api_trades_smoke.main(["--token", "abc"]) == 1


def test_check_pending_orders(db, use_db, capsys):
    with db.session() as s:
        user = make_user(s, name="Ana")
        s.add(PendingOrder(user_id=user.id, symbol="BTCUSDT", side="buy", type="limit",
                           quantity=0.1, price=90000, total=9000, status="pending"))
        s.add(PendingOrder(user_id=user.id, symbol="ETHUSDT", side="sell", type="limit",
                           quantity=1, price=3000, total=3000, status="filled", take_profit=3300))
    use_db(check_pending_orders)

    assert check_pending_orders.main() == 0

    out = capsys.readouterr().out
    assert "Pending orders found: 1" in out
    assert "Take Profit: N/A" in out
    assert "{'pending': 1, 'filled': 1}" in out or "{'filled': 1, 'pending': 1}" in out


def test_list_trades_splits_by_status(db, use_db, capsys):
    with db.session() as s:
        user = make_user(s)
        s.add(Trade(user_id=user.id, symbol="BTCUSDT", side="buy", quantity=1, price=10, status="open"))
        s.add(Trade(user_id=user.id, symbol="ETHUSDT", side="sell", quantity=1, price=20, status="closed",
                    exit_price=18, pnl=2))
    use_db(list_trades)

    assert list_trades.main() == 0

    out = capsys.readouterr().out
    assert "Open trades: 1" in out
    assert "Closed trades: 1" in out
    assert "ETHUSDT sell 1.0 @ 20.0 -> 18.0 PnL: 2.0" in out


def test_check_challenge_trades(db, use_db, capsys):
    with db.session() as s:
        a, b = make_user(s, name="Ana"), make_user(s, name="Bia")
        challenge = make_challenge(s, a, b, end_date=datetime(2030, 1, 1), title="Ana vs Bia")
        s.add(ChallengeTrade(challenge_id=challenge.id, user_id=a.id, symbol="BTCUSDT", side="buy",
                             quantity=0.001, price=50000, profit=5))
    use_db(check_challenge_trades)

    assert check_challenge_trades.main() == 0

    out = capsys.readouterr().out
    assert "Trades found: 1" in out
    assert "Challenge: Ana vs Bia (active)" in out
    assert "Active challenges: 1" in out
    assert "Challenger: Ana" in out


def test_stripe_connection_check_creates_card_and_pix_intents(capsys):
    client = MagicMock()
    client.Account.retrieve.return_value = {"email": "ops@example.test", "country": "BR", "default_currency": "brl"}
    client.PaymentIntent.create.side_effect = [
        {"id": "pi_card", "amount": 1000, "status": "requires_payment_method"},
        {"id": "pi_pix", "amount": 1000, "status": "requires_action",
         "next_action": {"pix_display_qr_code": {"data": "000201"}}},
    ]

    stripe_connection_check.check_stripe_connection(client)

    kinds = [c.kwargs.get("payment_method_types") for c in client.PaymentIntent.create.call_args_list]
    assert kinds == [None, ["pix"]]
    assert all(c.kwargs["amount"] == 1000 for c in client.PaymentIntent.create.call_args_list)
    out = capsys.readouterr().out
    assert "Country: BR" in out
    assert "PIX QR code available" in out


def test_add_tokens_failure_keeps_earlier_rows(db, use_db):
    with db.session() as s:
        users = [make_user(s, tokens=0) for _ in range(3)]
        third = get_stats(s, users[2].id).id
    close = use_db(add_tokens_to_all_users)

    with failing_update(db.engine, third):
        assert add_tokens_to_all_users.main([]) == 1

    close.assert_called_once()
    with db.session() as s:
        assert [get_stats(s, u.id).tokens for u in users] == [1000, 1000, 0]


def test_check_expired_challenges_skips_malformed_end_time(db, use_db, capsys):
    with db.session() as s:
        a, b = make_user(s), make_user(s)
        make_challenge(s, a, b, end_date=datetime(2020, 1, 1), end_time="10:00", title="good")
        make_challenge(s, a, b, end_date=datetime(2020, 1, 1), end_time="", title="bad")
    use_db(check_expired_challenges)

    assert check_expired_challenges.main() == 0

    assert "1 expired challenges updated" in capsys.readouterr().out
    with db.session() as s:
        statuses = dict(s.execute(select(Challenge.title, Challenge.status)).all())
    assert statuses == {"good": "completed", "bad": "active"}


def test_verify_token_logic_main_exit_codes(db, use_db):
    with db.session() as s:
        make_user(s, tokens=1000)
        make_user(s, tokens=1000)
    use_db(verify_token_logic)

    assert verify_token_logic.main() == 0
    with patch.object(verify_token_logic, "settle_bet", return_value=(0, 0)):
        assert verify_token_logic.main() == 1


def test_update_user_tokens_reports_each_user_once(db, use_db, capsys):
    with db.session() as s:
        make_user(s, name="Ana", tokens=12)
    use_db(update_user_tokens)

    assert update_user_tokens.main([]) == 0

    captured = capsys.readouterr()
    assert captured.out.count("User Ana updated") == 1
    assert "Ana" not in captured.err


@pytest.mark.parametrize("error, hint", [
    (stripe.AuthenticationError("Invalid API Key provided"), "Check that STRIPE_SECRET_KEY is correct"),
    (stripe.InvalidRequestError("pix is not enabled", "payment_method_types"),
     "Check that the Stripe account is enabled for PIX"),
])
def test_stripe_connection_check_prints_remediation_hint(error, hint, capsys):
    client = MagicMock()
    client.Account.retrieve.side_effect = error
    with patch.object(stripe_connection_check.payments, "get_stripe_client", return_value=client):
        assert stripe_connection_check.main() == 1
    assert hint in capsys.readouterr().out
