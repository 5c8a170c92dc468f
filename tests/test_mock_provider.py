import asyncio

from turtle_advisor.data.mock_provider import MockProvider

NOW = 1_700_000_000_000
HOUR = 3_600_000


def test_snapshot_is_reproducible_for_a_fixed_clock():
    a = MockProvider(seed=7).snapshot("BTC", "1h", limit=30, now_ms=NOW)
    b = MockProvider(seed=7).snapshot("BTC", "1h", limit=30, now_ms=NOW)
    assert a == b
    assert len(a) == 30
    # every bar is closed before the clock, newest last
    assert a[-1]["T"] < NOW
    assert [x["t"] for x in a] == sorted(x["t"] for x in a)
    assert a[1]["t"] - a[0]["t"] == HOUR


def test_prices_do_not_depend_on_the_clock():
    a = MockProvider().snapshot("ETH", "1h", limit=10, now_ms=NOW)
    b = MockProvider().snapshot("ETH", "1h", limit=10, now_ms=NOW + 5 * HOUR)
    assert [x["c"] for x in a] == [x["c"] for x in b]
    assert b[0]["t"] - a[0]["t"] == 5 * HOUR


def test_mid_follows_last_served_close():
    mdp = MockProvider()

    async def run():
        before = await mdp.get_mid("BTC")
        candles = await mdp.get_recent_candles("BTC", "1h", limit=20, now_ms=NOW)
        return before, candles, await mdp.get_mid("BTC")

    before, candles, after = asyncio.run(run())
    assert before == 60_000.0
    assert len(candles) == 20
    assert after == candles[-1].close
