import random

import pytest

from replaybook.domain.models import NO_ASK, NO_BID
from replaybook.domain.order_book import OrderBook


def test_empty_book_reports_sentinels():
    book = OrderBook()
    assert book.best_bid() == NO_BID
    assert book.best_ask() == NO_ASK
    assert not book.has_bid()
    assert not book.has_ask()
    assert book.spread() is None
    assert not book.is_crossed()


def test_empty_sentinels_are_worse_than_any_real_price():
    book = OrderBook()
    assert book.best_bid() <= 1
    assert book.best_ask() >= 10_000_000_000


def test_best_levels_follow_set_level():
    book = OrderBook()
    book.set_level("BID", 100, 10)
    book.set_level("BID", 105, 5)
    book.set_level("BID", 95, 7)
    book.set_level("ASK", 115, 3)
    book.set_level("ASK", 110, 4)
    book.set_level("ASK", 120, 1)

    assert book.best_bid() == 105
    assert book.best_ask() == 110
    assert book.depth("BID") == [(105, 5), (100, 10), (95, 7)]
    assert book.depth("ASK") == [(110, 4), (115, 3), (120, 1)]


@pytest.mark.parametrize("qty", [0, -3])
def test_set_level_non_positive_removes_level(qty):
    book = OrderBook()
    book.set_level("BID", 100, 10)
    book.set_level("BID", 95, 5)

    book.set_level("BID", 100, qty)

    assert book.best_bid() == 95
    assert book.level_qty("BID", 100) == 0
    assert 100 not in dict(book.depth("BID"))


def test_set_level_overwrites_quantity():
    book = OrderBook()
    book.set_level("ASK", 110, 10)
    book.set_level("ASK", 110, 3)
    assert book.level_qty("ASK", 110) == 3


def test_removing_every_level_restores_sentinels():
    book = OrderBook()
    book.set_level("BID", 100, 10)
    book.set_level("ASK", 105, 5)
    book.set_level("BID", 100, 0)
    book.set_level("ASK", 105, 0)
    assert book.best_bid() == NO_BID
    assert book.best_ask() == NO_ASK


def test_clear_empties_both_sides():
    book = OrderBook()
    book.set_level("BID", 100, 10)
    book.set_level("ASK", 105, 5)
    book.clear()
    assert book.best_bid() == NO_BID
    assert book.best_ask() == NO_ASK
    assert book.depth("BID") == []
    assert book.depth("ASK") == []


def test_add_level_accumulates_and_creates():
    book = OrderBook()
    book.add_level("BID", 100, 10)
    book.add_level("BID", 100, 5)
    assert book.level_qty("BID", 100) == 15
    assert book.best_bid() == 100


@pytest.mark.parametrize("delta", [0, -5])
def test_add_level_ignores_non_positive_delta(delta):
    book = OrderBook()
    book.add_level("BID", 100, 10)
    book.add_level("BID", 100, delta)
    book.add_level("BID", 101, delta)
    assert book.level_qty("BID", 100) == 10
    assert book.level_qty("BID", 101) == 0
    assert book.best_bid() == 100


def test_remove_level_decrements():
    book = OrderBook()
    book.set_level("BID", 100, 10)
    book.remove_level("BID", 100, 3)
    assert book.level_qty("BID", 100) == 7
    assert book.best_bid() == 100


@pytest.mark.parametrize("delta", [10, 25])
def test_remove_level_deletes_when_exhausted(delta):
    book = OrderBook()
    book.set_level("BID", 100, 10)
    book.set_level("BID", 95, 5)

    book.remove_level("BID", 100, delta)

    assert book.level_qty("BID", 100) == 0
    assert book.depth("BID") == [(95, 5)]
    assert book.best_bid() == 95


def test_remove_level_ignores_missing_price_and_non_positive_delta():
    book = OrderBook()
    book.set_level("ASK", 105, 5)
    book.remove_level("ASK", 110, 5)
    book.remove_level("ASK", 105, 0)
    book.remove_level("ASK", 105, -1)
    assert book.depth("ASK") == [(105, 5)]


def test_interleaved_mutations_keep_best_levels_current():
    book = OrderBook()
    book.set_level("BID", 100, 10)
    book.set_level("BID", 99, 20)
    book.set_level("ASK", 101, 15)
    book.add_level("ASK", 102, 25)
    book.add_level("BID", 101, 2)

    assert book.best_bid() == 101
    assert book.is_crossed()

    book.remove_level("BID", 101, 2)
    assert book.best_bid() == 100
    assert book.best_ask() == 101
    assert book.spread() == 1
    assert not book.is_crossed()

    book.remove_level("ASK", 101, 15)
    assert book.best_ask() == 102


def test_best_levels_match_brute_force_over_random_updates():
    rng = random.Random(7)
    book = OrderBook()
    expected = {"BID": {}, "ASK": {}}
    for _ in range(500):
        side = rng.choice(["BID", "ASK"])
        price = rng.randint(90, 110)
        qty = rng.randint(-2, 5)
        book.set_level(side, price, qty)
        if qty <= 0:
            expected[side].pop(price, None)
        else:
            expected[side][price] = qty

        bids, asks = expected["BID"], expected["ASK"]
        assert book.best_bid() == (max(bids) if bids else NO_BID)
        assert book.has_bid() == bool(bids)
        assert book.best_ask() == (min(asks) if asks else NO_ASK)
        assert book.has_ask() == bool(asks)
        assert all(qty > 0 for _, qty in book.depth("BID") + book.depth("ASK"))
