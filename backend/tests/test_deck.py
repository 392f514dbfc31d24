from conftest import T0, make_card
from sonoglyph.models import CardSource, MnemonicCard, MnemonicResult
from sonoglyph.services.deck import (
    add_card,
    deck_stats,
    due_cards,
    find_card,
    new_card,
    remove_card,
    replace_card,
)
from sonoglyph.services.scheduler import DAY_MS


def test_new_card_defaults():
    card = new_card("halcyon", MnemonicResult(word="halcyon"), T0)
    assert isinstance(card, MnemonicCard)
    assert card.easiness_factor == 2.5
    assert card.interval_days == 1
    assert card.consecutive_correct_reps == 0
    assert card.next_review_ms == T0 + DAY_MS
    assert due_cards([card], T0) == []


def test_new_card_with_plain_payload():
    card = new_card("水", {"strokes": 4}, T0)
    assert card.content == {"strokes": 4}


def test_add_card_ignores_duplicate_identity_in_any_case():
    cards = add_card([], "Zephyr", MnemonicResult(word="Zephyr"), T0)
    again = add_card(cards, "zephyr", MnemonicResult(word="zephyr"), T0 + 1)
    assert len(again) == 1
    assert again[0].identity == "Zephyr"


def test_add_card_appends_at_end():
    cards = [make_card("a"), make_card("b")]
    result = add_card(cards, "c", MnemonicResult(word="c"), T0)
    assert [c.identity for c in result] == ["a", "b", "c"]
    assert len(cards) == 2


def test_find_card():
    cards = [make_card("Lattice")]
    assert find_card(cards, "lattice").identity == "Lattice"
    assert find_card(cards, "trellis") is None


def test_replace_card_swaps_matching_entry_only():
    cards = [make_card("a"), make_card("b"), make_card("c")]
    updated = cards[1].model_copy(update={"interval_days": 6})
    result = replace_card(cards, updated)
    assert result[1].interval_days == 6
    assert result[0] is cards[0] and result[2] is cards[2]
    assert cards[1].interval_days == 1


def test_remove_card():
    cards = [make_card("a"), make_card("b")]
    assert [c.identity for c in remove_card(cards, "A")] == ["b"]


def test_due_cards_boundary_is_inclusive():
    cards = [make_card("on-time", T0), make_card("late", T0 + 1)]
    assert [c.identity for c in due_cards(cards, T0)] == ["on-time"]


def test_deck_stats_breaks_down_by_source():
    cards = [
        make_card("a", T0 - 1),
        make_card("b", T0 + DAY_MS),
        make_card("字", T0, source=CardSource.CHARACTER),
    ]
    stats = deck_stats(cards, T0)
    assert stats.total_cards == 3
    assert stats.due_now == 2
    by_source = {s.source: (s.total, s.due) for s in stats.per_source}
    assert by_source == {"character": (1, 1), "word": (2, 1)}
