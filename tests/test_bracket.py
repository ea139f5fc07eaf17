import pytest

from photobracket.controllers.bracket import Bracket
from photobracket.exceptions import InvalidVerdictError


def _judge_keep_first(bracket):
    """Run a bracket to the end, keeping the left item of every pair."""
    compared = []
    while bracket.has_next_pair():
        pair = bracket.get_next_pair()
        if pair is None:
            continue
        compared.extend(pair)
        bracket.selected(pair[0])
    return compared


def test_empty_bracket():
    bracket = Bracket()

    assert bracket.is_empty()
    assert bracket.has_next_pair() is False
    assert bracket.get_next_pair() is None
    assert bracket.size() == 0
    assert bracket.get_all_image_files() == []


def test_add_to_empty_bracket():
    bracket = Bracket()
    bracket.add("a")

    assert not bracket.is_empty()
    assert bracket.has_next_pair() is False

    bracket.add("b")
    assert bracket.has_next_pair() is True
    assert not (bracket.is_empty() and bracket.has_next_pair())


def test_five_item_walkthrough():
    bracket = Bracket(["A", "B", "C", "D", "E"])

    assert bracket.get_next_pair() == ("A", "E")
    bracket.selected("A", "E")
    assert bracket.delta is False

    assert bracket.get_next_pair() == ("B", "D")
    bracket.selected("B")
    assert bracket.delta is True

    # C is passed straight through to the winners
    assert bracket.get_next_pair() is None
    assert bracket.get_current_image_files() == []
    assert bracket.current_round.winners.snapshot() == ["A", "E", "B", "C"]
    assert bracket.round_count == 0

    assert bracket.has_next_pair() is True
    assert bracket.get_next_pair() == ("A", "C")
    assert bracket.get_round_count() == 1
    assert bracket.delta is False
    assert sorted(bracket.get_current_image_files()) == ["B", "E"]


def test_round_without_elimination_stops_until_overridden():
    bracket = Bracket(["a", "b", "c", "d"])
    bracket.selected(*bracket.get_next_pair())
    bracket.selected(*bracket.get_next_pair())

    assert bracket.has_next_pair() is False
    assert bracket.get_next_pair() is None
    assert bracket.round_count == 0
    assert bracket.size() == 4

    bracket.ignore_done()
    assert bracket.has_next_pair() is True
    assert bracket.get_next_pair() == ("a", "c")
    assert bracket.round_count == 1


def test_every_item_compared_exactly_once_per_round():
    items = [f"img{i:02d}" for i in range(16)]
    bracket = Bracket(items)

    compared = _judge_keep_first(bracket)

    # 8 + 4 + 2 + 1 comparisons down to a single winner
    assert len(compared) == 30
    assert sorted(set(compared) & set(items)) == sorted(items)
    assert bracket.round_count == 3
    assert bracket.get_all_image_files() == ["img00"]
    assert bracket.has_next_pair() is False


def test_odd_pool_passes_leftover_through():
    bracket = Bracket(list("ABCDEFG"))

    first_round = []
    while bracket.round_count == 0 and bracket.has_next_pair():
        pair = bracket.get_next_pair()
        if pair is None:
            continue
        if bracket.round_count:
            break
        first_round.extend(pair)
        bracket.selected(pair[0])

    assert sorted(first_round) == list("ABCEFG")
    assert bracket.round_count == 1
    assert bracket.presented == ("A", "D")


def test_promotion_increments_round_count_by_one():
    bracket = Bracket(list("ABCD"))
    bracket.selected(bracket.get_next_pair()[0])
    bracket.selected(bracket.get_next_pair()[1])
    count_before = bracket.round_count

    assert bracket.get_next_pair() == ("A", "C")
    assert bracket.round_count == count_before + 1


def test_keep_neither_sets_delta():
    bracket = Bracket(list("ABCD"))
    bracket.get_next_pair()
    bracket.selected()

    assert bracket.delta is True
    assert bracket.size() == 2


def test_all_files_are_current_plus_winners():
    bracket = Bracket(list("ABCDEF"))
    bracket.selected(*bracket.get_next_pair())
    bracket.selected(bracket.get_next_pair()[0])

    current = bracket.get_current_image_files()
    everything = bracket.get_all_image_files()
    winners = bracket.current_round.winners.snapshot()

    assert len(everything) == len(current) + len(winners)
    assert len(set(everything)) == len(everything)
    assert bracket.size() == len(everything)
    assert bracket.get_round_size() == len(current)


def test_get_new_files_requeues_pair_mid_pool():
    bracket = Bracket(list("ABCDE"))
    assert bracket.get_next_pair() == ("A", "E")

    assert bracket.get_new_files() == ("B", "D")
    assert bracket.get_current_image_files() == ["A", "E", "C"]
    assert bracket.delta is False


@pytest.mark.parametrize("pool", ["ABCD", "ABCDEF", "ABCDEFGHI"])
def test_fresh_pair_after_skip_avoids_skipped_items(pool):
    bracket = Bracket(list(pool))
    skipped = bracket.get_next_pair()

    fresh = bracket.get_new_files(*skipped)

    assert not set(skipped) & set(fresh)
    assert bracket.size() == len(pool) - 2


def test_get_new_files_dropping_one_item_eliminates_it():
    bracket = Bracket(list("ABCD"))
    bracket.get_next_pair()

    bracket.get_new_files("A")
    assert bracket.delta is True
    assert "D" not in bracket.get_all_image_files()


def test_get_next_pair_repeats_pair_awaiting_verdict():
    bracket = Bracket(list("ABCD"))
    pair = bracket.get_next_pair()

    assert bracket.get_next_pair() == pair
    assert bracket.get_round_size() == 2


def test_add_skips_items_already_in_play():
    bracket = Bracket(list("ABC"))
    pair = bracket.get_next_pair()
    bracket.selected(pair[0])
    bracket.add("A", "B", "D")

    assert bracket.get_all_image_files().count("A") == 1
    assert bracket.get_current_image_files() == ["B", "D"]


@pytest.mark.parametrize(
    "verdict",
    [
        ("A", "A"),
        ("A", "D", "B"),
        ("Z",),
        ("B",),
    ],
)
def test_malformed_verdicts_are_rejected(verdict):
    bracket = Bracket(list("ABCD"))
    bracket.get_next_pair()

    with pytest.raises(InvalidVerdictError):
        bracket.selected(*verdict)
    # nothing was filed
    assert bracket.current_round.winners.size() == 0
    assert bracket.presented == ("A", "D")


def test_verdict_without_pair_on_display_is_rejected():
    bracket = Bracket(list("ABCD"))

    with pytest.raises(InvalidVerdictError):
        bracket.selected("A")

    pair = bracket.get_next_pair()
    bracket.selected(*pair)
    with pytest.raises(InvalidVerdictError):
        bracket.selected(*pair)
    with pytest.raises(InvalidVerdictError):
        bracket.get_new_files()


def test_flush_and_load_cover_current_and_winners(fake_item):
    items = [fake_item(name) for name in "ABCDE"]
    bracket = Bracket(items)
    pair = bracket.get_next_pair()
    bracket.selected(*pair)

    completions = []

    class Progress:
        loaded = []

        def on_item_loaded(self, item):
            self.loaded.append(item)

        def on_item_load_error(self, item, error):
            raise AssertionError(error)

        def on_complete(self, cancelled):
            completions.append(cancelled)

    progress = Progress()
    assert bracket.load_all(progress) is True
    assert completions == [False]
    assert sorted(i.name for i in progress.loaded) == list("ABCDE")

    bracket.flush_all()
    assert all(i.flush_calls == 1 for i in bracket.get_all_image_files())


def test_keeping_neither_of_the_last_pair_does_not_start_an_empty_round():
    bracket = Bracket(list("AB"))
    bracket.get_next_pair()
    bracket.selected()

    assert bracket.get_next_pair() is None
    assert bracket.round_count == 0
    assert bracket.is_empty() is False
    assert bracket.has_next_pair() is False
    assert bracket.size() == 0
