import random

import numpy as np
import pytest

from game.feedback import Feedback, evaluate
from game.secret_code import Code
from solver.candidate_space import CandidateSpace


@pytest.fixture(scope="module")
def full():
    return CandidateSpace.full()


def test_full_space_enumerates_lexicographically(full):
    codes = full.codes()
    assert len(full) == 1296
    assert codes[0] == Code("rrrr")
    assert codes[1] == Code("rrrg")
    assert codes[-1] == Code("oooo")
    assert [c.as_string() for c in codes] == sorted(
        (c.as_string() for c in codes),
        key=lambda s: ["rgbymo".index(ch) for ch in s],
    )


def test_index_round_trip(full):
    for i in (0, 7, 215, 1000, 1295):
        assert full.index_of(full.code_at(i)) == i


def test_table_matches_evaluate(full):
    rng = random.Random(11)
    for _ in range(500):
        i, j = rng.randrange(1296), rng.randrange(1296)
        expected = evaluate(full.code_at(i), full.code_at(j))
        assert full.decode_feedback(full.table[i, j]) == expected


def test_filter_keeps_exactly_consistent_codes(full):
    guess = Code("rrgg")
    fb = Feedback(1, 1)
    narrowed = full.filter(guess, fb)
    expected = [c for c in full.codes() if evaluate(c, guess) == fb]
    assert narrowed.codes() == expected
    assert 0 < len(narrowed) < len(full)


def test_filter_is_subset_and_idempotent(full):
    guess, fb = Code("rgby"), Feedback(0, 2)
    once = full.filter(guess, fb)
    twice = once.filter(guess, fb)
    assert twice == once
    assert not np.any(once.mask & ~full.mask)


def test_filter_does_not_mutate_input(full):
    before = len(full)
    full.filter(Code("rrgg"), Feedback(0, 0))
    assert len(full) == before == 1296


def test_filter_can_become_empty(full):
    # rrrr scores (3, 0) against rrrg, never (0, 0)
    single = full.filter(Code("rrrr"), Feedback(4, 0))
    assert single.codes() == [Code("rrrr")]
    empty = single.filter(Code("rrrg"), Feedback(0, 0))
    assert len(empty) == 0
    assert not empty


def test_secret_survives_every_honest_filter(full):
    secret = Code("ybmr")
    space = full
    for guess in ("rrgg", "bbyy", "mmoo", "ybmr"):
        space = space.filter(Code(guess), evaluate(secret, Code(guess)))
        assert secret in space


def test_partition_sizes_sum_to_space(full):
    parts = full.partition(Code("rrgg"))
    assert sum(parts.values()) == 1296
    # the classic worst case of the rrgg opening
    assert max(parts.values()) == 256
    assert parts[Feedback(4, 0)] == 1


def test_worst_cases_agrees_with_partition(full):
    space = full.filter(Code("rrgg"), Feedback(0, 1))
    worst = space.worst_cases()
    for code in (Code("rrrr"), Code("bbym"), Code("gbyr")):
        assert worst[space.index_of(code)] == max(space.partition(code).values())


def test_worst_cases_respects_guess_mask(full):
    guess_mask = np.zeros(1296, dtype=bool)
    guess_mask[:10] = True
    worst = full.worst_cases(guess_mask=guess_mask)
    assert (worst[10:] == -1).all()
    assert (worst[:10] > 0).all()


def test_rejects_wrong_mask_shape():
    with pytest.raises(ValueError):
        CandidateSpace(np.ones(10, dtype=bool))
