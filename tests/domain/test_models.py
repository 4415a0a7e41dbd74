from datetime import timedelta

from retain.domain.constants import EPOCH
from retain.domain.models import Card


def test_new_card_defaults():
    card = Card(key="hola", answer="hello")
    assert card.level == 0
    assert card.last_reviewed == EPOCH


def test_grade_correct_increments_level(now):
    card = Card(key="hola", answer="hello", level=3, last_reviewed=now - timedelta(days=2))
    card.grade(True, now)

    assert card.level == 4
    assert card.last_reviewed == now
    assert card.key == "hola"
    assert card.answer == "hello"


def test_grade_incorrect_resets_level(now):
    card = Card(key="hola", answer="hello", level=9)
    card.grade(False, now)

    assert card.level == 0
    assert card.last_reviewed == now
    assert card.answer == "hello"


def test_level_has_no_upper_bound(now):
    card = Card(key="k", answer="a", level=40)
    card.grade(True, now)
    assert card.level == 41


def test_to_state_round_trips_fields(now):
    card = Card(key="k", answer="a", level=2, last_reviewed=now)
    state = card.to_state()
    assert (state.level, state.last_reviewed, state.answer) == (2, now, "a")
