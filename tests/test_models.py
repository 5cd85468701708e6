import pytest

from data.models import (
    ACTION_PRESS,
    ACTION_TIMEOUT,
    CATEGORY_GO,
    CATEGORY_NOGO,
    SessionProfile,
    build_trial_result,
    is_correct,
    parse_profile,
    validate_profile,
)
from game.errors import InvalidProfileError


@pytest.mark.parametrize(
    "category, action, expected",
    [
        (CATEGORY_GO, ACTION_PRESS, True),
        (CATEGORY_GO, ACTION_TIMEOUT, False),
        (CATEGORY_NOGO, ACTION_TIMEOUT, True),
        (CATEGORY_NOGO, ACTION_PRESS, False),
    ],
)
def test_correctness_rule(category, action, expected):
    assert is_correct(category, action) is expected


def test_timeout_drops_reaction_time():
    result = build_trial_result(3, CATEGORY_NOGO, ACTION_TIMEOUT, 512.0)
    assert result.reaction_time_ms is None
    assert result.correct


@pytest.mark.parametrize("rt", [None, -1.0])
def test_press_needs_non_negative_reaction_time(rt):
    with pytest.raises(ValueError):
        build_trial_result(0, CATEGORY_GO, ACTION_PRESS, rt)


def test_unknown_action_is_rejected():
    with pytest.raises(ValueError):
        build_trial_result(0, CATEGORY_GO, "HOLD", None)


def test_record_shape():
    record = build_trial_result(1, CATEGORY_GO, ACTION_PRESS, 250.5).to_record()
    assert record == {
        "round_index": 1,
        "category": "GO",
        "action": "PRESS",
        "reaction_time_ms": 250.5,
        "correct": 1,
    }


@pytest.mark.parametrize("age", [0, 25, 120])
def test_valid_ages(age):
    assert validate_profile(SessionProfile(age=age, sex="female")).age == age


@pytest.mark.parametrize(
    "profile, field",
    [
        (SessionProfile(age=121, sex="male"), "age"),
        (SessionProfile(age=-5, sex="male"), "age"),
        (SessionProfile(age=True, sex="male"), "age"),
        (SessionProfile(age=30.5, sex="male"), "age"),
        (SessionProfile(age=30, sex=None), "sex"),
        (SessionProfile(age=30, sex="other"), "sex"),
    ],
)
def test_invalid_profiles(profile, field):
    with pytest.raises(InvalidProfileError) as exc_info:
        validate_profile(profile)
    assert exc_info.value.field == field


def test_parse_profile_from_form_text():
    assert parse_profile(" 42 ", "Female") == SessionProfile(age=42, sex="female")


@pytest.mark.parametrize("age_text, sex_text", [("", "male"), ("abc", "male"), ("30", ""), ("200", "male")])
def test_parse_profile_rejects_bad_input(age_text, sex_text):
    with pytest.raises(InvalidProfileError):
        parse_profile(age_text, sex_text)
