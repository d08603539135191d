import pytest

from pronunciation_coach import AnalysisResult, analyze, compute_accuracy
from pronunciation_coach.i18n import i18n


@pytest.mark.parametrize("word", ["cat", "Hello", "pronunciation", "!!!", "a"])
def test_identical_words_score_100(word):
    assert analyze(word, word).accuracy == 100


@pytest.mark.parametrize("word", ["cat", "hello"])
def test_empty_side_scores_zero(word):
    assert analyze(word, "").accuracy == 0
    assert analyze("", word).accuracy == 0


def test_empty_pair_is_zero_not_identity():
    result = analyze("", "")
    assert result.accuracy == 0
    assert result.feedback == i18n.t("feedback.listen_again")


def test_whitespace_only_counts_as_empty():
    assert compute_accuracy("   ", "   ") == 0
    assert compute_accuracy("cat", " \t ") == 0


def test_case_and_edge_whitespace_are_ignored():
    assert analyze("Hello", "  hello ").accuracy == analyze("hello", "hello").accuracy == 100


def test_single_substitution_in_five_letters():
    assert analyze("hello", "hallo").accuracy == 80


def test_result_keeps_argument_roles_and_raw_text():
    result = analyze("  Apple", "apple ")
    assert result.target_word == "  Apple"
    assert result.recognized_word == "apple "

    swapped = analyze("hello", "help")
    assert swapped.target_word == "hello"
    assert swapped.recognized_word == "help"
    assert analyze("help", "hello").accuracy == swapped.accuracy


def test_cat_cat_is_top_tier():
    result = analyze("cat", "cat")
    assert result.accuracy == 100
    assert result.feedback == i18n.t("feedback.excellent")


def test_cat_bat_is_generic_retry():
    result = analyze("cat", "bat")
    assert result.accuracy == 67
    assert result.feedback == i18n.t("feedback.retry_slowly")


def test_three_tree_is_good_tier_not_th_hint():
    result = analyze("three", "tree")
    assert result.accuracy == 80
    assert result.feedback == i18n.t("feedback.good")


def test_halves_round_up():
    # 5 of 8 characters survive: 62.5
    assert compute_accuracy("abcdefgh", "abcdexyz") == 63


def test_near_miss_on_long_word_stays_below_100():
    target = "a" * 300
    recognized = "a" * 299 + "b"
    assert compute_accuracy(target, recognized) == 99


def test_partial_overlap_on_long_word_stays_above_zero():
    target = "a" + "b" * 299
    recognized = "a" + "c" * 299
    assert compute_accuracy(target, recognized) == 1


def test_nothing_in_common_scores_zero():
    assert compute_accuracy("cat", "dog") == 0


def test_punctuation_only_inputs_are_scored():
    result = analyze("!!!", "???")
    assert result.accuracy == 0
    assert isinstance(result, AnalysisResult)


def test_accuracy_stays_in_range_for_mixed_inputs():
    pairs = [("water", "what her"), ("a", "abcdefghij"), ("Bonjour", "bon jour"), ("ありがとう", "ありがと")]
    for target, recognized in pairs:
        value = compute_accuracy(target, recognized)
        assert isinstance(value, int)
        assert 0 <= value <= 100


def test_repeated_calls_do_not_share_state():
    first = [analyze("hello", "hallo").accuracy for _ in range(50)]
    assert set(first) == {80}


def test_result_is_immutable_and_serializes_by_alias():
    result = analyze("cat", "bat")
    with pytest.raises(Exception):
        result.accuracy = 100  # type: ignore[misc]
    payload = result.to_payload()
    assert payload == {
        "accuracy": 67,
        "feedback": result.feedback,
        "recognizedWord": "bat",
        "targetWord": "cat",
    }


def test_feedback_language_is_selectable():
    result = analyze("cat", "cat", language="ja")
    assert result.feedback == "素晴らしい発音です！"
