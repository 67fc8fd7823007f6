"""Tests for fuzzy scoring and ranking (kswitch/core/matcher.py)."""

import pytest

from kswitch.core.matcher import ScoredEntry, fold_case, rank, score, searchable_text


def _is_subsequence(text: str, query: str) -> bool:
    it = iter(text.lower())
    return all(ch in it for ch in query.lower())


class TestEmptyInputs:
    """Empty query and empty text behaviour."""

    @pytest.mark.parametrize("text", ["", "a", "eks-payments-dev", "arn:aws:eks:x:1:cluster/c"])
    def test_empty_query_scores_one(self, text):
        assert score(text, "") == 1

    def test_empty_text_only_matches_empty_query(self):
        assert score("", "a") == 0

    def test_query_longer_than_text(self):
        assert score("ab", "abc") == 0


class TestSubsequenceGate:
    """A match requires the query to be an in-order subsequence."""

    @pytest.mark.parametrize(
        "text,query",
        [
            ("eks-payments-qa", "payqa"),
            ("eks-payments-dev", "payqa"),
            ("eks-orders-dev", "payqa"),
            ("alpha", "ah"),
            ("alpha", "ha"),
            ("Production-EU", "prodeu"),
            ("staging", "gnits"),
            ("a/b/c", "abc"),
        ],
    )
    def test_zero_iff_not_subsequence(self, text, query):
        assert (score(text, query) == 0) == (not _is_subsequence(text, query))

    def test_case_insensitive(self):
        assert score("PROD-EU", "prod") == score("prod-eu", "PROD")
        assert score("PROD-EU", "prod") > 0

    def test_scenario_payqa(self):
        candidates = ["eks-payments-dev", "eks-payments-qa", "eks-orders-dev"]
        scores = [score(c, "payqa") for c in candidates]
        assert scores[0] == 0
        assert scores[1] > 0
        assert scores[2] == 0


class TestScoring:
    """Exact per-character accumulation."""

    def test_full_run_from_start(self):
        # a: 15 + 20 + 5, b: 20 + 4, c: 25 + 3, substring: 50
        assert score("abc", "abc") == 142

    def test_boundary_after_dash(self):
        # a: 15 + 20 + 5, b: 15 + 20 + 3, no substring
        assert score("a-b", "ab") == 78

    def test_run_resets_on_gap(self):
        # a: 15 + 4, b: 20 + 3, substring: 50
        assert score("xab", "ab") == 92
        # a: 15 + 4, b: 15 + 2
        assert score("xaxb", "ab") == 36

    def test_boundary_after_slash_and_underscore(self):
        assert score("x/b", "b") == score("x_b", "b") == score("x-b", "b")
        assert score("x/b", "b") > score("xqb", "b")

    def test_camel_case_is_not_a_boundary(self):
        # b at position 3 after "o": 15 + 2, substring: 50
        assert score("fooBar", "b") == 67
        assert score("foo-bar", "b") > score("fooBar", "b")

    def test_early_match_bonus(self):
        assert score("zzab", "a") > score("zzzzzzab", "a")

    def test_substring_beats_scattered_of_equal_length(self):
        assert score("ab-cd", "ab") > score("ab-cd", "ac")

    def test_non_ascii_compared_per_code_point(self):
        assert score("café-über", "éü") > 0
        assert score("ÜBER", "über") == score("über", "über")
        assert score("日本-東京", "東京") > score("日本-東京", "本京")

    def test_final_sigma_folds_like_sigma(self):
        assert score("ΟΔΟΣ", "Σ") > 0
        assert score("ΟΔΟΣ", "οδοσ") == score("οδοσ", "οδοσ")
        assert score("οδοσ", "ΟΔΟΣ") == score("οδοσ", "οδοσ")

    def test_dotted_capital_i_keeps_positions(self):
        # s at position 1: 15 + 4, substring: 50
        assert score("İstanbul", "s") == 69
        assert score("İstanbul", "ist") == score("istanbul", "ist")


class TestFoldCase:
    """Per-code-point lower-casing."""

    @pytest.mark.parametrize("text", ["ΟΔΟΣ", "İstanbul", "Straße", "ÜBER-prod", ""])
    def test_length_preserved(self, text):
        assert len(fold_case(text)) == len(text)

    def test_values(self):
        assert fold_case("ΟΔΟΣ") == "οδοσ"
        assert fold_case("İ") == "i"
        assert fold_case("Prod-EU") == "prod-eu"


class TestSearchableText:
    """Alias widening of the searchable text."""

    def test_name_only(self):
        assert searchable_text("alpha") == "alpha"

    def test_aliases_appended(self):
        assert searchable_text("alpha", ["prod", "p1"]) == "alpha prod p1"

    def test_alias_makes_candidate_match(self):
        assert score("eks-orders-dev", "prod") == 0
        assert score(searchable_text("eks-orders-dev", ["prod"]), "prod") > 0


class TestRank:
    """Ranking keeps matches only, best first, stable on ties."""

    def test_drops_non_matches(self):
        result = rank(["alpha", "beta", "gamma"], "ma")
        assert [entry.index for entry in result] == [2]

    def test_sorted_by_score_descending(self):
        result = rank(["xxaxxb", "ab", "a-b"], "ab")
        scores = [entry.score for entry in result]
        assert scores == sorted(scores, reverse=True)
        assert result[0] == ScoredEntry(1, score("ab", "ab"))

    def test_ties_keep_input_order(self):
        result = rank(["beta", "alpha", "gamma"], "")
        assert [entry.index for entry in result] == [0, 1, 2]

    def test_idempotent(self):
        texts = ["eks-a", "eks-b", "gke-eks", "eks"]
        assert rank(texts, "eks") == rank(texts, "eks")
