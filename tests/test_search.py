"""Tests for fuzzy filtering."""

import pytest

from dir_sessions.search import (
    available_filters,
    fuzzy_filter,
    fuzzy_score,
    get_filter,
    ranked_filter,
    subsequence_filter,
)


class TestFuzzyScore:
    """Tests for match scoring."""

    def test_empty_term_matches(self):
        assert fuzzy_score("", "/any/path") > 0

    def test_subsequence_match(self):
        """Test characters may be spread out but must stay in order."""
        assert fuzzy_score("hxp", "/home/x/proj") > 0
        assert fuzzy_score("pxh", "/home/x/proj") == 0

    def test_case_insensitive(self):
        assert fuzzy_score("PROJ", "/home/x/proj") > 0
        assert fuzzy_score("proj", "/Home/X/Proj") > 0

    def test_all_words_must_match(self):
        """Test each word of the term is matched separately."""
        assert fuzzy_score("home proj", "/home/x/proj") > 0
        assert fuzzy_score("home nope", "/home/x/proj") == 0

    def test_exact_leaf_scores_highest(self):
        assert fuzzy_score("proj", "/a/proj") > fuzzy_score("proj", "/a/myproject")

    def test_consecutive_beats_scattered(self):
        assert fuzzy_score("abc", "/x/abc") > fuzzy_score("abc", "/x/a_b_c")


class TestFilters:
    """Tests for the registered filter strategies."""

    @pytest.fixture
    def paths(self):
        return ["/z/myproject-old", "/b/proj", "/a/xproj", "/srv/api"]

    def test_subsequence_keeps_order(self, paths):
        assert subsequence_filter(paths, "proj") == ["/z/myproject-old", "/b/proj", "/a/xproj"]

    def test_ranked_puts_best_first(self, paths):
        """Test ranked ordering with ties kept in input order."""
        result = ranked_filter(paths, "proj")
        assert result == ["/b/proj", "/z/myproject-old", "/a/xproj"]

    def test_empty_term_returns_everything(self, paths):
        assert subsequence_filter(paths, "") == paths
        assert ranked_filter(paths, "   ") == paths

    @pytest.mark.parametrize("name", ["subsequence", "ranked"])
    def test_result_is_subset(self, paths, name):
        """Test filters never invent paths and are deterministic."""
        filter_func = get_filter(name)
        first = filter_func(paths, "o")
        assert set(first) <= set(paths)
        assert filter_func(paths, "o") == first

    def test_registry(self):
        assert get_filter("ranked") is ranked_filter
        assert get_filter("subsequence") is subsequence_filter
        assert get_filter("missing") is None
        assert available_filters() == ["ranked", "subsequence"]

    def test_default_filter(self, paths):
        assert fuzzy_filter(paths, "api") == ["/srv/api"]
