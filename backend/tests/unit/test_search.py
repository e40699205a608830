"""Unit tests for search matching and relevance scoring."""

import pytest

from app.domain.entities import KnowledgeArticle
from app.domain.search import calculate_search_score, matches_filter, rank_articles


def _article(title: str, content: str = "body", **kwargs) -> KnowledgeArticle:
    return KnowledgeArticle(title=title, content=content, author_id="1", **kwargs)


def test_score_adds_field_weights_and_popularity():
    article = _article("GDPR Policy", "gdpr rules", tags=["GDPR"], view_count=10, likes=5)
    # 10 (title) + 5 (content) + 3 (tag) + 10 * 0.1 + 5 * 0.2
    assert calculate_search_score(article, "gdpr") == pytest.approx(20.0)


def test_match_is_case_insensitive():
    assert calculate_search_score(_article("Onboarding"), "ONBOARD") == pytest.approx(10.0)


def test_tag_only_match_ranks_below_title_match():
    title_hit = _article("Privacy handbook")
    tag_hit = _article("Handbook", tags=["privacy"])
    ranked = rank_articles([tag_hit, title_hit], "privacy")

    assert [a.title for a, _ in ranked] == ["Privacy handbook", "Handbook"]
    assert ranked[1][1] == pytest.approx(3.0)


def test_rank_skips_articles_matching_only_search_keywords():
    keyword_only = _article("Handbook", search_keywords="privacy")
    assert matches_filter(keyword_only, "privacy")
    assert rank_articles([keyword_only], "privacy") == []


def test_popularity_breaks_ties():
    quiet = _article("Policy A")
    popular = _article("Policy B", likes=3)
    ranked = rank_articles([quiet, popular], "policy")
    assert ranked[0][0] is popular
