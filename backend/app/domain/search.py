"""Substring matching and relevance scoring for knowledge articles.

A linear scan with field weights, fine for a small corpus. There is no
index: every query touches every candidate.
"""

from collections.abc import Iterable

from app.domain.entities import KnowledgeArticle

TITLE_WEIGHT = 10.0
CONTENT_WEIGHT = 5.0
TAG_WEIGHT = 3.0
VIEW_BOOST = 0.1
LIKE_BOOST = 0.2


def _contains(text: str | None, needle: str) -> bool:
    return bool(text) and needle in text.lower()


def _tag_matches(article: KnowledgeArticle, needle: str) -> bool:
    return any(needle in tag.lower() for tag in article.tags)


def matches_filter(article: KnowledgeArticle, query: str) -> bool:
    """List-filter predicate: title, content, search keywords or any tag."""
    needle = query.lower()
    return (
        _contains(article.title, needle)
        or _contains(article.content, needle)
        or _contains(article.search_keywords, needle)
        or _tag_matches(article, needle)
    )


def matches_search(article: KnowledgeArticle, query: str) -> bool:
    """Search predicate: title, content or any tag (keywords alone are not enough)."""
    needle = query.lower()
    return (
        _contains(article.title, needle)
        or _contains(article.content, needle)
        or _tag_matches(article, needle)
    )


def calculate_search_score(article: KnowledgeArticle, query: str) -> float:
    needle = query.lower()
    score = 0.0
    if _contains(article.title, needle):
        score += TITLE_WEIGHT
    if _contains(article.content, needle):
        score += CONTENT_WEIGHT
    if _tag_matches(article, needle):
        score += TAG_WEIGHT
    score += article.view_count * VIEW_BOOST
    score += article.likes * LIKE_BOOST
    return score


def rank_articles(
    articles: Iterable[KnowledgeArticle], query: str
) -> list[tuple[KnowledgeArticle, float]]:
    """Score the articles that match ``query`` and sort them best first.

    Ties keep the incoming order.
    """
    scored = [
        (article, calculate_search_score(article, query))
        for article in articles
        if matches_search(article, query)
    ]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored
