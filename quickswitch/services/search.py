"""
Goal: Search Engine. Filter and rank a Snapshot for a typed query.

Every query word must appear somewhere in "title subtitle" (AND, any order).
Ranking, most relevant first:
  1. title equals the whole query (case-insensitive)
  2. every word found in the title alone
  3. shorter title
  4. title, case-insensitive
  5. (type, id), so identical titles still sort the same way every time
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from quickswitch.models.items import Item, Snapshot


def query_words(query: str) -> List[str]:
    """Lowercased, de-duplicated words in first-seen order."""
    seen: List[str] = []
    for word in (query or "").lower().split():
        if word not in seen:
            seen.append(word)
    return seen


def _haystack(item: Item) -> str:
    return f"{item.title} {item.subtitle}".lower()


def matches(item: Item, words: Iterable[str]) -> bool:
    text = _haystack(item)
    return all(word in text for word in words)


def rank_key(item: Item, phrase: str, words: List[str]) -> Tuple[int, int, int, str, str, str]:
    title = item.title.lower()
    exact = title == phrase
    all_in_title = all(word in title for word in words)
    return (
        0 if exact else 1,
        0 if all_in_title else 1,
        len(item.title),
        title,
        item.type.value,
        item.id,
    )


def _unique(items: Iterable[Item]) -> List[Item]:
    seen = set()
    out = []
    for item in items:
        if item.key in seen:
            continue
        seen.add(item.key)
        out.append(item)
    return out


def search(query: str, snapshot: Snapshot) -> List[Item]:
    """Ranked matches for `query`. Blank queries match nothing."""
    phrase = (query or "").strip().lower()
    words = query_words(phrase)
    if not words:
        return []
    candidates = [item for item in _unique(snapshot.items) if matches(item, words)]
    return sorted(candidates, key=lambda item: rank_key(item, phrase, words))


def list_all(snapshot: Snapshot) -> List[Item]:
    """Every item in snapshot order (windows, then tabs); the UI's initial list."""
    return _unique(snapshot.items)
