"""Merge, ordering and rank rules for a day's score list.

Ordering: score descending, then timestamp ascending (earlier submission
ranks higher). Python's sort is stable, so entries with identical timestamps
keep their insertion order.

Name merge: a player usually submits anonymously at game over and sends a
name moments later, after seeing the rank. The name is attached to the most
recently appended anonymous entry with the same score, found by scanning the
list from the end. Scanning backwards picks "this session's" placeholder
among several identical anonymous scores from other sessions that day.
"""
from typing import List, Tuple

from civle.domain.score_entry import ScoreEntry

SCORE_CAPACITY = 100


def sort_entries(entries: List[ScoreEntry]) -> List[ScoreEntry]:
    return sorted(entries, key=ScoreEntry.sort_key)


def find_anonymous_placeholder(entries: List[ScoreEntry], score) -> int | None:
    """Index of the most recently appended anonymous entry with exactly *score*."""
    for index in range(len(entries) - 1, -1, -1):
        entry = entries[index]
        if entry.is_anonymous and entry.score == score:
            return index
    return None


def attach_or_append(
    entries: List[ScoreEntry],
    score,
    name: str | None,
    timestamp: str,
) -> ScoreEntry:
    """Apply one submission to the *entries* list and return the affected entry.

    Named submissions claim an anonymous placeholder when one exists: the
    placeholder's slot is replaced by a named copy with the original
    timestamp. Entry objects are never modified. Everything else is appended.
    """
    if name:
        index = find_anonymous_placeholder(entries, score)
        if index is not None:
            entries[index] = entries[index].with_name(name)
            return entries[index]
    entry = ScoreEntry(score=score, name=name, timestamp=timestamp)
    entries.append(entry)
    return entry


def find_rank(entries: List[ScoreEntry], score, name: str | None) -> int:
    """1-based position of the submission in the sorted list.

    Named: first entry matching (score, name). Anonymous: last entry matching
    (score, no name), which is the newest one among equal anonymous scores.
    Falls back to ``len(entries)`` when the entry was truncated away.
    """
    if name:
        for index, entry in enumerate(entries):
            if entry.score == score and entry.name == name:
                return index + 1
    else:
        for index in range(len(entries) - 1, -1, -1):
            entry = entries[index]
            if entry.score == score and entry.is_anonymous:
                return index + 1
    return len(entries)


def apply_submission(
    entries: List[ScoreEntry],
    score,
    name: str | None,
    timestamp: str,
    capacity: int = SCORE_CAPACITY,
) -> Tuple[List[ScoreEntry], int]:
    """Merge, sort, truncate to *capacity* and rank. Returns (entries, rank)."""
    working = list(entries)
    attach_or_append(working, score, name, timestamp)
    ranked = sort_entries(working)[:capacity]
    return ranked, find_rank(ranked, score, name)
