"""
PLANETSEARCH Fuzzy Name Matching

A candidate matches a query when every query character appears in the
candidate, in order, ignoring case ("ab" matches "Alphabet"). Matches are
ranked by a score that rewards:

- runs of consecutive matched characters (each extra character in a run
  doubles that run's contribution),
- matched characters that start a word,
- runs that cover a whole word ("alpha" in "Crater Alpha"),
- a first match close to the start of the name.

An exact case-insensitive match scores infinity and always ranks first.
Ties keep the candidates' input order.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

WORD_START_BONUS = 8.0
WHOLE_WORD_BONUS = 16.0
LEADING_BONUS = 8.0


@dataclass(frozen=True)
class FuzzyMatch:
    """One candidate that survived filtering."""
    original: Any   # The candidate object as passed in
    string: str     # Text the query was matched against
    score: float
    index: int      # Position in the input sequence


def _is_word_start(text: str, index: int) -> bool:
    return index == 0 or not text[index - 1].isalnum()


def _is_word_end(text: str, index: int) -> bool:
    return index == len(text) - 1 or not text[index + 1].isalnum()


def _align(query: str, text: str, start: int) -> Optional[list[int]]:
    """Greedy in-order positions of query in text, first char pinned at start."""
    positions = [start]
    cursor = start + 1
    for char in query[1:]:
        cursor = text.find(char, cursor)
        if cursor < 0:
            return None
        positions.append(cursor)
        cursor += 1
    return positions


def _score_alignment(text: str, positions: list[int]) -> float:
    score = 0.0
    run = 0.0
    run_start = positions[0]
    previous = None

    for pos in positions:
        if previous is not None and pos == previous + 1:
            run = run * 2 + 1
        else:
            if previous is not None and _is_word_start(text, run_start) and _is_word_end(text, previous):
                score += WHOLE_WORD_BONUS
            run = 1.0
            run_start = pos
        score += run
        if _is_word_start(text, pos):
            score += WORD_START_BONUS
        previous = pos

    if _is_word_start(text, run_start) and _is_word_end(text, previous):
        score += WHOLE_WORD_BONUS

    score += LEADING_BONUS / (1 + positions[0])
    return score


def fuzzy_score(query: str, text: str) -> Optional[float]:
    """Score text against query.

    Args:
        query: Characters to look for, in order
        text: Candidate name

    Returns:
        Match score (higher is better, math.inf for an exact match), or
        None if text does not contain the query as a subsequence.

    Example:
        >>> fuzzy_score("xz", "Alphabet") is None
        True
    """
    query = query.lower()
    text = text.lower()

    if not query:
        return 0.0
    if query == text:
        return math.inf

    best: Optional[float] = None
    start = text.find(query[0])
    while start >= 0:
        positions = _align(query, text, start)
        if positions is None:
            # A later start can only see a suffix of what this one saw
            break
        score = _score_alignment(text, positions)
        if best is None or score > best:
            best = score
        start = text.find(query[0], start + 1)
    return best


def fuzzy_filter(
    query: str,
    candidates: Iterable[Any],
    extract: Optional[Callable[[Any], str]] = None,
) -> list[FuzzyMatch]:
    """Filter and rank candidates by fuzzy match against query.

    Args:
        query: Search string
        candidates: Objects to match; order is the tie-break
        extract: Function returning the text to match for a candidate.
            Defaults to using the candidate itself.

    Returns:
        FuzzyMatch list, best first. Sorting is stable, so equal scores
        keep their input order.

    Example:
        >>> [m.string for m in fuzzy_filter("alpha", ["Crater A", "Alphabet Crater", "Crater Alpha"])]
        ['Crater Alpha', 'Alphabet Crater']
    """
    matches = []
    for index, candidate in enumerate(candidates):
        text = extract(candidate) if extract is not None else candidate
        if not isinstance(text, str):
            continue
        score = fuzzy_score(query, text)
        if score is not None:
            matches.append(FuzzyMatch(original=candidate, string=text, score=score, index=index))

    matches.sort(key=lambda match: match.score, reverse=True)
    return matches
