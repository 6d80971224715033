'''Pairwise dominance between candidates and the Smith set.

A voter's distance ranking induces a pairwise defeat relation: in any two-way
matchup, the candidate nearer to the voter is preferred. For a single voter
this relation is a strict total order, so its Smith set is simply the nearest
candidate; the machinery becomes interesting for a population, where the
majority relation can contain cycles.

Pairwise counts use the same format as Condorcet votes elsewhere: a mapping
of ``(upper, lower)`` candidate id pairs to the number of voters that prefer
``upper`` to ``lower``.
'''

import collections
from typing import Any, Dict, Iterable, List, Sequence, Set, Tuple

from spatialvote.preference import Preference


def pairwise_defeats(ranking: Sequence[Preference]) -> Dict[Any, Set[Any]]:
    '''Build the defeats map induced by a single voter's ranking.

    Every candidate defeats all the candidates ranked below it.

    :param ranking: A ranking produced by :func:`spatialvote.preference.rank`.
    :returns: A mapping of each candidate id to the set of ids it defeats.
        All candidates are present as keys.
    '''
    defeats = {pref.id: set() for pref in ranking}
    for i, closer in enumerate(ranking):
        for farther in ranking[i+1:]:
            defeats[closer.id].add(farther.id)
    return defeats


def smith_set(defeats: Dict[Any, Set[Any]]) -> List[Any]:
    '''Reduce a defeats map to its Smith set by iterated removal.

    Starting from all candidates, removes every candidate that some remaining
    candidate defeats without being defeated back, until a full pass removes
    nothing. For a defeat relation that is a strict total order (as induced by
    a single voter), this is exact and always leaves the top candidate.

    :param defeats: Candidate ids mapped to the ids they defeat, in
        candidate order.
    :returns: The Smith set members, in the key order of ``defeats``.
    '''
    members = list(defeats.keys())
    removed = True
    while removed:
        removed = False
        for cand in list(members):
            beaten = any(
                cand in defeats[other] and other not in defeats[cand]
                for other in members if other != cand
            )
            if beaten:
                members.remove(cand)
                removed = True
    return members


def voter_smith_set(ranking: Sequence[Preference]) -> List[Any]:
    '''Return the Smith set induced by a single voter's ranking.'''
    return smith_set(pairwise_defeats(ranking))


def pairwise_counts(rankings: Iterable[Sequence[Preference]]
                    ) -> Dict[Tuple[Any, Any], int]:
    '''Count, for every ordered pair, how many voters rank the first higher.

    :param rankings: Rankings of all voters over the same candidates.
    '''
    counts = collections.defaultdict(int)
    for ranking in rankings:
        for i, upper in enumerate(ranking):
            for lower in ranking[i+1:]:
                counts[upper.id, lower.id] += 1
    return dict(counts)


def pairwise_wins(counts: Dict[Tuple[Any, Any], int],
                  include_ties: bool = False,
                  ) -> List[Tuple[Any, Any]]:
    '''Select pairs of candidates where the first beats the second.

    :param counts: Pairwise counts as produced by :func:`pairwise_counts`.
    :param include_ties: Whether to include pairs of candidates that are tied.
        Such a pair will be included in both directions.
    '''
    wins = []
    for pair, count in counts.items():
        upper, lower = pair
        anti_count = counts.get((lower, upper), 0)
        if anti_count < count or include_ties and anti_count == count:
            wins.append(pair)
    return wins


def copeland_scores(candidates: Sequence[Any],
                    wins: List[Tuple[Any, Any]],
                    ) -> Dict[Any, int]:
    '''Score candidates by pairwise wins minus pairwise losses.'''
    scores = {cand: 0 for cand in candidates}
    for winner, loser in wins:
        scores[winner] += 1
        scores[loser] -= 1
    return scores


def population_smith_set(candidates: Sequence[Any],
                         counts: Dict[Tuple[Any, Any], int],
                         ) -> List[Any]:
    '''Return the Smith set of a voter population.

    Orders the candidates by Copeland score; the Smith set is then a prefix of
    that ordering. The prefix starts with the top candidate and is extended
    whenever a candidate outside it beats (or ties) a candidate inside it.
    Unlike :func:`smith_set`, this handles majority cycles correctly.

    :param candidates: Candidate ids in candidate order.
    :param counts: Pairwise counts as produced by :func:`pairwise_counts`.
    :returns: The Smith set members in candidate order; never empty for
        a non-empty candidate list.
    '''
    wins = pairwise_wins(counts, include_ties=True)
    for cand_a in candidates:
        for cand_b in candidates:
            # pairs nobody expressed a preference on are ties
            unexpressed = (
                cand_a != cand_b
                and (cand_a, cand_b) not in counts
                and (cand_b, cand_a) not in counts
            )
            if unexpressed:
                wins.append((cand_a, cand_b))
    scores = copeland_scores(candidates, wins)
    ordering = sorted(candidates, key=scores.get, reverse=True)
    position = {cand: i for i, cand in enumerate(ordering)}
    end_i = 1    # index of the first candidate out of the set
    extended = True
    while extended and end_i < len(ordering):
        extended = False
        for winner, loser in wins:
            if position[winner] >= end_i and position[loser] < end_i:
                end_i = position[winner] + 1
                extended = True
    members = set(ordering[:end_i])
    return [cand for cand in candidates if cand in members]


def dominates(members: Sequence[Any],
              outsider: Any,
              defeats: Dict[Any, Set[Any]],
              ) -> bool:
    '''Tell whether the outsider defeats every member of the set.'''
    return all(member in defeats[outsider] for member in members)
