'''Distance-based preference ranking of candidates.

A voter prefers nearer candidates to farther ones. The ranking produced by
:func:`rank` is the ballot every voting method in this library is derived
from; voting methods never look at raw positions directly.
'''

import collections.abc
from typing import Any, List, NamedTuple, Sequence, Tuple

import spatialvote.candidate
from spatialvote.geometry import distance


class Voter(NamedTuple):
    '''A voter position in the issue space.'''
    x: float
    y: float


class Preference(NamedTuple):
    '''A candidate in a voter's ranking, with its distance to the voter.'''
    id: Any
    dist: float


def position(voter: Any) -> Tuple[float, float]:
    '''Return the (x, y) position of a voter.

    Accepts :class:`Voter` objects, any object with ``x`` and ``y``
    attributes, and plain 2-sequences.
    '''
    if isinstance(voter, collections.abc.Sequence):
        x, y = voter
        return x, y
    return voter.x, voter.y


def rank(voter_x: float,
         voter_y: float,
         candidates: Sequence[Any],
         ) -> List[Preference]:
    '''Rank candidates by their distance to the voter.

    The sort is stable: candidates at equal distances keep their relative
    input order, which is the tie-break used by every voting method.

    :param voter_x: Horizontal position of the voter.
    :param voter_y: Vertical position of the voter.
    :param candidates: Candidates with ``id``, ``x`` and ``y`` attributes.
    :returns: Preferences ordered from the nearest candidate to the farthest.
    :raises spatialvote.candidate.InvalidInput: If there are no candidates.
    '''
    if not candidates:
        raise spatialvote.candidate.InvalidInput('no candidates provided')
    return sorted(
        (
            Preference(cand.id, distance(voter_x, voter_y, cand.x, cand.y))
            for cand in candidates
        ),
        key=lambda pref: pref.dist,
    )


def ranked_ids(ranking: Sequence[Preference]) -> List[Any]:
    '''Strip distances from a ranking.'''
    return [pref.id for pref in ranking]
