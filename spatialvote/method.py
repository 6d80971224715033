'''Single-voter ballots under the supported voting methods.

Each voting method turns one voter position into a ballot:

-   **Plurality** gives the id of the nearest candidate.
-   **Approval** gives the approved candidates with their falloff weights;
    a candidate is approved when it lies within the approval threshold.
    When no candidate is that close, the voter approves of the nearest one
    (a deliberate fallback so that every voter casts a non-empty ballot).
-   **Borda** gives the full ranking; a candidate at position ``i`` among
    ``n`` candidates implicitly gets ``n - 1 - i`` points
    (see :func:`borda_points`).
-   **IRV** gives the full ranking, used as the ballot in the instant-runoff
    elimination rounds of :func:`spatialvote.tally.evaluate`.
-   **Smith + Approval** restricts the candidates to the voter's Smith set
    and casts an approval ballot over the rest.

All functions share the signature
``(voter_x, voter_y, candidates, approval_threshold)`` (methods that do not
use the threshold ignore it) and raise
:class:`spatialvote.candidate.InvalidInput` on an empty candidate list.
With a single candidate, every method returns that candidate straight away.
Use :func:`cast` to dispatch by :class:`Method`.
'''

import enum
from typing import Any, Dict, List, Sequence, Union

import spatialvote.candidate
import spatialvote.pairwise
from spatialvote.geometry import DEFAULT_APPROVAL_THRESHOLD, weight
from spatialvote.preference import rank, ranked_ids


class Method(enum.Enum):
    '''The supported voting methods.

    Members can also be looked up by their value or, for Smith + Approval,
    by the camel-case name ``smithApproval``.
    '''
    PLURALITY = 'plurality'
    APPROVAL = 'approval'
    BORDA = 'borda'
    IRV = 'irv'
    SMITH_APPROVAL = 'smith_approval'

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.strip().lower().replace('-', '_')
            for member in cls:
                if normalized in (member.value, member.value.replace('_', '')):
                    return member
        return None

    @property
    def title(self) -> str:
        return TITLES[self]


TITLES = {
    Method.PLURALITY: 'Plurality',
    Method.APPROVAL: 'Approval',
    Method.BORDA: 'Borda Count',
    Method.IRV: 'Instant Runoff',
    Method.SMITH_APPROVAL: 'Smith Set + Approval',
}

DESCRIPTIONS = {
    Method.PLURALITY: (
        'Each voter chooses their closest candidate.'
        ' The candidate with the most votes wins.'
    ),
    Method.APPROVAL: (
        'Voters approve all candidates within a certain distance.'
        ' The most approved candidate wins.'
    ),
    Method.BORDA: (
        'Voters rank candidates by distance. Each rank gives points'
        ' (n-1 for 1st, n-2 for 2nd, etc.). Highest points wins.'
    ),
    Method.IRV: (
        'Voters rank by distance. If no majority, eliminate last place'
        ' and retry with remaining candidates.'
    ),
    Method.SMITH_APPROVAL: (
        'Only candidates from the Smith set are considered; among them,'
        ' the most approved candidate wins.'
    ),
}

ApprovalBallot = Dict[Any, float]
AnyBallot = Union[Any, List[Any], ApprovalBallot]


def plurality(voter_x: float,
              voter_y: float,
              candidates: Sequence[Any],
              approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
              ) -> Any:
    '''Return the id of the candidate nearest to the voter.'''
    if len(candidates) == 1:
        return candidates[0].id
    return rank(voter_x, voter_y, candidates)[0].id


def approval(voter_x: float,
             voter_y: float,
             candidates: Sequence[Any],
             approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
             ) -> ApprovalBallot:
    '''Return the approved candidates with their approval weights.

    :param approval_threshold: Maximum distance of an approved candidate.
        Must be positive. The approval weight falls off with the distance,
        from 1 at the voter's position to 0 at the threshold.
    :returns: Approved candidate ids mapped to weights, nearest first.
        If no candidate is within the threshold, the nearest candidate
        alone, with a weight of 1.
    '''
    if len(candidates) == 1:
        return {candidates[0].id: 1.}
    ranking = rank(voter_x, voter_y, candidates)
    approved = {
        pref.id: weight(pref.dist, approval_threshold)
        for pref in ranking
        if pref.dist <= approval_threshold
    }
    if not approved:
        return {ranking[0].id: 1.}
    return approved


def borda(voter_x: float,
          voter_y: float,
          candidates: Sequence[Any],
          approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
          ) -> List[Any]:
    '''Return the candidate ids ranked for a Borda count.'''
    if len(candidates) == 1:
        return [candidates[0].id]
    return ranked_ids(rank(voter_x, voter_y, candidates))


def irv(voter_x: float,
        voter_y: float,
        candidates: Sequence[Any],
        approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
        ) -> List[Any]:
    '''Return the candidate ids ranked for an instant-runoff ballot.'''
    if len(candidates) == 1:
        return [candidates[0].id]
    return ranked_ids(rank(voter_x, voter_y, candidates))


def smith_approval(voter_x: float,
                   voter_y: float,
                   candidates: Sequence[Any],
                   approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                   ) -> ApprovalBallot:
    '''Return an approval ballot restricted to the voter's Smith set.'''
    if len(candidates) == 1:
        return {candidates[0].id: 1.}
    smith = set(spatialvote.pairwise.voter_smith_set(
        rank(voter_x, voter_y, candidates)
    ))
    return approval(
        voter_x, voter_y,
        [cand for cand in candidates if cand.id in smith],
        approval_threshold
    )


def borda_points(ballot: Sequence[Any]) -> Dict[Any, int]:
    '''Return the Borda points implied by a ranked ballot.

    The candidate at position ``i`` out of ``n`` gets ``n - 1 - i`` points,
    so one ballot awards ``n * (n - 1) / 2`` points in total.
    '''
    n = len(ballot)
    return {cand: n - 1 - i for i, cand in enumerate(ballot)}


def best_approved(ballot: ApprovalBallot) -> Any:
    '''Return the id with the highest approval weight (first on ties).'''
    best = None
    best_weight = None
    for cand, cand_weight in ballot.items():
        if best_weight is None or cand_weight > best_weight:
            best, best_weight = cand, cand_weight
    return best


def as_method(method: Union[Method, str]) -> Method:
    '''Convert a method name to a :class:`Method` member.

    :raises ValueError: If the name is not recognized.
    '''
    try:
        return Method(method)
    except ValueError as e:
        raise ValueError(
            f'unknown voting method: {method!r}, available: '
            + ', '.join(member.value for member in Method)
        ) from e


def cast(method: Union[Method, str],
         voter_x: float,
         voter_y: float,
         candidates: Sequence[Any],
         approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
         ) -> AnyBallot:
    '''Cast a single voter's ballot under the given method.

    :param method: The voting method, as a member or a name.
    :param voter_x: Horizontal position of the voter.
    :param voter_y: Vertical position of the voter.
    :param candidates: Candidates in input order, either objects with ``id``,
        ``x`` and ``y`` attributes or a mapping of ids to positions.
    :param approval_threshold: Approval distance for approval-based methods.
    :raises spatialvote.candidate.InvalidInput: If there are no candidates.
    :raises ValueError: If the method is not recognized.
    '''
    method = as_method(method)
    candidates = spatialvote.candidate.as_candidates(candidates)
    if method is Method.PLURALITY:
        fx = plurality
    elif method is Method.APPROVAL:
        fx = approval
    elif method is Method.BORDA:
        fx = borda
    elif method is Method.IRV:
        fx = irv
    elif method is Method.SMITH_APPROVAL:
        fx = smith_approval
    else:
        raise AssertionError(f'unhandled voting method {method}')
    if not candidates:
        raise spatialvote.candidate.InvalidInput('no candidates provided')
    return fx(voter_x, voter_y, candidates, approval_threshold)


def winner_at(method: Union[Method, str],
              voter_x: float,
              voter_y: float,
              candidates: Sequence[Any],
              approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
              ) -> Any:
    '''Return the single candidate a voter at the given point elects.

    For ranked ballots, this is the first ranked candidate; for approval
    ballots, the candidate with the highest approval weight.
    '''
    method = as_method(method)
    ballot = cast(method, voter_x, voter_y, candidates, approval_threshold)
    if method is Method.PLURALITY:
        return ballot
    elif method in (Method.APPROVAL, Method.SMITH_APPROVAL):
        return best_approved(ballot)
    else:
        return ballot[0]
