'''Evaluate elections over a population of voters.

The functions here cast one ballot per voter using :mod:`spatialvote.method`
and aggregate the ballots into per-candidate tallies:

-   Plurality counts the nearest candidate of every voter.
-   Approval counts every approved candidate (or sums approval weights).
-   Borda sums the rank points.
-   Instant-runoff voting (IRV, Hare) eliminates the weakest candidate
    round by round until someone holds a majority of the votes of the round.
-   Smith + Approval restricts the candidates to the Smith set of the
    population and counts approvals among them.

Every tally contains all candidates, zero if they got no votes, in candidate
order. The winner is the candidate with the highest tally; ties go to the
candidate listed first.

Long loops over voters check an optional :class:`CancelToken`, so that
a caller evaluating many elections (such as a win-region map) can abandon
the computation from another thread.
'''

import logging
import threading
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import spatialvote.candidate
import spatialvote.method
import spatialvote.pairwise
from spatialvote.geometry import DEFAULT_APPROVAL_THRESHOLD, VOTER_RADIUS, \
    weight
from spatialvote.method import Method
from spatialvote.persist import simple_serialization
from spatialvote.preference import position, rank

logger = logging.getLogger(__name__)


class Cancelled(Exception):
    '''The evaluation was cancelled through its :class:`CancelToken`.'''
    pass


class CancelToken:
    '''A flag to stop long-running evaluations.

    Pass the token to the evaluating function and call :meth:`cancel` from
    elsewhere; the evaluation raises :class:`Cancelled` at its next check.
    '''
    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise Cancelled('evaluation cancelled')


def _check(cancel: Optional[CancelToken]) -> None:
    if cancel is not None:
        cancel.raise_if_cancelled()


@simple_serialization
class ElectionResult:
    '''The outcome of an election evaluated over a voter population.

    :param method: The voting method used.
    :param winner: Id of the winning candidate.
    :param votes: Final tally of all candidates, in candidate order. For IRV,
        this is the tally of the last round, with eliminated candidates at
        zero.
    :param eliminated: Ids of candidates eliminated in IRV, in the order of
        elimination. Empty for other methods.
    :param rounds: Tallies of all counting rounds. Only IRV has more than one.
    :param n_voters: Number of voters in the population.
    '''
    def __init__(self,
                 method: Method,
                 winner: Any,
                 votes: Dict[Any, float],
                 eliminated: List[Any] = [],
                 rounds: Optional[List[Dict[Any, float]]] = None,
                 n_voters: int = 0,
                 ):
        self.method = spatialvote.method.as_method(method)
        self.winner = winner
        self.votes = dict(votes)
        self.eliminated = list(eliminated)
        self.rounds = [dict(votes)] if rounds is None else list(rounds)
        self.n_voters = n_voters

    def shares(self) -> Dict[Any, float]:
        '''Return the fraction of the tally total held by each candidate.'''
        total = sum(self.votes.values())
        if not total:
            return {cand: 0. for cand in self.votes}
        return {cand: n_votes / total for cand, n_votes in self.votes.items()}

    def __repr__(self) -> str:
        return f'<ElectionResult({self.method.value},{self.winner!r})>'


def select_winner(votes: Dict[Any, float]) -> Any:
    '''Return the key with the highest value, the first one on ties.'''
    winner = None
    best = None
    for cand, n_votes in votes.items():
        if best is None or n_votes > best:
            winner, best = cand, n_votes
    return winner


def select_loser(votes: Dict[Any, float]) -> Any:
    '''Return the key with the lowest value, the last one on ties.'''
    loser = None
    worst = None
    for cand, n_votes in votes.items():
        if worst is None or n_votes <= worst:
            loser, worst = cand, n_votes
    return loser


def empty_tally(candidates: Sequence[Any]) -> Dict[Any, float]:
    return {cand.id: 0 for cand in candidates}


def plurality_votes(positions: Sequence[tuple],
                    candidates: Sequence[Any],
                    weighted: bool = False,
                    radius: float = VOTER_RADIUS,
                    cancel: Optional[CancelToken] = None,
                    ) -> Dict[Any, float]:
    '''Count the nearest candidate of each voter.

    :param weighted: Count each vote with the falloff weight of the distance
        to the chosen candidate instead of a full vote. A sole candidate
        always gets full votes.
    :param radius: Falloff radius for weighted votes.
    '''
    votes = empty_tally(candidates)
    for x, y in positions:
        _check(cancel)
        if weighted and len(candidates) > 1:
            nearest = rank(x, y, candidates)[0]
            votes[nearest.id] += weight(nearest.dist, radius)
        else:
            votes[spatialvote.method.plurality(x, y, candidates)] += 1
    return votes


def approval_votes(positions: Sequence[tuple],
                   candidates: Sequence[Any],
                   approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                   weighted: bool = False,
                   cancel: Optional[CancelToken] = None,
                   ) -> Dict[Any, float]:
    '''Count the approvals of each candidate.

    :param weighted: Sum the approval weights instead of counting approvals.
    '''
    votes = empty_tally(candidates)
    for x, y in positions:
        _check(cancel)
        ballot = spatialvote.method.approval(
            x, y, candidates, approval_threshold
        )
        for cand, cand_weight in ballot.items():
            votes[cand] += cand_weight if weighted else 1
    return votes


def borda_votes(positions: Sequence[tuple],
                candidates: Sequence[Any],
                cancel: Optional[CancelToken] = None,
                ) -> Dict[Any, float]:
    '''Sum the Borda points of each candidate.'''
    votes = empty_tally(candidates)
    for x, y in positions:
        _check(cancel)
        ballot = spatialvote.method.borda(x, y, candidates)
        for cand, points in spatialvote.method.borda_points(ballot).items():
            votes[cand] += points
    return votes


def irv_rounds(ballots: Sequence[Sequence[Any]],
               candidates: Sequence[Any],
               cancel: Optional[CancelToken] = None,
               ) -> ElectionResult:
    '''Run instant-runoff elimination rounds over ranked ballots.

    In each round, every ballot counts for its highest ranked candidate
    that has not been eliminated. A candidate with more than half of the
    votes of the round wins; otherwise the candidate with the fewest votes
    (the last listed on ties) is eliminated and the next round is counted.
    When a single candidate remains, they win regardless of majority.

    :param ballots: Full rankings of candidate ids, one per voter.
    :param candidates: Candidates in candidate order.
    '''
    remaining = spatialvote.candidate.ids(candidates)
    eliminated = []
    rounds = []
    while True:
        _check(cancel)
        round_votes = {cand: 0 for cand in remaining}
        for ballot in ballots:
            for cand in ballot:
                if cand in round_votes:
                    round_votes[cand] += 1
                    break
        rounds.append(round_votes)
        logger.debug('round %d tally: %s', len(rounds), round_votes)
        total = sum(round_votes.values())
        leader = select_winner(round_votes)
        if len(remaining) == 1:
            logger.info('%s remains, elected', leader)
            break
        elif round_votes[leader] * 2 > total:
            logger.info('%s elected by majority with %d of %d votes',
                        leader, round_votes[leader], total)
            break
        loser = select_loser(round_votes)
        logger.info('eliminating %s with %d votes', loser, round_votes[loser])
        remaining.remove(loser)
        eliminated.append(loser)
    votes = empty_tally(candidates)
    votes.update(rounds[-1])
    return ElectionResult(
        Method.IRV, leader, votes,
        eliminated=eliminated,
        rounds=rounds,
        n_voters=len(ballots),
    )


def smith_approval_votes(positions: Sequence[tuple],
                         candidates: Sequence[Any],
                         approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                         weighted: bool = False,
                         cancel: Optional[CancelToken] = None,
                         ) -> Dict[Any, float]:
    '''Count approvals among the members of the population's Smith set.'''
    rankings = []
    for x, y in positions:
        _check(cancel)
        rankings.append(rank(x, y, candidates))
    smith = spatialvote.pairwise.population_smith_set(
        spatialvote.candidate.ids(candidates),
        spatialvote.pairwise.pairwise_counts(rankings),
    )
    logger.info('smith set: %s', smith)
    restricted = [cand for cand in candidates if cand.id in smith]
    votes = empty_tally(candidates)
    votes.update(approval_votes(
        positions, restricted, approval_threshold,
        weighted=weighted, cancel=cancel
    ))
    return votes


def evaluate(method: Union[Method, str],
             voters: Iterable[Any],
             candidates: spatialvote.candidate.CandidatesType,
             approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
             weighted: bool = False,
             cancel: Optional[CancelToken] = None,
             ) -> ElectionResult:
    '''Evaluate an election of a voter population.

    :param method: The voting method, as a member or a name.
    :param voters: Voter positions; :class:`spatialvote.preference.Voter`
        objects, objects with ``x`` and ``y`` attributes or ``(x, y)`` pairs.
    :param candidates: Candidates in input order, either objects with ``id``,
        ``x`` and ``y`` attributes or a mapping of ids to positions.
        The list is never modified.
    :param approval_threshold: Approval distance for approval-based methods.
    :param weighted: Use falloff weights instead of whole votes for plurality
        (with :data:`spatialvote.geometry.VOTER_RADIUS`) and approval-based
        methods (with the approval threshold). Ranked methods ignore this.
    :param cancel: A token to cancel the evaluation with.
    :raises spatialvote.candidate.InvalidInput: If the candidate list is
        empty or has duplicate ids.
    :raises Cancelled: If the token gets cancelled during the evaluation.
    '''
    method = spatialvote.method.as_method(method)
    candidates = spatialvote.candidate.as_candidates(candidates)
    spatialvote.candidate.check_candidates(candidates)
    positions = [position(voter) for voter in voters]
    logger.debug('evaluating %s for %d voters and %d candidates',
                 method.value, len(positions), len(candidates))
    if method is Method.PLURALITY:
        votes = plurality_votes(
            positions, candidates, weighted=weighted, cancel=cancel
        )
    elif method is Method.APPROVAL:
        votes = approval_votes(
            positions, candidates, approval_threshold,
            weighted=weighted, cancel=cancel
        )
    elif method is Method.BORDA:
        votes = borda_votes(positions, candidates, cancel=cancel)
    elif method is Method.IRV:
        ballots = []
        for x, y in positions:
            _check(cancel)
            ballots.append(spatialvote.method.irv(x, y, candidates))
        return irv_rounds(ballots, candidates, cancel=cancel)
    elif method is Method.SMITH_APPROVAL:
        votes = smith_approval_votes(
            positions, candidates, approval_threshold,
            weighted=weighted, cancel=cancel
        )
    else:
        raise AssertionError(f'unhandled voting method {method}')
    return ElectionResult(
        method, select_winner(votes), votes, n_voters=len(positions)
    )


def simulate(method: Union[Method, str],
             voters: Iterable[Any],
             candidates: spatialvote.candidate.CandidatesType,
             approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
             cancel: Optional[CancelToken] = None,
             ) -> ElectionResult:
    '''Count how many voters would elect each candidate on their own.

    Each voter is reduced to a single winner by
    :func:`spatialvote.method.winner_at`; the tally counts those winners.
    '''
    method = spatialvote.method.as_method(method)
    candidates = spatialvote.candidate.as_candidates(candidates)
    spatialvote.candidate.check_candidates(candidates)
    votes = empty_tally(candidates)
    n_voters = 0
    for voter in voters:
        _check(cancel)
        x, y = position(voter)
        votes[spatialvote.method.winner_at(
            method, x, y, candidates, approval_threshold
        )] += 1
        n_voters += 1
    return ElectionResult(
        method, select_winner(votes), votes, n_voters=n_voters
    )
