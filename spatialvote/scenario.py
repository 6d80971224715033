'''Election scenarios: a complete, serializable election setup.

A :class:`Scenario` bundles the candidates, the voting method and its
parameters with a description of the voter population, so that a whole
simulated election can be stored in a JSON file and rerun::

    {
        "class": "spatialvote.scenario.Scenario",
        "candidates": [
            {"class": "spatialvote.candidate.Candidate",
             "id": "1", "x": 0.3, "y": 0.7},
            {"class": "spatialvote.candidate.Candidate",
             "id": "2", "x": 0.5, "y": 0.5}
        ],
        "method": "irv",
        "n_voters": 1000,
        "distribution": "normal",
        "random_state": 42
    }

Parameters left out of the file take their defaults from the module
constants of :mod:`spatialvote.geometry` and :mod:`spatialvote.candidate`.
'''

import json
import os
from typing import Any, Dict, Optional, Union

import spatialvote.candidate
import spatialvote.generate
import spatialvote.method
import spatialvote.persist
import spatialvote.tally
from spatialvote.geometry import DEFAULT_APPROVAL_THRESHOLD
from spatialvote.method import Method
from spatialvote.persist import simple_serialization

DEFAULT_N_VOTERS = 1000


@simple_serialization
class Scenario:
    '''A simulated election setup.

    :param candidates: Candidates in input order, either objects with ``id``,
        ``x`` and ``y`` attributes or a mapping of ids to positions.
        Defaults to the three diagonal candidates of
        :data:`spatialvote.candidate.DEFAULT_CANDIDATES`.
    :param method: The voting method, as a member or a name.
    :param approval_threshold: Approval distance for approval-based methods.
        Must be positive.
    :param distribution: Shape of the voter population; one of the keys of
        :data:`spatialvote.generate.DISTRIBUTIONS`.
    :param n_voters: Number of voters to generate.
    :param weighted: Whether to count weighted votes (see
        :func:`spatialvote.tally.evaluate`).
    :param random_state: Seed for the voter generation.
    :raises ValueError: If any of the parameters is invalid.
    '''
    def __init__(self,
                 candidates: Optional[
                     spatialvote.candidate.CandidatesType
                 ] = None,
                 method: Union[Method, str] = Method.PLURALITY,
                 approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                 distribution: str = 'uniform',
                 n_voters: int = DEFAULT_N_VOTERS,
                 weighted: bool = False,
                 random_state: Optional[int] = None,
                 ):
        if candidates is None:
            candidates = spatialvote.candidate.DEFAULT_CANDIDATES
        self.candidates = spatialvote.candidate.as_candidates(candidates)
        spatialvote.candidate.check_candidates(self.candidates)
        self.method = spatialvote.method.as_method(method)
        if not approval_threshold > 0:
            raise ValueError('approval threshold must be positive,'
                             f' got {approval_threshold}')
        self.approval_threshold = approval_threshold
        if distribution not in spatialvote.generate.DISTRIBUTIONS:
            raise ValueError(
                f'invalid voter distribution: {distribution}, supported: '
                + ', '.join(spatialvote.generate.DISTRIBUTIONS.keys())
            )
        self.distribution = distribution
        if n_voters < 0:
            raise ValueError(f'negative number of voters: {n_voters}')
        self.n_voters = n_voters
        self.weighted = weighted
        self.random_state = random_state

    def voters(self):
        '''Generate the voter population of the scenario.'''
        return spatialvote.generate.voters(
            self.n_voters, self.distribution, self.random_state
        )

    def run(self,
            cancel: Optional[spatialvote.tally.CancelToken] = None,
            ) -> spatialvote.tally.ElectionResult:
        '''Generate the voters and evaluate the election.'''
        return spatialvote.tally.evaluate(
            self.method,
            self.voters(),
            self.candidates,
            approval_threshold=self.approval_threshold,
            weighted=self.weighted,
            cancel=cancel,
        )

    @classmethod
    def from_dict(cls, value: Dict[str, Any]) -> 'Scenario':
        '''Create a scenario from a JSON-like dictionary.

        The ``class`` key is optional. Candidates may be given in the
        serialized form produced by :meth:`to_dict`, as plain dictionaries
        with ``id``, ``x`` and ``y`` keys, or as a mapping of ids to
        positions.
        '''
        params = dict(value)
        params.pop('class', None)
        candidates = params.get('candidates')
        if isinstance(candidates, list):
            params['candidates'] = [
                _parse_candidate(cand) for cand in candidates
            ]
        elif isinstance(candidates, dict):
            params['candidates'] = {
                cid: tuple(pos) for cid, pos in candidates.items()
            }
        if isinstance(params.get('method'), dict):
            params['method'] = spatialvote.persist.deserialize_value(
                params['method']
            )
        return cls(**params)


def _parse_candidate(value: Dict[str, Any]) -> spatialvote.candidate.Candidate:
    params = dict(value)
    params.pop('class', None)
    return spatialvote.candidate.Candidate(**params)


def load(path: Union[str, os.PathLike]) -> Scenario:
    '''Load a scenario from a JSON file.'''
    with open(path, encoding='utf8') as infile:
        return Scenario.from_dict(json.load(infile))


def save(scenario: Scenario, path: Union[str, os.PathLike]) -> None:
    '''Save a scenario to a JSON file.'''
    with open(path, 'w', encoding='utf8') as outfile:
        json.dump(scenario.to_dict(), outfile, indent=2)
