import sys
import os
import json

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import spatialvote.persist
import spatialvote.scenario
from spatialvote.candidate import Candidate, DEFAULT_CANDIDATES, InvalidInput
from spatialvote.method import Method
from spatialvote.scenario import Scenario


def test_defaults():
    scenario = Scenario()
    assert scenario.candidates == list(DEFAULT_CANDIDATES)
    assert scenario.method is Method.PLURALITY
    assert scenario.approval_threshold == .3
    assert scenario.n_voters == 1000


@pytest.mark.parametrize('params', [
    {'approval_threshold': 0},
    {'approval_threshold': -.1},
    {'distribution': 'triangular'},
    {'n_voters': -1},
    {'method': 'dictatorship'},
])
def test_invalid(params):
    with pytest.raises(ValueError):
        Scenario(**params)


def test_invalid_candidates():
    with pytest.raises(InvalidInput):
        Scenario(candidates=[])


def test_run():
    scenario = Scenario(method='irv', n_voters=101, random_state=8)
    result = scenario.run()
    assert result.n_voters == 101
    assert result.method is Method.IRV
    assert result.winner in {'1', '2', '3'}
    assert result.winner == scenario.run().winner


def test_from_dict_plain():
    scenario = Scenario.from_dict({
        'candidates': {'L': [.2, .5], 'R': [.8, .5]},
        'method': 'smithApproval',
        'n_voters': 10,
        'distribution': 'clustered',
    })
    assert [c.id for c in scenario.candidates] == ['L', 'R']
    assert scenario.candidates[1].position == (.8, .5)
    assert scenario.method is Method.SMITH_APPROVAL
    assert scenario.distribution == 'clustered'


def test_from_dict_candidate_list():
    scenario = Scenario.from_dict({
        'candidates': [
            {'id': 'L', 'x': .2, 'y': .5, 'name': 'Left'},
            {'class': 'spatialvote.candidate.Candidate',
             'id': 'R', 'x': .8, 'y': .5},
        ],
    })
    assert scenario.candidates == [
        Candidate('L', .2, .5, name='Left'), Candidate('R', .8, .5)
    ]


def test_persist_roundtrip():
    scenario = Scenario(
        candidates=[Candidate('L', .2, .5), Candidate('R', .8, .5)],
        method=Method.BORDA,
        n_voters=12,
        weighted=True,
        random_state=3,
    )
    serialized = scenario.to_dict()
    assert json.loads(json.dumps(serialized)) == serialized
    loaded = spatialvote.persist.from_dict(serialized)
    assert isinstance(loaded, Scenario)
    assert loaded.to_dict() == serialized


def test_save_load(tmp_path):
    path = tmp_path / 'scenario.json'
    scenario = Scenario(method='approval', approval_threshold=.2,
                        distribution='normal', n_voters=30, random_state=1)
    spatialvote.scenario.save(scenario, path)
    loaded = spatialvote.scenario.load(path)
    assert loaded.to_dict() == scenario.to_dict()
    assert loaded.run().votes == scenario.run().votes
