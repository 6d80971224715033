import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import spatialvote.method
from spatialvote.candidate import Candidate, DEFAULT_CANDIDATES, InvalidInput
from spatialvote.method import Method

LINE_CANDIDATES = [
    Candidate('A', 0, 0),
    Candidate('B', 1, 0),
    Candidate('C', .5, 0),
]


@pytest.mark.parametrize(('coors', 'expected'), [
    ((0, 0), 'A'),
    ((.1, 0), 'A'),
    ((.9, .1), 'B'),
    ((.45, .2), 'C'),
])
def test_plurality(coors, expected):
    assert spatialvote.method.plurality(*coors, LINE_CANDIDATES) == expected


def test_plurality_tie_first_listed():
    cands = [Candidate('A', 0, 0), Candidate('B', 1, 1)]
    assert all(
        spatialvote.method.plurality(.5, .5, cands) == 'A' for i in range(10)
    )
    assert spatialvote.method.plurality(.5, .5, cands[::-1]) == 'B'


def test_approval_within_threshold():
    assert spatialvote.method.approval(0, 0, LINE_CANDIDATES, .3) == {'A': 1.0}
    assert spatialvote.method.approval(.5, 0, LINE_CANDIDATES, .3) == {'C': 1.0}


def test_approval_nearest_first():
    ballot = spatialvote.method.approval(.5, 0, LINE_CANDIDATES, .6)
    assert list(ballot.keys()) == ['C', 'A', 'B']
    assert ballot['C'] == 1
    assert 0 < ballot['A'] < 1
    assert ballot['A'] == pytest.approx(ballot['B'])


def test_approval_fallback_nearest():
    ballot = spatialvote.method.approval(.5, .5, LINE_CANDIDATES, .05)
    assert ballot == {'C': 1.0}


def test_borda_ranking():
    assert spatialvote.method.borda(0, 0, LINE_CANDIDATES) == ['A', 'C', 'B']


def test_irv_ranking():
    ballot = spatialvote.method.irv(.5, 0, LINE_CANDIDATES)
    assert ballot[0] == 'C'
    assert sorted(ballot) == ['A', 'B', 'C']


def test_smith_approval():
    assert spatialvote.method.smith_approval(
        0, 0, LINE_CANDIDATES, .3
    ) == {'A': 1.0}
    assert spatialvote.method.smith_approval(
        .5, 0, LINE_CANDIDATES, .6
    ) == {'C': 1.0}


@pytest.mark.parametrize(('coors', 'expected'), [
    ((.45, .55), '2'),
    ((.31, .71), '1'),
    ((.69, .31), '3'),
])
def test_winner_at_default_approval(coors, expected):
    assert spatialvote.method.winner_at(
        Method.APPROVAL, *coors, DEFAULT_CANDIDATES
    ) == expected


@pytest.mark.parametrize('method', list(Method))
def test_winner_at_nearest(method):
    assert spatialvote.method.winner_at(
        method, .05, 0, LINE_CANDIDATES
    ) == 'A'


def test_cast_mapping_candidates():
    ballot = spatialvote.method.cast(
        'borda', .9, 0, {'A': (0, 0), 'B': (1, 0)}
    )
    assert ballot == ['B', 'A']


@pytest.mark.parametrize(('name', 'expected'), [
    ('plurality', Method.PLURALITY),
    ('Approval', Method.APPROVAL),
    ('irv', Method.IRV),
    ('smith_approval', Method.SMITH_APPROVAL),
    ('smithApproval', Method.SMITH_APPROVAL),
    (Method.BORDA, Method.BORDA),
])
def test_as_method(name, expected):
    assert spatialvote.method.as_method(name) is expected


def test_unknown_method():
    with pytest.raises(ValueError):
        spatialvote.method.as_method('condorcet')
    with pytest.raises(ValueError):
        spatialvote.method.cast('condorcet', 0, 0, LINE_CANDIDATES)


@pytest.mark.parametrize('method', list(Method))
def test_no_candidates(method):
    with pytest.raises(InvalidInput):
        spatialvote.method.cast(method, .5, .5, [])


@pytest.mark.parametrize(('method', 'expected'), [
    (Method.PLURALITY, 'X'),
    (Method.APPROVAL, {'X': 1.0}),
    (Method.BORDA, ['X']),
    (Method.IRV, ['X']),
    (Method.SMITH_APPROVAL, {'X': 1.0}),
])
def test_single_candidate(method, expected):
    # even far away beyond the approval threshold
    assert spatialvote.method.cast(
        method, 1, 1, [Candidate('X', 0, 0)], .1
    ) == expected


@pytest.mark.parametrize('n', range(1, 7))
def test_borda_points_total(n):
    cands = [Candidate(i, i / 10, .5) for i in range(n)]
    ballot = spatialvote.method.borda(.2, .3, cands)
    points = spatialvote.method.borda_points(ballot)
    assert sum(points.values()) == n * (n - 1) // 2
    assert points[ballot[0]] == n - 1


def test_titles_complete():
    for method in Method:
        assert method.title
        assert spatialvote.method.DESCRIPTIONS[method]
