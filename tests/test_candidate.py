import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import spatialvote.candidate
from spatialvote.candidate import Candidate, InvalidInput


def test_mapping_to_candidates():
    cands = spatialvote.candidate.as_candidates({'A': (0, 0), 'B': (1, .5)})
    assert [c.id for c in cands] == ['A', 'B']
    assert cands[1].position == (1, .5)
    assert cands[1].name == 'B'


def test_sequence_copied():
    orig = [Candidate('A', 0, 0)]
    cands = spatialvote.candidate.as_candidates(orig)
    assert cands == orig
    assert cands is not orig


def test_immutable():
    cand = Candidate('A', .2, .3, name='Alice', color='#ff0000')
    with pytest.raises(AttributeError):
        cand.x = .5
    moved = cand.moved(.5, .6)
    assert moved.position == (.5, .6)
    assert moved.name == 'Alice'
    assert moved.color == '#ff0000'
    assert cand.position == (.2, .3)


def test_equality_and_hash():
    assert Candidate('A', 0, 0) == Candidate('A', 0, 0)
    assert Candidate('A', 0, 0) != Candidate('A', 0, 1)
    assert len({Candidate('A', 0, 0), Candidate('A', 0, 0)}) == 1


def test_empty_invalid():
    with pytest.raises(InvalidInput):
        spatialvote.candidate.check_candidates([])


def test_duplicate_ids_invalid():
    with pytest.raises(InvalidInput) as excinfo:
        spatialvote.candidate.check_candidates([
            Candidate('A', 0, 0), Candidate('B', 1, 1), Candidate('A', .5, .5)
        ])
    assert excinfo.value.candidates == ['A']


def test_invalid_input_is_value_error():
    assert issubclass(InvalidInput, ValueError)


def test_default_candidates_valid():
    spatialvote.candidate.check_candidates(
        spatialvote.candidate.DEFAULT_CANDIDATES
    )
    assert spatialvote.candidate.ids(
        spatialvote.candidate.DEFAULT_CANDIDATES
    ) == ['1', '2', '3']
