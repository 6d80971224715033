import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import spatialvote.persist
from spatialvote.candidate import Candidate
from spatialvote.method import Method


def test_candidate_roundtrip():
    cand = Candidate('A', .1, .9, name='Alice', color='#00ff00')
    serialized = cand.to_dict()
    assert serialized == {
        'class': 'spatialvote.candidate.Candidate',
        'id': 'A', 'x': .1, 'y': .9, 'name': 'Alice', 'color': '#00ff00',
    }
    assert spatialvote.persist.from_dict(serialized) == cand


def test_enum():
    serialized = spatialvote.persist.serialize_value(Method.IRV)
    assert serialized == {'type': 'spatialvote.method.Method', 'value': 'irv'}
    assert spatialvote.persist.deserialize_value(serialized) is Method.IRV


def test_non_string_keys():
    value = {1: 'a', 2: 'b'}
    serialized = spatialvote.persist.serialize_value(value)
    assert serialized['type'] == 'dict'
    assert spatialvote.persist.deserialize_value(serialized) == value


@pytest.mark.parametrize('value', [
    {'class': 'os.system', 'command': 'ls'},
    {'class': 'spatialvotex.evil.Thing'},
    {'class': 'Candidate'},
    {'id': 'A'},
    ['spatialvote.candidate.Candidate'],
])
def test_invalid_defs(value):
    with pytest.raises(ValueError):
        spatialvote.persist.from_dict(value)


def test_unserializable():
    with pytest.raises(ValueError):
        spatialvote.persist.serialize_value(object())


@pytest.mark.parametrize(('value', 'expected'), [
    ('spatialvote.candidate.Candidate', True),
    ('a.b', True),
    ('Candidate', False),
    ('.candidate', False),
    ('a..b', False),
    (3, False),
])
def test_is_scoped_identifier(value, expected):
    assert spatialvote.persist.is_scoped_identifier(value) == expected
