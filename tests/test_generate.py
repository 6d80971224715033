import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import spatialvote.generate
from spatialvote.preference import Voter


@pytest.mark.parametrize('distribution', list(
    spatialvote.generate.DISTRIBUTIONS.keys()
))
def test_voters_in_unit_square(distribution):
    voters = spatialvote.generate.voters(500, distribution, random_state=1)
    assert len(voters) == 500
    for voter in voters:
        assert isinstance(voter, Voter)
        assert 0 <= voter.x <= 1
        assert 0 <= voter.y <= 1


@pytest.mark.parametrize('distribution', list(
    spatialvote.generate.DISTRIBUTIONS.keys()
))
def test_seeded_reproducible(distribution):
    assert (
        spatialvote.generate.voters(50, distribution, random_state=42)
        == spatialvote.generate.voters(50, distribution, random_state=42)
    )


def test_samplers_independent():
    first = spatialvote.generate.UniformSampler(random_state=3)
    second = spatialvote.generate.UniformSampler(random_state=3)
    sample_a = list(first.sample(5))
    list(spatialvote.generate.UniformSampler(random_state=3).sample(100))
    assert sample_a == list(second.sample(5))


def test_uniform_bbox():
    sampler = spatialvote.generate.UniformSampler(
        bbox=(.2, .4, .3, .5), random_state=0
    )
    for x, y in sampler.sample(100):
        assert .2 <= x <= .3
        assert .4 <= y <= .5


def test_invalid_distribution():
    with pytest.raises(ValueError):
        spatialvote.generate.voters(10, 'triangular')


def test_invalid_bounding():
    with pytest.raises(ValueError):
        spatialvote.generate.GaussianSampler(bounding='wrap')


def test_local_voters():
    voters = spatialvote.generate.local_voters(
        .95, .05, 200, sigma=.1, random_state=7
    )
    assert len(voters) == 200
    assert all(0 <= v.x <= 1 and 0 <= v.y <= 1 for v in voters)
    mean_x = sum(v.x for v in voters) / len(voters)
    assert mean_x > .7


def test_clamp():
    assert spatialvote.generate.clamp(-.5) == 0
    assert spatialvote.generate.clamp(1.5) == 1
    assert spatialvote.generate.clamp(.25) == .25
