'''Geometric primitives of the spatial voting model.

Voter and candidate positions are points in the 2D issue space (normally the
unit square). The only geometric notions the voting methods need are the
Euclidean distance between two points and a smooth falloff weight that turns
a distance into a vote weight between 0 and 1.
'''

import math
from typing import Any, Dict, Iterable

VOTER_RADIUS = 0.15
'''Radius of influence of a voter for weighted plurality votes.'''

DEFAULT_APPROVAL_THRESHOLD = 0.3
'''Distance up to which a voter approves of a candidate by default.'''


def distance(ax: float, ay: float, bx: float, by: float) -> float:
    '''Return the Euclidean distance between points (ax, ay) and (bx, by).'''
    return math.sqrt((bx - ax) ** 2 + (by - ay) ** 2)


def weight(dist: float, radius: float) -> float:
    '''Return the cosine falloff weight of a distance within a radius.

    The weight is 1 at zero distance and decays smoothly to 0 at the radius,
    without the discontinuity of a hard cutoff. Distances at or beyond the
    radius get zero weight.

    :param dist: Distance of a candidate from the voter.
    :param radius: Radius of the falloff. Must be positive; the result for
        non-positive radii is undefined.
    '''
    if dist >= radius:
        return 0.
    return .5 * (1 + math.cos(math.pi * dist / radius))


def influence(x: float,
              y: float,
              candidates: Iterable[Any],
              radius: float = VOTER_RADIUS,
              ) -> Dict[Any, float]:
    '''Return the falloff weight of each candidate as seen from a point.

    :param x: Horizontal coordinate of the point.
    :param y: Vertical coordinate of the point.
    :param candidates: Candidates with ``id``, ``x`` and ``y`` attributes.
    :param radius: Falloff radius.
    :returns: Weights keyed by candidate id, in candidate order.
    '''
    return {
        cand.id: weight(distance(x, y, cand.x, cand.y), radius)
        for cand in candidates
    }
