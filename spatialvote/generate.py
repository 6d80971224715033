"""Generate voter populations for spatial election simulations.

Samplers produce voter positions in the issue space. Each sampler owns its
random generator, seeded by ``random_state``, so that two samplers never
interfere and a seeded population is reproducible.

Three population shapes are provided by name for :func:`voters`:

-   ``uniform``: voters spread evenly over the unit square.
-   ``normal``: a Gaussian population centered in the unit square; points
    falling outside are redrawn so that voters do not pile up on the edges.
-   ``clustered``: a mixture of three Gaussian clusters, clamped to the unit
    square.

:class:`GaussianSampler` additionally produces the local populations around
a single point used by :func:`spatialvote.regions.population_map`.
"""

import random
from typing import Iterable, List, Optional, Sequence, Tuple

from spatialvote.preference import Voter

UNIT_BBOX = (0., 0., 1., 1.)

NORMAL_SIGMA = .15
CLUSTER_CENTERS = ((.3, .3), (.7, .7), (.5, .5))
CLUSTER_SIGMA = .2
LOCAL_SIGMA = .15


def clamp(value: float, low: float = 0., high: float = 1.) -> float:
    return min(high, max(low, value))


class Sampler:
    """A generic voter position sampler interface.

    :param random_state: Seed for the sampler's random generator.
    """
    def __init__(self, random_state: Optional[int] = None):
        self.random_state = random_state
        self.rng = random.Random(random_state)

    def sample(self, n: int) -> Iterable[Tuple[float, float]]:
        raise NotImplementedError


class UniformSampler(Sampler):
    """Sample positions uniformly from a rectangle.

    :param bbox: The rectangle as ``(minx, miny, maxx, maxy)``.
    """
    def __init__(self,
                 bbox: Tuple[float, float, float, float] = UNIT_BBOX,
                 random_state: Optional[int] = None):
        super().__init__(random_state)
        self.bbox = bbox

    def sample(self, n: int) -> Iterable[Tuple[float, float]]:
        minx, miny, maxx, maxy = self.bbox
        for i in range(n):
            yield self.rng.uniform(minx, maxx), self.rng.uniform(miny, maxy)


class GaussianSampler(Sampler):
    """Sample positions from a 2D Gaussian around a center.

    :param center: Mean of the distribution.
    :param sigma: Standard deviation in both dimensions.
    :param bounding: What to do with positions outside the unit square:
        ``clamp`` moves them onto its edge, ``redraw`` samples them again,
        ``none`` keeps them.
    """
    BOUNDINGS = ('clamp', 'redraw', 'none')

    def __init__(self,
                 center: Tuple[float, float] = (.5, .5),
                 sigma: float = LOCAL_SIGMA,
                 bounding: str = 'clamp',
                 random_state: Optional[int] = None):
        if bounding not in self.BOUNDINGS:
            raise ValueError(f'invalid bounding: {bounding}, supported: '
                             + ', '.join(self.BOUNDINGS))
        super().__init__(random_state)
        self.center = center
        self.sigma = sigma
        self.bounding = bounding

    def sample(self, n: int) -> Iterable[Tuple[float, float]]:
        for i in range(n):
            yield self._draw(self.center)

    def _draw(self, center: Tuple[float, float]) -> Tuple[float, float]:
        cx, cy = center
        while True:
            x = self.rng.gauss(cx, self.sigma)
            y = self.rng.gauss(cy, self.sigma)
            if self.bounding == 'clamp':
                return clamp(x), clamp(y)
            elif self.bounding == 'none' or (0 <= x <= 1 and 0 <= y <= 1):
                return x, y


class NormalSampler(GaussianSampler):
    """Sample a centered Gaussian population, redrawing outliers."""
    def __init__(self,
                 sigma: float = NORMAL_SIGMA,
                 random_state: Optional[int] = None):
        super().__init__(
            center=(.5, .5),
            sigma=sigma,
            bounding='redraw',
            random_state=random_state,
        )


class ClusteredSampler(GaussianSampler):
    """Sample from a mixture of equally likely Gaussian clusters.

    :param centers: Centers of the clusters.
    :param sigma: Standard deviation of every cluster.
    """
    def __init__(self,
                 centers: Sequence[Tuple[float, float]] = CLUSTER_CENTERS,
                 sigma: float = CLUSTER_SIGMA,
                 random_state: Optional[int] = None):
        super().__init__(
            sigma=sigma,
            bounding='clamp',
            random_state=random_state,
        )
        self.centers = centers

    def sample(self, n: int) -> Iterable[Tuple[float, float]]:
        for i in range(n):
            yield self._draw(self.rng.choice(self.centers))


DISTRIBUTIONS = {
    'uniform': UniformSampler,
    'normal': NormalSampler,
    'clustered': ClusteredSampler,
}


def create_sampler(distribution: str,
                   random_state: Optional[int] = None,
                   ) -> Sampler:
    """Create a sampler for a named population shape."""
    try:
        sampler_cls = DISTRIBUTIONS[distribution]
    except KeyError as e:
        raise ValueError(
            f'invalid voter distribution: {distribution}, supported: '
            + ', '.join(DISTRIBUTIONS.keys())
        ) from e
    return sampler_cls(random_state=random_state)


def voters(n: int,
           distribution: str = 'uniform',
           random_state: Optional[int] = None,
           ) -> List[Voter]:
    """Generate a population of n voters.

    :param n: Number of voters.
    :param distribution: Name of the population shape; one of the keys of
        :data:`DISTRIBUTIONS`.
    :param random_state: Seed for the sampler.
    """
    return [
        Voter(x, y)
        for x, y in create_sampler(distribution, random_state).sample(n)
    ]


def local_voters(x: float,
                 y: float,
                 n: int,
                 sigma: float = LOCAL_SIGMA,
                 random_state: Optional[int] = None,
                 ) -> List[Voter]:
    """Generate n voters scattered around a point, clamped to the square."""
    sampler = GaussianSampler(
        center=(x, y), sigma=sigma, random_state=random_state
    )
    return [Voter(vx, vy) for vx, vy in sampler.sample(n)]
