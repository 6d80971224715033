"""Compute win-region maps of voting methods over the unit square.

A win-region map (also called a Yee diagram) covers the issue space with a
rectangular lattice of cells and records, for every cell, which candidate
wins an election held there. Two variants are provided:

-   :func:`point_map` places a single voter at each cell center, giving the
    regions each candidate wins under the method's per-voter ballot.
-   :func:`population_map` simulates a whole voter population scattered around
    each cell center and records the population winner.

A good voting method's population map should closely approximate the Voronoi
diagram over the candidates, which assigns each point to the nearest
candidate; :func:`voronoi` and :func:`voronoi_conformity` measure this.
[#yee]_

The maps are 2D lists of candidate ids, rows running from the bottom
(``y`` near 0) to the top. Turning them into pictures is left to the caller.

.. [#yee] Warren D. Smith. "Yee Pictures", Range Voting, 2007.
    https://rangevoting.org/IEVS/Pictures.html
"""

import logging
import math
import random
from typing import Any, List, Optional, Sequence, Tuple, Union

import spatialvote.candidate
import spatialvote.generate
import spatialvote.method
import spatialvote.tally
from spatialvote.geometry import DEFAULT_APPROVAL_THRESHOLD, distance
from spatialvote.method import Method
from spatialvote.preference import Voter

logger = logging.getLogger(__name__)

DEFAULT_SHAPE = (50, 50)
DEFAULT_N_POINTS = 50

RegionMap = List[List[Any]]


def cell_centers(shape: Tuple[int, int]) -> Tuple[List[float], List[float]]:
    """Return the y and x coordinates of the cell centers of a lattice."""
    y_size_elem, x_size_elem = [1 / s for s in shape]
    return (
        [(i + .5) * y_size_elem for i in range(shape[0])],
        [(i + .5) * x_size_elem for i in range(shape[1])]
    )


def grid_points(n: int) -> List[Voter]:
    """Return an n by n lattice of points spanning the unit square.

    Coordinates run from 0 to 1 inclusive, ``i / (n - 1)``; a single point
    lies at the origin.
    """
    if n < 1:
        raise ValueError(f'need at least one grid point, got {n}')
    step = 1 / (n - 1) if n > 1 else 0
    return [Voter(i * step, j * step) for i in range(n) for j in range(n)]


def point_map(method: Union[Method, str],
              candidates: spatialvote.candidate.CandidatesType,
              shape: Tuple[int, int] = DEFAULT_SHAPE,
              approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
              cancel: Optional[spatialvote.tally.CancelToken] = None,
              ) -> RegionMap:
    """Map the winner of a single voter placed at each cell center.

    :param method: The voting method, as a member or a name.
    :param candidates: Candidate positions in the unit square.
    :param shape: Number of cells along each dimension, rows first.
    :param approval_threshold: Approval distance for approval-based methods.
    :param cancel: A token to cancel the computation with.
    """
    method = spatialvote.method.as_method(method)
    candidates = spatialvote.candidate.as_candidates(candidates)
    spatialvote.candidate.check_candidates(candidates)
    ys, xs = cell_centers(shape)
    diag = []
    for y in ys:
        if cancel is not None:
            cancel.raise_if_cancelled()
        diag.append([
            spatialvote.method.winner_at(
                method, x, y, candidates, approval_threshold
            )
            for x in xs
        ])
    return diag


def population_map(method: Union[Method, str],
                   candidates: spatialvote.candidate.CandidatesType,
                   shape: Tuple[int, int] = DEFAULT_SHAPE,
                   n_voters: int = 1000,
                   sigma: float = spatialvote.generate.LOCAL_SIGMA,
                   approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                   random_state: Optional[int] = None,
                   cancel: Optional[spatialvote.tally.CancelToken] = None,
                   ) -> RegionMap:
    """Map the winner of a voter population centered on each cell.

    :param method: The voting method, as a member or a name.
    :param candidates: Candidate positions in the unit square.
    :param shape: Number of cells along each dimension, rows first.
        Enlarging this gives more detail but increases computing time.
    :param n_voters: Number of voters in each simulated election. Lowering
        this will speed up the computation but may give unstable results.
    :param sigma: Spread of the voters around the cell center; voters are
        clamped to the unit square.
    :param approval_threshold: Approval distance for approval-based methods.
    :param random_state: Seed for the voter generation.
    :param cancel: A token to cancel the computation with.
    """
    method = spatialvote.method.as_method(method)
    candidates = spatialvote.candidate.as_candidates(candidates)
    spatialvote.candidate.check_candidates(candidates)
    seeder = random.Random(random_state)
    ys, xs = cell_centers(shape)
    diag = []
    for row_i, y in enumerate(ys):
        if cancel is not None:
            cancel.raise_if_cancelled()
        logger.debug('computing row %d of %d', row_i + 1, len(ys))
        row = []
        for x in xs:
            local = spatialvote.generate.local_voters(
                x, y, n_voters, sigma=sigma,
                random_state=seeder.randrange(2 ** 32),
            )
            result = spatialvote.tally.evaluate(
                method, local, candidates,
                approval_threshold=approval_threshold,
                cancel=cancel,
            )
            row.append(result.winner)
        diag.append(row)
    return diag


def voronoi(candidates: spatialvote.candidate.CandidatesType,
            shape: Tuple[int, int] = DEFAULT_SHAPE,
            ) -> RegionMap:
    """Produce the Voronoi map for the given candidates.

    This gives the ideal map that good voting methods should be close to.
    Ties go to the candidate listed first.
    """
    candidates = spatialvote.candidate.as_candidates(candidates)
    spatialvote.candidate.check_candidates(candidates)
    ys, xs = cell_centers(shape)
    return [
        [min(
            candidates,
            key=lambda cand: distance(x, y, cand.x, cand.y)
        ).id for x in xs]
        for y in ys
    ]


def voronoi_matches(results: RegionMap,
                    candidates: spatialvote.candidate.CandidatesType,
                    ) -> List[List[bool]]:
    """Give a 2D boolean mask of where a map matches the Voronoi map."""
    shape = (len(results), len(results[0]))
    voronoi_diagram = voronoi(candidates, shape=shape)
    return [
        [results[i][j] == voronoi_diagram[i][j] for j in range(shape[1])]
        for i in range(shape[0])
    ]


def voronoi_conformity(results: RegionMap,
                       candidates: spatialvote.candidate.CandidatesType,
                       ) -> float:
    """Calculate the fraction of cells in which a map matches Voronoi."""
    shape = (len(results), len(results[0]))
    matches = voronoi_matches(results, candidates)
    return sum(m for row in matches for m in row) / (shape[0] * shape[1])


def region_shares(results: RegionMap,
                  candidates: spatialvote.candidate.CandidatesType,
                  ) -> dict:
    """Return the fraction of cells won by each candidate."""
    candidates = spatialvote.candidate.as_candidates(candidates)
    counts = {cand.id: 0 for cand in candidates}
    n_cells = 0
    for row in results:
        for winner in row:
            counts[winner] += 1
            n_cells += 1
    return {cand: count / n_cells for cand, count in counts.items()}


def area_shares(method: Union[Method, str],
                candidates: spatialvote.candidate.CandidatesType,
                n_points: int = DEFAULT_N_POINTS,
                approval_threshold: float = DEFAULT_APPROVAL_THRESHOLD,
                cancel: Optional[spatialvote.tally.CancelToken] = None,
                ) -> spatialvote.tally.ElectionResult:
    """Hold one election with a voter at every point of a lattice.

    The result's :meth:`~spatialvote.tally.ElectionResult.shares` give the
    share of the issue space supporting each candidate.

    :param n_points: Number of lattice points along each dimension.
    """
    return spatialvote.tally.evaluate(
        method, grid_points(n_points), candidates,
        approval_threshold=approval_threshold,
        cancel=cancel,
    )


def circular_candidates(n: int,
                        r: float = .25,
                        center: Tuple[float, float] = (.5, .5),
                        ) -> List[spatialvote.candidate.Candidate]:
    """Place candidates evenly on a circle.

    :param n: Number of candidates, named by uppercase letters.
    :param r: Radius of the circle.
    :param center: Center of the circle coordinates.
    """
    unit_angle = 2 * math.pi / n
    cx, cy = center
    return [
        spatialvote.candidate.Candidate(
            name, cx + r * math.cos(unit_angle * i),
            cy + r * math.sin(unit_angle * i)
        )
        for i, name in enumerate(candidate_names(n))
    ]


def random_candidates(n: int,
                      random_state: Optional[int] = None,
                      ) -> List[spatialvote.candidate.Candidate]:
    """Place candidates uniformly at random in the unit square."""
    sampler = spatialvote.generate.UniformSampler(random_state=random_state)
    return [
        spatialvote.candidate.Candidate(name, x, y)
        for name, (x, y) in zip(candidate_names(n), sampler.sample(n))
    ]


def candidate_names(n: int) -> Sequence[str]:
    if n > 26:
        raise NotImplementedError
    return [chr(ord('A') + i) for i in range(n)]
