"""Spatialvote - a library for evaluating elections in a 2D opinion space.

Candidates and voters are points in the unit square. Every voter prefers
nearer candidates to farther ones, so a voter position alone determines
a complete ballot for any of the supported voting methods:

-   The ``geometry`` module provides Euclidean distance and the cosine falloff
    weight used for weighted votes.
-   The ``preference`` module ranks candidates by distance for one voter;
    all methods operate on this ranking.
-   The ``pairwise`` module derives pairwise defeats and the Smith set, both
    for a single voter and for a population.
-   The ``method`` module casts single-voter ballots under Plurality,
    Approval, Borda Count, Instant-Runoff and Smith set + Approval.
-   The ``tally`` module aggregates ballots of a voter population into an
    :class:`tally.ElectionResult` with a winner.

On top of that, ``generate`` samples voter populations, ``regions`` computes
win-region maps over the unit square and ``scenario`` bundles a complete
election setup that can be loaded from JSON.
"""
