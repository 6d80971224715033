'''Candidate definition and candidate list validation.

A candidate is a point in the issue space with an identity. Only the ``id``
and the position matter for evaluation; ``name`` and ``color`` are carried
along for the presentation layers that consume the results.

Any function that evaluates an election accepts the candidates either as
a sequence of :class:`Candidate` objects (or any objects with ``id``, ``x``
and ``y`` attributes) or as a mapping of ids to ``(x, y)`` positions; use
:func:`as_candidates` to normalize both to a list. The order of the
candidates is significant: it breaks all ties in all voting methods.
'''

from __future__ import annotations

import collections.abc
from typing import Any, List, Optional, Tuple, Union, Mapping, Sequence

from spatialvote.persist import simple_serialization


class InvalidInput(ValueError):
    '''The candidate list cannot be evaluated.

    Raised when the candidate list is empty or contains duplicate ids.

    :param reason: Description of the problem.
    :param candidates: The offending candidate ids, if any.
    '''
    def __init__(self, reason: str, candidates: Sequence[Any] = ()):
        self.reason = reason
        self.candidates = list(candidates)
        message = f'invalid candidates: {reason}'
        if self.candidates:
            message += ': ' + ', '.join(str(c) for c in self.candidates)
        super().__init__(message)


@simple_serialization
class Candidate:
    '''A candidate standing in the election at a fixed position.

    Candidates are immutable; to move a candidate, create a new one with
    :meth:`moved`.

    :param id: Identity of the candidate. Any hashable object; compared by
        equality only.
    :param x: Horizontal position in the issue space.
    :param y: Vertical position in the issue space.
    :param name: Display name. Defaults to the string form of the id.
    :param color: Display color, in any format the presentation layer
        understands.
    '''
    __slots__ = ('id', 'x', 'y', 'name', 'color')

    def __init__(self,
                 id: Any,
                 x: float,
                 y: float,
                 name: Optional[str] = None,
                 color: Optional[str] = None,
                 ):
        object.__setattr__(self, 'id', id)
        object.__setattr__(self, 'x', x)
        object.__setattr__(self, 'y', y)
        object.__setattr__(self, 'name', str(id) if name is None else name)
        object.__setattr__(self, 'color', color)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f'{type(self).__name__} is immutable')

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    def moved(self, x: float, y: float) -> Candidate:
        '''Return a copy of the candidate placed at (x, y).'''
        return type(self)(self.id, x, y, name=self.name, color=self.color)

    def _key(self) -> tuple:
        return (self.id, self.x, self.y, self.name, self.color)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Candidate):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f'<Candidate({self.id!r},{self.x:g},{self.y:g})>'


CandidatesType = Union[
    Sequence[Candidate],
    Mapping[Any, Tuple[float, float]],
]


def as_candidates(candidates: CandidatesType) -> List[Candidate]:
    '''Normalize a candidate definition to a list of candidates.

    :param candidates: A sequence of candidate objects, or a mapping of
        candidate ids to their ``(x, y)`` positions.
    :returns: A new list; the input is never modified.
    '''
    if isinstance(candidates, collections.abc.Mapping):
        return [Candidate(cid, *pos) for cid, pos in candidates.items()]
    else:
        return list(candidates)


def check_candidates(candidates: Sequence[Any]) -> None:
    '''Check that the candidate list can be evaluated.

    :param candidates: Candidates as normalized by :func:`as_candidates`.
    :raises InvalidInput: If there are no candidates or their ids repeat.
    '''
    if not candidates:
        raise InvalidInput('no candidates provided')
    seen = set()
    duplicates = []
    for cand in candidates:
        if cand.id in seen and cand.id not in duplicates:
            duplicates.append(cand.id)
        seen.add(cand.id)
    if duplicates:
        raise InvalidInput('duplicate candidate ids', duplicates)


def ids(candidates: Sequence[Any]) -> List[Any]:
    '''Return the candidate ids in candidate order.'''
    return [cand.id for cand in candidates]


DEFAULT_CANDIDATES = (
    Candidate('1', .3, .7, name='A', color='#22c55e'),
    Candidate('2', .5, .5, name='B', color='#ef4444'),
    Candidate('3', .7, .3, name='C', color='#3b82f6'),
)
'''The three-candidate diagonal setup the explorer starts with.'''
