"""Free functions acting on ``Index`` and ``IndexVal`` objects, and on
generic arrays whose legs are labelled by indices.
"""

import autoray as ar

from .index_common import IndexType


def prime(x, *args, inc=None, itype=None):
    """Return a copy of ``x``, an ``Index`` or ``IndexVal``, with its prime
    level increased by ``inc`` (default 1) if its type matches ``itype``
    (default ``All``). Also callable as ``prime(x, itype, inc)``, or with
    keywords, e.g. ``prime(x, IndexType.SITE, inc=2)``.
    """
    return x.copy().prime(*args, inc=inc, itype=itype)


def noprime(x, itype=IndexType.ALL):
    """Return a copy of ``x`` with its prime level reset to zero if its type
    matches ``itype``.
    """
    return x.copy().noprime(itype)


def mapprime(x, plevold, plevnew, itype=IndexType.ALL):
    """Return a copy of ``x`` with prime level changed to ``plevnew`` if the
    old prime level was ``plevold``, and its type matches ``itype``.
    Otherwise the copy is unchanged.
    """
    return x.copy().mapprime(plevold, plevnew, itype)


map_prime = mapprime


def dag(x):
    """Return the conjugate of ``x``, for plain indices just a copy."""
    return x.copy().dag()


def sort_indices(indices):
    """Sort ``indices`` into the canonical order, by bond dimension, then id,
    then prime level.
    """
    return sorted(indices)


def canonical_perm(indices):
    """Get the permutation that brings ``indices`` into canonical order, i.e.
    such that ``[indices[p] for p in perm]`` is sorted.
    """
    return tuple(
        sorted(range(len(indices)), key=lambda i: indices[i].sort_key())
    )


def find_index(indices, ix):
    """Find the position of ``ix``, matched by id and prime level, within
    ``indices``.

    Parameters
    ----------
    indices : Sequence[Index]
        The indices to search, e.g. the legs of a tensor.
    ix : Index or IndexVal
        The index to find.

    Returns
    -------
    int
    """
    for i, other in enumerate(indices):
        if other == ix:
            return i
    raise ValueError(f"Index {ix} not found in {list(map(str, indices))}.")


def has_index(indices, ix):
    """Whether ``ix`` appears, matched by id and prime level, in
    ``indices``.
    """
    return any(other == ix for other in indices)


def common_indices(inds_a, inds_b):
    """Find the pairs of axes, one from each of ``inds_a`` and ``inds_b``,
    that carry equal indices and so should be contracted.

    Returns
    -------
    tuple[tuple[int, int]]
        The matching ``(axis_a, axis_b)`` pairs, ordered by ``axis_a``.
    """
    positions_b = {ix: j for j, ix in enumerate(inds_b)}
    return tuple(
        (i, positions_b[ix])
        for i, ix in enumerate(inds_a)
        if ix in positions_b
    )


def transpose_canonical(x, indices):
    """Transpose the array ``x``, whose legs are labelled by ``indices``, so
    that its legs are in canonical index order.

    Parameters
    ----------
    x : array_like
        Any array supported by ``autoray``.
    indices : Sequence[Index]
        The index of each axis of ``x``.

    Returns
    -------
    x : array_like
        The transposed array.
    indices : tuple[Index]
        The indices in their new, sorted, order.
    """
    indices = tuple(indices)
    if ar.ndim(x) != len(indices):
        raise ValueError(
            f"Array has {ar.ndim(x)} dimensions but {len(indices)} indices "
            "were given."
        )
    perm = canonical_perm(indices)
    if perm != tuple(range(len(perm))):
        x = ar.do("transpose", x, perm)
    return x, tuple(indices[p] for p in perm)


def take_fiber(x, indices, *ivs):
    """Select the fiber of array ``x`` where each index in ``ivs`` takes its
    value, removing the corresponding axes.

    Parameters
    ----------
    x : array_like
        Any array supported by ``autoray``.
    indices : Sequence[Index]
        The index of each axis of ``x``.
    ivs : IndexVal
        The index values to fix. Values are 1-based.

    Returns
    -------
    x : array_like
        The selected sub array.
    indices : tuple[Index]
        The indices of the remaining axes.
    """
    indices = list(indices)
    for iv in ivs:
        axis = find_index(indices, iv.index)
        if not (1 <= iv.val <= indices[axis].m):
            raise ValueError(
                f"Value {iv.val} out of range [1, {indices[axis].m}] "
                f"for index {indices[axis]}."
            )
        x = ar.do("take", x, iv.val - 1, axis=axis)
        indices.pop(axis)
    return x, tuple(indices)
