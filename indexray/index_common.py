"""General interface for index objects: the index type tags, and the prime
level capability shared by ``Index`` and ``IndexVal``.
"""

import enum

from .utils import lazyabstractmethod


class IndexType(enum.IntEnum):
    """The role of an index leg. The integer values are the ordinals written
    by the binary codec and must not change. ``ALL`` and ``NULL_INDEX`` are
    sentinels: a wildcard for type gated operations, and the marker of the
    null index respectively.
    """

    LINK = 0
    SITE = 1
    ALL = 2
    NULL_INDEX = 3
    XIND = 4
    YIND = 5
    ZIND = 6
    WIND = 7
    VIND = 8

    @property
    def label(self):
        return _INDEX_TYPE_LABELS[self]

    @property
    def is_sentinel(self):
        """Whether this is a wildcard / marker type that no real index has."""
        return self in (IndexType.ALL, IndexType.NULL_INDEX)

    def matches(self, itype):
        """Whether a type gated operation for ``itype`` applies to an index of
        this type, i.e. the types are equal or ``itype`` is ``ALL``.
        """
        return (itype == IndexType.ALL) or (itype == self)

    def __str__(self):
        return self.label

    def __format__(self, spec):
        return format(self.label, spec)


_INDEX_TYPE_LABELS = {
    IndexType.LINK: "Link",
    IndexType.SITE: "Site",
    IndexType.ALL: "All",
    IndexType.NULL_INDEX: "NullIndex",
    IndexType.XIND: "Xind",
    IndexType.YIND: "Yind",
    IndexType.ZIND: "Zind",
    IndexType.WIND: "Wind",
    IndexType.VIND: "Vind",
}

_INDEX_TYPE_LOOKUP = {
    **{t.label.lower(): t for t in IndexType},
    **{t.name.lower(): t for t in IndexType},
}


def get_index_type(itype):
    """Parse ``itype`` into an ``IndexType``.

    Parameters
    ----------
    itype : IndexType, int or str
        An existing type, its ordinal, or its label in any case, e.g.
        ``"Site"``, ``"site"``, ``"NullIndex"`` or ``"null_index"``.

    Returns
    -------
    IndexType
    """
    if isinstance(itype, IndexType):
        return itype
    elif isinstance(itype, str):
        try:
            return _INDEX_TYPE_LOOKUP[itype.lower()]
        except KeyError:
            raise ValueError(f"Unknown index type: {itype!r}") from None
    elif isinstance(itype, int):
        try:
            return IndexType(itype)
        except ValueError:
            raise ValueError(f"Unknown index type ordinal: {itype}") from None
    else:
        raise TypeError(f"Can't interpret {itype!r} as an index type.")


class Arrow(enum.IntEnum):
    """Direction of an index. Plain indices always point ``OUT``."""

    IN = -1
    OUT = 1
    NEITHER = 2

    def __str__(self):
        return self.name.capitalize()


class PrimeCommon:
    """Capability shared by objects carrying a prime level: ``Index`` and
    ``IndexVal``. The in place methods all return ``self``, so they can be
    chained, and the free functions in ``indexray.interface`` are written
    once against them.
    """

    __slots__ = ()

    @lazyabstractmethod
    def copy(self) -> "PrimeCommon":
        pass

    @lazyabstractmethod
    def prime(self, *args, inc=None, itype=None) -> "PrimeCommon":
        pass

    @lazyabstractmethod
    def noprime(self, itype=IndexType.ALL) -> "PrimeCommon":
        pass

    @lazyabstractmethod
    def mapprime(
        self, plevold, plevnew, itype=IndexType.ALL
    ) -> "PrimeCommon":
        pass

    def dag(self) -> "PrimeCommon":
        """Conjugate in place. Plain indices have no direction so this has no
        effect.
        """
        return self

    def __copy__(self):
        return self.copy()


def nameint(f, n):
    """Append the integer ``n`` to the string ``f``."""
    return f"{f}{n}"


def showm(ix):
    """A string version of the bond dimension of ``ix``."""
    return nameint("m=", ix.m)
