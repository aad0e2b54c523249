"""Plain tensor indices, tagged with a globally unique id, and index values."""

from . import utils
from .ids import new_id
from .index_common import (
    Arrow,
    IndexType,
    PrimeCommon,
    get_index_type,
)


def parse_prime_args(args, inc=None, itype=None):
    """Parse the arguments of ``prime``, which may be given as
    ``prime(inc, itype)``, in the type first form ``prime(itype, inc)``, or
    by keyword, e.g. ``prime(IndexType.SITE, inc=2)``. ``IndexType`` is an
    ``int`` subclass, so without this ``ix.prime(IndexType.SITE)`` would
    silently add 1 to every index.
    """
    args = list(args)
    if len(args) > 2:
        raise TypeError(f"prime takes at most 2 arguments, got {len(args)}.")

    if args and isinstance(args[0], IndexType):
        names = ("itype", "inc")
    else:
        names = ("inc", "itype")

    given = {"inc": inc, "itype": itype}
    for name, value in zip(names, args):
        if given[name] is not None:
            raise TypeError(f"prime got multiple values for `{name}`.")
        given[name] = value

    inc = 1 if given["inc"] is None else given["inc"]
    itype = IndexType.ALL if given["itype"] is None else given["itype"]
    if not isinstance(itype, IndexType):
        itype = get_index_type(itype)
    return itype, inc


class Index(PrimeCommon):
    """A tensor index of fixed bond dimension ``m``. Copies of an index share
    its ``id``, and compare equal as long as their prime levels match. To make
    an index distinct from other copies, increase its prime level.

    Parameters
    ----------
    name : str, optional
        Name of the index, used for printing only. If not given, the null
        index is constructed, which evaluates to ``False``.
    m : int, optional
        The bond dimension.
    itype : IndexType or str, optional
        The type of the index, ``Link`` by default. The sentinel types
        ``All`` and ``NullIndex`` are not allowed.
    prime_level : int, optional
        The initial prime level.
    """

    __slots__ = ("_id", "_prime_level", "_m", "_type", "_rawname")

    def __init__(
        self,
        name=None,
        m=1,
        itype=IndexType.LINK,
        prime_level=0,
    ):
        if name is None:
            if (m, itype, prime_level) != (1, IndexType.LINK, 0):
                raise TypeError(
                    "The null index takes no dimension, type or prime level, "
                    "supply a name to construct a real index."
                )
            self._id = 0
            self._prime_level = 0
            self._m = 1
            self._type = IndexType.NULL_INDEX
            self._rawname = ""
            return

        self._id = new_id()
        self._prime_level = int(prime_level)
        self._m = int(m)
        self._type = get_index_type(itype)
        self._rawname = str(name)

        if utils.DEBUG:
            self.check()

    @classmethod
    def null(cls):
        """The null index, representing the absence of an index."""
        return cls()

    @classmethod
    def from_state(cls, id, prime_level, m, itype, rawname):
        """Rebuild an index from its full persistent state, reusing ``id``.
        No checks are performed, this is intended for deserialization.
        """
        new = cls.__new__(cls)
        new._set_state(id, prime_level, m, itype, rawname)
        return new

    def _set_state(self, id, prime_level, m, itype, rawname):
        self._id = id
        self._prime_level = prime_level
        self._m = m
        self._type = itype
        self._rawname = rawname

    def get_state(self):
        """The full persistent state as a tuple, in codec field order:
        ``(id, prime_level, m, type, rawname)``.
        """
        return (
            self._id,
            self._prime_level,
            self._m,
            self._type,
            self._rawname,
        )

    def copy(self):
        """A copy of this index, with the same id and name, whose prime
        level can then evolve independently.
        """
        return self.from_state(*self.get_state())

    def check(self):
        """Check that the index is well-formed."""
        if self._type == IndexType.NULL_INDEX:
            if self._id != 0:
                raise ValueError(
                    f"Null index has non-zero id {self._id}, constructing an "
                    "Index with type NullIndex is disallowed."
                )
            return
        if self._type == IndexType.ALL:
            raise ValueError("Constructing Index with type All disallowed.")
        if not isinstance(self._m, int) or self._m < 1:
            raise ValueError(
                f"Bond dimension is {self._m}, must be a positive int."
            )
        if self._prime_level < 0:
            raise ValueError(f"Negative prime level {self._prime_level}.")

    # ---------------------------- accessors ---------------------------- #

    @property
    def id(self):
        """The unique identifier shared by all copies of this index."""
        return self._id

    @property
    def m(self):
        """The bond dimension."""
        return self._m

    dimension = m

    @property
    def prime_level(self):
        """The prime level."""
        return self._prime_level

    @property
    def type(self):
        """The ``IndexType`` of this index."""
        return self._type

    @property
    def rawname(self):
        """The name of this index without prime decoration."""
        return self._rawname

    @property
    def name(self):
        """The name of this index, decorated with its primes."""
        return self._rawname + utils.prime_marks(self._prime_level)

    @property
    def dir(self):
        """The direction of this index, always ``Arrow.OUT``."""
        return Arrow.OUT

    def set_dir(self, arrow):
        """Has no effect, plain indices have no direction."""

    def is_null(self):
        """Whether this is the null (default constructed) index."""
        return self._type == IndexType.NULL_INDEX

    def __bool__(self):
        return self._type != IndexType.NULL_INDEX

    def __int__(self):
        return self._m

    # ----------------------- prime level methods ----------------------- #

    def set_prime_level(self, plev):
        """Set the prime level to ``plev``, in place."""
        if utils.DEBUG and plev < 0:
            raise ValueError(f"Negative prime level {plev}.")
        self._prime_level = int(plev)
        return self

    def _add_prime(self, inc):
        new_plev = self._prime_level + inc
        if utils.DEBUG and new_plev < 0:
            raise ValueError(
                f"Negative prime level: {self._prime_level} + {inc} for "
                f"index {self!r}."
            )
        self._prime_level = new_plev

    def prime(self, *args, inc=None, itype=None):
        """Increase the prime level by ``inc`` (default 1), in place, if
        ``itype`` is ``All`` (the default) or matches the type of this index.
        Callable as ``prime(inc, itype)``, ``prime(itype, inc)``, or with
        either given by keyword, e.g. ``prime(IndexType.SITE, inc=2)``.
        """
        itype, inc = parse_prime_args(args, inc, itype)
        if self._type.matches(itype):
            self._add_prime(inc)
        return self

    def noprime(self, itype=IndexType.ALL):
        """Reset the prime level to zero, in place, if ``itype`` is ``All``
        or matches the type of this index.
        """
        return self.prime(-self._prime_level, itype)

    def mapprime(self, plevold, plevnew, itype=IndexType.ALL):
        """Switch the prime level from exactly ``plevold`` to ``plevnew``,
        in place. Has no effect if the current prime level is not
        ``plevold`` or the type doesn't match.
        """
        if not isinstance(itype, IndexType):
            itype = get_index_type(itype)
        if (self._prime_level == plevold) and self._type.matches(itype):
            if utils.DEBUG and plevnew < 0:
                raise ValueError(f"Negative prime level {plevnew}.")
            self._prime_level = int(plevnew)
        return self

    # ------------------------ comparison methods ----------------------- #

    def __eq__(self, other):
        if not isinstance(other, Index):
            return NotImplemented
        return (self._id == other._id) and (
            self._prime_level == other._prime_level
        )

    def __hash__(self):
        return hash((self._id, self._prime_level))

    def noprime_equals(self, other):
        """Whether ``other`` is a copy of this index, ignoring prime level."""
        if isinstance(other, IndexVal):
            other = other.index
        return self._id == other._id

    def sort_key(self):
        """The key of the canonical index order: bond dimension, then id,
        then prime level.
        """
        return (self._m, self._id, self._prime_level)

    def __lt__(self, other):
        if not isinstance(other, Index):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __gt__(self, other):
        if not isinstance(other, Index):
            return NotImplemented
        return self.sort_key() > other.sort_key()

    def __le__(self, other):
        if not isinstance(other, Index):
            return NotImplemented
        return self.sort_key() <= other.sort_key()

    def __ge__(self, other):
        if not isinstance(other, Index):
            return NotImplemented
        return self.sort_key() >= other.sort_key()

    # ------------------------------ other ------------------------------ #

    def __call__(self, val):
        """Create an ``IndexVal`` pairing this index with value ``val``."""
        return IndexVal(self, val)

    def write(self, stream):
        """Write this index to the binary stream ``stream``."""
        from .codec import write_index

        write_index(self, stream)

    def read(self, stream):
        """Overwrite this index, in place, with one read from the binary
        stream ``stream``.
        """
        from .codec import read_index

        self._set_state(*read_index(stream).get_state())
        return self

    def __reduce__(self):
        return (_rebuild_index, self.get_state())

    def __str__(self):
        if not self:
            return "(NullIndex)"
        return (
            f'("{self._rawname}",{self._m},{self._type})'
            f"{utils.prime_marks(self._prime_level)}"
        )

    def __repr__(self):
        if not self:
            return f"{self.__class__.__name__}()"
        return (
            f"{self.__class__.__name__}("
            f"name={self._rawname!r}, m={self._m}, itype={self._type}, "
            f"prime_level={self._prime_level}, id={self._id})"
        )


class IndexVal(PrimeCommon):
    """Pairs an ``Index`` of dimension ``m`` with a specific value ``val``
    where ``1 <= val <= m``, e.g. to select a single fiber of a tensor.

    Parameters
    ----------
    index : Index, optional
        The index. If not given the null index is used.
    val : int, optional
        The value, 1-based.
    """

    __slots__ = ("index", "val")

    def __init__(self, index=None, val=0):
        # hold a copy, so priming this doesn't touch the caller's index
        self.index = Index() if index is None else index.copy()
        self.val = int(val)

        if utils.DEBUG:
            self.check()

    def check(self):
        """Check that the value lies within the range of the index."""
        self.index.check()
        if self.index and not (1 <= self.val <= self.index.m):
            raise ValueError(
                f"Value {self.val} out of range [1, {self.index.m}] for "
                f"index {self.index!r}."
            )

    def copy(self):
        new = self.__new__(self.__class__)
        new.index = self.index.copy()
        new.val = self.val
        return new

    @property
    def m(self):
        """The bond dimension of the wrapped index."""
        return self.index.m

    @property
    def prime_level(self):
        """The prime level of the wrapped index."""
        return self.index.prime_level

    def __bool__(self):
        return bool(self.index)

    def prime(self, *args, inc=None, itype=None):
        self.index.prime(*args, inc=inc, itype=itype)
        return self

    def noprime(self, itype=IndexType.ALL):
        self.index.noprime(itype)
        return self

    def mapprime(self, plevold, plevnew, itype=IndexType.ALL):
        self.index.mapprime(plevold, plevnew, itype)
        return self

    def __eq__(self, other):
        if isinstance(other, IndexVal):
            return (self.index == other.index) and (self.val == other.val)
        if isinstance(other, Index):
            return self.index == other
        return NotImplemented

    # compares equal to bare indices, whose hash it can't match
    __hash__ = None

    def __reduce__(self):
        return (_rebuild_index_val, (self.index, self.val))

    def __str__(self):
        return f"{self.index}={self.val}"

    def __repr__(self):
        return f"{self.__class__.__name__}({self.index!r}, val={self.val})"


def _rebuild_index(id, prime_level, m, itype, rawname):
    return Index.from_state(id, prime_level, m, itype, rawname)


def _rebuild_index_val(index, val):
    new = IndexVal.__new__(IndexVal)
    new.index = index
    new.val = val
    return new
