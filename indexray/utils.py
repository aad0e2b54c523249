import contextlib
import functools
import os

# a simple flag for enabling rigorous checks in many places
DEBUG = bool(os.environ.get("INDEXRAY_DEBUG", "0").upper() in ("1", "TRUE"))


def set_debug(debug):
    global DEBUG
    DEBUG = bool(debug)


def is_debug():
    """Whether debug validation is currently switched on."""
    return DEBUG


@contextlib.contextmanager
def debug_mode(debug=True):
    """Temporarily switch debug validation on (or off) within a block."""
    global DEBUG
    old = DEBUG
    DEBUG = bool(debug)
    try:
        yield
    finally:
        DEBUG = old


def lazyabstractmethod(method):
    """Mark a method as one that must be implemented in a subclass, but only
    enforce this when the method is called. This can be used as a decorator (if
    you want to demonstrate the call signature) or by directly assigning the
    result to a method name.
    """

    if callable(method):
        name = method.__name__
    else:
        name = str(method)

    def raising_method(self, *args, **kwargs):
        raise NotImplementedError(
            f"`{name}` must be implemented in "
            f"subclass `{self.__class__.__name__}`"
        )

    return raising_method


def get_rng(seed=None):
    """Get a ``numpy.random.Generator``, passing existing generators
    straight through.
    """
    import numpy as np

    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


@functools.lru_cache(2**10)
def prime_marks(plev):
    """The string decoration for prime level ``plev``: one ``'`` per level up
    to three, then ``'`` followed by the level itself.
    """
    if 0 <= plev <= 3:
        return "'" * plev
    return f"'{plev}"


def rand_index(
    m=None,
    itype=None,
    prime_level=0,
    name=None,
    min_m=1,
    max_m=8,
    seed=None,
):
    """Generate a random ``Index``, for testing purposes.

    Parameters
    ----------
    m : int, optional
        The bond dimension. If None, drawn uniformly from
        ``[min_m, max_m]``.
    itype : IndexType or str, optional
        The type of the index. If None, randomly ``Link`` or ``Site``.
    prime_level : int, optional
        The initial prime level.
    name : str, optional
        The name, if None a random lower case letter is used.
    min_m : int, optional
        Minimum bond dimension when ``m`` is random.
    max_m : int, optional
        Maximum bond dimension when ``m`` is random.
    seed : None, int, or numpy.random.Generator, optional
        The seed for the random choices. This does not affect the id, which
        always comes from the active identity generator.

    Returns
    -------
    Index
    """
    import indexray as ir

    rng = get_rng(seed)

    if m is None:
        m = int(rng.integers(min_m, max_m + 1))

    if itype is None:
        itype = ir.IndexType(int(rng.integers(0, 2)))

    if name is None:
        name = chr(ord("a") + int(rng.integers(0, 26)))

    return ir.Index(name, m, itype, prime_level)
