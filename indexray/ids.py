"""Generators of (with overwhelming probability) unique index identifiers."""

import contextlib
import logging
import os
import threading
import time
import warnings

logger = logging.getLogger(__name__)

# ids are the raw 32 bit outputs of a mersenne twister
ID_BITS = 32


def default_seed():
    """The seed used when none is given: wall clock seconds plus the process
    id, so that separately started processes get different id streams.
    """
    return int(time.time()) + os.getpid()


def mt19937(seed):
    """Get a ``numpy.random.MT19937`` seeded the classic way (``init_genrand``
    on the low 32 bits of ``seed``), so that its raw outputs match those of
    ``std::mt19937(seed)``. ``MT19937(seed)`` itself goes through
    ``SeedSequence`` and gives a different stream.
    """
    import numpy as np

    legacy = np.random.RandomState(seed & 0xFFFFFFFF)
    bitgen = np.random.MT19937()
    bitgen.state = {
        "bit_generator": "MT19937",
        "state": legacy.get_state(legacy=False)["state"],
    }
    return bitgen


class IDGenerator:
    """Hands out index identifiers from a ``MT19937`` bit generator. Drawing
    is guarded by a lock so a single instance can be shared between threads.

    Parameters
    ----------
    seed : int, optional
        The seed for the bit generator. If None, the generator is seeded
        lazily on first use from :func:`default_seed`, and never reseeded.
    """

    __slots__ = ("_seed", "_bitgen", "_lock", "_count")

    def __init__(self, seed=None):
        self._seed = seed
        self._bitgen = None
        self._lock = threading.Lock()
        self._count = 0

    @property
    def seed(self):
        """The seed in use, None if not yet seeded."""
        return self._seed

    @property
    def count(self):
        """How many ids this generator has issued."""
        return self._count

    def _init_bitgen(self):
        if self._seed is None:
            self._seed = default_seed()
        self._bitgen = mt19937(self._seed)
        logger.debug("seeded %s with %d", self.__class__.__name__, self._seed)

    def next_id(self):
        """Draw a new, non-zero, id."""
        with self._lock:
            if self._bitgen is None:
                self._init_bitgen()
            new = 0
            # 0 is reserved for the null index
            while new == 0:
                new = int(self._bitgen.random_raw())
            self._count += 1
            return new

    __call__ = next_id

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(seed={self._seed}, "
            f"count={self._count})"
        )


class ThreadLocalIDGenerator:
    """Keeps a separate :class:`IDGenerator` for every thread, each seeded
    with the thread identifier mixed in, so that no lock is shared between
    threads.

    Parameters
    ----------
    seed : int, optional
        Base seed, to which each thread adds its own identifier. If None,
        :func:`default_seed` is used per thread.
    """

    def __init__(self, seed=None):
        self._seed = seed
        self._local = threading.local()

    def _get_local(self):
        gen = getattr(self._local, "gen", None)
        if gen is None:
            base = default_seed() if self._seed is None else self._seed
            gen = IDGenerator(base + threading.get_ident())
            self._local.gen = gen
        return gen

    @property
    def count(self):
        """How many ids the generator of the calling thread has issued."""
        return self._get_local().count

    def next_id(self):
        """Draw a new, non-zero, id from this thread's generator."""
        return self._get_local().next_id()

    __call__ = next_id

    def __repr__(self):
        return f"{self.__class__.__name__}(seed={self._seed})"


_id_generator = None
_id_generator_lock = threading.Lock()


def get_id_generator():
    """Get the process wide identity generator, creating it on first use."""
    global _id_generator
    if _id_generator is None:
        with _id_generator_lock:
            if _id_generator is None:
                _id_generator = IDGenerator()
    return _id_generator


def _parse_id_generator(gen):
    if gen is None or isinstance(gen, (IDGenerator, ThreadLocalIDGenerator)):
        return gen
    if isinstance(gen, int):
        return IDGenerator(gen)
    if callable(gen):
        # any zero argument callable returning ints
        return gen
    raise TypeError(f"Can't make an id generator from {gen!r}.")


def set_id_generator(gen):
    """Replace the process wide identity generator.

    Parameters
    ----------
    gen : IDGenerator, ThreadLocalIDGenerator, int, callable or None
        The new generator. An int is used as the seed of a new
        ``IDGenerator``, and None resets so that a freshly seeded generator
        is created on next use.

    Returns
    -------
    previous : generator or None
        The generator that was active before.
    """
    global _id_generator
    gen = _parse_id_generator(gen)
    with _id_generator_lock:
        previous = _id_generator
        if (
            isinstance(gen, IDGenerator)
            and gen.seed is not None
            and getattr(previous, "count", 0)
        ):
            warnings.warn(
                "Replacing an id generator that has already issued ids with "
                f"a fixed seed ({gen.seed}), new ids may collide with "
                "existing ones.",
                UserWarning,
            )
        _id_generator = gen
    return previous


@contextlib.contextmanager
def id_generator_context(gen):
    """Use ``gen`` (see :func:`set_id_generator`) as the identity generator
    within a block, restoring the previous one afterwards.
    """
    global _id_generator
    gen = _parse_id_generator(gen)
    with _id_generator_lock:
        previous = _id_generator
        _id_generator = gen
    try:
        yield get_id_generator()
    finally:
        with _id_generator_lock:
            _id_generator = previous


def new_id():
    """Draw an id from the active identity generator."""
    return get_id_generator()()
