"""Binary persistence of indices. The layout is fixed, with no version tag,
so that files written by earlier versions remain readable:

    id           uint64
    prime_level  int32
    m            int64
    type         int32   (``IndexType`` ordinal)
    name         uint64 byte length, followed by UTF-8 bytes

all little-endian.
"""

import io
import struct

from .index import Index
from .index_common import IndexType

_INDEX_STRUCT = struct.Struct("<Q i q i Q")
_COUNT_STRUCT = struct.Struct("<Q")
_READ_CHUNK = 1 << 16


class IndexReadError(OSError):
    """Raised when a stream doesn't hold a well-formed index, e.g. because it
    is truncated or corrupt.
    """


def _read_exact(stream, n, what):
    chunks = []
    remaining = n
    while remaining > 0:
        # bounded, so a corrupt length runs into the end of the stream
        chunk = stream.read(min(remaining, _READ_CHUNK))
        if not chunk:
            raise IndexReadError(
                f"Stream ended while reading {what}: got {n - remaining} "
                f"of {n} bytes."
            )
        if len(chunk) > remaining:
            raise IndexReadError(
                f"Stream returned {len(chunk)} bytes while reading {what}, "
                f"only {remaining} were requested."
            )
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def write_index(ix, stream):
    """Write the full persistent state of ``ix`` to the binary stream
    ``stream``.

    Parameters
    ----------
    ix : Index
        The index to write, which can't be the null index.
    stream : binary file-like
        Anything with a ``write(bytes)`` method.
    """
    if not ix:
        raise ValueError("Can't write the null (default constructed) Index.")

    name = ix.rawname.encode("utf-8")
    try:
        header = _INDEX_STRUCT.pack(
            ix.id, ix.prime_level, ix.m, int(ix.type), len(name)
        )
    except struct.error as e:
        raise ValueError(f"Can't pack index {ix!r}: {e}") from e

    stream.write(header)
    stream.write(name)


def read_index(stream):
    """Read an index written by :func:`write_index` from the binary stream
    ``stream``. The result has the original id, so compares equal to the
    index that was written.

    Parameters
    ----------
    stream : binary file-like
        Anything with a ``read(n)`` method.

    Returns
    -------
    Index

    Raises
    ------
    IndexReadError
        If the stream is truncated or holds invalid field values.
    """
    header = _read_exact(stream, _INDEX_STRUCT.size, "index header")
    id, prime_level, m, itype, name_len = _INDEX_STRUCT.unpack(header)

    if id == 0:
        raise IndexReadError("Read index id 0, reserved for the null index.")
    if m < 1:
        raise IndexReadError(f"Read non-positive bond dimension {m}.")
    try:
        itype = IndexType(itype)
    except ValueError:
        raise IndexReadError(
            f"Read unknown index type ordinal {itype}."
        ) from None
    if itype.is_sentinel:
        raise IndexReadError(f"Read sentinel index type {itype}.")

    raw = _read_exact(stream, name_len, "index name")
    try:
        rawname = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise IndexReadError(f"Index name is not valid UTF-8: {e}") from e

    return Index.from_state(id, prime_level, m, itype, rawname)


def write_indices(indices, stream):
    """Write a sequence of indices, e.g. the legs of a tensor, prefixed by
    their number.
    """
    indices = tuple(indices)
    stream.write(_COUNT_STRUCT.pack(len(indices)))
    for ix in indices:
        write_index(ix, stream)


def read_indices(stream):
    """Read a sequence of indices written by :func:`write_indices`.

    Returns
    -------
    tuple[Index]
    """
    (count,) = _COUNT_STRUCT.unpack(
        _read_exact(stream, _COUNT_STRUCT.size, "index count")
    )
    return tuple(read_index(stream) for _ in range(count))


def dump_index(ix):
    """Serialize ``ix`` to bytes."""
    buffer = io.BytesIO()
    write_index(ix, buffer)
    return buffer.getvalue()


def load_index(data):
    """Deserialize an index from exactly the bytes ``data``."""
    buffer = io.BytesIO(data)
    ix = read_index(buffer)
    extra = len(data) - buffer.tell()
    if extra:
        raise IndexReadError(f"{extra} trailing bytes after index.")
    return ix
