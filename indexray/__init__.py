from . import utils
from .codec import (
    IndexReadError,
    dump_index,
    load_index,
    read_index,
    read_indices,
    write_index,
    write_indices,
)
from .ids import (
    IDGenerator,
    ThreadLocalIDGenerator,
    get_id_generator,
    id_generator_context,
    new_id,
    set_id_generator,
)
from .index import (
    Index,
    IndexVal,
)
from .index_common import (
    Arrow,
    IndexType,
    get_index_type,
    nameint,
    showm,
)
from .interface import (
    canonical_perm,
    common_indices,
    dag,
    find_index,
    has_index,
    map_prime,
    mapprime,
    noprime,
    prime,
    sort_indices,
    take_fiber,
    transpose_canonical,
)
from .utils import debug_mode, set_debug

__all__ = (
    "Arrow",
    "canonical_perm",
    "common_indices",
    "dag",
    "debug_mode",
    "dump_index",
    "find_index",
    "get_id_generator",
    "get_index_type",
    "has_index",
    "id_generator_context",
    "IDGenerator",
    "Index",
    "IndexReadError",
    "IndexType",
    "IndexVal",
    "load_index",
    "map_prime",
    "mapprime",
    "nameint",
    "new_id",
    "noprime",
    "prime",
    "read_index",
    "read_indices",
    "set_debug",
    "set_id_generator",
    "showm",
    "sort_indices",
    "take_fiber",
    "ThreadLocalIDGenerator",
    "transpose_canonical",
    "utils",
    "write_index",
    "write_indices",
)
