import pytest


@pytest.fixture(autouse=True)
def enable_debug():
    from indexray.utils import set_debug

    set_debug(True)


@pytest.fixture(autouse=True)
def seeded_ids():
    from indexray.ids import id_generator_context

    with id_generator_context(12345) as gen:
        yield gen
