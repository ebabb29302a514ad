"""Base classes and strategies for property-based testing."""

import json
import random
from contextlib import contextmanager
from typing import Any

from hypothesis import event, note
from hypothesis import strategies as st

from tests.fakes import SessionStore
from tests.property_based.config import get_test_seed

json_scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-10**6, max_value=10**6),
    st.text(max_size=20),
)

radar_objects = st.dictionaries(
    keys=st.text(min_size=1, max_size=12),
    values=st.one_of(json_scalars, st.lists(json_scalars, max_size=3)),
    max_size=6,
)


@st.composite
def fenced_json(draw, payload=radar_objects):
    """A JSON object as a model might wrap it: fenced, padded or bare."""
    body = json.dumps(draw(payload), indent=draw(st.sampled_from([None, 2])))
    opener = draw(st.sampled_from(["```json\n", "```JSON\n", "```\n", ""]))
    closer = "\n```" if opener else ""
    padding = draw(st.sampled_from(["", " ", "\n", "  \n"]))
    return f"{padding}{opener}{body}{closer}{padding}"


model_replies = st.one_of(
    fenced_json(),
    st.text(max_size=80),
    st.sampled_from([
        "Sorry, I cannot help with that.",
        "",
        "[1, 2, 3]",
        '{"truncated": [1, 2',
    ]),
)


class PropertyTestBase:
    """Base class for property-based tests with common utilities."""

    def setup_method(self):
        seed = get_test_seed()
        if seed is not None:
            random.seed(seed)

    @contextmanager
    def fresh_store(self):
        """In-memory store created per example; fixtures would leak across examples."""
        store = SessionStore()
        try:
            yield store
        finally:
            store.dispose()

    def log_test_data(self, description: str, data: Any):
        note(f"{description}: {data}")
        event(f"Testing {description}")
