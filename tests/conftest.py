import pytest

from rulekit.builder import RuleBuilder, default_registry
from rulekit.core import Context


SAMPLE_CONTEXTS = [
    ({"age": 25, "country": "US"}, True),
    ({"age": 17, "country": "US"}, False),
    ({"age": 30, "country": "CA"}, False),
    ({"age": 18, "country": "US"}, True),
]


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def rb(registry):
    """Fluent rule builder sharing the test registry."""
    return RuleBuilder(registry)


@pytest.fixture
def context():
    return Context({
        "age": 25,
        "name": "Alice",
        "country": "US",
        "tags": ["vip", "beta"],
        "user": {"profile": {"city": "Paris"}, "scores": [3, 7, 5]},
    })


@pytest.fixture
def sample_contexts():
    return SAMPLE_CONTEXTS