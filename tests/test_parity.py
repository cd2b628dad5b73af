"""
Every way of writing "adults in the US" must build the same operator tree
and agree on every sample context.
"""

import pytest

from rulekit import (
    ExpressionRuleBuilder,
    GraphQLFilterRuleBuilder,
    JMESPathRuleBuilder,
    LDAPFilterRuleBuilder,
    MongoQueryRuleBuilder,
    NaturalLanguageRuleBuilder,
    RuleEvaluator,
    SQLWhereRuleBuilder,
)
from rulekit.core import Context
from rulekit.operators import EqualTo, GreaterThanOrEqualTo, LogicalAnd
from rulekit.variables import Variable

EXPECTED_REPR = (
    "LogicalAnd(GreaterThanOrEqualTo(Variable('age'), Variable(value=18)), "
    "EqualTo(Variable('country'), Variable(value='US')))"
)

SOURCES = [
    (ExpressionRuleBuilder, 'age >= 18 and country == "US"'),
    (ExpressionRuleBuilder, "age >= 18 && country == 'US'"),
    (JMESPathRuleBuilder, "age >= `18` && country == 'US'"),
    (NaturalLanguageRuleBuilder, "age is at least 18 and country is US"),
    (MongoQueryRuleBuilder, {"age": {"$gte": 18}, "country": "US"}),
    (MongoQueryRuleBuilder, '{"$and": [{"age": {"$gte": 18}}, {"country": {"$eq": "US"}}]}'),
    (GraphQLFilterRuleBuilder, {"age": {"gte": 18}, "country": {"eq": "US"}}),
    (GraphQLFilterRuleBuilder, {"AND": [{"age": {"gte": 18}}, {"country": "US"}]}),
    (SQLWhereRuleBuilder, "age >= 18 AND country = 'US'"),
    (SQLWhereRuleBuilder, "(age >= 18) and (country = 'US')"),
    (LDAPFilterRuleBuilder, "(&(age>=18)(country=US))"),
]


def _direct():
    return LogicalAnd(
        GreaterThanOrEqualTo(Variable("age"), 18),
        EqualTo(Variable("country"), "US"),
    )


def _fluent(rb):
    return rb.logical_and(
        rb["age"].greater_than_or_equal_to(18),
        rb["country"].equal_to("US"),
    )


def _evaluator():
    return RuleEvaluator({
        "combinator": "and",
        "value": [
            {"field": "age", "operator": "greaterThanOrEqualTo", "value": 18},
            {"field": "country", "operator": "equalTo", "value": "US"},
        ],
    }).proposition


@pytest.mark.parametrize("builder_class,source", SOURCES)
def test_front_ends_build_the_same_tree(rb, builder_class, source):
    assert repr(builder_class(rb).compile(source)) == EXPECTED_REPR


def test_programmatic_construction_matches(rb):
    assert repr(_direct()) == EXPECTED_REPR
    assert repr(_fluent(rb)) == EXPECTED_REPR
    assert repr(_evaluator()) == EXPECTED_REPR


@pytest.mark.parametrize("builder_class,source", SOURCES)
def test_front_ends_agree_on_every_context(rb, sample_contexts, builder_class, source):
    compiled = builder_class(rb).compile(source)
    direct = _direct()
    for data, expected in sample_contexts:
        context = Context(data)
        assert compiled.evaluate(context) is expected
        assert direct.evaluate(context) is expected
