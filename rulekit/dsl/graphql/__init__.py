"""
GraphQL filter front-end.
"""

from .parser import GraphQLFilterParser
from .builder import GraphQLFilterRuleBuilder
from .serializer import GraphQLFilterSerializer

__all__ = ["GraphQLFilterParser", "GraphQLFilterRuleBuilder", "GraphQLFilterSerializer"]
