"""
MongoDB-style query front-end.
"""

from .parser import MongoQueryParser
from .builder import MongoQueryRuleBuilder
from .serializer import MongoQuerySerializer

__all__ = ["MongoQueryParser", "MongoQueryRuleBuilder", "MongoQuerySerializer"]
