"""
Controlled natural language front-end.
"""

from .parser import NaturalLanguageParser
from .builder import NaturalLanguageRuleBuilder
from .serializer import NaturalLanguageSerializer

__all__ = ["NaturalLanguageParser", "NaturalLanguageRuleBuilder", "NaturalLanguageSerializer"]
