"""
JMESPath query front-end.
"""

from .parser import JMESPathParser
from .builder import JMESPathRuleBuilder
from .proposition import JMESPathProposition
from .serializer import JMESPathSerializer

__all__ = ["JMESPathParser", "JMESPathProposition", "JMESPathRuleBuilder", "JMESPathSerializer"]
