"""
LDAP search filter front-end.
"""

from .parser import LDAPFilterParser
from .builder import LDAPFilterRuleBuilder
from .serializer import LDAPFilterSerializer

__all__ = ["LDAPFilterParser", "LDAPFilterRuleBuilder", "LDAPFilterSerializer"]
