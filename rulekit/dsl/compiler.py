"""
Rule Compiler

Walks the shared AST and builds operator trees through the registry. Each
front-end supplies only a vocabulary mapping its tokens to registry ids.
"""

from typing import Any, Dict, Optional

from rulekit.builder.registry import OperatorRegistry
from rulekit.core.operator import PropositionOperator, VariableOperator
from rulekit.core.proposition import Proposition, VariableOperand
from rulekit.dsl.ast import FieldNode, LiteralNode, Node, OperatorNode
from rulekit.dsl.field_resolver import FieldResolver
from rulekit.exceptions import CompileError
from rulekit.variables import Variable


class RuleCompiler:
    """
    Compile AST nodes into Propositions.

    Args:
        field_resolver: Resolver for field paths
        registry: Operator registry, defaults to the resolver's builder registry
        vocabulary: Front-end token to registry id mapping
        max_depth: Deepest allowed node nesting
    """

    def __init__(
        self,
        field_resolver: FieldResolver,
        registry: Optional[OperatorRegistry] = None,
        vocabulary: Optional[Dict[str, str]] = None,
        max_depth: int = 64
    ):
        self.field_resolver = field_resolver
        self.registry = registry or field_resolver.builder.registry
        self.vocabulary = vocabulary or {}
        self.max_depth = max_depth

    def compile(self, node: Node) -> Proposition:
        """
        Compile a root node.

        Raises:
            CompileError: If the root is not a proposition or the tree is invalid
            UnknownOperatorError: If an operator token is not registered
        """
        result = self.compile_operand(node)
        if not isinstance(result, Proposition):
            raise CompileError(
                "Expression must compile to a proposition",
                component="RuleCompiler"
            )
        return result

    def compile_operand(self, node: Node, depth: int = 0) -> Any:
        if depth > self.max_depth:
            raise CompileError(
                f"Expression nesting exceeds the maximum depth of {self.max_depth}",
                component="RuleCompiler"
            )

        if isinstance(node, FieldNode):
            return self.field_resolver.resolve(node.path)
        if isinstance(node, LiteralNode):
            return Variable(value=node.value)
        if isinstance(node, OperatorNode):
            return self._compile_operator(node, depth)

        raise CompileError(
            f"Unsupported node type: {type(node).__name__}",
            component="RuleCompiler"
        )

    def canonical(self, token: str) -> str:
        return self.vocabulary.get(token, token)

    def _compile_operator(self, node: OperatorNode, depth: int) -> Any:
        spec = self.registry.get(self.canonical(node.operator))
        operands = [self.compile_operand(child, depth + 1) for child in node.operands]

        factory = spec.factory
        if isinstance(factory, type) and issubclass(factory, PropositionOperator):
            for operand in operands:
                if not isinstance(operand, Proposition):
                    raise CompileError(
                        f"Operator '{spec.name}' needs conditions as operands",
                        component="RuleCompiler"
                    )
        elif isinstance(factory, type) and issubclass(factory, VariableOperator):
            for operand in operands:
                if isinstance(operand, Proposition) and not isinstance(operand, VariableOperand):
                    raise CompileError(
                        f"Operator '{spec.name}' cannot take a condition as a value",
                        component="RuleCompiler"
                    )

        return self.registry.create(spec.name, *operands)
