"""
Lune Abstract Syntax Tree (AST) Definitions
===========================================

This module defines the AST node types produced by the Lune parser.
A parsed program is a plain list of statements; each statement may own
an expression tree.

Node Hierarchy
--------------
ASTNode (base)
├── Name - identifier wrapper, compared by text
├── Statements (Stmt)
│   ├── ExpressionStatement - bare expression
│   ├── VarDeclaration - var name:type = expr
│   └── Assignment - name = expr
└── Expressions (Expr)
    ├── IntLiteral - 32-bit signed integer constant
    ├── StringLiteral - decoded string constant
    ├── UnaryOp - prefix operator applied to one operand
    └── BinaryOp - infix operator applied to two operands

Design Notes
------------
- All nodes are frozen dataclasses; equality is structural
- Operator nodes keep the operator Token so diagnostics can point at it
- Each node exclusively owns its children; trees are acyclic
"""

import json
from dataclasses import dataclass, fields
from typing import Any

from lune.lexer import Token
from lune.types import TypeTag


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """Base class for all AST nodes."""


@dataclass(frozen=True)
class Expr(ASTNode):
    """Base class for all expression nodes."""


@dataclass(frozen=True)
class Stmt(ASTNode):
    """Base class for all statement nodes."""


@dataclass(frozen=True)
class Name(ASTNode):
    """
    Identifier used as a declaration or assignment target.

    Attributes:
        value: The identifier text
    """
    value: str

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass(frozen=True)
class IntLiteral(Expr):
    """Integer constant, already range-checked by the lexer."""
    value: int


@dataclass(frozen=True)
class StringLiteral(Expr):
    """String constant with escape sequences resolved."""
    value: str


@dataclass(frozen=True)
class UnaryOp(Expr):
    """
    Prefix operator expression.

    Represents expressions like:
        -5
        !0
        --5   (nested UnaryOp)

    Attributes:
        operator: The MINUS or BANG token
        operand: The expression the operator applies to
    """
    operator: Token
    operand: Expr


@dataclass(frozen=True)
class BinaryOp(Expr):
    """
    Infix operator expression.

    Attributes:
        left: Left operand
        operator: The operator token (PLUS, STAR, EQUAL_EQUAL, ...)
        right: Right operand
    """
    left: Expr
    operator: Token
    right: Expr


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass(frozen=True)
class ExpressionStatement(Stmt):
    """Expression evaluated for its own sake."""
    expression: Expr


@dataclass(frozen=True)
class VarDeclaration(Stmt):
    """
    Variable declaration with a mandatory initializer.

    Represents declarations like:
        var count:int = 0x2000
        var greeting:str = "hello"

    Attributes:
        name: Declared variable name
        var_type: Declared primitive type
        initializer: Initial value expression
    """
    name: Name
    var_type: TypeTag
    initializer: Expr


@dataclass(frozen=True)
class Assignment(Stmt):
    """
    Assignment to an existing variable.

    Attributes:
        target: Variable being assigned
        value: New value expression
    """
    target: Name
    value: Expr


# =============================================================================
# AST Visitor
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Dispatches each node to a ``visit_<ClassName>`` method. Nodes without
    a specific method fall back to generic_visit, which walks children.

    Usage:
        class LiteralCounter(ASTVisitor):
            def __init__(self):
                self.count = 0

            def visit_IntLiteral(self, node):
                self.count += 1

        counter = LiteralCounter()
        for stmt in statements:
            counter.visit(stmt)
    """

    def visit(self, node: ASTNode) -> Any:
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit all child nodes of node."""
        for node_field in fields(node):
            value = getattr(node, node_field.name)
            if isinstance(value, ASTNode):
                self.visit(value)


# =============================================================================
# AST Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Renders statements as S-expressions for debugging.

    Example output for ``var x:int = 2 + 3 * 4``:

        (var x int (+ 2 (* 3 4)))

    Usage:
        printer = ASTPrinter()
        print(printer.print(statements))
    """

    def print(self, statements: list[Stmt]) -> str:
        """Render each statement on its own line."""
        return "\n".join(self.visit(stmt) for stmt in statements)

    def visit_Name(self, node: Name) -> str:
        return node.value

    def visit_ExpressionStatement(self, node: ExpressionStatement) -> str:
        return self.visit(node.expression)

    def visit_VarDeclaration(self, node: VarDeclaration) -> str:
        return (
            f"(var {self.visit(node.name)} {node.var_type} "
            f"{self.visit(node.initializer)})"
        )

    def visit_Assignment(self, node: Assignment) -> str:
        return f"(set {self.visit(node.target)} {self.visit(node.value)})"

    def visit_IntLiteral(self, node: IntLiteral) -> str:
        return str(node.value)

    def visit_StringLiteral(self, node: StringLiteral) -> str:
        return json.dumps(node.value)

    def visit_UnaryOp(self, node: UnaryOp) -> str:
        return f"({node.operator.text} {self.visit(node.operand)})"

    def visit_BinaryOp(self, node: BinaryOp) -> str:
        return (
            f"({node.operator.text} {self.visit(node.left)} "
            f"{self.visit(node.right)})"
        )
