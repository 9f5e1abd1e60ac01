from __future__ import annotations

import textwrap
from enum import Enum
from typing import List, Dict, Union, Optional, Any, Type, TypeVar

from txchop.errors.exceptions import MalformedTree
from txchop.chop_ast.visitor.visitor import AstVisitor

T = TypeVar('T')


class NodeKind(Enum):
    """Kind tags of the nodes emitted by the external parser (the values are the tags used in tree documents)."""
    SOURCE_FILE = 'file'
    FUNCTION_DECLARATION = 'func_decl'
    PARAMETER_LIST = 'params'
    PARAMETER = 'param'
    STATEMENT_LIST = 'block'
    IF = 'if'
    FOR = 'for'
    RANGE = 'range'
    SWITCH = 'switch'
    CASE_CLAUSE = 'case'
    INC_DEC = 'inc_dec'
    ASSIGNMENT = 'assign'
    EXPRESSION_STATEMENT = 'expr_stmt'
    RETURN = 'return'
    EXPRESSION_LIST = 'expr_list'
    CALL = 'call'
    IDENTIFIER = 'ident'
    FIELD_ACCESS = 'selector'
    INDEX = 'index'
    LITERAL = 'literal'
    BINARY = 'binary'
    UNARY = 'unary'
    COMPOSITE = 'composite'
    KEY_VALUE = 'key_value'
    TYPE = 'type'


class AST:
    kind: NodeKind = None

    def __init__(self, children: Optional[List[AST]] = None, attrs: Optional[Dict[str, Any]] = None):
        self.children: List[AST] = list(children) if children else []
        self.attrs: Dict[str, Any] = dict(attrs) if attrs else {}

        self.pos = -1
        self.end = -1
        self.line = -1
        self.column = -1

        # set later by parent setter
        self.parent: Optional[AST] = None
        # enclosing statement (expressions) and enclosing function (statements)
        self.statement: Optional[Statement] = None
        self.function: Optional[FunctionDeclaration] = None

    @classmethod
    def from_parts(cls: Type[T], children: List[AST], attrs: Dict[str, Any]) -> T:
        """Create a node directly from its generic parts, bypassing the convenience constructor."""
        node = cls.__new__(cls)
        AST.__init__(node, children, attrs)
        return node

    def at(self: T, line: int = -1, column: int = -1, pos: int = -1, end: int = -1) -> T:
        self.line, self.column, self.pos, self.end = line, column, pos, end
        return self

    def _child(self, idx: int, cls: Optional[type] = None) -> AST:
        if not -len(self.children) <= idx < len(self.children):
            raise MalformedTree(f'{type(self).__name__} has {len(self.children)} children, expected child {idx}', self)
        c = self.children[idx]
        if cls is not None and not isinstance(c, cls):
            expected = cls.__name__ if isinstance(cls, type) else ' or '.join(t.__name__ for t in cls)
            raise MalformedTree(f'{type(self).__name__} expected {expected} at child {idx}, got {type(c).__name__}', self)
        return c

    def _expect_arity(self, *counts: int):
        if len(self.children) not in counts:
            expected = ' or '.join(map(str, counts))
            raise MalformedTree(f'{type(self).__name__} has {len(self.children)} children, expected {expected}', self)

    def _attr(self, key: str) -> Any:
        if key not in self.attrs:
            raise MalformedTree(f'{type(self).__name__} lacks attribute "{key}"', self)
        return self.attrs[key]

    def index_in_parent(self) -> int:
        assert self.parent is not None
        for idx, c in enumerate(self.parent.children):
            if c is self:
                return idx
        raise MalformedTree('node is not a child of its parent', self)

    def code(self) -> str:
        v = CodeVisitor()
        s = v.visit(self)
        return s

    def __str__(self):
        return self.code()

    def __repr__(self):
        return f'<{type(self).__name__} line {self.line}>'


class SourceFile(AST):
    kind = NodeKind.SOURCE_FILE

    def __init__(self, declarations: List[AST], name: str = ''):
        super().__init__(declarations, {'name': name})

    @property
    def name(self) -> str:
        return self.attrs.get('name', '')

    @property
    def declarations(self) -> List[AST]:
        return self.children


class TypeName(AST):
    kind = NodeKind.TYPE

    def __init__(self, name: str, args: Optional[List[AST]] = None):
        super().__init__(args, {'name': name})

    @property
    def name(self) -> str:
        return self.attrs.get('name', '')


class Expression(AST):
    pass


class ExpressionList(AST):
    kind = NodeKind.EXPRESSION_LIST

    def __init__(self, elements: List[Expression]):
        super().__init__(elements)

    @property
    def elements(self) -> List[AST]:
        return self.children


class IdentifierExpr(Expression):
    kind = NodeKind.IDENTIFIER

    def __init__(self, name: str):
        super().__init__(attrs={'name': name})

    @property
    def name(self) -> str:
        return self._attr('name')


class MemberAccessExpr(Expression):
    """Field access / selector expression ``expr.member``."""
    kind = NodeKind.FIELD_ACCESS

    def __init__(self, expr: Expression, member: Union[str, IdentifierExpr]):
        if isinstance(member, str):
            member = IdentifierExpr(member)
        super().__init__([expr, member])

    @property
    def expr(self) -> AST:
        self._expect_arity(2)
        return self._child(0)

    @property
    def member(self) -> IdentifierExpr:
        self._expect_arity(2)
        return self._child(1, IdentifierExpr)


class IndexExpr(Expression):
    kind = NodeKind.INDEX

    def __init__(self, arr: Expression, key: Expression):
        super().__init__([arr, key])

    @property
    def arr(self) -> AST:
        self._expect_arity(2)
        return self._child(0)

    @property
    def key(self) -> AST:
        self._expect_arity(2)
        return self._child(1)


class LiteralExpr(Expression):
    kind = NodeKind.LITERAL

    def __init__(self, value: Union[str, int, float, bool]):
        super().__init__(attrs={'value': value})

    @property
    def value(self):
        return self.attrs.get('value')


class BinaryExpr(Expression):
    kind = NodeKind.BINARY

    def __init__(self, op: str, lhs: Expression, rhs: Expression):
        super().__init__([lhs, rhs], {'op': op})

    @property
    def op(self) -> str:
        return self._attr('op')

    @property
    def lhs(self) -> AST:
        self._expect_arity(2)
        return self._child(0)

    @property
    def rhs(self) -> AST:
        self._expect_arity(2)
        return self._child(1)


class UnaryExpr(Expression):
    kind = NodeKind.UNARY

    def __init__(self, op: str, expr: Expression):
        super().__init__([expr], {'op': op})

    @property
    def op(self) -> str:
        return self._attr('op')

    @property
    def expr(self) -> AST:
        self._expect_arity(1)
        return self._child(0)


class FunctionCallExpr(Expression):
    kind = NodeKind.CALL

    def __init__(self, func: Expression, args: List[Expression]):
        super().__init__([func, ExpressionList(args)])

    @property
    def func(self) -> AST:
        self._expect_arity(2)
        return self._child(0)

    @property
    def args(self) -> List[AST]:
        self._expect_arity(2)
        return self._child(1, ExpressionList).elements

    @property
    def callee_name(self) -> Optional[str]:
        """Name of the called function or method, None for calls of computed values."""
        f = self.func
        if isinstance(f, IdentifierExpr):
            return f.name
        elif isinstance(f, MemberAccessExpr):
            return f.member.name
        return None


class KeyValueExpr(Expression):
    kind = NodeKind.KEY_VALUE

    def __init__(self, key: Expression, value: Expression):
        super().__init__([key, value])

    @property
    def key(self) -> AST:
        self._expect_arity(2)
        return self._child(0)

    @property
    def value(self) -> AST:
        self._expect_arity(2)
        return self._child(1)


class CompositeLiteralExpr(Expression):
    kind = NodeKind.COMPOSITE

    def __init__(self, type_name: Optional[TypeName], elements: List[Expression]):
        super().__init__(([type_name] if type_name is not None else []) + list(elements))

    @property
    def type_name(self) -> Optional[TypeName]:
        if self.children and isinstance(self.children[0], TypeName):
            return self.children[0]
        return None

    @property
    def elements(self) -> List[AST]:
        return self.children[1:] if self.type_name is not None else self.children


class Statement(AST):
    pass


class StatementList(Statement):
    kind = NodeKind.STATEMENT_LIST

    def __init__(self, statements: List[Statement]):
        super().__init__(statements)

    @property
    def statements(self) -> List[AST]:
        return self.children


class AssignmentStatement(Statement):
    kind = NodeKind.ASSIGNMENT

    def __init__(self, lhs: List[Expression], rhs: List[Expression], op: str = '='):
        super().__init__([ExpressionList(lhs), ExpressionList(rhs)], {'op': op})

    @property
    def op(self) -> str:
        return self._attr('op')

    @property
    def is_declaration(self) -> bool:
        """True for declare-and-assign (:=), False for every reassignment operator."""
        return self.op == ':='

    @property
    def lhs(self) -> List[AST]:
        self._expect_arity(2)
        return self._child(0, ExpressionList).elements

    @property
    def rhs(self) -> List[AST]:
        self._expect_arity(2)
        return self._child(1, ExpressionList).elements

    @property
    def rhs_list(self) -> ExpressionList:
        self._expect_arity(2)
        return self._child(1, ExpressionList)


class IncDecStatement(Statement):
    kind = NodeKind.INC_DEC

    def __init__(self, target: Expression, op: str = '++'):
        super().__init__([target], {'op': op})

    @property
    def op(self) -> str:
        return self._attr('op')

    @property
    def target(self) -> AST:
        self._expect_arity(1)
        return self._child(0)


class ExpressionStatement(Statement):
    kind = NodeKind.EXPRESSION_STATEMENT

    def __init__(self, expr: Expression):
        super().__init__([expr])

    @property
    def expr(self) -> AST:
        self._expect_arity(1)
        return self._child(0)


class ReturnStatement(Statement):
    kind = NodeKind.RETURN

    def __init__(self, values: Optional[List[Expression]] = None):
        super().__init__(values)

    @property
    def values(self) -> List[AST]:
        return self.children


class IfStatement(Statement):
    """
    ``if [init;] condition then_branch [else else_branch]``

    Children: [init,] condition, then block [, else block or nested if].
    """
    kind = NodeKind.IF

    def __init__(self, condition: Expression, then_branch: StatementList,
                 else_branch: Optional[Union[StatementList, IfStatement]] = None, init: Optional[Statement] = None):
        children = [c for c in [init, condition, then_branch, else_branch] if c is not None]
        super().__init__(children)

    @property
    def _then_idx(self) -> int:
        for idx in (1, 2):
            if idx < len(self.children) and isinstance(self.children[idx], StatementList):
                if len(self.children) - idx > 2:
                    break
                return idx
        raise MalformedTree('IfStatement requires a condition followed by a block', self)

    @property
    def init(self) -> Optional[AST]:
        return self.children[0] if self._then_idx == 2 else None

    @property
    def condition(self) -> AST:
        return self.children[self._then_idx - 1]

    @property
    def then_branch(self) -> StatementList:
        return self.children[self._then_idx]

    @property
    def else_branch(self) -> Optional[AST]:
        idx = self._then_idx + 1
        if idx < len(self.children):
            return self._child(idx, (StatementList, IfStatement))
        return None


class LoopStatement(Statement):
    """Loop with an arbitrary header (init/condition/post or range clause) and a body block as last child."""

    def __init__(self, header: List[AST], body: StatementList):
        super().__init__(list(header) + [body])

    @property
    def header(self) -> List[AST]:
        return self.children[:-1]

    @property
    def body(self) -> StatementList:
        return self._child(-1, StatementList)


class ForStatement(LoopStatement):
    kind = NodeKind.FOR


class RangeStatement(LoopStatement):
    kind = NodeKind.RANGE


class SwitchStatement(Statement):
    kind = NodeKind.SWITCH

    def __init__(self, tags: List[AST], clauses: List[CaseClause]):
        super().__init__(list(tags) + [StatementList(clauses)])

    @property
    def tags(self) -> List[AST]:
        return self.children[:-1]

    @property
    def body(self) -> StatementList:
        return self._child(-1, StatementList)


class CaseClause(Statement):
    kind = NodeKind.CASE_CLAUSE

    def __init__(self, expressions: List[Expression], body: StatementList):
        super().__init__([ExpressionList(expressions), body])

    @property
    def expressions(self) -> List[AST]:
        self._expect_arity(2)
        return self._child(0, ExpressionList).elements

    @property
    def body(self) -> StatementList:
        self._expect_arity(2)
        return self._child(1, StatementList)


class Parameter(AST):
    kind = NodeKind.PARAMETER

    def __init__(self, idf: Union[str, IdentifierExpr], type_name: Optional[TypeName] = None):
        if isinstance(idf, str):
            idf = IdentifierExpr(idf)
        super().__init__([c for c in [idf, type_name] if c is not None])

    @property
    def idf(self) -> IdentifierExpr:
        self._expect_arity(1, 2)
        return self._child(0, IdentifierExpr)


class ParameterList(AST):
    kind = NodeKind.PARAMETER_LIST

    def __init__(self, params: List[Parameter]):
        super().__init__(params)

    @property
    def params(self) -> List[AST]:
        return self.children


class FunctionDeclaration(AST):
    """
    A function (or method) declaration.

    This is the function unit the analyses work on: its name, the identifiers of its formal parameters
    in declaration order and its body statement sequence.
    """
    kind = NodeKind.FUNCTION_DECLARATION

    def __init__(self, name: str, parameters: List[Union[str, Parameter]], body: Union[StatementList, List[Statement]],
                 receiver: Optional[str] = None):
        params = ParameterList([Parameter(p) if isinstance(p, str) else p for p in parameters])
        if not isinstance(body, StatementList):
            body = StatementList(body)
        attrs = {'name': name}
        if receiver is not None:
            attrs['receiver'] = receiver
        super().__init__([params, body], attrs)

    @property
    def name(self) -> str:
        return self._attr('name')

    @property
    def receiver(self) -> Optional[str]:
        return self.attrs.get('receiver')

    @property
    def parameter_list(self) -> ParameterList:
        self._expect_arity(2)
        return self._child(0, ParameterList)

    @property
    def parameters(self) -> List[IdentifierExpr]:
        return [self._param(p).idf for p in self.parameter_list.params]

    def _param(self, p: AST) -> Parameter:
        if not isinstance(p, Parameter):
            raise MalformedTree(f'ParameterList expected Parameter, got {type(p).__name__}', p)
        return p

    @property
    def body(self) -> StatementList:
        self._expect_arity(2)
        return self._child(1, StatementList)


node_classes: Dict[NodeKind, Type[AST]] = {
    cls.kind: cls for cls in [
        SourceFile, FunctionDeclaration, ParameterList, Parameter, StatementList, IfStatement, ForStatement,
        RangeStatement, SwitchStatement, CaseClause, IncDecStatement, AssignmentStatement, ExpressionStatement,
        ReturnStatement, ExpressionList, FunctionCallExpr, IdentifierExpr, MemberAccessExpr, IndexExpr, LiteralExpr,
        BinaryExpr, UnaryExpr, CompositeLiteralExpr, KeyValueExpr, TypeName
    ]
}


def indent(s: str) -> str:
    return textwrap.indent(s, ' ' * 4)


class CodeVisitor(AstVisitor):
    """Renders a (sub)tree as go-like source text, used for reports and error messages."""

    def __init__(self):
        super().__init__('node-or-children')

    def visit(self, ast):
        ret = super().visit(ast)
        return '' if ret is None else ret

    def visit_list(self, l: List[AST], sep='\n'):
        return sep.join(self.visit(e) for e in l)

    def visitAST(self, ast: AST):
        # should never be called
        raise NotImplementedError("Did not implement code generation for " + repr(ast))

    def visitSourceFile(self, ast: SourceFile):
        return self.visit_list(ast.declarations, '\n\n')

    def visitTypeName(self, ast: TypeName):
        return ast.name

    def visitExpressionList(self, ast: ExpressionList):
        return self.visit_list(ast.elements, ', ')

    def visitIdentifierExpr(self, ast: IdentifierExpr):
        return ast.name

    def visitMemberAccessExpr(self, ast: MemberAccessExpr):
        return f'{self.visit(ast.expr)}.{self.visit(ast.member)}'

    def visitIndexExpr(self, ast: IndexExpr):
        return f'{self.visit(ast.arr)}[{self.visit(ast.key)}]'

    def visitLiteralExpr(self, ast: LiteralExpr):
        return str(ast.value)

    def visitBinaryExpr(self, ast: BinaryExpr):
        return f'{self.visit(ast.lhs)} {ast.op} {self.visit(ast.rhs)}'

    def visitUnaryExpr(self, ast: UnaryExpr):
        return f'{ast.op}{self.visit(ast.expr)}'

    def visitFunctionCallExpr(self, ast: FunctionCallExpr):
        return f'{self.visit(ast.func)}({self.visit_list(ast.args, ", ")})'

    def visitKeyValueExpr(self, ast: KeyValueExpr):
        return f'{self.visit(ast.key)}: {self.visit(ast.value)}'

    def visitCompositeLiteralExpr(self, ast: CompositeLiteralExpr):
        t = '' if ast.type_name is None else self.visit(ast.type_name)
        return f'{t}{{{self.visit_list(ast.elements, ", ")}}}'

    def visitStatementList(self, ast: StatementList):
        if not ast.statements:
            return '{}'
        return f'{{\n{indent(self.visit_list(ast.statements))}\n}}'

    def visitAssignmentStatement(self, ast: AssignmentStatement):
        return f'{self.visit_list(ast.lhs, ", ")} {ast.op} {self.visit_list(ast.rhs, ", ")}'

    def visitIncDecStatement(self, ast: IncDecStatement):
        return f'{self.visit(ast.target)}{ast.op}'

    def visitExpressionStatement(self, ast: ExpressionStatement):
        return self.visit(ast.expr)

    def visitReturnStatement(self, ast: ReturnStatement):
        if not ast.values:
            return 'return'
        return f'return {self.visit_list(ast.values, ", ")}'

    def visitIfStatement(self, ast: IfStatement):
        init = '' if ast.init is None else f'{self.visit(ast.init)}; '
        ret = f'if {init}{self.visit(ast.condition)} {self.visit(ast.then_branch)}'
        if ast.else_branch is not None:
            ret += f' else {self.visit(ast.else_branch)}'
        return ret

    def visitForStatement(self, ast: ForStatement):
        h = self.visit_list(ast.header, '; ')
        return f'for {h} {self.visit(ast.body)}' if h else f'for {self.visit(ast.body)}'

    def visitRangeStatement(self, ast: RangeStatement):
        *targets, expr = ast.header
        t = f'{self.visit_list(targets, ", ")} := ' if targets else ''
        return f'for {t}range {self.visit(expr)} {self.visit(ast.body)}'

    def visitSwitchStatement(self, ast: SwitchStatement):
        tags = self.visit_list(ast.tags, '; ')
        return f'switch {tags + " " if tags else ""}{self.visit(ast.body)}'

    def visitCaseClause(self, ast: CaseClause):
        head = f'case {self.visit_list(ast.expressions, ", ")}:' if ast.expressions else 'default:'
        if not ast.body.statements:
            return head
        return f'{head}\n{indent(self.visit_list(ast.body.statements))}'

    def visitParameter(self, ast: Parameter):
        return self.visit_list(ast.children, ' ')

    def visitParameterList(self, ast: ParameterList):
        return f'({self.visit_list(ast.params, ", ")})'

    def visitFunctionDeclaration(self, ast: FunctionDeclaration):
        recv = '' if ast.receiver is None else f'({ast.receiver}) '
        return f'func {recv}{ast.name}{self.visit(ast.parameter_list)} {self.visit(ast.body)}'
