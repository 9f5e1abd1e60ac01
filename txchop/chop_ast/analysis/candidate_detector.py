from typing import List, Optional

from txchop.chop_ast.ast import AST, FunctionDeclaration, StatementList, IfStatement, IncDecStatement, \
    AssignmentStatement, LiteralExpr, FunctionCallExpr, Statement
from txchop.chop_ast.analysis.equivalence import LabelSet, collect_labels, is_trackable, contains
from txchop.chop_ast.visitor.visitor import AstVisitor


class Candidate:
    """A statement without residual dependency on earlier control flow in its scope."""

    def __init__(self, statement: Statement, scope: StatementList, index: int, function: FunctionDeclaration):
        self.statement = statement
        self.scope = scope
        self.index = index
        self.function = function

    def __str__(self):
        return str(self.statement)


def detect_candidates(fct: FunctionDeclaration, nested_scopes: bool = True) -> List[Candidate]:
    """
    Candidates of fct in source order.

    :param nested_scopes: if true, if/loop/switch bodies are searched as well
    :raise MalformedTree: if a statement of fct does not have the expected shape
    """
    v = CandidateDetector(fct, nested_scopes)
    v.visit(fct)
    return v.candidates


class ScopeState:
    def __init__(self):
        # labels read by conditionals seen so far
        self.cond_labels = LabelSet()
        # labels introduced by := seen so far
        self.declared_labels = LabelSet()

    def copy(self) -> 'ScopeState':
        c = ScopeState()
        c.cond_labels = self.cond_labels.copy()
        c.declared_labels = self.declared_labels.copy()
        return c


class CandidateDetector(AstVisitor):
    """
    Scans every statement sequence of a function forward.

    A nested sequence starts with the state of its enclosing sequence right before the enclosing statement
    (plus the condition labels of enclosing if statements), its own additions are not visible outside.
    """

    def __init__(self, fct: FunctionDeclaration, nested_scopes: bool):
        super().__init__('node-or-children')
        self.fct = fct
        self.parameters = fct.parameters
        self.nested_scopes = nested_scopes
        self.candidates: List[Candidate] = []
        self.scope: Optional[ScopeState] = None

    def visitFunctionDeclaration(self, ast: FunctionDeclaration):
        # other function declarations are analyzed on their own
        if ast is self.fct:
            self.visit(ast.body)

    def visitStatementList(self, ast: StatementList):
        outer = self.scope
        scope = ScopeState() if outer is None else outer.copy()
        for idx, stmt in enumerate(ast.statements):
            entry = scope.copy()
            if self.is_candidate(stmt, scope):
                self.candidates.append(Candidate(stmt, ast, idx, self.fct))
            if self.nested_scopes:
                self.scope = entry
                self.visit(stmt)
        self.scope = outer

    def visitIfStatement(self, ast: IfStatement):
        # both branches are control dependent on the condition
        outer = self.scope
        self.scope = outer.copy()
        for c in (ast.init, ast.condition):
            if c is not None:
                self.scope.cond_labels.update(collect_labels(c))
        self.visitChildren(ast)
        self.scope = outer

    def is_candidate(self, stmt: AST, scope: ScopeState) -> bool:
        if isinstance(stmt, IfStatement):
            scope.cond_labels.update(collect_labels(stmt))
            return False
        elif isinstance(stmt, IncDecStatement):
            return stmt.target not in scope.cond_labels
        elif isinstance(stmt, AssignmentStatement):
            if stmt.is_declaration:
                for target in stmt.lhs:
                    scope.declared_labels.update(collect_labels(target))
                return False
            if any(target in scope.cond_labels for target in stmt.lhs):
                return False
            return all(self.resolves_locally(expr, scope) for expr in stmt.rhs)
        return False

    def resolves_locally(self, expr: AST, scope: ScopeState) -> bool:
        if isinstance(expr, LiteralExpr):
            return False
        elif is_trackable(expr):
            return self.is_local(expr, scope)
        elif isinstance(expr, FunctionCallExpr):
            return all(self.is_local(arg, scope) for arg in expr.args)
        return True

    def is_local(self, expr: AST, scope: ScopeState) -> bool:
        return contains(self.parameters, expr) or expr in scope.declared_labels
