from txchop.chop_ast.ast import AST, Expression, Statement, FunctionDeclaration, ExpressionList
from txchop.chop_ast.visitor.visitor import AstVisitor


class ParentSetterVisitor(AstVisitor):
    """
    Links parents
    """

    def __init__(self):
        super().__init__(traversal='pre')

    def visitChildren(self, ast: AST):
        for c in ast.children:
            c.parent = ast
            self.visit(c)


class ExpressionToStatementVisitor(AstVisitor):

    def __init__(self):
        super().__init__(traversal='pre')

    def _link_statement(self, ast: AST):
        parent = ast.parent
        while parent and not isinstance(parent, Statement):
            parent = parent.parent
        if parent:
            ast.statement = parent

    def visitExpression(self, ast: Expression):
        self._link_statement(ast)

    def visitExpressionList(self, ast: ExpressionList):
        self._link_statement(ast)

    def visitStatement(self, ast: Statement):
        parent = ast
        while parent and not isinstance(parent, FunctionDeclaration):
            parent = parent.parent
        if parent:
            ast.function = parent


def set_parents(ast):
    v = ParentSetterVisitor()
    v.visit(ast)
    v = ExpressionToStatementVisitor()
    v.visit(ast)
