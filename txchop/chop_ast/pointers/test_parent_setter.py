from parameterized import parameterized_class

from txchop.chop_ast.ast import SourceFile, Expression, Statement, FunctionDeclaration, ExpressionList
from txchop.chop_ast.build_ast import build_ast
from txchop.chop_ast.pointers.parent_setter import set_parents
from txchop.chop_ast.visitor.visitor import AstVisitor
from txchop.examples.examples import all_examples
from txchop.tests.utils.test_examples import TestExamples


class ParentChecker(AstVisitor):

    def visit(self, ast):
        if not isinstance(ast, SourceFile):
            assert (ast.parent is not None)
        self._visit_internal(ast)


class LinkChecker(AstVisitor):

    def visitExpression(self, ast: Expression):
        assert isinstance(ast.statement, Statement)

    def visitExpressionList(self, ast: ExpressionList):
        assert isinstance(ast.statement, Statement)

    def visitStatement(self, ast: Statement):
        assert isinstance(ast.function, FunctionDeclaration)


@parameterized_class(('name', 'example'), all_examples)
class TestParentSetter(TestExamples):

    def test_root_children_have_parent(self):
        ast = build_ast(self.example.code())
        set_parents(ast)

        # test
        for c in ast.children:
            self.assertIs(c.parent, ast)

    def test_function_body(self):
        ast = build_ast(self.example.code())
        set_parents(ast)

        # test
        fct = ast.declarations[0]
        self.assertIs(fct.body.parent, fct)
        for stmt in fct.body.statements:
            self.assertIs(stmt.parent, fct.body)
            self.assertIs(stmt.function, fct)

    def test_all_nodes_have_parent(self):
        ast = build_ast(self.example.code())
        set_parents(ast)

        # test
        v = ParentChecker()
        v.visit(ast)

    def test_statement_and_function_links(self):
        ast = build_ast(self.example.code())
        set_parents(ast)

        # test
        v = LinkChecker()
        for fct in ast.declarations:
            v.visit(fct.body)
