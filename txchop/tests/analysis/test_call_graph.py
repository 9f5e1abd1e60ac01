from txchop.chop_ast.analysis.call_graph import call_graph_analysis
from txchop.chop_ast.ast import IdentifierExpr, MemberAccessExpr, FunctionCallExpr, ExpressionStatement, \
    FunctionDeclaration, AssignmentStatement, IfStatement, StatementList
from txchop.tests.chop_unit_test import TxChopTestCase


def idf(name: str) -> IdentifierExpr:
    return IdentifierExpr(name)


def call(func, *args) -> ExpressionStatement:
    if isinstance(func, str):
        func = idf(func)
    return ExpressionStatement(FunctionCallExpr(func, list(args)))


class TestCallGraph(TxChopTestCase):

    def test_direct_and_indirect_calls(self):
        a = FunctionDeclaration('a', [], [call('b')])
        b = FunctionDeclaration('b', [], [call('c')])
        c = FunctionDeclaration('c', [], [call('unknown')])
        graph = call_graph_analysis([a, b, c], ['GetState', 'PutState'])
        self.assertEqual(graph.called_functions['a'], {'b', 'c'})
        self.assertEqual(graph.called_functions['b'], {'c'})
        self.assertEqual(graph.called_functions['c'], set())
        self.assertEqual(graph.recursive_functions, [])

    def test_recursion(self):
        f = FunctionDeclaration('f', ['x'], [IfStatement(idf('x'), StatementList([call('f', idf('x'))]))])
        ping = FunctionDeclaration('ping', [], [call('pong')])
        pong = FunctionDeclaration('pong', [], [call('ping')])
        g = FunctionDeclaration('g', [], [call('ping')])
        graph = call_graph_analysis([f, ping, pong, g], [])
        self.assertEqual(graph.recursive_functions, ['f', 'ping', 'pong'])
        self.assertFalse(graph.is_recursive('g'))

    def test_call_sites_in_source_order(self):
        inner = FunctionCallExpr(idf('h'), [])
        outer = FunctionCallExpr(idf('g'), [inner])
        f = FunctionDeclaration('f', [], [
            AssignmentStatement([idf('v')], [outer], ':='),
            call(MemberAccessExpr(idf('stub'), 'GetState'), idf('v')),
        ])
        graph = call_graph_analysis([f], ['GetState'])
        sites = graph.call_sites[f]
        self.assertEqual(len(sites), 3)
        self.assertIs(sites[0], outer)
        self.assertIs(sites[1], inner)

    def test_resolve(self):
        helper = FunctionDeclaration('helper', [], [])
        graph = call_graph_analysis([helper], ['GetState'])
        self.assertEqual(graph.resolve(FunctionCallExpr(idf('helper'), [])), 'helper')
        self.assertEqual(graph.resolve(FunctionCallExpr(MemberAccessExpr(idf('t'), 'helper'), [])), 'helper')
        self.assertIsNone(graph.resolve(FunctionCallExpr(MemberAccessExpr(idf('stub'), 'GetState'), [])))
        self.assertIsNone(graph.resolve(FunctionCallExpr(idf('fmt'), [])))

    def test_same_name_functions_share_entry(self):
        m1 = FunctionDeclaration('Init', [], [call('a')], receiver='t *Token')
        m2 = FunctionDeclaration('Init', [], [call('b')], receiver='w *Wallet')
        a = FunctionDeclaration('a', [], [])
        b = FunctionDeclaration('b', [], [])
        graph = call_graph_analysis([m1, m2, a, b], [])
        self.assertEqual(graph.called_functions['Init'], {'a', 'b'})
        self.assertEqual(len(graph.functions['Init']), 2)
