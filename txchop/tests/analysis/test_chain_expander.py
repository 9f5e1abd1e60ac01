from txchop.chop_ast.analysis.chain_expander import dependency_chains, read_labels
from txchop.chop_ast.ast import IdentifierExpr, LiteralExpr, BinaryExpr, FunctionCallExpr, AssignmentStatement, \
    IfStatement, StatementList, FunctionDeclaration, IncDecStatement, ForStatement, ExpressionStatement
from txchop.chop_ast.pointers.parent_setter import set_parents
from txchop.tests.chop_unit_test import TxChopTestCase


def idf(name: str) -> IdentifierExpr:
    return IdentifierExpr(name)


def assign(lhs, rhs, op='=', line=-1) -> AssignmentStatement:
    return AssignmentStatement([lhs], [rhs], op).at(line)


def chain_lines(fct: FunctionDeclaration):
    set_parents(fct)
    return [chain.lines for chain in dependency_chains(fct)]


class TestChainExpander(TxChopTestCase):

    def test_declared_local(self):
        fct = FunctionDeclaration('f', ['a', 'b'], [
            assign(idf('x'), BinaryExpr('+', idf('a'), LiteralExpr(1)), ':=', 1),
            assign(idf('b'), idf('x'), line=2),
        ])
        self.assertEqual(chain_lines(fct), [[2, 1]])

    def test_singleton_inc_dec(self):
        fct = FunctionDeclaration('f', ['i', 'other'], [
            IfStatement(idf('other'), StatementList([])).at(1),
            IncDecStatement(idf('i')).at(2),
        ])
        self.assertEqual(chain_lines(fct), [[2]])

    def test_inc_dec_reads_its_target(self):
        fct = FunctionDeclaration('f', ['p'], [
            assign(idf('n'), idf('p'), ':=', 1),
            IncDecStatement(idf('n')).at(2),
        ])
        self.assertEqual(chain_lines(fct), [[2, 1]])

    def test_transitive_definitions(self):
        fct = FunctionDeclaration('f', ['a', 'b'], [
            assign(idf('x'), idf('a'), ':=', 1),
            assign(idf('y'), FunctionCallExpr(idf('g'), [idf('x')]), ':=', 2),
            ExpressionStatement(FunctionCallExpr(idf('log'), [idf('y')])).at(3),
            assign(idf('z'), LiteralExpr(2), ':=', 4),
            assign(idf('b'), BinaryExpr('*', idf('y'), idf('a')), line=5),
        ])
        self.assertEqual(chain_lines(fct), [[5, 2, 1]])

    def test_walk_crosses_enclosing_scopes(self):
        fct = FunctionDeclaration('f', ['b', 'n'], [
            assign(idf('x'), idf('n'), ':=', 1),
            ForStatement([BinaryExpr('<', idf('b'), idf('n'))], StatementList([
                assign(idf('b'), idf('x'), line=3),
            ])).at(2),
        ])
        self.assertEqual(chain_lines(fct), [[3, 1]])

    def test_candidate_located_by_position(self):
        # two structurally equal candidates get independent chains
        fct = FunctionDeclaration('f', ['a', 'b'], [
            assign(idf('b'), idf('a'), line=1),
            assign(idf('a'), idf('b'), line=2),
            assign(idf('b'), idf('a'), line=3),
        ])
        self.assertEqual(chain_lines(fct), [[1], [2, 1], [3, 2, 1]])

    def test_chain_order_follows_candidates(self):
        fct = FunctionDeclaration('f', ['a', 'b'], [
            IncDecStatement(idf('a')).at(1),
            IncDecStatement(idf('b')).at(2),
        ])
        set_parents(fct)
        chains = dependency_chains(fct)
        self.assertEqual([str(c) for c in chains], ['[a++]', '[b++]'])
        self.assertTrue(all(c.function is fct for c in chains))
        self.assertEqual([len(c) for c in chains], [1, 1])

    def test_read_labels(self):
        self.assertEqual([str(l) for l in read_labels(assign(idf('x'), BinaryExpr('+', idf('y'), idf('z'))))],
                         ['y', 'z'])
        self.assertEqual([str(l) for l in read_labels(IncDecStatement(idf('i')))], ['i'])
        self.assertEqual(read_labels(ExpressionStatement(idf('i'))), [])
