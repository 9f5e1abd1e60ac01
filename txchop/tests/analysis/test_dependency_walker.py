from txchop.chop_ast.analysis.dependency_walker import walk_back, enclosing_scopes, walk_back_through_scopes
from txchop.chop_ast.analysis.equivalence import LabelSet
from txchop.chop_ast.ast import IdentifierExpr, MemberAccessExpr, LiteralExpr, BinaryExpr, FunctionCallExpr, \
    AssignmentStatement, ExpressionStatement, IfStatement, StatementList, FunctionDeclaration, IncDecStatement
from txchop.chop_ast.pointers.parent_setter import set_parents
from txchop.tests.chop_unit_test import TxChopTestCase


def idf(name: str) -> IdentifierExpr:
    return IdentifierExpr(name)


def assign(lhs, rhs, op='=', line=-1) -> AssignmentStatement:
    return AssignmentStatement([lhs], [rhs], op).at(line)


class TestWalkBack(TxChopTestCase):

    def test_collects_definitions_nearest_first(self):
        stmts = [
            assign(idf('a'), idf('p'), ':=', 1),
            assign(idf('b'), BinaryExpr('+', idf('a'), LiteralExpr(1)), ':=', 2),
            assign(idf('c'), idf('b'), '=', 3),
        ]
        wanted = LabelSet([idf('c')])
        r = walk_back(stmts, 3, wanted)
        self.assertEqual([s.line for s in r.collected], [3, 2, 1])
        self.assertEqual([str(l) for l in r.remaining], ['p'])

    def test_starts_before_start_index(self):
        stmts = [assign(idf('x'), idf('p'), line=1), assign(idf('x'), idf('q'), line=2)]
        r = walk_back(stmts, 1, LabelSet([idf('x')]))
        self.assertEqual([s.line for s in r.collected], [1])

    def test_skips_non_assignments(self):
        stmts = [
            assign(idf('x'), idf('p'), line=1),
            ExpressionStatement(FunctionCallExpr(idf('log'), [idf('x')])).at(2),
            IncDecStatement(idf('x')).at(3),
        ]
        r = walk_back(stmts, 3, LabelSet([idf('x')]))
        self.assertEqual([s.line for s in r.collected], [1])

    def test_only_nearest_definition(self):
        stmts = [assign(idf('x'), idf('p'), line=1), assign(idf('x'), idf('q'), line=2)]
        r = walk_back(stmts, 2, LabelSet([idf('x')]))
        self.assertEqual([s.line for s in r.collected], [2])
        self.assertEqual([str(l) for l in r.remaining], ['q'])

    def test_ignores_callee(self):
        stmts = [assign(idf('v'), FunctionCallExpr(MemberAccessExpr(idf('stub'), 'GetState'), [idf('k')]), ':=', 1)]
        r = walk_back(stmts, 1, LabelSet([idf('v')]))
        self.assertEqual([str(l) for l in r.remaining], ['k'])

    def test_stops_when_nothing_wanted(self):
        stmts = [assign(idf('y'), idf('z'), line=1), assign(idf('x'), LiteralExpr(1), line=2)]
        r = walk_back(stmts, 2, LabelSet([idf('x')]))
        self.assertEqual([s.line for s in r.collected], [2])
        self.assertFalse(r.remaining)

    def test_field_targets_match_structurally(self):
        stmts = [assign(MemberAccessExpr(idf('acc'), 'Balance'), idf('amount'), line=1)]
        r = walk_back(stmts, 1, LabelSet([MemberAccessExpr(idf('acc'), 'Balance')]))
        self.assertEqual([s.line for s in r.collected], [1])
        r = walk_back(stmts, 1, LabelSet([idf('acc')]))
        self.assertEqual(r.collected, [])

    def test_multi_target_assignment(self):
        stmts = [AssignmentStatement([idf('v'), idf('err')], [FunctionCallExpr(idf('f'), [idf('k')])], ':=').at(1)]
        r = walk_back(stmts, 1, LabelSet([idf('err')]))
        self.assertEqual([s.line for s in r.collected], [1])
        self.assertEqual([str(l) for l in r.remaining], ['k'])


class TestScopedWalk(TxChopTestCase):

    def test_enclosing_scopes_and_walk(self):
        inner = assign(idf('y'), idf('x'), line=3)
        body = StatementList([
            assign(idf('x'), idf('p'), ':=', 1),
            IfStatement(idf('c'), StatementList([inner])).at(2),
        ])
        fct = FunctionDeclaration('f', ['p', 'c'], body)
        set_parents(fct)

        scopes = enclosing_scopes(inner)
        self.assertEqual([(stmts.statements[idx].line, idx) for stmts, idx in scopes], [(3, 0), (2, 1)])
        self.assertIs(scopes[-1][0], body)

        r = walk_back_through_scopes(scopes, LabelSet([idf('x')]))
        self.assertEqual([s.line for s in r.collected], [1])
        self.assertEqual([str(l) for l in r.remaining], ['p'])
