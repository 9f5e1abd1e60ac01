from parameterized import parameterized

from txchop.chop_ast.analysis.candidate_detector import detect_candidates
from txchop.chop_ast.ast import IdentifierExpr, MemberAccessExpr, LiteralExpr, BinaryExpr, FunctionCallExpr, \
    AssignmentStatement, IfStatement, StatementList, FunctionDeclaration, IncDecStatement, RangeStatement, \
    SwitchStatement, CaseClause
from txchop.errors.exceptions import MalformedTree
from txchop.tests.chop_unit_test import TxChopTestCase


def idf(name: str) -> IdentifierExpr:
    return IdentifierExpr(name)


def assign(lhs, rhs, op='=', line=-1) -> AssignmentStatement:
    return AssignmentStatement([lhs], [rhs], op).at(line)


def lines(fct: FunctionDeclaration, nested_scopes=True):
    return [c.statement.line for c in detect_candidates(fct, nested_scopes)]


class TestCandidateDetector(TxChopTestCase):

    def test_reassignment_of_declared_local(self):
        fct = FunctionDeclaration('f', ['a', 'b'], [
            assign(idf('x'), BinaryExpr('+', idf('a'), LiteralExpr(1)), ':=', 1),
            assign(idf('b'), idf('x'), line=2),
        ])
        self.assertEqual(lines(fct), [2])

    def test_declaration_is_never_candidate(self):
        fct = FunctionDeclaration('f', ['a'], [assign(idf('x'), idf('a'), ':=', 1)])
        self.assertEqual(lines(fct), [])

    def test_inc_dec_in_condition(self):
        fct = FunctionDeclaration('f', ['i', 'cond'], [
            IfStatement(BinaryExpr('>', idf('cond'), idf('i')), StatementList([])).at(1),
            IncDecStatement(idf('i')).at(2),
        ])
        self.assertEqual(lines(fct), [])

    def test_inc_dec_guarded_by_enclosing_condition(self):
        fct = FunctionDeclaration('f', ['i', 'cond'], [
            IfStatement(BinaryExpr('>', idf('cond'), idf('i')), StatementList([IncDecStatement(idf('i')).at(2)])).at(1),
        ])
        self.assertEqual(lines(fct), [])

    def test_inc_dec_after_unrelated_condition(self):
        fct = FunctionDeclaration('f', ['i', 'other'], [
            IfStatement(idf('other'), StatementList([])).at(1),
            IncDecStatement(idf('i')).at(2),
        ])
        self.assertEqual(lines(fct), [2])

    def test_if_subtree_labels_taint_following_statements(self):
        fct = FunctionDeclaration('f', ['a', 'b', 'c'], [
            IfStatement(idf('c'), StatementList([assign(idf('b'), idf('a'), line=2)])).at(1),
            assign(idf('b'), idf('a'), line=4),
        ])
        self.assertEqual(lines(fct), [2])

    @parameterized.expand([
        ('literal', LiteralExpr(1), False),
        ('parameter', idf('a'), True),
        ('unknown_identifier', idf('g'), False),
        ('declared_local', idf('x'), True),
        ('parameter_field', MemberAccessExpr(idf('a'), 'Key'), False),
        ('call_with_local_arguments', FunctionCallExpr(idf('h'), [idf('a'), idf('x')]), True),
        ('call_with_literal_argument', FunctionCallExpr(idf('h'), [LiteralExpr('k')]), False),
        ('other_expression', BinaryExpr('+', idf('g'), LiteralExpr(1)), True),
    ])
    def test_right_hand_side(self, _, rhs, expected):
        fct = FunctionDeclaration('f', ['a', 'b'], [
            assign(idf('x'), LiteralExpr(0), ':=', 1),
            assign(idf('b'), rhs, line=2),
        ])
        self.assertEqual(lines(fct), [2] if expected else [])

    def test_all_right_hand_children_must_pass(self):
        fct = FunctionDeclaration('f', ['a', 'b', 'c'], [
            AssignmentStatement([idf('b'), idf('c')], [idf('a'), LiteralExpr(1)]).at(1),
        ])
        self.assertEqual(lines(fct), [])

    def test_nested_scopes_in_source_order(self):
        fct = FunctionDeclaration('f', ['a', 'b', 'items', 'k'], [
            IncDecStatement(idf('a')).at(1),
            RangeStatement([idf('_'), idf('item'), idf('items')], StatementList([
                assign(idf('b'), idf('a'), line=3),
            ])).at(2),
            SwitchStatement([idf('k')], [
                CaseClause([LiteralExpr(0)], StatementList([IncDecStatement(idf('b')).at(6)])).at(5),
            ]).at(4),
            IncDecStatement(idf('k')).at(8),
        ])
        self.assertEqual(lines(fct), [1, 3, 6, 8])

    def test_without_nested_scopes(self):
        fct = FunctionDeclaration('f', ['a', 'items'], [
            RangeStatement([idf('items')], StatementList([assign(idf('a'), idf('items'), line=2)])).at(1),
            IncDecStatement(idf('a')).at(3),
        ])
        self.assertEqual(lines(fct, nested_scopes=False), [3])
        self.assertEqual(lines(fct), [2, 3])

    def test_nested_declarations_are_not_visible_outside(self):
        fct = FunctionDeclaration('f', ['b', 'items'], [
            RangeStatement([idf('items')], StatementList([assign(idf('x'), idf('b'), ':=', 2)])).at(1),
            assign(idf('b'), idf('x'), line=3),
        ])
        self.assertEqual(lines(fct), [])

    def test_outer_declarations_are_visible_inside(self):
        fct = FunctionDeclaration('f', ['b', 'items'], [
            assign(idf('x'), LiteralExpr(0), ':=', 1),
            RangeStatement([idf('items')], StatementList([assign(idf('b'), idf('x'), line=3)])).at(2),
        ])
        self.assertEqual(lines(fct), [3])

    def test_candidate_location(self):
        fct = FunctionDeclaration('f', ['a'], [
            IncDecStatement(idf('a')).at(1),
            IncDecStatement(idf('a')).at(2),
        ])
        c = detect_candidates(fct)
        self.assertEqual([(x.index, x.scope, x.function) for x in c], [(0, fct.body, fct), (1, fct.body, fct)])

    def test_malformed_statement(self):
        broken = AssignmentStatement.from_parts([], {'op': '='})
        fct = FunctionDeclaration('f', ['a'], [broken])
        with self.assertRaises(MalformedTree):
            detect_candidates(fct)
