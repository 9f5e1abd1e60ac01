from parameterized import parameterized_class

from txchop.chop_ast.process_ast import get_processed_ast, analyze_ast
from txchop.chop_ast.visitor.function_visitor import collect_functions
from txchop.examples.examples import all_examples, malformed
from txchop.tests.chop_unit_test import TxChopTestCase
from txchop.tests.utils.test_examples import TestExamples


@parameterized_class(('name', 'example'), all_examples)
class TestProcessAST(TestExamples):

    def test_process_ast(self):
        ast = get_processed_ast(self.example.code())
        self.assertIsNotNone(ast)
        self.assertIsNone(ast.parent)
        self.assertIs(ast.declarations[0].parent, ast)

    def test_collect_functions(self):
        ast = get_processed_ast(self.example.code())
        self.assertEqual(collect_functions(ast), ast.declarations)


class TestMalformedFunctions(TxChopTestCase):

    def test_malformed_function_is_reported(self):
        ast = get_processed_ast(malformed.code())
        with self.assertLogs(level='WARNING') as logs:
            result = analyze_ast(ast)
        self.assertEqual(result.omitted_functions, ['broken'])
        self.assertTrue(str(result.errors[0]).startswith('in function "broken", line 6: AssignmentStatement'))
        self.assertTrue(any('broken' in line for line in logs.output))
        self.assertEqual([name for name, _ in result.phase1], ['copyValue'])
        self.assertNotIn('broken', result.get_state)
        self.assertNotIn('broken', result.put_state)
