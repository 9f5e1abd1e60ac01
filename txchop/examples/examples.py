import os
from typing import List, Tuple, Dict, Any, Optional

from txchop.utils.helpers import read_file, without_extension

examples_dir = os.path.dirname(os.path.abspath(__file__))
code_dir = os.path.join(examples_dir, 'code')


class Example:

    def __init__(self, file_location: str):
        self.file_location = file_location
        _, self.filename = os.path.split(file_location)

    def code(self):
        return read_file(self.file_location)

    def name(self):
        return without_extension(self.filename)

    def expected(self) -> Optional[Dict[str, Any]]:
        """Expected analysis result (phase1, get_state, put_state, omitted), None if unknown."""
        return expected_results.get(self.name())


kernels = Example(os.path.join(code_dir, 'Kernels.json'))
ledger = Example(os.path.join(code_dir, 'Ledger.json'))
recursion = Example(os.path.join(code_dir, 'Recursion.json'))
nested = Example(os.path.join(code_dir, 'Nested.json'))
malformed = Example(os.path.join(code_dir, 'Malformed.json'))

expected_results = {
    'Kernels': {
        'phase1': [('transfer', [[3, 2]]), ('guarded', []), ('unguarded', [[13]]), ('literal', [[17, 16]])],
        'get_state': {'transfer': [], 'guarded': [], 'unguarded': [], 'literal': []},
        'put_state': {'transfer': [], 'guarded': [], 'unguarded': [], 'literal': []},
        'omitted': [],
    },
    'Ledger': {
        'phase1': [('loadAccount', []), ('saveAccount', []), ('inner', []), ('helper', []), ('transferFunds', [[19]])],
        'get_state': {'loadAccount': [0], 'saveAccount': [], 'inner': [0], 'helper': [0], 'transferFunds': [0]},
        'put_state': {'loadAccount': [], 'saveAccount': [0], 'inner': [], 'helper': [], 'transferFunds': [0]},
        'omitted': [],
    },
    'Recursion': {
        'phase1': [('walk', []), ('ping', []), ('pong', [])],
        'get_state': {'walk': [0], 'ping': [], 'pong': []},
        'put_state': {'walk': [], 'ping': [0, 1], 'pong': [0, 1]},
        'omitted': [],
    },
    'Nested': {
        'phase1': [('settle', [[4], [8, 2], [10]]), ('tally', [[20]])],
        'get_state': {'settle': [], 'tally': []},
        'put_state': {'settle': [], 'tally': []},
        'omitted': [],
    },
    'Malformed': {
        'phase1': [('copyValue', [[2]])],
        'get_state': {'copyValue': []},
        'put_state': {'copyValue': [0]},
        'omitted': ['broken'],
    },
}


def collect_examples(directory: str):
    examples: List[Tuple[str, Example]] = []
    for f in sorted(os.listdir(directory)):
        if f.endswith('.json'):
            e = Example(os.path.join(directory, f))
            examples.append((e.name(), e))
    return examples


def get_code_example(name: str):
    e = Example(os.path.join(code_dir, name))
    return [(e.name(), e)]


all_examples = collect_examples(code_dir)
