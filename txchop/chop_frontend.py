"""
This module exposes functionality to analyze tree documents and to render the analysis results
"""

import json
import os
from typing import Optional

from txchop import my_logging
from txchop.config import cfg
from txchop.errors.exceptions import ParseFailure
from txchop.chop_ast.process_ast import AnalysisResult, get_processed_ast, analyze_ast
from txchop.utils.helpers import read_file, save_to_file
from txchop.utils.timer import time_measure


def analyze_file(input_file_path: str) -> AnalysisResult:
    """
    Load and analyze the tree document stored in the given file.

    :param input_file_path: path to a JSON tree document emitted by the external parser
    :raise ParseFailure: if the file does not contain a valid tree document
    """
    try:
        code = read_file(input_file_path)
    except UnicodeDecodeError as e:
        raise ParseFailure(f'Tree document is not valid UTF-8: {e}')
    my_logging.data('documentSize', len(code))
    with time_measure('analysisFull'):
        result = analyze_code(code)
    if not result.name:
        result.name = os.path.basename(input_file_path)
    return result


def analyze_code(code: str) -> AnalysisResult:
    """
    Load and analyze a tree document.

    :raise ParseFailure: if code is not a valid tree document
    """
    ast = get_processed_ast(code)
    return analyze_ast(ast)


def format_report(result: AnalysisResult, fmt: Optional[str] = None) -> str:
    """Render result as 'text' or 'json' (defaults to cfg.output_format)."""
    if fmt is None:
        fmt = cfg.output_format
    if fmt == 'json':
        return _format_json(result)
    elif fmt == 'text':
        return _format_text(result)
    else:
        raise ValueError(f'Unknown report format "{fmt}"')


def _format_text(result: AnalysisResult) -> str:
    lines = ['Phase 1:']
    for name, chains in result.phase1:
        lines += [f'{name}: {chain}' for chain in chains]

    lines.append('Phase 2: Read/Write API:')
    lines.append('GetState:')
    lines += [f'{name}: {pos}' for name, pos in result.get_state.items()]
    lines.append('PutState:')
    lines += [f'{name}: {pos}' for name, pos in result.put_state.items()]

    if result.errors:
        lines.append('Omitted functions:')
        lines += [str(e) for e in result.errors]
    return '\n'.join(lines) + '\n'


def _format_json(result: AnalysisResult) -> str:
    doc = {
        'phase1': [{'function': name, 'chains': chains} for name, chains in result.phase1],
        'phase2': {
            'GetState': result.get_state,
            'PutState': result.put_state,
        },
        'errors': [{'function': e.function, 'message': str(e)} for e in result.errors],
    }
    return json.dumps(doc, indent=2) + '\n'


def write_report(result: AnalysisResult, output_file: str, fmt: Optional[str] = None) -> str:
    """Write the rendered report to output_file and return its path."""
    output_dir, filename = os.path.split(output_file)
    return save_to_file(output_dir if output_dir else None, filename, format_report(result, fmt))
