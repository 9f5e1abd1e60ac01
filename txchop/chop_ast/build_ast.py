"""
Load the syntax tree emitted by the external parser.

The parser writes one JSON document per program. Every node is an object with a ``kind`` tag
(see :py:class:`~txchop.chop_ast.ast.NodeKind`), and optional ``attrs``, ``children``,
``pos``, ``end``, ``line`` and ``column`` fields.
"""
import json
from typing import Any, Dict, Union

from txchop.config_version import Versions
from txchop.errors.exceptions import ParseFailure
from txchop.chop_ast.ast import AST, NodeKind, SourceFile, node_classes

_kinds: Dict[str, NodeKind] = {k.value: k for k in NodeKind}
_position_fields = ('pos', 'end', 'line', 'column')
_known_fields = {'kind', 'attrs', 'children'}.union(_position_fields)


def build_ast(code: Union[str, bytes]) -> SourceFile:
    """
    :param code: the tree document, bytes are decoded as UTF-8
    :raise ParseFailure: if code is not a valid tree document
    """
    try:
        doc = json.loads(code)
        full_ast = build_ast_from_dict(doc)
    except RecursionError:
        raise ParseFailure('Tree document is nested too deeply')
    except ValueError as e:
        # includes UnicodeDecodeError for bytes input
        raise ParseFailure(f'Tree document is not valid JSON: {e}')
    if not isinstance(full_ast, SourceFile):
        raise ParseFailure(f'Tree document root must be of kind "{NodeKind.SOURCE_FILE.value}", '
                           f'got "{full_ast.kind.value}"')
    _check_format_version(full_ast)
    return full_ast


def build_ast_from_dict(doc: Any) -> AST:
    return TreeBuilder().build(doc, '$')


class TreeBuilder:

    def build(self, d: Any, path: str) -> AST:
        if not isinstance(d, dict):
            self.fail(path, f'expected an object, got {type(d).__name__}')

        unknown = set(d.keys()) - _known_fields
        if unknown:
            self.fail(path, f'unknown field(s) {", ".join(sorted(unknown))}')

        tag = d.get('kind')
        if tag not in _kinds:
            self.fail(path, f'unknown node kind {tag!r}')
        cls = node_classes[_kinds[tag]]

        attrs = d.get('attrs', {})
        if not isinstance(attrs, dict):
            self.fail(path, '"attrs" must be an object')
        for key, val in attrs.items():
            if val is not None and not isinstance(val, (str, int, float, bool)):
                self.fail(path, f'attribute "{key}" must be a scalar')

        children = d.get('children', [])
        if not isinstance(children, list):
            self.fail(path, '"children" must be a list')

        node = cls.from_parts([self.build(c, f'{path}.children[{idx}]') for idx, c in enumerate(children)], attrs)

        for field in _position_fields:
            val = d.get(field, -1)
            if not isinstance(val, int) or isinstance(val, bool):
                self.fail(path, f'"{field}" must be an integer')
            setattr(node, field, val)
        if 0 <= node.end < node.pos:
            self.fail(path, f'position range is inverted ({node.pos} > {node.end})')
        return node

    @staticmethod
    def fail(path: str, msg: str):
        raise ParseFailure(f'Invalid tree document at {path}: {msg}')


def _check_format_version(ast: SourceFile):
    version = ast.attrs.get('format')
    if version is None:
        return
    try:
        compatible = Versions.is_compatible_tree_format(str(version))
    except ValueError:
        raise ParseFailure(f'Invalid tree format version "{version}"')
    if not compatible:
        raise ParseFailure(f'Unsupported tree format version {version} '
                           f'(supported: {Versions.TREE_FORMAT_COMPATIBILITY.expression})')
