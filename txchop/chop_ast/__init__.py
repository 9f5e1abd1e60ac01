"""
Syntax-tree related functionality.

==========
Submodules
==========
* :py:mod:`.ast`: Node classes of the chaincode syntax tree and a code printer
* :py:mod:`.build_ast`: Load a syntax tree from the JSON document emitted by the external parser
* :py:mod:`.process_ast`: Load, link and analyze a tree

===========
Subpackages
===========
* :py:mod:`.analysis`: Static analyses
* :py:mod:`.pointers`: Parent links
* :py:mod:`.visitor`: Visitor base classes
"""
