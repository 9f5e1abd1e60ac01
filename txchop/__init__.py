"""
The main txchop package.

==========
Submodules
==========
* :py:mod:`.__main__`: txchop command line interface
* :py:mod:`.chop_frontend`: Analyze tree documents and render reports
* :py:mod:`.config`: Global txchop configuration (both user-configuration as well as internal configuration)

===========
Subpackages
===========
* :py:mod:`.chop_ast`: Syntax-tree related functionality and the analyses
* :py:mod:`.errors`: Defines exceptions which may be raised by public txchop interfaces
* :py:mod:`.examples`: Example tree documents with expected analysis results
* :py:mod:`.my_logging`: Logging facilities
* :py:mod:`.utils`: Internal helper functionality
"""
