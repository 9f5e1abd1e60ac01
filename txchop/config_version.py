"""
This module defines the txchop version number and the supported versions of the tree document format
"""
import os

from semantic_version import NpmSpec, Version


class Versions:
    # Tree documents declaring a format version (root attribute "format") must match this
    TREE_FORMAT_COMPATIBILITY = NpmSpec('^1.0.0')
    TREE_FORMAT_VERSION = '1.0.0'

    # Read txchop version from VERSION file
    with open(os.path.join(os.path.realpath(os.path.dirname(__file__)), 'VERSION')) as f:
        TXCHOP_VERSION = f.read().strip()

    @staticmethod
    def is_compatible_tree_format(version: str) -> bool:
        """
        :raise ValueError: if version is not a valid semantic version
        """
        return Version(version) in Versions.TREE_FORMAT_COMPATIBILITY
