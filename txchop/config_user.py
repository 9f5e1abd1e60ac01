"""
This module defines the txchop options which are configurable by the user via command line arguments.

The argument parser in :py:mod:`.__main__` uses the docstrings, type hints and _values for the help
 strings and the _values fields for autocompletion

WARNING: This is one of the only txchop modules that is imported before argcomplete.autocomplete is called. \
For performance reasons it should thus not have any import side-effects or perform any expensive operations during import.
"""
from typing import Any, Tuple

from appdirs import AppDirs


def _check_is_one_of(val: str, legal_vals):
    if val not in legal_vals:
        raise ValueError(f'Invalid config value {val}, must be one of {legal_vals}')


def _type_check(val: Any, t):
    if not isinstance(val, t):
        raise ValueError(f'Value {val} has wrong type (expected {t})')


def _split_names(val: str) -> Tuple[str, ...]:
    return tuple(name.strip() for name in val.split(',') if name.strip())


class UserConfig:
    def __init__(self):
        self._appdirs = AppDirs('txchop', appauthor=False, version=None, roaming=True)

        # User configuration
        # Each attribute must have a type hint and a docstring for correct help strings in the commandline interface.
        # If 'Available Options: [...]' is specified, the options are used for autocomplete suggestions.

        self._ledger_read_apis: str = 'GetState'
        self._ledger_write_apis: str = 'PutState'

        self._max_sweeps: int = 0
        self._analyze_nested_scopes: bool = True

        self._output_format: str = 'text'
        self._output_format_values = ['text', 'json']

        self._log_dir: str = self._appdirs.user_log_dir
        self._verbosity: int = 1

    @property
    def ledger_read_apis(self) -> str:
        """
        Comma separated member names of the ledger read API (e.g. "GetState,GetPrivateData").

        A call "<obj>.<name>(key, ...)" with one of these names reads the ledger entry for its first argument.
        """
        return self._ledger_read_apis

    @ledger_read_apis.setter
    def ledger_read_apis(self, val: str):
        _type_check(val, str)
        if not _split_names(val):
            raise ValueError('At least one ledger read api name is required')
        self._ledger_read_apis = val

    @property
    def ledger_write_apis(self) -> str:
        """
        Comma separated member names of the ledger write API (e.g. "PutState,DelState").

        A call "<obj>.<name>(key, ...)" with one of these names writes the ledger entry for its first argument.
        """
        return self._ledger_write_apis

    @ledger_write_apis.setter
    def ledger_write_apis(self, val: str):
        _type_check(val, str)
        if not _split_names(val):
            raise ValueError('At least one ledger write api name is required')
        self._ledger_write_apis = val

    @property
    def ledger_read_api_names(self) -> Tuple[str, ...]:
        return _split_names(self.ledger_read_apis)

    @property
    def ledger_write_api_names(self) -> Tuple[str, ...]:
        return _split_names(self.ledger_write_apis)

    @property
    def max_sweeps(self) -> int:
        """
        Upper bound for the number of whole-program sweeps of the ledger position propagation.

        If 0, the bound is derived from the program (total number of function parameters + 1),
        which is always sufficient since every non-final sweep adds at least one position.
        """
        return self._max_sweeps

    @max_sweeps.setter
    def max_sweeps(self, val: int):
        _type_check(val, int)
        if val < 0:
            raise ValueError(f'max_sweeps must not be negative (got {val})')
        self._max_sweeps = val

    @property
    def analyze_nested_scopes(self) -> bool:
        """
        If true, the statement sequences of if, loop and switch bodies are searched for
        parallelization candidates as well (each as an independent scope).
        If false, only the top level statements of a function body are considered.
        """
        return self._analyze_nested_scopes

    @analyze_nested_scopes.setter
    def analyze_nested_scopes(self, val: bool):
        _type_check(val, bool)
        self._analyze_nested_scopes = val

    @property
    def output_format(self) -> str:
        """
        Format of the analysis report.

        Available Options: [text, json]
        """
        return self._output_format

    @output_format.setter
    def output_format(self, val: str):
        _check_is_one_of(val, self._output_format_values)
        self._output_format = val

    @property
    def log_dir(self) -> str:
        """Path to default log directory."""
        return self._log_dir

    @log_dir.setter
    def log_dir(self, val: str):
        _type_check(val, str)
        self._log_dir = val

    @property
    def verbosity(self) -> int:
        """
        If 0, no output
        If 1, normal output
        If 2, verbose output

        This includes for example progress messages and per-sweep information of the ledger position propagation.
        """
        return self._verbosity

    @verbosity.setter
    def verbosity(self, val: int):
        _type_check(val, int)
        self._verbosity = val
