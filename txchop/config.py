import json
import os
from contextlib import contextmanager
from typing import Dict, Any, ContextManager

from txchop.config_user import UserConfig
from txchop.config_version import Versions


def chop_print(*args, verbosity_level=1, **kwargs):
    if (verbosity_level <= cfg.verbosity) and not cfg.is_unit_test:
        print(*args, **kwargs)


class Config(UserConfig):
    def __init__(self):
        super().__init__()

        # Internal values

        self._options_with_effect_on_analysis_output = [
            'ledger_read_apis', 'ledger_write_apis', 'max_sweeps', 'analyze_nested_scopes',
        ]

        self._is_unit_test = False

    def _load_cfg_file_if_exists(self, filename):
        if os.path.exists(filename):
            with open(filename) as conf:
                try:
                    self.override_defaults(json.load(conf))
                except ValueError as e:
                    raise ValueError(f'{e} (in file "{filename}")')

    def load_configuration_from_disk(self, local_cfg_file: str):
        # Load global configuration file
        global_config_dir = self._appdirs.site_config_dir
        global_cfg_file = os.path.join(global_config_dir, 'config.json')
        self._load_cfg_file_if_exists(global_cfg_file)

        # Load user configuration file
        user_config_dir = self._appdirs.user_config_dir
        user_cfg_file = os.path.join(user_config_dir, 'config.json')
        self._load_cfg_file_if_exists(user_cfg_file)

        # Load local configuration file
        self._load_cfg_file_if_exists(local_cfg_file)

    def override_defaults(self, overrides: Dict[str, Any]):
        for arg, val in overrides.items():
            if not hasattr(self, arg):
                raise ValueError(f'Tried to override non-existing config value {arg}')
            try:
                setattr(self, arg, val)
            except ValueError as e:
                raise ValueError(f'{e} (for entry "{arg}")')

    def export_analysis_settings(self) -> dict:
        out = {}
        for k in self._options_with_effect_on_analysis_output:
            out[k] = getattr(self, k)
        return out

    def import_analysis_settings(self, vals: dict):
        for k in vals:
            if k not in self._options_with_effect_on_analysis_output:
                raise KeyError(f'vals contains unknown option "{k}"')
            setattr(self, k, vals[k])

    @contextmanager
    def analysis_settings(self, **overrides) -> ContextManager:
        """Temporarily override analysis settings, restoring the previous values afterwards."""
        old = self.export_analysis_settings()
        self.import_analysis_settings(overrides)
        try:
            yield
        finally:
            self.import_analysis_settings(old)

    @property
    def txchop_version(self) -> str:
        """txchop version number"""
        return Versions.TXCHOP_VERSION

    @property
    def is_unit_test(self) -> bool:
        return self._is_unit_test

    @is_unit_test.setter
    def is_unit_test(self, val: bool):
        self._is_unit_test = val


cfg = Config()
