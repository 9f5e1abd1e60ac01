#!/usr/bin/env python3
# PYTHON_ARGCOMPLETE_OK
import argcomplete
import argparse

from argcomplete.completers import FilesCompleter, DirectoriesCompleter

from txchop.config_user import UserConfig
from txchop.utils.progress_printer import fail_print, success_print, warn_print


def parse_config_doc():
    import textwrap
    from typing import get_type_hints
    __ucfg = UserConfig()

    docs = {}
    for name, prop in vars(UserConfig).items():
        # derived (read-only) options are not configurable
        if name.startswith('_') or not isinstance(prop, property) or prop.fset is None:
            continue
        t = get_type_hints(prop.fget)['return']
        doc = prop.__doc__
        choices = None
        if hasattr(__ucfg, f'_{name}_values'):
            choices = getattr(__ucfg, f'_{name}_values')
        default_val = getattr(__ucfg, name)
        docs[name] = (
            f"type: {t}\n\n"
            f"{textwrap.dedent(doc).strip()}\n\n"
            f"Default value: {default_val}", t, default_val, choices)
    return docs


def parse_arguments():
    class ShowSuppressedInHelpFormatter(argparse.RawTextHelpFormatter):
        def add_usage(self, usage, actions, groups, prefix=None):
            if usage is not argparse.SUPPRESS:
                actions = [action for action in actions if action.metavar != '<cfg_val>']
                args = usage, actions, groups, prefix
                self._add_item(self._format_usage, args)

    main_parser = argparse.ArgumentParser(prog='txchop')
    tree_files = ('json', )
    config_files = ('json', )

    msg = 'Path to local configuration file (defaults to "config.json" in cwd). ' \
          'This file (if it exists), overrides settings defined in the global configuration.'
    main_parser.add_argument('--config-file', default='config.json', metavar='<config_file>', help=msg).completer = FilesCompleter(config_files)

    # Shared 'config' parser
    config_parser = argparse.ArgumentParser(add_help=False)
    msg = 'These parameters can be used to override settings defined (and documented) in config_user.py'
    cfg_group = config_parser.add_argument_group(title='Configuration Options', description=msg)

    # Expose config_user.py options via command line arguments, they are supported in all parsers
    cfg_docs = parse_config_doc()

    def add_config_args(parser, arg_names):
        for name in arg_names:
            doc, t, defval, choices = cfg_docs[name]

            if t is bool:
                if defval:
                    parser.add_argument(f'--no-{name.replace("_", "-")}', dest=name, help=doc, action='store_false', default=None)
                else:
                    parser.add_argument(f'--{name.replace("_", "-")}', dest=name, help=doc, action='store_true', default=None)
            elif t is int:
                parser.add_argument(f'--{name.replace("_", "-")}', type=int, dest=name, metavar='<cfg_val>', help=doc)
            else:
                arg = parser.add_argument(f'--{name.replace("_", "-")}', dest=name, metavar='<cfg_val>', help=doc,
                                          choices=choices)
                if name.endswith('dir'):
                    arg.completer = DirectoriesCompleter()
    # the output format has its own short flag in the 'analyze' parser
    add_config_args(cfg_group, [name for name in cfg_docs.keys() if name != 'output_format'])

    subparsers = main_parser.add_subparsers(title='actions', dest='cmd', required=True)

    # 'analyze' parser
    analyze_parser = subparsers.add_parser('analyze', parents=[config_parser],
                                           help='Find independent statement chains and ledger read/write positions.',
                                           formatter_class=ShowSuppressedInHelpFormatter)
    analyze_parser.add_argument('input', help='The tree document emitted by the parser', metavar='<tree_file>').completer = FilesCompleter(tree_files)
    doc, _, _, choices = cfg_docs['output_format']
    analyze_parser.add_argument('--format', dest='output_format', choices=choices, help=doc)
    msg = 'Write the report to this file instead of printing it.'
    analyze_parser.add_argument('-o', '--output', help=msg, metavar='<output_file>')
    analyze_parser.add_argument('--log', action='store_true', help='enable logging')

    # parse
    argcomplete.autocomplete(main_parser, always_complete_options=False)
    a = main_parser.parse_args()
    return a


def main():
    # parse arguments
    a = parse_arguments()

    from pathlib import Path

    import txchop.chop_frontend as frontend
    from txchop import my_logging
    from txchop.config import cfg
    from txchop.errors.exceptions import ParseFailure
    from txchop.my_logging.log_context import log_context
    from txchop.utils.helpers import without_extension

    # Load configuration files
    try:
        cfg.load_configuration_from_disk(a.config_file)
    except Exception as e:
        with fail_print():
            print(f"ERROR: Failed to load configuration files\n{e}")
        exit(42)

    # Support for overriding any user config setting via command line
    # The evaluation order for configuration loading is:
    # Default values in config_user.py -> Site config.json -> user config.json -> local config.json -> cmdline arguments
    # Settings defined at a later stage override setting values defined at an earlier stage
    override_dict = {}
    for name in vars(UserConfig):
        if name[0] != '_' and hasattr(a, name):
            val = getattr(a, name)
            if val is not None:
                override_dict[name] = val
    try:
        cfg.override_defaults(override_dict)
    except ValueError as e:
        with fail_print():
            print(f"ERROR: Invalid configuration\n{e}")
        exit(42)

    input_path = Path(a.input)
    if not input_path.exists():
        with fail_print():
            print(f'Error: input file \'{input_path}\' does not exist')
        exit(1)

    if a.cmd == 'analyze':
        if a.output is None:
            # stdout only carries the report
            cfg.verbosity = 0

        # Enable logging
        if a.log:
            log_file = my_logging.get_log_file(filename=f'analyze_{without_extension(input_path.name)}',
                                               include_timestamp=True)
            my_logging.prepare_logger(log_file)

        with log_context('inputfile', input_path.name):
            try:
                result = frontend.analyze_file(str(input_path))
            except ParseFailure as e:
                with fail_print():
                    print(f'{e}')
                exit(3)

        if a.output is None:
            print(frontend.format_report(result), end='')
            exit(0)

        target = frontend.write_report(result, a.output)
        print(f'Report written to {target}')
        if result.errors:
            with warn_print():
                print(f'{len(result.errors)} function(s) omitted because of malformed trees')
    else:
        raise NotImplementedError(a.cmd)

    with success_print():
        print("Finished successfully")


if __name__ == '__main__':
    main()
