#!/usr/bin/env python
"""
sv-breakends [command] [args...]

Dispatch to the main() of the module named by the command, e.g.
    sv-breakends breakpoint-ranges input.vcf breakends.tsv
calls sv_breakends.breakpoint_ranges.main(["breakpoint-ranges", "input.vcf", "breakends.tsv"])
"""
import sys
import os
import io
import contextlib
import textwrap
from typing import Text, List, TextIO, Optional, Iterator, Tuple

from sv_breakends import common


PACKAGE = "sv_breakends"


def _kebab_to_snake(kebab_str: str) -> str:
    """
    Allow passing commands in kebab case by converting to snake case (to match file names)
    """
    return kebab_str.replace('-', '_')


def _snake_to_kebab(snake_str: str) -> str:
    return snake_str.replace('_', '-')


def _find_sub_modules(package: str = PACKAGE) -> Iterator[Text]:
    module = common.import_attribute(package)
    module_folder = list(module.__path__)[0]
    command_module = os.path.basename(__file__)
    for file_name in sorted(os.listdir(module_folder)):
        if file_name.endswith(".py") and file_name != command_module and not file_name.startswith("__"):
            yield file_name[:-len(".py")]


def _get_help_summary(package: str, sub_module: str) -> Optional[str]:
    """ First paragraph of the sub module's --help, or None if it is not a command-line module """
    try:
        submodule_arg_parser = common.import_attribute(f"{package}.{sub_module}.__parse_arguments")
    except (ModuleNotFoundError, AttributeError):
        return None
    string_buffer = io.StringIO()
    with contextlib.redirect_stdout(string_buffer):
        try:
            submodule_arg_parser([sub_module, "--help"])
        except SystemExit:
            pass
    paragraphs = string_buffer.getvalue().split("\n\n", 2)
    return paragraphs[1] if len(paragraphs) >= 2 else paragraphs[0] if paragraphs else "(No help available)"


def _command_help_func(
        package: str,
        sub_modules: Tuple[str, ...],
        file_descriptor: TextIO = sys.stdout,
        num_indent: int = 2,
        max_width: int = 78
):
    print(f"{_snake_to_kebab(package)} [command] [args...]", file=file_descriptor)
    print("Valid commands are:", file=file_descriptor)
    indent1 = " " * num_indent
    indent2 = " " * (num_indent * 2)
    for command_name in sub_modules:
        help_str = _get_help_summary(package, command_name)
        if help_str is None:
            continue
        print(f"{indent1}{_snake_to_kebab(command_name)}:", file=file_descriptor)
        print(textwrap.fill(" ".join(help_str.split()), width=max_width, initial_indent=indent2,
                            subsequent_indent=indent2), file=file_descriptor)
    print("", file=file_descriptor)


def _bad_command_func(package: str, sub_modules: Tuple[str, ...], argv: List[Text],
                      file_descriptor: TextIO = sys.stderr):
    if len(argv) >= 1:
        print(f"Bad command: {argv[0]}", file=file_descriptor)
    else:
        print("No command specified.", file=file_descriptor)
    _command_help_func(package=package, sub_modules=sub_modules, file_descriptor=file_descriptor)
    sys.exit(1)


def main(argv: Optional[List[Text]] = None):
    """
    Dispatch arguments to appropriate module function, with the program name removed, so that the dispatched command
    behaves the same as if its module had been called directly.
    Args:
        argv: input arguments to command. If called from command-line (usual use case), this will simply be sys.argv
    """
    if argv is None:
        argv = sys.argv
    sub_modules = tuple(_find_sub_modules(PACKAGE))
    if len(argv) < 2:
        _bad_command_func(package=PACKAGE, sub_modules=sub_modules, argv=argv[1:])
    command = argv[1]
    if command in {"help", "-help", "--help", "-h"}:
        _command_help_func(package=PACKAGE, sub_modules=sub_modules)
        return
    sub_module = _kebab_to_snake(command)
    if sub_module not in sub_modules:
        _bad_command_func(package=PACKAGE, sub_modules=sub_modules, argv=argv[1:])
    try:
        call_func = common.import_attribute(f"{PACKAGE}.{sub_module}.main")
    except (ModuleNotFoundError, AttributeError):
        raise ValueError(
            f"{command} does not have a 'main' function, and thus cannot be invoked as a command-line program."
        )
    call_func(argv[1:])


if __name__ == "__main__":
    main()
