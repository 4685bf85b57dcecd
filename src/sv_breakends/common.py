import importlib
import warnings
from typing import Text, Any, Iterable, Optional


class BreakpointFormatError(ValueError):
    """ A VCF record cannot be converted to breakends (malformed, unsupported, or missing mandatory fields) """
    pass


class SanityCheckError(RuntimeError):
    """ Internal inconsistency in the extracted breakend set """
    pass


class BreakendWarning(UserWarning):
    """ Recoverable problem with the input: data was adjusted or dropped and processing continued """
    pass


def format_ids(ids: Iterable[Optional[str]]) -> str:
    return ", ".join(str(_id) for _id in ids)


def warn_records(message: str, ids: Iterable[Optional[str]], stacklevel: int = 2):
    """
    Issue a BreakendWarning reporting the number and ids of the affected records.
    Args:
        message: str
            Description of the problem, formatted as "{message} ({count}): {ids}"
        ids: Iterable[Optional[str]]
            ids of the affected records / breakends
        stacklevel: int (Default=2)
            passed to warnings.warn
    """
    ids = list(ids)
    warnings.warn(f"{message} ({len(ids)}): {format_ids(ids)}", BreakendWarning, stacklevel=stacklevel + 1)


def add_exception_context(exception: Exception, context: str):
    """
    Prepend context (e.g. the file or record being processed) to the arguments of a caught exception, so that it is
    reported when the exception is re-raised.
    """
    exception.args = (context,) + tuple(exception.args)


def import_attribute(dotted_name: Text) -> Any:
    """
    Import a module, or an attribute of a module, by its fully qualified name
    Args:
        dotted_name: str
            e.g. "sv_breakends" or "sv_breakends.breakpoint_ranges.main"
    Returns:
        obj: Any
            The imported module or attribute
    Raises:
        ModuleNotFoundError if the module does not exist, AttributeError if it lacks the attribute
    """
    try:
        return importlib.import_module(dotted_name)
    except ModuleNotFoundError:
        if "." not in dotted_name:
            raise
    module_name, attribute = dotted_name.rsplit(".", 1)
    return getattr(importlib.import_module(module_name), attribute)
