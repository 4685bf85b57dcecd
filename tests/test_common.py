import pytest

from sv_breakends import common


def test_warn_records():
    with pytest.warns(common.BreakendWarning, match=r"Dropped records \(2\): a, None"):
        common.warn_records("Dropped records", ["a", None])


def test_error_hierarchy():
    assert issubclass(common.BreakpointFormatError, ValueError)
    assert issubclass(common.SanityCheckError, RuntimeError)
    assert issubclass(common.BreakendWarning, UserWarning)


def test_add_exception_context():
    with pytest.raises(ValueError) as exception_info:
        try:
            raise ValueError("bad value")
        except ValueError as value_error:
            common.add_exception_context(value_error, "parsing record 7")
            raise
    assert exception_info.value.args == ("parsing record 7", "bad value")


def test_import_attribute():
    assert common.import_attribute("sv_breakends.common") is common
    assert common.import_attribute("sv_breakends.common.format_ids") is common.format_ids
    with pytest.raises(AttributeError):
        common.import_attribute("sv_breakends.common.not_a_function")
    with pytest.raises(ModuleNotFoundError):
        common.import_attribute("sv_breakends_not_a_package")
