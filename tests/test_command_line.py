import os

import pandas
import pytest

from sv_breakends import command_line
from sv_breakends.genomics_io import Keys
import common_test_utils


class Default:
    vcf_lines = (
        "chr1\t100\tdel1\tN\t<DEL>\t.\tPASS\tSVTYPE=DEL;SVLEN=-50;END=150;CIPOS=-5,5",
        "chr1\t1000\tA\tN\tN[chr2:500[\t.\tPASS\tSVTYPE=BND;MATEID=B;EVENT=ev1",
        "chr2\t500\tB\tN\t]chr1:1000]N\t.\tPASS\tSVTYPE=BND;MATEID=A;EVENT=ev1",
        "chr5\t700\tlonely\tN\tN]chr1:5000]\t.\tPASS\tSVTYPE=BND",
    )


def _read_table(path: str) -> pandas.DataFrame:
    return pandas.read_csv(path, sep="\t", index_col=Keys.id, na_values=["."], keep_default_na=False)


def test_find_sub_modules():
    sub_modules = set(command_line._find_sub_modules())
    assert {"breakpoint_ranges", "align_breakpoints"} <= sub_modules
    assert "command_line" not in sub_modules
    assert "__init__" not in sub_modules


def test_help_lists_commands(capsys):
    command_line.main(["sv-breakends", "--help"])
    captured = capsys.readouterr()
    assert "breakpoint-ranges:" in captured.out
    assert "align-breakpoints:" in captured.out
    # modules without a command-line interface are not listed
    assert "bnd-notation:" not in captured.out


def test_bad_command(capsys):
    with pytest.raises(SystemExit):
        command_line.main(["sv-breakends", "not-a-command"])
    assert "Bad command: not-a-command" in capsys.readouterr().err


def test_no_command():
    with pytest.raises(SystemExit):
        command_line.main(["sv-breakends"])


def test_breakpoint_ranges_command(tmpdir):
    input_vcf = common_test_utils.write_vcf(os.path.join(tmpdir, "input.vcf"), Default.vcf_lines)
    output_tsv = os.path.join(tmpdir, "breakends.tsv")
    with pytest.warns(UserWarning, match="lonely"):
        command_line.main(["sv-breakends", "breakpoint-ranges", input_vcf, output_tsv])
    breakends_table = _read_table(output_tsv)
    assert list(breakends_table.index) == ["del1_bp1", "del1_bp2", "A", "B"]
    assert list(breakends_table[Keys.start]) == [95, 146, 1000, 500]
    assert list(breakends_table[Keys.end]) == [105, 156, 1000, 500]
    assert list(breakends_table[Keys.partner]) == ["del1_bp2", "del1_bp1", "B", "A"]
    assert list(breakends_table[Keys.event].iloc[2:]) == ["ev1", "ev1"]


def test_breakpoint_ranges_command_options(tmpdir):
    input_vcf = common_test_utils.write_vcf(os.path.join(tmpdir, "input.vcf"), Default.vcf_lines)
    output_tsv = os.path.join(tmpdir, "breakends.tsv")
    command_line.main([
        "sv-breakends", "breakpoint-ranges", input_vcf, output_tsv, "--nominal-position", "--infer-missing-breakends",
        "--info-columns", "SVTYPE", "--log-level", "DEBUG"
    ])
    breakends_table = _read_table(output_tsv)
    assert list(breakends_table.index) == ["del1_bp1", "del1_bp2", "A", "B", "lonely", "svrecord8_bp2"]
    assert list(breakends_table[Keys.start]) == [100, 151, 1000, 500, 700, 5000]
    assert breakends_table.loc["svrecord8_bp2", Keys.contig] == "chr1"
    assert breakends_table.loc["svrecord8_bp2", Keys.alt] == "N]chr5:700]"
    assert list(breakends_table["SVTYPE"]) == ["DEL", "DEL", "BND", "BND", "BND", "BND"]


def test_invalid_log_level(tmpdir):
    input_vcf = common_test_utils.write_vcf(os.path.join(tmpdir, "input.vcf"), Default.vcf_lines)
    with pytest.raises(ValueError, match="Invalid log level"):
        command_line.main([
            "sv-breakends", "breakpoint-ranges", input_vcf, os.path.join(tmpdir, "out.tsv"), "--log-level", "LOUD"
        ])
