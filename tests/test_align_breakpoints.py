import os

import pysam
import pytest

from sv_breakends import align_breakpoints, common
import common_test_utils
from common_test_utils import make_record


class Default:
    vcf_lines = (
        "chr1\t100\tA\tG\tG[chr1:200[\t.\tPASS\tSVTYPE=BND;PARID=B;CIPOS=-3,5;CIRPOS=-3,5",
        "chr1\t200\tB\tT\t]chr1:100]T\t.\tPASS\tSVTYPE=BND;PARID=A;CIPOS=-3,5;CIRPOS=-3,5",
    )


def test_centre_moves_both_partners_consistently():
    records = [
        make_record(100, "G[chr1:200[", ref="G", record_id="A", PARID="B", CIPOS=(-3, 5)),
        make_record(200, "]chr1:100]T", ref="T", record_id="B", PARID="A", CIPOS=(-3, 5)),
    ]
    first, second = align_breakpoints.align_breakpoints(records)
    assert (first.pos, first.alt, first.info["CIPOS"]) == (101, "N[chr1:201[", (-4, 4))
    assert (second.pos, second.alt, second.info["CIPOS"]) == (201, "]chr1:101]N", (-4, 4))
    assert first.ref == "G"


def test_same_strand_partners_move_in_opposite_directions():
    records = [
        make_record(100, "N]chr1:200]", record_id="A", PARID="B", CIPOS=(-2, 3)),
        make_record(200, "N]chr1:100]", record_id="B", PARID="A", CIPOS=(-3, 2)),
    ]
    higher, lower = align_breakpoints.align_breakpoints(records)
    # fractional shifts round up for the higher breakend only
    assert (higher.pos, higher.alt, higher.info["CIPOS"]) == (101, "N]chr1:199]", (-3, 2))
    assert (lower.pos, lower.alt, lower.info["CIPOS"]) == (199, "N]chr1:101]", (-2, 3))


def test_explicit_breakend_order():
    record = make_record(100, "N]chr1:200]", record_id="A", PARID="B", CIPOS=(-2, 3))
    assert align_breakpoints.align_breakpoints([record], is_higher_breakend=[False])[0].pos == 100
    assert align_breakpoints.align_breakpoints([record], is_higher_breakend=[True])[0].pos == 101
    assert align_breakpoints.align_breakpoints([record], is_higher_breakend=[None])[0].pos == 100


def test_anchoring_bases_replaced():
    record = make_record(100, "GAC[chr1:200[", ref="G", record_id="A", PARID="B", CIPOS=(0, 2))
    aligned, = align_breakpoints.align_breakpoints([record])
    assert aligned.alt == "NNN[chr1:201["


def test_zero_shift_leaves_record_unchanged():
    record = make_record(100, "G[chr1:200[", ref="G", record_id="A", PARID="B", CIPOS=(-5, 5))
    aligned, = align_breakpoints.align_breakpoints([record])
    assert (aligned.pos, aligned.alt, aligned.info["CIPOS"]) == (100, "G[chr1:200[", (-5, 5))


def test_other_confidence_intervals_shifted_and_remote_dropped():
    record = make_record(
        100, "N[chr1:200[", record_id="A", PARID="B", CIPOS=(0, 10), CIEND=(0, 10), IHOMPOS=(0, 4), CIRPOS=(-1, 1)
    )
    aligned, = align_breakpoints.align_breakpoints([record])
    assert aligned.pos == 105
    assert aligned.info["CIEND"] == (-5, 5)
    assert aligned.info["IHOMPOS"] == (-5, -1)
    assert "CIRPOS" not in aligned.info


def test_non_breakpoint_records_are_not_moved():
    record = make_record(100, "<DEL>", record_id="del1", SVLEN=-50, CIPOS=(0, 10))
    aligned, = align_breakpoints.align_breakpoints([record])
    assert aligned.pos == 100
    assert aligned.info["CIPOS"] == (0, 10)


def test_centre_adjustment():
    record = make_record(100, "N[chr1:200[", record_id="A", CIPOS=(-3, 2))
    assert align_breakpoints.centre_adjustment(record, is_higher_breakend=True) == -1
    record = make_record(100, "N]chr1:200]", record_id="A", CIPOS=(-3, 2))
    assert align_breakpoints.centre_adjustment(record, is_higher_breakend=True) == 0
    assert align_breakpoints.centre_adjustment(record, is_higher_breakend=False) == -1


def test_empty_input():
    assert align_breakpoints.align_breakpoints([]) == []


def test_missing_cipos_is_fatal():
    records = [
        make_record(100, "N[chr1:200[", record_id="A", CIPOS=(-3, 5)),
        make_record(200, "]chr1:100]N", record_id="B"),
    ]
    with pytest.raises(common.BreakpointFormatError, match="CIPOS not specified for all variants: B"):
        align_breakpoints.align_breakpoints(records)


def test_unsupported_alignment():
    record = make_record(100, "N[chr1:200[", record_id="A", CIPOS=(-3, 5))
    with pytest.raises(NotImplementedError):
        align_breakpoints.align_breakpoints([record], align="left")


def test_breakend_order_length_mismatch():
    record = make_record(100, "N[chr1:200[", record_id="A", CIPOS=(-3, 5))
    with pytest.raises(ValueError, match="is_higher_breakend"):
        align_breakpoints.align_breakpoints([record], is_higher_breakend=[True, False])


def test_align_vcf(tmpdir):
    input_vcf = common_test_utils.write_vcf(os.path.join(tmpdir, "input.vcf"), Default.vcf_lines)
    output_vcf = os.path.join(tmpdir, "aligned.vcf")
    align_breakpoints.main(["align-breakpoints", input_vcf, output_vcf])
    with pysam.VariantFile(output_vcf, "r") as f_in:
        records = list(f_in)
    assert [record.pos for record in records] == [101, 201]
    assert [record.alts[0] for record in records] == ["N[chr1:201[", "]chr1:101]N"]
    assert [tuple(record.info["CIPOS"]) for record in records] == [(-4, 4), (-4, 4)]
    assert all("CIRPOS" not in record.info for record in records)
