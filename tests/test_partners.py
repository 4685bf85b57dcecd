import pytest

from sv_breakends import common, partners
from sv_breakends.bnd_notation import parse_bracket_alt
from sv_breakends.genomics_io import Breakend, Strand
from common_test_utils import make_record


def _breakend(breakend_id: str, partner, start: int = 100, strand: str = Strand.plus) -> Breakend:
    return Breakend(
        id=breakend_id, contig="chr1", start=start, end=start, strand=strand, ref="N", alt="<DEL>",
        source_id=breakend_id, svtype="DEL", partner=partner
    )


@pytest.mark.parametrize(
    "info,expected",
    [
        ({"PARID": "B", "MATEID": ("C",)}, ("B", False)),
        ({"MATEID": ("C",)}, ("C", False)),
        ({"MATEID": "C"}, ("C", False)),
        ({"MATEID": ("C", "D")}, ("C", True)),
        ({}, (None, False)),
    ]
)
def test_resolve_partner_id(info, expected):
    assert partners.resolve_partner_id(make_record(100, "N[chr1:5[", record_id="A", **info)) == expected


def test_infer_mate():
    local = Breakend(
        id="A", contig="chr1", start=100, end=100, strand=Strand.plus, ref="G", alt="GAA[chr3:500[", source_id="A",
        svtype="BND", ins_seq="AA", ins_len=2
    )
    mate = partners.infer_mate(local, parse_bracket_alt(local.alt, local.ref), "A_mate")
    assert (mate.id, mate.contig, mate.start, mate.end, mate.strand) == ("A_mate", "chr3", 500, 500, Strand.minus)
    assert mate.partner == "A"
    assert mate.ref == "N"
    assert mate.alt == "]chr1:100]N"
    assert mate.ins_len == 2
    assert mate.source_id == "A"


def test_validate_partners_keeps_reciprocal_pairs():
    breakends = [_breakend("A", "B"), _breakend("B", "A"), _breakend("C", "D"), _breakend("D", "C")]
    assert partners.validate_partners(breakends) == breakends


def test_validate_partners_drops_non_reciprocal():
    breakends = [_breakend("A", "B"), _breakend("B", "A"), _breakend("C", "B")]
    with pytest.warns(common.BreakendWarning, match="Promiscuous"):
        kept = partners.validate_partners(breakends)
    assert [breakend.id for breakend in kept] == ["A", "B"]


def test_validate_partners_missing_partner_is_fatal():
    with pytest.raises(common.SanityCheckError, match="A"):
        partners.validate_partners([_breakend("A", "Z")])


def test_validate_partners_drops_duplicate_ids():
    first = _breakend("A", "B", start=100)
    breakends = [first, _breakend("B", "A"), _breakend("A", "B", start=500)]
    with pytest.warns(common.BreakendWarning, match="same id"):
        kept = partners.validate_partners(breakends)
    assert kept == breakends[:2]


def test_strip_partners():
    stripped = partners.strip_partners([_breakend("A", "B"), _breakend("B", None)])
    assert [breakend.partner for breakend in stripped] == [None, None]
