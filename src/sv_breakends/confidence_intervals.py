"""
Confidence intervals around breakend positions, expressed as (start offset, width) relative to the nominal position.
"""
from typing import NamedTuple, Optional

from sv_breakends.genomics_io import VariantRecord, VcfKeys


class ConfidenceInterval(NamedTuple):
    start_offset: int
    width: int

    @property
    def end_offset(self) -> int:
        return self.start_offset + self.width


NO_UNCERTAINTY = ConfidenceInterval(start_offset=0, width=0)
INSERTION_TYPES = frozenset({"INS"})
MISSING_HOMSEQ = "."


def parse_ci(record: VariantRecord, key: str) -> Optional[ConfidenceInterval]:
    """
    Read a two-valued confidence interval INFO field (e.g. CIPOS = -5,10) as a ConfidenceInterval.
    Returns None if the field is absent or does not have two values. Reversed bounds are reordered so the width is
    never negative.
    """
    values = record.info_values(key)
    if len(values) < 2:
        return None
    start_offset, end_offset = sorted((int(values[0]), int(values[1])))
    return ConfidenceInterval(start_offset=start_offset, width=end_offset - start_offset)


def homology_length(record: VariantRecord) -> int:
    """
    Length of microhomology at the breakpoint: HOMLEN, falling back to the length of HOMSEQ, otherwise 0.
    """
    homlen = record.info_value(VcfKeys.homlen)
    if homlen is not None:
        return int(homlen)
    homseq = record.info_value(VcfKeys.homseq)
    if homseq is not None and homseq != MISSING_HOMSEQ:
        return len(homseq)
    return 0


def left_confidence_interval(record: VariantRecord) -> ConfidenceInterval:
    """
    Confidence interval around POS. CIPOS takes precedence; without it the variant is assumed to be left-aligned, so
    any microhomology extends to the right of the nominal position.
    """
    cipos = parse_ci(record, VcfKeys.cipos)
    if cipos is not None:
        return cipos
    return ConfidenceInterval(start_offset=0, width=homology_length(record))


def right_confidence_interval(
        left_ci: ConfidenceInterval,
        svtype: Optional[str],
        ciend: Optional[ConfidenceInterval],
        cilen: Optional[ConfidenceInterval]
) -> ConfidenceInterval:
    """
    Confidence interval around the end of a SV represented using symbolic allele notation.
    Args:
        left_ci: ConfidenceInterval
            Confidence interval around the start of the SV
        svtype: Optional[str]
            Type of the SV. CILEN is not projected onto the end of insertions
        ciend: Optional[ConfidenceInterval]
            Explicit confidence interval around END, used if present
        cilen: Optional[ConfidenceInterval]
            Confidence interval around SVLEN. Compounds on top of the left_ci bounds
    Returns:
        right_ci: ConfidenceInterval
            Confidence interval around the end of the SV
    """
    if ciend is not None:
        return ciend
    if cilen is not None and svtype not in INSERTION_TYPES:
        return ConfidenceInterval(
            start_offset=left_ci.start_offset + cilen.start_offset,
            width=left_ci.width + cilen.width
        )
    return left_ci


def record_right_confidence_interval(
        record: VariantRecord,
        left_ci: ConfidenceInterval,
        svtype: Optional[str]
) -> ConfidenceInterval:
    return right_confidence_interval(
        left_ci, svtype, ciend=parse_ci(record, VcfKeys.ciend), cilen=parse_ci(record, VcfKeys.cilen)
    )


def remote_confidence_interval(record: VariantRecord) -> ConfidenceInterval:
    """ Confidence interval around the remote (CHR2 / END) locus of a translocation record """
    ciend = parse_ci(record, VcfKeys.ciend)
    return NO_UNCERTAINTY if ciend is None else ciend
