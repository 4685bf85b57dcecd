"""
Match breakends with their partners, infer missing partners, and check the breakpoint pairing invariants.
"""
import dataclasses
from typing import List, Optional, Tuple, Sequence

from sv_breakends import common
from sv_breakends.genomics_io import Breakend, VariantRecord, VcfKeys, Default
from sv_breakends.bnd_notation import BracketBreakend, make_bnd_alt


def resolve_partner_id(record: VariantRecord) -> Tuple[Optional[str], bool]:
    """
    Find the id of the record's partner breakend.
    Args:
        record: VariantRecord
            Record in breakpoint notation
    Returns:
        partner: Optional[str]
            PARID if present, otherwise the first MATEID, otherwise None
        has_extra_mates: bool
            True if partner came from MATEID and additional MATEIDs were ignored
    """
    par_id = record.info_value(VcfKeys.par_id)
    if par_id is not None:
        return str(par_id), False
    mate_ids = record.info_values(VcfKeys.mate_id)
    if not mate_ids:
        return None, False
    return str(mate_ids[0]), len(mate_ids) > 1


def infer_mate(breakend: Breakend, bracket_breakend: BracketBreakend, mate_id: str) -> Breakend:
    """
    Synthesize the remote breakend of a breakpoint-notation record whose mate record is missing. The inferred mate sits
    at the remote locus named in the ALT, with its strand given by the bracket direction, and its ALT points back at
    the local breakend.
    """
    strands = bracket_breakend.remote_strand + bracket_breakend.strand
    return dataclasses.replace(
        breakend,
        id=mate_id,
        contig=bracket_breakend.remote_contig,
        start=bracket_breakend.remote_pos,
        end=bracket_breakend.remote_pos,
        strand=bracket_breakend.remote_strand,
        ref=Default.unknown_base,
        alt=make_bnd_alt(breakend.contig, breakend.start, strands),
        partner=breakend.id
    )


def _drop_duplicate_ids(breakends: Sequence[Breakend]) -> List[Breakend]:
    seen = set()
    unique = []
    duplicates = []
    for breakend in breakends:
        if breakend.id in seen:
            duplicates.append(breakend.id)
        else:
            seen.add(breakend.id)
            unique.append(breakend)
    if duplicates:
        common.warn_records("Multiple breakends with the same id found (keeping first occurrence)", duplicates,
                            stacklevel=3)
    return unique


def validate_partners(breakends: Sequence[Breakend]) -> List[Breakend]:
    """
    Enforce the breakpoint invariant: every breakend's partner exists and points back at it.

    Breakends whose partner points at a different breakend are dropped with a warning; promiscuous breakpoints are
    not supported, so for each partner only the breakend it points back at is kept. After that, any breakend whose
    partner is missing indicates an internal inconsistency and raises SanityCheckError.
    Args:
        breakends: Sequence[Breakend]
            Extracted breakends, in output order
    Returns:
        paired_breakends: List[Breakend]
            Breakends with reciprocal partners, in input order
    """
    breakends = _drop_duplicate_ids(breakends)
    by_id = {breakend.id: breakend for breakend in breakends}
    non_reciprocal = {
        breakend.id for breakend in breakends
        if breakend.partner in by_id and by_id[breakend.partner].partner != breakend.id
    }
    if non_reciprocal:
        common.warn_records(
            "Multiple breakend partners for a single breakend found (ignoring all except the reciprocal partner). "
            "Promiscuous breakpoints are not supported. Dropped breakends",
            [breakend.id for breakend in breakends if breakend.id in non_reciprocal],
            stacklevel=2
        )
        breakends = [breakend for breakend in breakends if breakend.id not in non_reciprocal]

    kept_ids = {breakend.id for breakend in breakends}
    unpaired = [breakend.id for breakend in breakends if breakend.partner not in kept_ids]
    if unpaired:
        raise common.SanityCheckError(f"Sanity check failure: unpaired breakends: {common.format_ids(unpaired)}")
    return breakends


def strip_partners(breakends: Sequence[Breakend]) -> List[Breakend]:
    """ Single breakend output carries no partner information """
    return [dataclasses.replace(breakend, partner=None) for breakend in breakends]
