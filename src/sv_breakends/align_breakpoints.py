#!/usr/bin/env python
"""
Adjust the nominal position of partnered breakpoint records so that calls from different callers can be compared.
"""
import sys
import math
import argparse
import dataclasses
import logging
from types import MappingProxyType
from typing import List, Text, Optional, Sequence

import pysam

from sv_breakends import common, genomics_io
from sv_breakends.genomics_io import VariantRecord, VcfKeys
from sv_breakends.bnd_notation import split_bracket_alt, alt_to_strand_pair


class Default:
    align = "centre"
    log_level = "INFO"
    unknown_base = genomics_io.Default.unknown_base


SUPPORTED_ALIGNMENTS = frozenset({"centre"})
# breakends whose partner is on the same strand move in the opposite direction to their partner
OPPOSITE_DIRECTION_STRAND_PAIRS = frozenset({"--", "++"})
SHIFTED_INFO_FIELDS = (VcfKeys.cipos, VcfKeys.ciend, VcfKeys.inexact_homology_pos)


def default_is_higher_breakend(record: VariantRecord) -> bool:
    """ By default the breakend whose id sorts before its partner's id (PARID) is the "higher" breakend """
    par_id = record.info_value(VcfKeys.par_id)
    if record.id is None or par_id is None:
        return False
    return record.id < str(par_id)


def centre_adjustment(record: VariantRecord, is_higher_breakend: bool) -> int:
    """
    Distance from the nominal position to the centre of the CIPOS interval. Fractional distances are rounded down,
    except for the higher breakend of a --/++ breakpoint, which is rounded up so that the two partners move
    consistently.
    """
    cipos_start, cipos_end = (int(value) for value in record.info_values(VcfKeys.cipos)[:2])
    adjust_by = cipos_start + (cipos_end - cipos_start) / 2.0
    if is_higher_breakend and alt_to_strand_pair(record.alt) in OPPOSITE_DIRECTION_STRAND_PAIRS:
        return math.ceil(adjust_by)
    return math.floor(adjust_by)


def _shift_info(info: dict, adjust_by: int) -> dict:
    shifted = dict(info)
    for key in SHIFTED_INFO_FIELDS:
        value = shifted.get(key)
        if value is None:
            continue
        if isinstance(value, (tuple, list)):
            shifted[key] = tuple(None if v is None else v - adjust_by for v in value)
        else:
            shifted[key] = value - adjust_by
    # remote confidence intervals are not shifted, so are no longer valid
    shifted.pop(VcfKeys.ci_remote_pos, None)
    return shifted


def shifted_alt(alt: str, adjust_by: int) -> Optional[str]:
    """
    Rewrite a breakpoint ALT for a breakend moved by adjust_by. The partner position moves in the same direction as
    this breakend, or the opposite direction for --/++ breakpoints. Anchoring bases are replaced with N since the
    sequence at the new position is unknown. Returns None if alt is not in breakpoint notation.
    """
    parts = split_bracket_alt(alt)
    if parts is None:
        return None
    pre_bases, bracket, partner_contig, partner_pos, post_bases = parts
    if alt_to_strand_pair(alt) in OPPOSITE_DIRECTION_STRAND_PAIRS:
        partner_pos -= adjust_by
    else:
        partner_pos += adjust_by
    return (
        Default.unknown_base * len(pre_bases) + f"{bracket}{partner_contig}:{partner_pos}{bracket}"
        + Default.unknown_base * len(post_bases)
    )


def align_record(record: VariantRecord, is_higher_breakend: bool, align: str = Default.align) -> VariantRecord:
    if align not in SUPPORTED_ALIGNMENTS:
        raise NotImplementedError("Only centre alignment is currently implemented.")
    adjust_by = centre_adjustment(record, is_higher_breakend)
    new_alt = shifted_alt(record.alt, adjust_by) if adjust_by != 0 else None
    if new_alt is None:
        # only breakpoint notation records are moved
        adjust_by = 0
    return dataclasses.replace(
        record,
        pos=record.pos + adjust_by,
        alts=record.alts if new_alt is None else (new_alt,),
        info=MappingProxyType(_shift_info(record.info, adjust_by))
    )


def align_breakpoints(
        records: Sequence[VariantRecord],
        align: str = Default.align,
        is_higher_breakend: Optional[Sequence[Optional[bool]]] = None
) -> List[VariantRecord]:
    f"""
    Adjust the nominal position of a set of partnered breakpoint records.
    Args:
        records: Sequence[VariantRecord]
            Breakpoint records. Every record must have a two-valued CIPOS.
        align: str (Default={Default.align})
            The alignment type. Only "centre" (move to the centre of the CIPOS interval) is implemented.
        is_higher_breakend: Optional[Sequence[Optional[bool]]] (Default=None)
            Breakpoint ordering, one value per record. None values are treated as False. If not supplied, a record is
            the higher breakend when its id sorts before its PARID.
    Returns:
        aligned_records: List[VariantRecord]
            Records with adjusted positions, confidence intervals, and ALT alleles
    """
    if len(records) == 0:
        return []
    if align not in SUPPORTED_ALIGNMENTS:
        raise NotImplementedError("Only centre alignment is currently implemented.")
    missing_cipos = [record.id for record in records if len(record.info_values(VcfKeys.cipos)) != 2]
    if missing_cipos:
        raise common.BreakpointFormatError(
            f"CIPOS not specified for all variants: {common.format_ids(missing_cipos)}"
        )
    if is_higher_breakend is None:
        is_higher_breakend = [default_is_higher_breakend(record) for record in records]
    elif len(is_higher_breakend) != len(records):
        raise ValueError(
            f"is_higher_breakend has {len(is_higher_breakend)} values but there are {len(records)} records"
        )
    return [
        align_record(record, bool(is_higher), align=align)
        for record, is_higher in zip(records, is_higher_breakend)
    ]


def update_pysam_record(record: pysam.VariantRecord, aligned: VariantRecord):
    """ Copy the aligned position, ALT and shifted INFO fields onto the pysam record it was read from """
    record.pos = aligned.pos
    if record.alts is None or tuple(record.alts) != aligned.alts:
        record.alts = aligned.alts
    for key in SHIFTED_INFO_FIELDS:
        if key in aligned.info:
            record.info[key] = aligned.info[key]
    if VcfKeys.ci_remote_pos in record.info:
        del record.info[VcfKeys.ci_remote_pos]


def align_vcf(input_vcf: Text, output_vcf: Text, align: str = Default.align):
    with pysam.VariantFile(input_vcf, "r") as f_in:
        raw_records = list(f_in)
        logging.info(f"Aligning {len(raw_records)} records...")
        aligned_records = align_breakpoints(
            [genomics_io.record_from_pysam(record) for record in raw_records], align=align
        )
        with pysam.VariantFile(output_vcf, "w", header=f_in.header) as f_out:
            for record, aligned in zip(raw_records, aligned_records):
                try:
                    update_pysam_record(record, aligned)
                except (KeyError, ValueError) as error:
                    common.add_exception_context(error, f"updating aligned record {record.id}")
                    raise
                f_out.write(record)
    logging.info(f"File '{output_vcf}' written.")


def __parse_arguments(argv: List[Text]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Move the nominal position of breakpoint records to the centre of their confidence interval",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        prog=argv[0]
    )
    parser.add_argument("input_vcf", type=str, help="VCF with breakpoint records that all have CIPOS")
    parser.add_argument("output_vcf", type=str, help="aligned output VCF")
    parser.add_argument("--align", type=str, default=Default.align, help="alignment type")
    parser.add_argument("--log-level", type=str, default=Default.log_level,
                        help="Specify level of logging information")
    return parser.parse_args(argv[1:] if len(argv) > 1 else ["--help"])


def main(argv: Optional[List[Text]] = None):
    args = __parse_arguments(sys.argv if argv is None else argv)
    numeric_level = getattr(logging, args.log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {args.log_level}")
    logging.basicConfig(level=numeric_level, format='%(levelname)s: %(message)s')
    align_vcf(args.input_vcf, args.output_vcf, align=args.align)


if __name__ == "__main__":
    main()
