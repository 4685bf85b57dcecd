#!/usr/bin/env python
"""
Extract structural variants from VCF records as breakends.

Every structural variant record is converted to breakpoint notation: pairs of breakends whose partner fields point at
each other. A breakend on the '+' strand indicates a break immediately after the given position, to the left of which
is the DNA segment involved in the breakpoint. The '-' strand indicates a break immediately before the given position,
rightwards of which is the DNA segment involved in the breakpoint.

The CIPOS tag describes the uncertainty interval around the position of the breakend. If HOMLEN or HOMSEQ is defined
without CIPOS, it is assumed that the variant position is left aligned.
"""
import sys
import argparse
import dataclasses
import logging
from types import MappingProxyType
from typing import List, Text, Optional, Sequence, Iterable, Dict, Tuple, NamedTuple

from sv_breakends import common, partners
from sv_breakends.genomics_io import VariantRecord, Breakend, VcfKeys, Strand, Default as IoDefault
from sv_breakends import genomics_io
from sv_breakends.sv_types import SvType, classify, is_structural, has_single_allele, root_sv_type, sv_len
from sv_breakends.bnd_notation import parse_bracket_alt, parse_single_breakend_alt
from sv_breakends.confidence_intervals import (
    ConfidenceInterval, left_confidence_interval, record_right_confidence_interval, remote_confidence_interval,
    homology_length
)


class Default:
    nominal_position = False
    placeholder_name = IoDefault.placeholder_name
    suffix = IoDefault.suffix
    info_columns = ()
    unpartnered_breakends = False
    infer_missing_breakends = False
    ignore_unknown_symbolic_alleles = False
    log_level = "INFO"


class BreakendOptions(NamedTuple):
    nominal_position: bool = Default.nominal_position
    placeholder_name: str = Default.placeholder_name
    suffix: str = Default.suffix
    info_columns: Tuple[str, ...] = Default.info_columns
    unpartnered_breakends: bool = Default.unpartnered_breakends
    infer_missing_breakends: bool = Default.infer_missing_breakends
    ignore_unknown_symbolic_alleles: bool = Default.ignore_unknown_symbolic_alleles


class IndexedRecord(NamedTuple):
    """ A structural variant record together with its stable index, unique id, and the attributes shared by all of
    its breakends """
    index: int
    record: VariantRecord
    base: Breakend

    @property
    def id(self) -> str:
        return self.base.id


# Connection type of DELLY TRA records: (local strand, remote strand)
CONNECTION_TYPE_STRANDS = MappingProxyType({
    "3to3": (Strand.plus, Strand.plus),
    "3to5": (Strand.plus, Strand.minus),
    "5to3": (Strand.minus, Strand.plus),
    "5to5": (Strand.minus, Strand.minus),
})


def assign_record_ids(
        records: Sequence[VariantRecord],
        placeholder_name: str = Default.placeholder_name
) -> List[str]:
    """
    Get a unique id for every record. Missing and duplicated ids (every occurrence after the first) are replaced by
    placeholder_name followed by the record's 1-based index.
    Args:
        records: Sequence[VariantRecord]
            Records to name
        placeholder_name: str (Default="svrecord")
            Prefix for generated ids
    Returns:
        record_ids: List[str]
            Unique ids, in record order
    """
    raw_ids = [None if record.id in (None, IoDefault.missing_id) else str(record.id) for record in records]
    seen = set()
    renamed = []
    record_ids = []
    for index, raw_id in enumerate(raw_ids):
        if raw_id is None or raw_id in seen:
            record_id = f"{placeholder_name}{index + 1}"
            renamed.append(raw_id if raw_id is not None else record_id)
        else:
            record_id = raw_id
        seen.add(raw_id)
        record_ids.append(record_id)
    if renamed:
        common.warn_records("Found missing or duplicate record ids (renamed)", renamed)
    if len(set(record_ids)) != len(record_ids):
        # a placeholder collided with an existing id
        raise common.BreakpointFormatError(
            f"Unable to assign unique ids using placeholder name '{placeholder_name}'"
        )
    return record_ids


def _base_breakend(record: VariantRecord, record_id: str, info_columns: Iterable[str]) -> Breakend:
    left_ci = left_confidence_interval(record)
    event = record.info_value(VcfKeys.event)
    return Breakend(
        id=record_id,
        contig=record.chrom,
        start=record.pos,
        end=record.pos,
        strand=Strand.unknown,
        ref=record.ref,
        alt=record.alt,
        source_id=record_id,
        svtype=root_sv_type(record),
        sv_len=sv_len(record),
        ins_seq=None,
        ins_len=0,
        homlen=homology_length(record),
        event=None if event is None else str(event),
        ci_start_offset=left_ci.start_offset,
        ci_width=left_ci.width,
        info=MappingProxyType({column: record.info.get(column) for column in info_columns})
    )


def _breakend_at(
        base: Breakend,
        breakend_id: str,
        contig: str,
        pos: int,
        strand: str,
        partner: Optional[str],
        ci: Optional[ConfidenceInterval] = None,
        **kwargs
) -> Breakend:
    if ci is not None:
        kwargs.update(ci_start_offset=ci.start_offset, ci_width=ci.width)
    return dataclasses.replace(base, id=breakend_id, contig=contig, start=pos, end=pos, strand=strand,
                               partner=partner, **kwargs)


def _require_info(batch: Iterable[IndexedRecord], key: str, caller: str):
    missing = [indexed.id for indexed in batch if indexed.record.info_value(key) is None]
    if missing:
        raise common.BreakpointFormatError(f"{caller} variants missing {key}: {common.format_ids(missing)}")


class BreakendExtractor:
    """
    Convert a batch of records sharing one SvType into breakends. Subclasses are registered per SvType, and each
    record is handled by exactly one extractor.
    """
    subclasses = {}

    def __init__(self, options: BreakendOptions, num_records: int):
        self.options = options
        self.num_records = num_records

    @classmethod
    def register(cls, *svtypes: SvType):
        def decorator(subclass):
            for svtype in svtypes:
                cls.subclasses[svtype] = subclass
            return subclass
        return decorator

    @classmethod
    def create(cls, svtype: SvType, *args) -> "BreakendExtractor":
        if svtype not in cls.subclasses:
            raise ValueError(f"No breakend extractor defined for {svtype.name}")
        return cls.subclasses[svtype](*args)

    @property
    def emits_breakpoints(self) -> bool:
        """ Extractors that produce partnered breakends emit nothing when single breakends are requested """
        return not self.options.unpartnered_breakends

    def breakend_id(self, indexed: IndexedRecord, number: int) -> str:
        return f"{indexed.id}{self.options.suffix}{number}"

    def validate(self, batch: Sequence[IndexedRecord]):
        """ Raise an exception listing every record in the batch that cannot be converted """
        pass

    def extract_batch(self, batch: Sequence[IndexedRecord]) -> List[Breakend]:
        if not self.emits_breakpoints:
            return []
        self.validate(batch)
        breakends = []
        for indexed in batch:
            breakends.extend(self.extract_record(indexed))
        return breakends

    def extract_record(self, indexed: IndexedRecord) -> List[Breakend]:
        raise NotImplementedError(f"{type(self).__name__} does not extract single records")


@BreakendExtractor.register(SvType.IGNORED)
class IgnoredExtractor(BreakendExtractor):
    """ Records known to not describe breakpoints (CNV, NON_REF, ambiguity codes, abundance claims) """
    def extract_batch(self, batch: Sequence[IndexedRecord]) -> List[Breakend]:
        return []


@BreakendExtractor.register(SvType.INDEL)
class IndelExtractor(BreakendExtractor):
    def extract_record(self, indexed: IndexedRecord) -> List[Breakend]:
        """
        Sequence-resolved insertions and deletions. The breakpoint lies after the bases shared by REF and ALT.
        """
        record, base = indexed.record, indexed.base
        prefix_len = common_prefix_length(record.ref, record.alt)
        ins_seq = record.alt[prefix_len:]
        start = record.pos - 1 + prefix_len
        mate_start = start + len(record.ref) - prefix_len + 1
        bp1, bp2 = self.breakend_id(indexed, 1), self.breakend_id(indexed, 2)
        shared = dict(sv_len=len(record.alt) - len(record.ref), ins_seq=ins_seq, ins_len=len(ins_seq))
        return [
            _breakend_at(base, bp1, record.chrom, start, Strand.plus, bp2, **shared),
            _breakend_at(base, bp2, record.chrom, mate_start, Strand.minus, bp1, **shared)
        ]


@BreakendExtractor.register(SvType.DEL, SvType.INS, SvType.DUP, SvType.RPL, SvType.UNK)
class SimpleSvExtractor(BreakendExtractor):
    """
    Symbolic alleles with a single END: <DEL>, <INS>, <DUP>, <UNK>, and pindel <RPL>.
    """
    @staticmethod
    def sv_end(indexed: IndexedRecord) -> Optional[int]:
        base = indexed.base
        if base.svtype == SvType.INS.value:
            return base.start
        if base.sv_len is not None:
            return base.start + abs(base.sv_len)
        end = indexed.record.info_value(VcfKeys.end)
        return None if end is None else int(end)

    def validate(self, batch: Sequence[IndexedRecord]):
        undefined = [indexed.id for indexed in batch if self.sv_end(indexed) is None]
        if undefined:
            raise common.BreakpointFormatError(f"Variant of undefined length: {common.format_ids(undefined)}")

    def extract_record(self, indexed: IndexedRecord) -> List[Breakend]:
        record, base = indexed.record, indexed.base
        svtype = base.svtype
        end = self.sv_end(indexed)
        # duplications and unknown adjacencies break inside the affected interval
        inner = svtype in (SvType.DUP.value, SvType.UNK.value)
        if svtype == SvType.DUP.value:
            strand, mate_strand = Strand.minus, Strand.plus
        elif svtype == SvType.UNK.value:
            strand, mate_strand = Strand.unknown, Strand.unknown
        else:
            strand, mate_strand = Strand.plus, Strand.minus

        if svtype == SvType.INS.value:
            ins_len = None if base.sv_len is None else abs(base.sv_len)
        else:
            ins_len = 0
        nt_len = record.info_value(VcfKeys.nt_len)
        if nt_len is not None:
            # pindel RPL is a deletion with NTLEN bases inserted
            ins_len = int(nt_len)

        right_ci = record_right_confidence_interval(
            record, ConfidenceInterval(base.ci_start_offset, base.ci_width), svtype
        )
        bp1, bp2 = self.breakend_id(indexed, 1), self.breakend_id(indexed, 2)
        return [
            _breakend_at(base, bp1, record.chrom, base.start + (1 if inner else 0), strand, bp2, ins_len=ins_len),
            _breakend_at(base, bp2, record.chrom, end + (0 if inner else 1), mate_strand, bp1, ci=right_ci,
                         ins_len=ins_len)
        ]


@BreakendExtractor.register(SvType.INV)
class InversionExtractor(BreakendExtractor):
    """
    <INV> records describe two breakpoints: the minus strand pair flanking the left side of each end, and the plus
    strand pair flanking the right side. INV3 / INV5 flags indicate only one of the two breakpoints was observed.
    """
    @staticmethod
    def sv_end(indexed: IndexedRecord) -> Optional[int]:
        base = indexed.base
        if base.sv_len is not None:
            return base.start + abs(base.sv_len)
        end = indexed.record.info_value(VcfKeys.end)
        return None if end is None else int(end)

    def validate(self, batch: Sequence[IndexedRecord]):
        undefined = [indexed.id for indexed in batch if self.sv_end(indexed) is None]
        if undefined:
            raise common.BreakpointFormatError(f"Variant of undefined length: {common.format_ids(undefined)}")

    def extract_record(self, indexed: IndexedRecord) -> List[Breakend]:
        record, base = indexed.record, indexed.base
        end = self.sv_end(indexed)
        right_ci = record_right_confidence_interval(
            record, ConfidenceInterval(base.ci_start_offset, base.ci_width), base.svtype
        )
        bp1, bp2, bp3, bp4 = (self.breakend_id(indexed, number) for number in (1, 2, 3, 4))
        breakends = []
        if not record.has_flag(VcfKeys.inv3):
            breakends.extend([
                _breakend_at(base, bp1, record.chrom, base.start + 1, Strand.minus, bp2),
                _breakend_at(base, bp2, record.chrom, end + 1, Strand.minus, bp1, ci=right_ci)
            ])
        if not record.has_flag(VcfKeys.inv5):
            breakends.extend([
                _breakend_at(base, bp3, record.chrom, base.start, Strand.plus, bp4),
                _breakend_at(base, bp4, record.chrom, end, Strand.plus, bp3, ci=right_ci)
            ])
        return breakends


@BreakendExtractor.register(SvType.BND)
class BreakpointNotationExtractor(BreakendExtractor):
    """
    Records in breakpoint notation (e.g. G]17:198982]). Each record is one breakend; its partner is the record named
    by PARID or MATEID.
    """
    def inferred_mate_id(self, indexed: IndexedRecord) -> str:
        return f"{self.options.placeholder_name}{self.num_records + indexed.index + 1}{self.options.suffix}2"

    def extract_batch(self, batch: Sequence[IndexedRecord]) -> List[Breakend]:
        if not self.emits_breakpoints:
            return []
        local_breakends = {}
        bracket_breakends = {}
        multiple_mates = []
        for indexed in batch:
            record = indexed.record
            bracket_breakend = parse_bracket_alt(record.alt, record.ref)
            bracket_breakends[indexed.id] = bracket_breakend
            partner, has_extra_mates = partners.resolve_partner_id(record)
            if has_extra_mates:
                multiple_mates.append(indexed.id)
            # LongRanger reports breakends of unknown direction
            strand = Strand.unknown if record.has_flag(VcfKeys.imprecise_dir) else bracket_breakend.strand
            local_breakends[indexed.id] = dataclasses.replace(
                indexed.base, strand=strand, partner=partner, ins_seq=bracket_breakend.ins_seq,
                ins_len=len(bracket_breakend.ins_seq)
            )
        if multiple_mates:
            common.warn_records("Ignoring additional mate breakends for variants", multiple_mates)

        # a record is unpaired if its partner is missing, or itself unpaired
        paired_ids = set(local_breakends)
        while True:
            unpaired = {_id for _id in paired_ids if local_breakends[_id].partner not in paired_ids}
            if not unpaired:
                break
            paired_ids -= unpaired
        missing_partner = [indexed for indexed in batch if indexed.id not in paired_ids]

        inferred_mates = {}
        if missing_partner:
            if self.options.infer_missing_breakends:
                for indexed in missing_partner:
                    mate_id = self.inferred_mate_id(indexed)
                    local_breakends[indexed.id] = dataclasses.replace(local_breakends[indexed.id], partner=mate_id)
                    inferred_mates[indexed.id] = partners.infer_mate(
                        local_breakends[indexed.id], bracket_breakends[indexed.id], mate_id
                    )
            else:
                common.warn_records(
                    "Removing unpaired breakend variants. Use infer_missing_breakends=True to recover with inferred "
                    "partner breakends. Missing breakends",
                    [indexed.id for indexed in missing_partner]
                )

        breakends = []
        for indexed in batch:
            if indexed.id in inferred_mates:
                local, mate = local_breakends[indexed.id], inferred_mates[indexed.id]
                breakends.extend([
                    dataclasses.replace(local, sv_len=breakpoint_sv_len(local, mate)),
                    dataclasses.replace(mate, sv_len=breakpoint_sv_len(mate, local))
                ])
            elif indexed.id in paired_ids:
                local = local_breakends[indexed.id]
                mate = local_breakends[local.partner]
                breakends.append(dataclasses.replace(local, sv_len=breakpoint_sv_len(local, mate)))
        return breakends


@BreakendExtractor.register(SvType.SINGLE_BREAKEND)
class SingleBreakendExtractor(BreakendExtractor):
    """
    Single breakends (e.g. "G." or ".G") have no partner, so are only reported when unpartnered breakends are
    requested.
    """
    @property
    def emits_breakpoints(self) -> bool:
        return self.options.unpartnered_breakends

    def extract_record(self, indexed: IndexedRecord) -> List[Breakend]:
        single_breakend = parse_single_breakend_alt(indexed.record.alt)
        return [
            dataclasses.replace(
                indexed.base, strand=single_breakend.strand, ins_seq=single_breakend.ins_seq,
                ins_len=len(single_breakend.ins_seq), partner=None, sv_len=None
            )
        ]


@BreakendExtractor.register(SvType.TRA)
class TranslocationExtractor(BreakendExtractor):
    """
    DELLY TRA records: the remote breakend is at CHR2:END, and the CT connection type gives the strand of both ends.
    """
    def validate(self, batch: Sequence[IndexedRecord]):
        _require_info(batch, VcfKeys.bnd_contig_2, "Delly")
        _require_info(batch, VcfKeys.connection_type, "Delly")
        _require_info(batch, VcfKeys.end, "Delly")
        improper = [
            indexed.id for indexed in batch
            if indexed.record.info_value(VcfKeys.connection_type) not in CONNECTION_TYPE_STRANDS
        ]
        if improper:
            raise common.BreakpointFormatError(
                f"Delly variants with improper {VcfKeys.connection_type}: {common.format_ids(improper)}"
            )

    def extract_record(self, indexed: IndexedRecord) -> List[Breakend]:
        record = indexed.record
        strand, mate_strand = CONNECTION_TYPE_STRANDS[record.info_value(VcfKeys.connection_type)]
        # Delly no longer writes INSLEN to all TRA records
        ins_len = record.info_value(VcfKeys.ins_len)
        return _translocation_pair(self, indexed, strand, mate_strand, ins_len=0 if ins_len is None else int(ins_len))


@BreakendExtractor.register(SvType.CTX)
class TigraTranslocationExtractor(BreakendExtractor):
    """
    TIGRA CTX records: the remote breakend is at CHR2:END. No direction information is reported.
    """
    def validate(self, batch: Sequence[IndexedRecord]):
        _require_info(batch, VcfKeys.bnd_contig_2, "TIGRA")
        _require_info(batch, VcfKeys.end, "TIGRA")

    def extract_record(self, indexed: IndexedRecord) -> List[Breakend]:
        return _translocation_pair(self, indexed, Strand.unknown, Strand.unknown, ins_len=indexed.base.ins_len)


def _translocation_pair(
        extractor: BreakendExtractor,
        indexed: IndexedRecord,
        strand: str,
        mate_strand: str,
        ins_len: int
) -> List[Breakend]:
    record, base = indexed.record, indexed.base
    chr2 = str(record.info_value(VcfKeys.bnd_contig_2))
    end = int(record.info_value(VcfKeys.end))
    # END is on another contig, so END - POS is not a length
    length = base.sv_len if chr2 == record.chrom else None
    bp1, bp2 = extractor.breakend_id(indexed, 1), extractor.breakend_id(indexed, 2)
    return [
        _breakend_at(base, bp1, record.chrom, base.start, strand, bp2, sv_len=length, ins_len=ins_len),
        _breakend_at(base, bp2, chr2, end, mate_strand, bp1, ci=remote_confidence_interval(record), sv_len=length,
                     ins_len=ins_len)
    ]


def common_prefix_length(ref: str, alt: str) -> int:
    """ Length of the longest case-insensitive common prefix of ref and alt """
    length = 0
    for ref_base, alt_base in zip(ref.upper(), alt.upper()):
        if ref_base != alt_base:
            break
        length += 1
    return length


def breakpoint_sv_len(breakend: Breakend, mate: Breakend) -> Optional[int]:
    """
    Length of the SV implied by a breakpoint: the number of bases between the two breakends (None if they are on
    different contigs), negative for deletion-like adjacencies, plus the inserted sequence.
    """
    if breakend.contig != mate.contig:
        return None
    length = abs(breakend.start - mate.start) - 1
    if breakend.strand != mate.strand and (
            (breakend.start < mate.start and breakend.strand == Strand.plus)
            or (breakend.start > mate.start and breakend.strand == Strand.minus)
    ):
        length = -length
    return length + (breakend.ins_len or 0)


def widen_to_confidence_interval(breakend: Breakend) -> Breakend:
    start = breakend.start + breakend.ci_start_offset
    return dataclasses.replace(breakend, start=start, end=start + breakend.ci_width)


def partition_records(records: Sequence[IndexedRecord]) -> Dict[SvType, List[IndexedRecord]]:
    """
    Split records into disjoint batches by SvType. Batches are returned in extraction order, records within a batch
    in input order.
    """
    batches = {svtype: [] for svtype in SvType}
    for indexed in records:
        batches[classify(indexed.record)].append(indexed)
    return batches


def _index_records(records: Sequence[VariantRecord], options: BreakendOptions) -> List[IndexedRecord]:
    multi_allelic = [
        record.id for record in records if record.alts and not has_single_allele(record)
    ]
    if multi_allelic:
        raise common.BreakpointFormatError(
            f"Structural variants with multiple ALT alleles are not supported: {common.format_ids(multi_allelic)}"
        )
    records = [record for record in records if is_structural(record)]
    record_ids = assign_record_ids(records, placeholder_name=options.placeholder_name)
    return [
        IndexedRecord(index=index, record=record,
                      base=_base_breakend(record, record_id, options.info_columns))
        for index, (record, record_id) in enumerate(zip(records, record_ids))
    ]


def breakpoint_ranges(
        records: Iterable[VariantRecord],
        nominal_position: bool = Default.nominal_position,
        placeholder_name: str = Default.placeholder_name,
        suffix: str = Default.suffix,
        info_columns: Optional[Sequence[str]] = Default.info_columns,
        unpartnered_breakends: bool = Default.unpartnered_breakends,
        infer_missing_breakends: bool = Default.infer_missing_breakends,
        ignore_unknown_symbolic_alleles: bool = Default.ignore_unknown_symbolic_alleles
) -> List[Breakend]:
    f"""
    Extract the structural variants in records as breakends.
    Args:
        records: Iterable[VariantRecord]
            VCF records. Non-structural records are skipped. Every record must have a single ALT allele.
        nominal_position: bool (Default={Default.nominal_position})
            If True, report breakends at the nominal VCF position. Otherwise report the confidence interval
            (incorporating any homology present) as [start, end].
        placeholder_name: str (Default={Default.placeholder_name})
            Prefix of ids assigned to records with a missing or duplicated id.
        suffix: str (Default={Default.suffix})
            Suffix appended to the record id, followed by the breakend number, to name generated breakends.
        info_columns: Optional[Sequence[str]] (Default=None)
            INFO fields to copy onto the breakends.
        unpartnered_breakends: bool (Default={Default.unpartnered_breakends})
            If True, report single breakends (without partners) instead of breakpoints.
        infer_missing_breakends: bool (Default={Default.infer_missing_breakends})
            If True, breakpoint notation records without a matching partner get an inferred partner breakend at the
            remote locus of their ALT. Otherwise such records are removed.
        ignore_unknown_symbolic_alleles: bool (Default={Default.ignore_unknown_symbolic_alleles})
            If True, drop records of unrecognized format. Otherwise raise an error.
    Returns:
        breakends: List[Breakend]
            Extracted breakends. Unless unpartnered_breakends is set, every breakend's partner is in the list and
            points back at it.
    """
    options = BreakendOptions(
        nominal_position=nominal_position,
        placeholder_name=placeholder_name,
        suffix=suffix,
        info_columns=tuple(info_columns or ()),
        unpartnered_breakends=unpartnered_breakends,
        infer_missing_breakends=infer_missing_breakends,
        ignore_unknown_symbolic_alleles=ignore_unknown_symbolic_alleles
    )
    indexed_records = _index_records(list(records), options)
    batches = partition_records(indexed_records)

    breakends = []
    for svtype, batch in batches.items():
        if not batch or svtype == SvType.UNRECOGNIZED:
            continue
        extractor = BreakendExtractor.create(svtype, options, len(indexed_records))
        batch_breakends = extractor.extract_batch(batch)
        logging.debug(f"{svtype.name}: {len(batch)} records -> {len(batch_breakends)} breakends")
        breakends.extend(batch_breakends)

    unrecognized = batches[SvType.UNRECOGNIZED]
    if unrecognized and not options.ignore_unknown_symbolic_alleles:
        raise common.BreakpointFormatError(
            "Unrecognised format for variants. Set ignore_unknown_symbolic_alleles=True to ignore variants. "
            f"Problematic records are: {common.format_ids(indexed.id for indexed in unrecognized)}"
        )

    if not options.nominal_position:
        breakends = [widen_to_confidence_interval(breakend) for breakend in breakends]
    if options.unpartnered_breakends:
        return partners.strip_partners(breakends)
    return partners.validate_partners(breakends)


def breakend_ranges(records: Iterable[VariantRecord], **kwargs) -> List[Breakend]:
    """
    Extract single breakends: records in single breakend notation ("G." / ".G") that are not part of a breakpoint.
    Accepts the keyword arguments of breakpoint_ranges().
    """
    kwargs["unpartnered_breakends"] = True
    return breakpoint_ranges(records, **kwargs)


def __parse_arguments(argv: List[Text]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract the structural variants in a VCF as a table of breakends",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        prog=argv[0]
    )
    parser.add_argument("input_vcf", type=str, help="VCF with structural variants")
    parser.add_argument("output_tsv", type=str, help="tab-separated table of breakends, one row per breakend")
    parser.add_argument("--nominal-position", action="store_true", default=Default.nominal_position,
                        help="report the nominal VCF position instead of the confidence interval")
    parser.add_argument("--placeholder-name", type=str, default=Default.placeholder_name,
                        help="id prefix for records with missing or duplicate ids")
    parser.add_argument("--suffix", type=str, default=Default.suffix, help="breakend id suffix")
    parser.add_argument("--info-columns", type=str, default=None,
                        help="comma-separated list of INFO fields to add as columns")
    parser.add_argument("--unpartnered-breakends", action="store_true", default=Default.unpartnered_breakends,
                        help="report single breakends instead of breakpoints")
    parser.add_argument("--infer-missing-breakends", action="store_true",
                        default=Default.infer_missing_breakends,
                        help="infer partners of breakpoint notation records with a missing mate")
    parser.add_argument("--ignore-unknown-symbolic-alleles", action="store_true",
                        default=Default.ignore_unknown_symbolic_alleles,
                        help="drop records of unrecognized format instead of failing")
    parser.add_argument("--log-level", type=str, default=Default.log_level,
                        help="Specify level of logging information")
    return parser.parse_args(argv[1:] if len(argv) > 1 else ["--help"])


def main(argv: Optional[List[Text]] = None):
    args = __parse_arguments(sys.argv if argv is None else argv)
    numeric_level = getattr(logging, args.log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {args.log_level}")
    logging.basicConfig(level=numeric_level, format='%(levelname)s: %(message)s')

    info_columns = args.info_columns.split(",") if args.info_columns else ()
    logging.info(f"Reading {args.input_vcf}...")
    records = genomics_io.vcf_to_records(args.input_vcf)
    logging.info(f"Extracting breakends from {len(records)} records...")
    breakends = breakpoint_ranges(
        records,
        nominal_position=args.nominal_position,
        placeholder_name=args.placeholder_name,
        suffix=args.suffix,
        info_columns=info_columns,
        unpartnered_breakends=args.unpartnered_breakends,
        infer_missing_breakends=args.infer_missing_breakends,
        ignore_unknown_symbolic_alleles=args.ignore_unknown_symbolic_alleles
    )
    genomics_io.breakends_to_tsv(breakends, args.output_tsv, info_columns=info_columns)
    logging.info(f"File '{args.output_tsv}' written with {len(breakends)} breakends.")


if __name__ == "__main__":
    main()
