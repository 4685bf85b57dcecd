#!/usr/bin/env python
"""
Data model shared by the breakend extraction modules: input VCF records, output breakends, and conversion to / from
pysam and pandas.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Text, Union, Tuple, Mapping, Optional, Any, Iterator, Iterable, List, Sequence
import pandas
import pysam

from sv_breakends import common


VCF_INFO_COLUMN = 7
EncodedInfoValue = Union[int, float, str, bool, Tuple[Any, ...], None]
VcfSource = Union[Text, pysam.VariantFile]


class VcfKeys:
    svtype = "SVTYPE"
    svlen = "SVLEN"
    end = "END"
    cipos = "CIPOS"
    ciend = "CIEND"
    cilen = "CILEN"
    homlen = "HOMLEN"
    homseq = "HOMSEQ"
    mate_id = "MATEID"
    par_id = "PARID"
    event = "EVENT"
    nt_len = "NTLEN"
    inv3 = "INV3"
    inv5 = "INV5"
    imprecise_dir = "IMPRECISE_DIR"
    bnd_contig_2 = "CHR2"
    connection_type = "CT"
    ins_len = "INSLEN"
    sv_claim = "SVCLAIM"
    inexact_homology_pos = "IHOMPOS"
    ci_remote_pos = "CIRPOS"


class Keys:
    id = "id"
    contig = "contig"
    start = "start"
    end = "end"
    strand = "strand"
    ref = "ref"
    alt = "alt"
    source_id = "source_id"
    partner = "partner"
    svtype = "svtype"
    sv_len = "sv_len"
    ins_seq = "ins_seq"
    ins_len = "ins_len"
    homlen = "homlen"
    event = "event"
    ci_start_offset = "ci_start_offset"
    ci_width = "ci_width"


class Strand:
    plus = "+"
    minus = "-"
    unknown = "*"


class Default:
    placeholder_name = "svrecord"
    suffix = "_bp"
    missing_id = "."
    unknown_base = "N"
    table_sep = "\t"
    table_na_rep = "."
    int_columns = (Keys.start, Keys.end, Keys.sv_len, Keys.ins_len, Keys.homlen, Keys.ci_start_offset,
                   Keys.ci_width)
    breakend_columns = (
        Keys.contig, Keys.start, Keys.end, Keys.strand, Keys.ref, Keys.alt, Keys.source_id, Keys.partner, Keys.svtype,
        Keys.sv_len, Keys.ins_seq, Keys.ins_len, Keys.homlen, Keys.event, Keys.ci_start_offset, Keys.ci_width
    )


@dataclass(frozen=True)
class VariantRecord:
    """
    One VCF line, as supplied by the VCF reader. INFO values are scalars, tuples (multi-valued fields) or True (flags).
    """
    chrom: str
    pos: int
    id: Optional[str]
    ref: str
    alts: Tuple[str, ...]
    info: Mapping[str, EncodedInfoValue] = field(default_factory=dict)

    @property
    def alt(self) -> Optional[str]:
        """ The first ALT allele (records are required to have exactly one) """
        return self.alts[0] if self.alts else None

    def info_value(self, key: str, index: int = 0) -> EncodedInfoValue:
        """
        Get a single value of INFO field key: the index-th element for multi-valued fields, or the value itself for
        scalars. Missing fields (or missing elements) are None.
        """
        value = self.info.get(key)
        if isinstance(value, (tuple, list)):
            return value[index] if index < len(value) else None
        return value if index == 0 else None

    def info_values(self, key: str) -> Tuple[EncodedInfoValue, ...]:
        """ All values of INFO field key, as a tuple (empty if the field is missing) """
        value = self.info.get(key)
        if value is None:
            return ()
        if isinstance(value, (tuple, list)):
            return tuple(v for v in value if v is not None)
        return (value,)

    def has_flag(self, key: str) -> bool:
        value = self.info.get(key)
        if isinstance(value, (tuple, list)):
            return bool(value) and bool(value[0])
        return bool(value)


@dataclass(frozen=True)
class Breakend:
    """
    One side of a structural variant adjacency: a strand-oriented 1-based locus [start, end] plus the annotations
    carried over from the VCF record it was extracted from.
    """
    id: str
    contig: str
    start: int
    end: int
    strand: str
    ref: str
    alt: str
    source_id: str
    svtype: Optional[str]
    partner: Optional[str] = None
    sv_len: Optional[int] = None
    ins_seq: Optional[str] = None
    ins_len: Optional[int] = 0
    homlen: int = 0
    event: Optional[str] = None
    ci_start_offset: int = 0
    ci_width: int = 0
    info: Mapping[str, EncodedInfoValue] = field(default_factory=dict)

    @property
    def pos(self) -> int:
        return self.start


def _encode_info_value(value: Any) -> EncodedInfoValue:
    if isinstance(value, tuple):
        return tuple(_encode_info_value(v) for v in value)
    return value


def _raw_info_value(record: pysam.VariantRecord, key: str) -> Optional[str]:
    """ Text value of INFO field key as written in the VCF line, or None if the record does not have it """
    fields = str(record).rstrip("\n").split("\t")
    if len(fields) <= VCF_INFO_COLUMN:
        return None
    prefix = f"{key}="
    for entry in fields[VCF_INFO_COLUMN].split(";"):
        if entry.startswith(prefix):
            return entry[len(prefix):]
    return None


def _info_from_pysam(record: pysam.VariantRecord) -> dict:
    info = {key: _encode_info_value(value) for key, value in record.info.items()}
    # pysam hides END in record.stop, which cannot hold END <= POS (e.g. the CHR2 position of a translocation)
    if VcfKeys.end in record.header.info:
        end = _raw_info_value(record, VcfKeys.end)
        if end is not None and end != Default.missing_id:
            info[VcfKeys.end] = int(end)
    return info


def record_from_pysam(record: pysam.VariantRecord) -> VariantRecord:
    """
    Convert pysam.VariantRecord to VariantRecord
    Args:
        record: pysam.VariantRecord
            Record from a VCF opened with pysam
    Returns:
        variant_record: VariantRecord
            Immutable copy of the fields used for breakend extraction
    """
    return VariantRecord(
        chrom=record.chrom,
        pos=record.pos,
        id=record.id,
        ref=record.ref,
        alts=tuple(record.alts) if record.alts is not None else (),
        info=MappingProxyType(_info_from_pysam(record))
    )


def iter_records(vcf: VcfSource) -> Iterator[VariantRecord]:
    """
    Iterate over the records of a VCF
    Args:
        vcf: str or pysam.VariantFile
            Path to VCF, or already-opened VariantFile
    Yields:
        variant_record: VariantRecord
    """
    if isinstance(vcf, pysam.VariantFile):
        for record in vcf:
            yield record_from_pysam(record)
    else:
        try:
            with pysam.VariantFile(vcf, "r") as f_in:
                for record in f_in:
                    yield record_from_pysam(record)
        except (OSError, ValueError) as error:
            common.add_exception_context(error, f"reading VCF {vcf}")
            raise


def vcf_to_records(vcf: VcfSource) -> List[VariantRecord]:
    return list(iter_records(vcf))


def breakends_to_pandas(
        breakends: Iterable[Breakend],
        info_columns: Optional[Sequence[str]] = None
) -> pandas.DataFrame:
    """
    Convert breakends to a DataFrame, one row per breakend, indexed by breakend id
    Args:
        breakends: Iterable[Breakend]
            Breakends, e.g. output of breakpoint_ranges()
        info_columns: Optional[Sequence[str]] (Default=None)
            Pass-through INFO fields to add as columns. Multi-valued fields are joined with ","
    Returns:
        breakends_table: pandas.DataFrame
            Table with Default.breakend_columns, followed by info_columns
    """
    info_columns = list(info_columns or ())
    rows = []
    index = []
    for breakend in breakends:
        index.append(breakend.id)
        row = {column: getattr(breakend, column) for column in Default.breakend_columns}
        for column in info_columns:
            value = breakend.info.get(column)
            row[column] = ",".join(str(v) for v in value) if isinstance(value, tuple) else value
        rows.append(row)
    columns = list(Default.breakend_columns) + [c for c in info_columns if c not in Default.breakend_columns]
    breakends_table = pandas.DataFrame(rows, columns=columns, index=pandas.Index(index, name=Keys.id, dtype=object))
    for column in Default.int_columns:
        breakends_table[column] = breakends_table[column].astype("Int64")
    return breakends_table


def breakends_to_tsv(
        breakends: Iterable[Breakend],
        output_file: Text,
        info_columns: Optional[Sequence[str]] = None
):
    breakends_table = breakends_to_pandas(breakends, info_columns=info_columns)
    breakends_table.to_csv(output_file, sep=Default.table_sep, na_rep=Default.table_na_rep, index=True)
