"""
Classify VCF records by the structural variant encoding they use.
"""
import enum
import re
from typing import Optional

from sv_breakends.genomics_io import VariantRecord, VcfKeys
from sv_breakends.bnd_notation import parse_bracket_alt, parse_single_breakend_alt


# noinspection PyArgumentList
class SvType(enum.Enum):
    """ Encodings of structural variants, in the order their records are converted to breakends """
    INDEL = "INDEL"
    DEL = "DEL"
    INS = "INS"
    DUP = "DUP"
    RPL = "RPL"
    UNK = "UNK"
    INV = "INV"
    BND = "BND"
    SINGLE_BREAKEND = "SINGLE_BREAKEND"
    TRA = "TRA"
    CTX = "CTX"
    IGNORED = "IGNORED"
    UNRECOGNIZED = "UNRECOGNIZED"


SYMBOLIC_CHARACTERS = frozenset("<[].")
NON_REF_ALLELE = "<NON_REF>"
# symbolic alleles known to not be structural variant alleles, including IUPAC ambiguity codes
IGNORED_SV_TYPES = frozenset({"CNV", "*", "NON_REF", "U", "R", "Y", "S", "W", "K", "M", "B", "D", "H", "V", "N"})
SIMPLE_SV_TYPES = frozenset({"DEL", "INS", "DUP", "RPL", "UNK"})
ABUNDANCE_CLAIM = "D"
_SYMBOLIC_ALT_RE = re.compile(r"<(.*)>")


def is_symbolic(alt: Optional[str]) -> bool:
    """ True if the ALT allele uses angle-bracket, breakend bracket, or single breakend notation """
    return alt is not None and any(c in SYMBOLIC_CHARACTERS for c in alt)


def is_breakpoint_notation(alt: Optional[str]) -> bool:
    return alt is not None and ("[" in alt or "]" in alt)


def is_single_breakend_notation(alt: Optional[str]) -> bool:
    return alt is not None and (alt.startswith(".") or alt.endswith("."))


def has_single_allele(record: VariantRecord) -> bool:
    return len(record.alts) == 1


def is_structural(record: VariantRecord) -> bool:
    """
    True if the record's (first) ALT allele describes a structural variant: either it is symbolic, or its length
    differs from REF. No-call ALTs and the gVCF <NON_REF> allele are not structural.
    """
    alt = record.alt
    if not alt or alt == NON_REF_ALLELE:
        return False
    return is_symbolic(alt) or len(alt) != len(record.ref)


def root_sv_type(record: VariantRecord) -> Optional[str]:
    """
    SV type of the record: the symbolic allele name, falling back to INFO/SVTYPE. Any record in breakpoint or single
    breakend notation is a BND. Only the root type is returned (e.g. "DUP:TANDEM" -> "DUP").
    """
    alt = record.alt or ""
    match = _SYMBOLIC_ALT_RE.search(alt)
    svtype = match.group(1) if match is not None else record.info_value(VcfKeys.svtype)
    if is_breakpoint_notation(alt) or is_single_breakend_notation(alt):
        svtype = "BND"
    if svtype is None:
        return None
    svtype = str(svtype).split(":", 1)[0]
    return svtype if svtype else None


def sv_len(record: VariantRecord) -> Optional[int]:
    """
    Length of the structural variant: SVLEN, falling back to END - POS, and for sequence-resolved alleles to the
    length difference between ALT and REF. None if the length is undefined.
    """
    if not is_structural(record):
        return 0
    length = record.info_value(VcfKeys.svlen)
    if length is not None:
        return int(length)
    end = record.info_value(VcfKeys.end)
    if end is not None:
        return int(end) - record.pos
    if is_symbolic(record.alt):
        return None
    return len(record.alt) - len(record.ref)


def classify(record: VariantRecord) -> SvType:
    """
    Assign exactly one SvType to a structural variant record. The order of the checks matters: e.g. abundance claims
    are ignored even if they carry a DEL / DUP allele.
    """
    svtype = root_sv_type(record)
    alt = record.alt or ""
    if svtype is not None and svtype in IGNORED_SV_TYPES:
        return SvType.IGNORED
    if record.info_value(VcfKeys.sv_claim) == ABUNDANCE_CLAIM:
        return SvType.IGNORED
    if not is_symbolic(alt) and len(alt) > 0:
        return SvType.INDEL
    if svtype in SIMPLE_SV_TYPES:
        return SvType(svtype)
    if svtype == "INV":
        return SvType.INV
    if svtype == "BND":
        # malformed breakend notation is left unclaimed
        if is_breakpoint_notation(alt):
            return SvType.BND if parse_bracket_alt(alt, record.ref) is not None else SvType.UNRECOGNIZED
        return SvType.SINGLE_BREAKEND if parse_single_breakend_alt(alt) is not None else SvType.UNRECOGNIZED
    if svtype == "TRA":
        return SvType.TRA
    if svtype == "CTX":
        return SvType.CTX
    return SvType.UNRECOGNIZED
