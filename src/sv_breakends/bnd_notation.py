"""
bnd_notation.py

Parse and build VCF breakend ALT alleles.

Breakpoint (paired) notation places the remote locus between brackets:
  t[p[   piece extending to the right of p is joined after t   (strands +-)
  t]p]   reverse comp piece extending left of p is joined after t   (strands ++)
  ]p]t   piece extending to the left of p is joined before t   (strands -+)
  [p[t   reverse comp piece extending right of p is joined before t   (strands --)
Single breakends replace the remote locus with a dot: "t." (+) or ".t" (-).
"""
import re
from typing import NamedTuple, Optional, Tuple

from sv_breakends.genomics_io import Strand, Default


_BRACKET_ALT_RE = re.compile(r"^([^\[\]]*)([\[\]])([^\[\]]+)([\[\]])([^\[\]]*)$")


class BracketBreakend(NamedTuple):
    pre_bases: str
    bracket: str
    remote_contig: str
    remote_pos: int
    post_bases: str
    strand: str
    remote_strand: str
    ins_seq: str


class SingleBreakend(NamedTuple):
    strand: str
    ins_seq: str


def split_bracket_alt(alt: str) -> Optional[Tuple[str, str, str, int, str]]:
    """
    Split a breakpoint ALT into (pre bases, bracket, remote contig, remote
    position, post bases).

    Returns None if alt is not in breakpoint notation. Contig names may contain
    ':', so the position is the text following the last ':'.
    """
    match = _BRACKET_ALT_RE.match(alt)
    if match is None or match.group(2) != match.group(4):
        return None
    pre_bases, bracket, remote, _, post_bases = match.groups()
    contig, sep, pos = remote.rpartition(":")
    if not sep or not contig or not pos.isdigit():
        return None
    return pre_bases, bracket, contig, int(pos), post_bases


def parse_bnd_pos(alt: str) -> Optional[Tuple[str, int]]:
    """
    Parse the remote contig and position from a breakpoint ALT.
    """
    parts = split_bracket_alt(alt)
    return None if parts is None else (parts[2], parts[3])


def parse_bracket_alt(alt: str, ref: str) -> Optional[BracketBreakend]:
    """
    Decompose a breakpoint-notation ALT allele.

    Parameters
    ----------
    alt : str
        ALT allele, e.g. "G]17:198982]"
    ref : str
        REF allele. Bases of alt beyond the len(ref) anchoring bases are
        inserted sequence.

    Returns
    -------
    breakend : BracketBreakend or None
        None if alt is not well-formed breakpoint notation.
    """
    parts = split_bracket_alt(alt)
    if parts is None:
        return None
    pre_bases, bracket, remote_contig, remote_pos, post_bases = parts
    if pre_bases and post_bases:
        return None
    reflen = len(ref)
    ins_seq = pre_bases[reflen:] + (post_bases[:-reflen] if reflen > 0 else post_bases)
    return BracketBreakend(
        pre_bases=pre_bases,
        bracket=bracket,
        remote_contig=remote_contig,
        remote_pos=remote_pos,
        post_bases=post_bases,
        strand=Strand.plus if pre_bases else Strand.minus,
        remote_strand=Strand.minus if bracket == "[" else Strand.plus,
        ins_seq=ins_seq
    )


def parse_single_breakend_alt(alt: str) -> Optional[SingleBreakend]:
    """
    Decompose a single breakend ALT allele (".ACGT" or "ACGT.").

    The anchoring base and the dot are trimmed from the inserted sequence.
    Returns None if alt is not in single breakend notation.
    """
    if len(alt) < 2 or "[" in alt or "]" in alt:
        return None
    if alt.startswith("."):
        strand = Strand.minus
    elif alt.endswith("."):
        strand = Strand.plus
    else:
        return None
    return SingleBreakend(strand=strand, ins_seq=alt[1:-1])


def alt_to_strand_pair(alt: str) -> str:
    """
    Strands of a breakend ALT: local strand then remote strand for breakpoint
    notation, local strand only for single breakends, "" otherwise.
    """
    if alt.startswith("."):
        return "-"
    if alt.endswith("."):
        return "+"
    if alt.startswith("]"):
        return "-+"
    if alt.startswith("["):
        return "--"
    if alt.endswith("]"):
        return "++"
    if alt.endswith("["):
        return "+-"
    return ""


def make_bnd_alt(chrom: str, pos: int, strands: str, ref_base: str = Default.unknown_base) -> str:
    """
    Make ALT for BND record in accordance with VCF specification.

    strands is the local strand followed by the remote strand.
    """

    p = '{0}:{1}'.format(chrom, pos)
    t = ref_base

    if strands == '++':
        fmt = '{1}]{0}]'
    elif strands == '+-':
        fmt = '{1}[{0}['
    elif strands == '-+':
        fmt = ']{0}]{1}'
    elif strands == '--':
        fmt = '[{0}[{1}'
    else:
        raise ValueError('Improper strands ({0}) for breakend at {1}'.format(strands, p))

    return fmt.format(p, t)
