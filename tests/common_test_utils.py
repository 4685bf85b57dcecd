from types import MappingProxyType
from typing import Optional, Sequence, Union, Iterable, Dict

from sv_breakends.genomics_io import VariantRecord, Breakend


def make_record(
        pos: int,
        alt: Union[str, Sequence[str]],
        ref: str = "N",
        record_id: Optional[str] = None,
        chrom: str = "chr1",
        **info
) -> VariantRecord:
    alts = (alt,) if isinstance(alt, str) else tuple(alt)
    return VariantRecord(chrom=chrom, pos=pos, id=record_id, ref=ref, alts=alts, info=MappingProxyType(info))


def by_id(breakends: Iterable[Breakend]) -> Dict[str, Breakend]:
    return {breakend.id: breakend for breakend in breakends}


def assert_partners_reciprocal(breakends: Sequence[Breakend]):
    lookup = by_id(breakends)
    assert len(lookup) == len(breakends), "breakend ids are not unique"
    for breakend in breakends:
        assert breakend.partner is not None, f"{breakend.id} has no partner"
        assert breakend.partner in lookup, f"{breakend.id} partner {breakend.partner} is missing"
        assert lookup[breakend.partner].partner == breakend.id, f"{breakend.id} partner does not point back"


VCF_HEADER = """##fileformat=VCFv4.2
##contig=<ID=chr1,length=1000000>
##contig=<ID=chr2,length=1000000>
##contig=<ID=chr5,length=1000000>
##ALT=<ID=DEL,Description="Deletion">
##ALT=<ID=INV,Description="Inversion">
##ALT=<ID=TRA,Description="Translocation">
##ALT=<ID=CTX,Description="Interchromosomal translocation">
##INFO=<ID=SVTYPE,Number=1,Type=String,Description="Type of structural variant">
##INFO=<ID=SVLEN,Number=.,Type=Integer,Description="Difference in length between REF and ALT alleles">
##INFO=<ID=END,Number=1,Type=Integer,Description="End position of the variant">
##INFO=<ID=CIPOS,Number=2,Type=Integer,Description="Confidence interval around POS">
##INFO=<ID=CIEND,Number=2,Type=Integer,Description="Confidence interval around END">
##INFO=<ID=CIRPOS,Number=2,Type=Integer,Description="Confidence interval around remote breakend POS">
##INFO=<ID=HOMLEN,Number=.,Type=Integer,Description="Length of base pair identical micro-homology">
##INFO=<ID=MATEID,Number=.,Type=String,Description="ID of mate breakends">
##INFO=<ID=PARID,Number=1,Type=String,Description="ID of partner breakend">
##INFO=<ID=EVENT,Number=1,Type=String,Description="ID of event associated to breakend">
##INFO=<ID=IMPRECISE,Number=0,Type=Flag,Description="Imprecise structural variation">
##INFO=<ID=CHR2,Number=1,Type=String,Description="Chromosome of the remote breakend">
##INFO=<ID=CT,Number=1,Type=String,Description="Paired-end signature induced connection type">
##INFO=<ID=INSLEN,Number=1,Type=Integer,Description="Predicted length of the insertion">
#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO
"""


def write_vcf(path: str, lines: Sequence[str]) -> str:
    with open(path, "w") as f_out:
        f_out.write(VCF_HEADER)
        for line in lines:
            f_out.write(line.rstrip("\n") + "\n")
    return path


# remote END at or before POS, on another contig
TRANSLOCATION_VCF_LINES = (
    "chr1\t5000\ttra1\tN\t<TRA>\t.\tPASS\tSVTYPE=TRA;END=300;CHR2=chr2;CT=3to5",
    "chr1\t100\ttra2\tN\t<TRA>\t.\tPASS\tSVTYPE=TRA;END=100;CHR2=chr5;CT=5to5;INSLEN=3",
    "chr2\t800\tctx1\tN\t<CTX>\t.\tPASS\tSVTYPE=CTX;END=800;CHR2=chr1",
    "chr2\t900\tctx2\tN\t<CTX>\t.\tPASS\tSVTYPE=CTX;END=20;CHR2=chr5",
)
