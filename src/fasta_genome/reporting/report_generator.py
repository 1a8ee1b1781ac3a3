"""
Report generation module for FastaGenome.
Writes the contig summary and assembly statistics tables, and writes a genome back out as FASTA.
"""

import logging
from pathlib import Path
from typing import Any, Dict, TextIO

import pandas as pd
from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from fasta_genome.core.genome import Genome
from fasta_genome.utils.stats import base_composition, calculate_assembly_stats

logger = logging.getLogger(__name__)

def contig_table(genome: Genome) -> pd.DataFrame:
    """
    Build a table of contigs in lookup-table order.

    :param genome: A finalized genome.
    :return: DataFrame with name, beginning_location and length columns.
    """
    rows = [
        {'name': c.name, 'beginning_location': c.beginning_location, 'length': c.length}
        for c in genome.contigs
    ]
    return pd.DataFrame(rows, columns=['name', 'beginning_location', 'length'])

def generate_report(genome: Genome, output_dir: Path) -> Dict[str, Any]:
    """
    Write contig_summary.tsv and assembly_stats.tsv for a genome.

    :param genome: A finalized genome.
    :param output_dir: Directory to save outputs.
    :return: Dictionary of assembly statistics and base counts.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    df_contigs = contig_table(genome)
    df_contigs.to_csv(output_dir / 'contig_summary.tsv', sep='\t', index=False, encoding='utf-8')

    stats = calculate_assembly_stats(df_contigs['length'].tolist())
    stats['Padding Size'] = genome.padding_size
    stats['Buffer Bytes'] = genome.total_bases
    stats.update({f"Count {symbol}": count for symbol, count in base_composition(genome).items()})

    df_stats = pd.DataFrame(list(stats.items()), columns=['statistic', 'value'])
    df_stats.to_csv(output_dir / 'assembly_stats.tsv', sep='\t', index=False, encoding='utf-8')

    logger.info(f"Wrote contig summary for {len(df_contigs)} contigs to {output_dir}")
    return stats

def write_genome_fasta(genome: Genome, fasta: TextIO, prefix: str = "") -> bool:
    """
    Write every contig of a genome as FASTA, in lookup-table order.
    Each sequence is written on a single line, without padding.

    :param genome: A finalized genome.
    :param fasta: Writable text stream.
    :param prefix: Prepended to each contig name in the header.
    :return: True if every record was written, False if the stream failed.
    """
    records = (
        SeqRecord(
            Seq(genome.contig_sequence(contig).decode('ascii')),
            id=f"{prefix}{contig.name}",
            description=""
        )
        for contig in genome.contigs
    )
    try:
        written = SeqIO.write(records, fasta, "fasta-2line")
    except (OSError, ValueError) as e:
        logger.error(f"Failed to write genome FASTA: {e}")
        return False
    return written == genome.contig_count
