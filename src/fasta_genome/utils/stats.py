"""
Genome statistics utilities.
Includes N50-style contig length statistics and base composition.
"""

import numpy as np
from typing import Dict, List

from fasta_genome.core.genome import Genome

COMPOSITION_SYMBOLS = "ACGTNn"

def calculate_assembly_stats(lengths: List[int]) -> Dict[str, int]:
    """
    Calculate assembly statistics (N50, N60, N70, N80, N90, N100) and total bases.

    :param lengths: List of contig lengths.
    :return: Dictionary with stats.
    """
    if not lengths:
        return {f"N{i}": 0 for i in range(50, 110, 10)} | {"Total Bases": 0, "Num Contigs": 0}

    lengths_sorted = np.sort(np.asarray(lengths, dtype=np.int64))[::-1]
    total_bases = int(lengths_sorted.sum())
    cumulative = np.cumsum(lengths_sorted)

    stats = {
        "Total Bases": total_bases,
        "Num Contigs": len(lengths_sorted)
    }

    for nx in range(50, 110, 10):
        # First contig at which the cumulative length reaches nx% of the total
        index = int(np.searchsorted(cumulative, total_bases * (nx / 100.0), side="left"))
        index = min(index, len(lengths_sorted) - 1)
        stats[f"N{nx}"] = int(lengths_sorted[index])
        stats[f"N{nx}_count"] = index + 1

    return stats

def base_composition(genome: Genome) -> Dict[str, int]:
    """
    Count each stored symbol over all contig spans, ignoring padding.

    :param genome: A finalized genome.
    :return: Dictionary mapping symbol to count.
    """
    counts = np.zeros(256, dtype=np.int64)
    bases = genome.bases
    for contig in genome.contigs:
        span = bases[contig.beginning_location:contig.beginning_location + contig.length]
        counts += np.bincount(span, minlength=256)
    return {symbol: int(counts[ord(symbol)]) for symbol in COMPOSITION_SYMBOLS}
