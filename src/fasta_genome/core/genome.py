"""
In-memory genome for FastaGenome.
A single pre-sized numpy byte buffer holding every contig plus padding, and a contig lookup table.
"""

import bisect
import logging
from typing import List, Optional, Tuple

import numpy as np

from fasta_genome.core.models import Contig

logger = logging.getLogger(__name__)

class Genome:
    """
    Flat genome buffer addressed by global offsets.

    Contigs are laid out in build order; the lookup table may later be sorted by name
    without moving any bases.
    """

    def __init__(self):
        self._bases: np.ndarray = np.zeros(0, dtype=np.uint8)
        self._n_bases = 0
        self._padding_size = 0
        self._build_order: List[Contig] = []
        self._contigs: List[Contig] = []
        self._contig_capacity = 0
        self._starts: List[int] = []
        self._sorted_names: Optional[List[str]] = None

    @classmethod
    def allocate(cls, estimated_capacity: int, contig_capacity: int, padding_size: int) -> "Genome":
        """
        Create a genome whose buffer is sized exactly once.

        :param estimated_capacity: Upper bound on bytes that will be appended (bases plus padding).
        :param contig_capacity: Expected number of contig slots, used for sanity logging only.
        :param padding_size: Size of the padding run that precedes each contig.
        :return: An empty Genome.
        """
        if estimated_capacity < 0 or padding_size < 0:
            raise ValueError("Genome capacity and padding size must be non-negative")
        genome = cls()
        genome._bases = np.empty(estimated_capacity, dtype=np.uint8)
        genome._padding_size = padding_size
        genome._contig_capacity = contig_capacity
        logger.debug(f"Allocated genome buffer of {estimated_capacity} bytes for {contig_capacity} contig slots")
        return genome

    def append(self, data: bytes):
        """
        Append bytes at the current write offset.
        """
        if not data:
            return
        end = self._n_bases + len(data)
        if end > len(self._bases):
            raise ValueError(f"Genome buffer overflow: {end} bytes exceeds capacity {len(self._bases)}")
        self._bases[self._n_bases:end] = np.frombuffer(data, dtype=np.uint8)
        self._n_bases = end

    def begin_contig(self, name: str):
        """
        Start a new contig at the current write offset.
        """
        contig = Contig(name=str(name), beginning_location=self._n_bases)
        self._build_order.append(contig)
        self._contigs.append(contig)
        self._sorted_names = None
        if len(self._build_order) > self._contig_capacity:
            logger.debug(f"Contig count {len(self._build_order)} exceeds the expected {self._contig_capacity}")

    def finalize_lengths(self):
        """
        Fill in contig lengths from consecutive offsets, excluding the padding that follows each contig.
        """
        for i, contig in enumerate(self._build_order):
            if i + 1 < len(self._build_order):
                end = self._build_order[i + 1].beginning_location
            else:
                end = self._n_bases
            contig.length = max(0, end - contig.beginning_location - self._padding_size)
        self._starts = [c.beginning_location for c in self._build_order]

    def sort_contigs_by_name(self):
        self._contigs.sort(key=lambda c: c.name)
        self._sorted_names = [c.name for c in self._contigs]

    @property
    def contig_count(self) -> int:
        return len(self._contigs)

    @property
    def contigs(self) -> Tuple[Contig, ...]:
        return tuple(self._contigs)

    @property
    def total_bases(self) -> int:
        return self._n_bases

    @property
    def padding_size(self) -> int:
        return self._padding_size

    @property
    def bases(self) -> np.ndarray:
        """Read-only view of the written part of the buffer."""
        view = self._bases[:self._n_bases]
        view.flags.writeable = False
        return view

    def substring(self, offset: int, length: int) -> bytes:
        if offset < 0 or length < 0 or offset + length > self._n_bases:
            raise IndexError(f"Range {offset}+{length} outside genome of {self._n_bases} bases")
        return self._bases[offset:offset + length].tobytes()

    def contig_sequence(self, contig: Contig) -> bytes:
        return self.substring(contig.beginning_location, contig.length)

    def get_contig_by_name(self, name: str) -> Optional[Contig]:
        if self._sorted_names is None:
            for contig in self._contigs:
                if contig.name == name:
                    return contig
            return None
        index = bisect.bisect_left(self._sorted_names, name)
        if index < len(self._sorted_names) and self._sorted_names[index] == name:
            return self._contigs[index]
        return None

    def get_contig_at_location(self, location: int) -> Optional[Contig]:
        """
        Find the contig whose span (including its trailing padding) covers a global offset.

        :param location: Offset into the flat buffer.
        :return: The covering Contig, or None for the leading padding and out-of-range offsets.
        """
        if location < 0 or location >= self._n_bases:
            return None
        if len(self._starts) != len(self._build_order):
            self._starts = [c.beginning_location for c in self._build_order]
        index = bisect.bisect_right(self._starts, location) - 1
        if index < 0:
            return None
        return self._build_order[index]
