"""
FASTA genome parser for FastaGenome.
Streams a FASTA file into a single padded genome buffer: size estimation, contig counting,
contig name resolution (delimiter or tag style), alias remapping and base normalization.
"""

import logging
import os
from typing import BinaryIO, Dict, FrozenSet, Optional, Tuple

from fasta_genome.core.genome import Genome
from fasta_genome.core.models import AssemblerState, FastaParseOptions, NAME_ENCODING, NAME_ERRORS, PADDING_BASE
from fasta_genome.parsers.chrmap_parser import load_chr_map

logger = logging.getLogger(__name__)

HEADER_SIGIL = b">"

class FastaFormatError(ValueError):
    """Raised when the FASTA file violates the record structure."""

class FastaTagError(FastaFormatError):
    """Raised when a tag-style header is missing the tag or is badly formatted."""

def estimate_genome_size(fasta_path: str) -> int:
    """
    Upper bound on the number of bases in a FASTA file: its size in bytes.

    :param fasta_path: Path to the FASTA file.
    :return: File size in bytes.
    """
    return os.path.getsize(fasta_path)

def count_contigs(fasta_file: BinaryIO) -> int:
    """
    Count header lines, then rewind the file so it can be read again from the start.

    :param fasta_file: FASTA file opened in binary mode, positioned at the start.
    :return: Number of lines starting with '>'.
    """
    n_contigs = sum(1 for line in fasta_file if line.startswith(HEADER_SIGIL))
    fasta_file.seek(0)
    return n_contigs

def find_tag_value(header: str, tag: str) -> Optional[Tuple[int, int]]:
    """
    Locate the value of a tag in a header of the form ">...|TAG|value|...".
    The tag must be preceded by '>' or '|' and followed by '|'.

    :param header: Header line, including the leading '>'.
    :param tag: Tag name to look for.
    :return: (start, length) of the value within the header, or None if the tag is absent.
    :raises FastaTagError: If the tag is found but its value has no closing '|'.
    """
    if not tag:
        raise ValueError("Tag name must not be empty")

    search_from = 1
    while True:
        tag_start = header.find(tag, search_from)
        if tag_start < 0:
            return None
        tag_end = tag_start + len(tag)
        if header[tag_start - 1] in ">|" and header[tag_end:tag_end + 1] == "|":
            break
        search_from = tag_start + 1

    value_start = tag_end + 1
    value_end = header.find("|", value_start)
    if value_end < 0:
        raise FastaTagError(f"Badly formatted tag '{tag}' in contig '{header[1:].rstrip()}'")
    return value_start, value_end - value_start

def extract_contig_name(header: str, options: FastaParseOptions) -> str:
    """
    Resolve the raw contig name from a header line.

    Without a tag, the name runs from after '>' to the earliest terminator character,
    space/tab (if enabled), or line ending. With a tag, the name is the tag's value.

    :param header: Header line, including the leading '>'.
    :param options: Parse options.
    :return: The contig name, before alias remapping.
    """
    if options.chr_tag:
        location = find_tag_value(header, options.chr_tag)
        if location is None:
            raise FastaTagError(f"Unable to find tag '{options.chr_tag}' in contig '{header[1:].rstrip()}'")
        start, length = location
        return header[start:start + length]

    terminator = len(header)
    stops = list(options.piece_name_terminators or "")
    if options.space_is_terminator:
        stops += [" ", "\t"]
    stops += ["\n", "\r"]
    for ch in stops:
        p = header.find(ch, 1)
        if 0 <= p < terminator:
            terminator = p
    return header[1:terminator]

def genome_character_set() -> FrozenSet[int]:
    """Byte values accepted as genome symbols."""
    return frozenset(b"ATCGNatcgn")

def build_normalization_table(valid_characters: FrozenSet[int]) -> bytes:
    """
    Build a bytes.translate table: upper-case everything, store N as 'n',
    and turn anything outside the valid set into 'N'.
    """
    table = bytearray(256)
    for b in range(256):
        upper = bytes([b]).upper()[0]
        if upper == ord("N"):
            table[b] = ord("n")
        elif upper in valid_characters:
            table[b] = upper
        else:
            table[b] = ord("N")
    return bytes(table)

class FastaAssembler:
    """
    Streaming assembler that turns FASTA lines into a padded genome.

    One instance handles one parse; the invalid-base warning is issued at most once per instance.
    """

    def __init__(
        self,
        genome: Genome,
        options: FastaParseOptions,
        chr_map: Optional[Dict[str, str]] = None,
        valid_characters: Optional[FrozenSet[int]] = None
    ):
        self.genome = genome
        self.options = options
        self.chr_map = chr_map or {}
        valid = valid_characters if valid_characters is not None else genome_character_set()
        self._valid_bytes = bytes(sorted(valid))
        self._normalization_table = build_normalization_table(valid)
        self._padding = PADDING_BASE * options.padding_size
        self.state = AssemblerState.BEFORE_FIRST_CONTIG
        self.warning_issued = False

    def assemble(self, fasta_file: BinaryIO) -> Genome:
        """
        Read every line of a rewound FASTA file into the genome and finalize it.

        :param fasta_file: FASTA file opened in binary mode, positioned at the start.
        :return: The populated genome, with contigs sorted by name.
        """
        if fasta_file.tell() != 0:
            raise ValueError("FASTA file must be rewound to the start before assembly")

        for line in fasta_file:
            if line.startswith(HEADER_SIGIL):
                self.add_header(line)
            else:
                self.add_sequence(line)

        self.finish()
        return self.genome

    def add_header(self, line: bytes):
        header = line.decode(NAME_ENCODING, errors=NAME_ERRORS)
        name = extract_contig_name(header, self.options)
        name = self.chr_map.get(name, name)
        if not name:
            raise FastaFormatError(f"Empty contig name in header '{header.rstrip()}'")

        self.state = AssemblerState.IN_CONTIG
        # Every contig, the first included, starts right after a padding run
        self.genome.append(self._padding)
        if self.options.alt_map is not None:
            self.options.alt_map.on_fasta_contig(header.rstrip("\r\n"), name)
        self.genome.begin_contig(name)

    def add_sequence(self, line: bytes):
        if self.state is AssemblerState.BEFORE_FIRST_CONTIG:
            if not line.strip(b"\r\n"):
                return
            raise FastaFormatError(
                "FASTA file doesn't begin with a contig name (i.e., the first line doesn't start with '>')"
            )

        if line.endswith(b"\n"):
            line = line[:-1]
            if line.endswith(b"\r"):
                line = line[:-1]

        if not self.warning_issued:
            stray = line.translate(None, self._valid_bytes)
            if stray:
                logger.warning(
                    f"FASTA file contained a character that's not a valid base (or N): "
                    f"'{chr(stray[:1].upper()[0])}', full line '{line.decode('utf-8', errors='replace')}'; "
                    f"converting to 'N'. This may happen again, but there will be no more warnings."
                )
                self.warning_issued = True

        self.genome.append(line.translate(self._normalization_table))

    def finish(self):
        self.genome.append(self._padding)
        self.genome.finalize_lengths()
        if self.options.alt_map is not None:
            self.options.alt_map.post_adjust(self.genome)
        self.genome.sort_contigs_by_name()

def read_fasta_genome(fasta_path: str, options: Optional[FastaParseOptions] = None) -> Optional[Genome]:
    """
    Parse a FASTA file into a padded, name-sorted genome.

    :param fasta_path: Path to the FASTA file.
    :param options: Parse options; defaults are used when omitted.
    :return: The genome, or None if the FASTA or chrmap file could not be opened.
    :raises FastaFormatError: If the file is not well-formed FASTA or a tag cannot be resolved.
    """
    options = options or FastaParseOptions()

    try:
        file_size = estimate_genome_size(fasta_path)
    except OSError as e:
        logger.error(f"Unable to get the size of FASTA file '{fasta_path}': {e}")
        return None

    chr_map = load_chr_map(options.chr_map_path)
    if chr_map is None:
        return None

    try:
        fasta_file = open(fasta_path, "rb")
    except OSError as e:
        logger.error(f"Unable to open FASTA file '{fasta_path}' (even though we already got its size): {e}")
        return None

    with fasta_file:
        n_contigs = count_contigs(fasta_file)
        padding_total = (n_contigs + 1) * options.padding_size
        genome = Genome.allocate(file_size + padding_total, n_contigs + 1, options.padding_size)
        FastaAssembler(genome, options, chr_map).assemble(fasta_file)

    logger.info(f"Loaded {genome.contig_count} contigs, {genome.total_bases} bases (with padding) from {fasta_path}")
    return genome
