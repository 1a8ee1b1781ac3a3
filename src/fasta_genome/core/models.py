"""
Data models for FastaGenome.
Defines the Contig record, parse options, assembler state and the alt-contig sink interface.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

DEFAULT_PADDING_SIZE = 500
PADDING_BASE = b"n"
# Undecodable bytes in contig and alias names are kept as surrogates
NAME_ENCODING = "utf-8"
NAME_ERRORS = "surrogateescape"

class AssemblerState(Enum):
    """
    Enum representing where the streaming assembler is in the FASTA file.
    """
    BEFORE_FIRST_CONTIG = "BEFORE_FIRST_CONTIG"
    IN_CONTIG = "IN_CONTIG"

@dataclass
class Contig:
    """
    A named contig and its offset into the flat genome buffer.
    """
    name: str
    beginning_location: int
    length: int = 0

    def __post_init__(self):
        if not self.name:
            raise ValueError("Contig name must not be empty")

class AltContigSink(Protocol):
    """
    Receives every FASTA header while parsing and a final pass over the built genome.
    """
    def on_fasta_contig(self, raw_header: str, name: str) -> None: ...
    def post_adjust(self, genome) -> None: ...

@dataclass
class FastaParseOptions:
    """
    Options controlling contig name resolution and padding.
    """
    piece_name_terminators: str = ""
    space_is_terminator: bool = False
    padding_size: int = DEFAULT_PADDING_SIZE
    chr_tag: Optional[str] = None
    chr_map_path: Optional[str] = None
    alt_map: Optional[AltContigSink] = None

    def __post_init__(self):
        if self.padding_size < 0:
            raise ValueError(f"padding_size must be non-negative, got {self.padding_size}")
