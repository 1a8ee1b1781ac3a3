"""
Chromosome alias (chrmap) parser for FastaGenome.
Reads a tab-delimited remap file into an alias -> canonical name dictionary.
"""

import logging
import re
from typing import Dict, Optional

from fasta_genome.core.models import NAME_ENCODING, NAME_ERRORS

logger = logging.getLogger(__name__)

_TOKEN_SEPARATORS = re.compile(r"[\t\r\n]+")

def load_chr_map(chr_map_path: Optional[str]) -> Optional[Dict[str, str]]:
    """
    Parse a chrmap file. The first token on each line is the canonical name,
    every following token on that line is an alias for it.

    :param chr_map_path: Path to the chrmap file, or None/empty when no remapping is requested.
    :return: A dictionary mapping alias to canonical name, or None if the file could not be opened.
    """
    if not chr_map_path:
        return {}

    chr_map = {}
    try:
        with open(chr_map_path, "r", encoding=NAME_ENCODING, errors=NAME_ERRORS) as f:
            for line in f:
                if line.startswith("#"):
                    continue
                tokens = [t for t in _TOKEN_SEPARATORS.split(line) if t]
                if not tokens:
                    continue
                canonical = tokens[0]
                for alias in tokens[1:]:
                    chr_map[alias] = canonical
    except OSError as e:
        logger.error(f"Unable to open chrmap file '{chr_map_path}': {e}")
        return None

    logger.info(f"Loaded {len(chr_map)} contig aliases from {chr_map_path}")
    return chr_map
