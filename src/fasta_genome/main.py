"""
Main entry point for the FastaGenome command-line tool.
Loads a FASTA file into a padded genome, writes a contig summary and statistics,
and optionally writes the normalized genome back out as FASTA.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from fasta_genome.core.models import DEFAULT_PADDING_SIZE, NAME_ENCODING, NAME_ERRORS, FastaParseOptions
from fasta_genome.parsers.fasta_parser import read_fasta_genome
from fasta_genome.reporting.report_generator import generate_report, write_genome_fasta
from fasta_genome.utils.logging import setup_logging

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="FastaGenome: Load a FASTA file into a single padded genome buffer.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Mandatory
    parser.add_argument("-f", "--fasta", required=True, help="Input genome FASTA file")

    # Optional
    parser.add_argument("-o", "--output", default="./output", help="Output directory for results")
    parser.add_argument("--chr-map", help="Tab-delimited alias file: canonical name followed by its aliases")
    parser.add_argument("--chr-tag", help="Take contig names from the '|TAG|value|' field of each header")

    # Configurable
    parser.add_argument("--terminators", default="", help="Characters that end a contig name")
    parser.add_argument("--space-is-terminator", action="store_true", help="Space and tab also end a contig name")
    parser.add_argument("--padding", type=int, default=DEFAULT_PADDING_SIZE, help="Padding bases around every contig")
    parser.add_argument("--write-fasta", action="store_true", help="Write the normalized genome to genome.fasta")
    parser.add_argument("--prefix", default="", help="Prefix for contig names in the written FASTA")
    return parser

def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    output_dir = Path(args.output)
    setup_logging(output_dir)

    logger = logging.getLogger(__name__)
    try:
        logger.info("Starting FastaGenome...")
        options = FastaParseOptions(
            piece_name_terminators=args.terminators,
            space_is_terminator=args.space_is_terminator,
            padding_size=args.padding,
            chr_tag=args.chr_tag,
            chr_map_path=args.chr_map
        )

        genome = read_fasta_genome(args.fasta, options)
        if genome is None:
            logger.error(f"Could not load genome from {args.fasta}")
            sys.exit(1)

        stats = generate_report(genome, output_dir)
        logger.info(f"Contigs: {stats['Num Contigs']}, bases: {stats['Total Bases']}, N50: {stats['N50']}")

        if args.write_fasta:
            fasta_out = output_dir / 'genome.fasta'
            with open(fasta_out, 'w', encoding=NAME_ENCODING, errors=NAME_ERRORS) as f:
                if not write_genome_fasta(genome, f, args.prefix):
                    logger.error(f"Failed to write {fasta_out}")
                    sys.exit(1)
            logger.info(f"Wrote normalized genome to {fasta_out}")

        logger.info(f"Done. Results saved in {output_dir}")
    except Exception as e:
        logger.error(f"Critical failure: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
