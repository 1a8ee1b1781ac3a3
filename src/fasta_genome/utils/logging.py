"""
Logging utilities for FastaGenome.
Sets up multi-level logging to console and file.
"""

import logging
import sys
from pathlib import Path

def setup_logging(output_dir: Path) -> Path:
    """
    Setup logging to both stdout (INFO) and log.txt (DEBUG) in output directory.

    :param output_dir: Directory to save log.txt.
    :return: Path of the log file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    log_file = output_dir / "log.txt"

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    # Console handler (INFO)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)

    # File handler (DEBUG)
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    # Remove existing handlers
    for h in root.handlers[:]:
        root.removeHandler(h)
        h.close()
    root.addHandler(console_handler)
    root.addHandler(file_handler)

    root.info(f"Logging initialized. Log file: {log_file}")

    return log_file
