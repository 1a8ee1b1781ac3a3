import logging

import pandas as pd
import pytest
from fasta_genome.main import main

@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for h in root.handlers[:]:
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)

def test_full_pipeline(tmp_path, restore_logging):
    fasta = tmp_path / "genome.fa"
    fasta.write_text(">gi|1|ref|NC_2|x\nACGTN\n>gi|2|ref|NC_1|y\nttga\n")
    chr_map = tmp_path / "chr.map"
    chr_map.write_text("chr1\tNC_1\nchr2\tNC_2\n")
    output_dir = tmp_path / "output"

    main([
        "-f", str(fasta),
        "-o", str(output_dir),
        "--chr-tag", "ref",
        "--chr-map", str(chr_map),
        "--padding", "8",
        "--write-fasta",
        "--prefix", "hs_"
    ])

    assert (output_dir / "log.txt").exists()
    summary = pd.read_csv(output_dir / "contig_summary.tsv", sep="\t")
    assert summary["name"].tolist() == ["chr1", "chr2"]
    assert summary["length"].tolist() == [4, 5]
    assert (output_dir / "genome.fasta").read_text() == ">hs_chr1\nTTGA\n>hs_chr2\nACGTn\n"

def test_missing_fasta_exits(tmp_path, restore_logging):
    with pytest.raises(SystemExit) as exc:
        main(["-f", str(tmp_path / "missing.fa"), "-o", str(tmp_path / "output")])
    assert exc.value.code == 1

def test_format_error_exits(tmp_path, restore_logging):
    fasta = tmp_path / "genome.fa"
    fasta.write_text("ACGT\n")
    with pytest.raises(SystemExit) as exc:
        main(["-f", str(fasta), "-o", str(tmp_path / "output")])
    assert exc.value.code == 1
