import pytest

from mipdd import __version__
from mipdd.cli import main

MPS = """\
NAME cli
ROWS
 N obj
 L c1
 E c2
COLUMNS
    x obj 1 c1 1
    y c1 1 c2 1
RHS
    RHS c1 4 c2 1
ENDATA
"""


def test_version(capsys):
    main(["version"])
    out = capsys.readouterr().out
    assert f"mipdd version: {__version__}" in out


def test_stats(mps_file, capsys):
    path = mps_file(MPS, "cli.mps.gz")
    main(["stats", path])
    out = capsys.readouterr().out
    assert "Problem 'cli': 2 rows, 2 columns" in out
    assert "EQUAL=1" in out and "LESS_EQUAL=1" in out
    assert "Objective row: obj" in out


def test_stats_rational(mps_file, capsys):
    path = mps_file(MPS)
    main(["stats", "--rational", path])
    assert "3 nonzeros" in capsys.readouterr().out


def test_stats_malformed(mps_file, capsys):
    path = mps_file(MPS.replace("    x obj 1 c1 1\n", "    x obj 1 c1\n"))
    with pytest.raises(SystemExit) as excinfo:
        main(["stats", path])
    assert excinfo.value.code == 1
    assert "Error reading model" in capsys.readouterr().err


def test_stats_max_lines(mps_file, capsys):
    path = mps_file(MPS)
    with pytest.raises(SystemExit) as excinfo:
        main(["stats", "--max-lines", "3", path])
    assert excinfo.value.code == 1
    assert "longer than 3 lines" in capsys.readouterr().err


def test_missing_command():
    with pytest.raises(SystemExit):
        main([])
