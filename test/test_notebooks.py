import os
import runpy
import sys
from contextlib import contextmanager
from pathlib import Path

import matplotlib.pyplot as plt
import pytest

# Find all example scripts
notebook_dir = Path(__file__).parent.parent / "examples"
notebook_scripts = sorted(
    x.name for x in notebook_dir.iterdir() if x.is_dir() and (x / "example.py").exists()
)


@contextmanager
def _cwd(directory):
    """Modify working directory and sys.path temporarily"""
    cwd = Path.cwd()
    os.chdir(directory)
    sys.path.insert(0, str(directory))
    try:
        yield
    finally:
        sys.path.pop(0)
        os.chdir(cwd)


def test_all_walkthroughs_found():
    assert notebook_scripts == [
        "1_differential_equations",
        "2_chaos",
        "3_sindy",
        "4_hybrid_training",
    ]


@pytest.mark.parametrize("directory", notebook_scripts)
@pytest.mark.notebooks
def test_notebook_script(directory: str):
    # Run with reduced budgets: the scripts check for run_name == "testing"
    with _cwd(notebook_dir / directory):
        try:
            runpy.run_path(
                str(notebook_dir / directory / "example.py"), run_name="testing"
            )
        except SystemExit:
            pass
        finally:
            plt.close("all")
