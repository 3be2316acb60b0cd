from __future__ import annotations
import nox
from pathlib import Path

PYTHON_VERSIONS = ["3.8", "3.9", "3.10", "3.11", "3.12", "3.13"]


@nox.session(python=PYTHON_VERSIONS, reuse_venv=False)
def pytest(session):

    # Install mipdd
    mipdd_dir = Path(__file__).parent.parent
    session.install("-e", f"{mipdd_dir}[test]", "--no-cache")

    # Install pytest dependencies
    session.install("pytest-xdist", "--no-cache")

    # Create results directory if needed
    results_dir = mipdd_dir / "test_results"
    results_dir.mkdir(parents=True, exist_ok=True)

    # Run pytest and save results
    import multiprocessing
    session.chdir(str(mipdd_dir))
    result_file = results_dir / f"results_py{session.python.replace('.', '')}.txt"
    with result_file.open("w") as f:
        session.run(
            "pytest",
            "-n", str(max(1, multiprocessing.cpu_count()-2)),
            "tests",
            stdout=f,
        )
    session.log(f"Saved test results to {result_file}")
