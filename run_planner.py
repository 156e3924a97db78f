"""
run_planner.py: CLI Entry Point

This script serves as the command-line interface entry point for the
quilt planner. It forwards execution to the CLI logic defined in
`src/quilt_planner/cli.py`.

Usage:
    python run_planner.py --input path/to/manifest.json [options]

This wrapper allows you to run the tool directly without needing to
modify PYTHONPATH or install the project as a package.

For help on available options, run:
    python run_planner.py --help
"""
import sys
# Source code in src/ subdirectory
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import quilt_planner.cli as qp_cli

if __name__ == "__main__":
    sys.exit(qp_cli.main())
