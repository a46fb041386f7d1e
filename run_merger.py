"""
run_merger.py: CLI Entry Point

This script serves as the command-line interface entry point for the
image merger. It forwards execution to the CLI logic defined in
`src/image_merger/cli.py`.

Usage:
    python run_merger.py img1.jpg img2.png -o merged.png
    python run_merger.py --dir ./photos -o merged_photos.png

This wrapper allows you to run the tool directly without needing to
modify PYTHONPATH or install the project as a package.

For help on available options, run:
    python run_merger.py --help
"""
import sys
# Source code in src/ subdirectory
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import image_merger.cli as im_cli

if __name__ == "__main__":
    sys.exit(im_cli.main())
