"""
Script entry for running the bundle compositor from a source checkout.

Adds ``src/`` to the import path and hands the arguments to
``bundle_compositor.composer.cli.main``, so no install is needed.

Examples:
    python run_compositor.py grid a.jpg b.jpg c.jpg --columns 2 --out bundle.jpg
    python run_compositor.py caption --caption "Spring" --font f.ttf --out c.jpg

"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import bundle_compositor.composer.cli as bc_cli  # noqa: E402

if __name__ == "__main__":
    sys.exit(bc_cli.main())
