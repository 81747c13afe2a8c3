# seqbuild_workflow.py
# Builds the module tree next to this file: libraries first, then assets,
# then the wasm examples. Run with `seqbuild run` or `python seqbuild_workflow.py`.
from __future__ import annotations

import sys

from seqbuild.catalog import default_steps
from seqbuild.runner import build_main


def workflow():
    return default_steps()


if __name__ == "__main__":
    sys.exit(build_main(__file__, workflow()))
