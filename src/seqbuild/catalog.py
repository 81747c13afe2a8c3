# catalog.py
# The build order for the module tree. Order is the dependency order:
# a module must come after everything it builds against.
from __future__ import annotations

from typing import List

from .dsl import asset_pipeline, cross_target_build, module_build, wf
from .model import Step

LIBRARY_MODULES = [
    "sbor",
    "sbor-derive",
    "sbor-tests",
    "scrypto",
    "scrypto-derive",
    "scrypto-tests",
    "radix-engine",
    "transaction-manifest",
]

# runs after the libraries; the script uses freshly built tooling
ASSETS_DIR = "assets"

EXAMPLE_MODULES = [
    "examples/hello-world",
    "examples/no-std",
]


def default_steps() -> List[Step]:
    return wf(
        *(module_build(m) for m in LIBRARY_MODULES),
        asset_pipeline(ASSETS_DIR),
        *(cross_target_build(m) for m in EXAMPLE_MODULES),
    )
