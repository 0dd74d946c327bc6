from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent.parent / "src"

IMPORT_AND_LIST = """
import sys
import ir
import merge
print("\\n".join(sorted(sys.modules)))
"""


def test_ir_import_does_not_load_parsers() -> None:
    # A fresh interpreter, so modules loaded by other tests cannot hide a leak.
    env = {**os.environ, "PYTHONPATH": str(SRC_DIR)}
    result = subprocess.run(
        [sys.executable, "-c", IMPORT_AND_LIST],
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )

    loaded = result.stdout.split()
    assert "ir.models" in loaded
    assert not [
        name
        for name in loaded
        if name == "tree_sitter"
        or name.startswith(("tree_sitter.", "tree_sitter_", "heuristics"))
    ]
