"""Multi-source IR merge."""

from merge.merge import MergeConflictError, MergeResult, merge_ir, merge_ir_detailed

__all__ = ["MergeConflictError", "MergeResult", "merge_ir", "merge_ir_detailed"]
