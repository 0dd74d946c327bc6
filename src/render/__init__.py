"""Artifact rendering entry points."""

from render.write import IR_JSON, MODULES_DIR, JsonArtifactRenderer, Renderer

__all__ = ["IR_JSON", "MODULES_DIR", "JsonArtifactRenderer", "Renderer"]
