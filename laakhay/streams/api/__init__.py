"""High-level API facades."""

from .pipeline_builder import PipelineBuilder

__all__ = ["PipelineBuilder"]
