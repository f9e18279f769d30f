"""Chunked, backpressure-aware conversion of large block lists."""

from .chunked_pipeline import ChunkedPipeline, ChunkStream, convert_chunked

__all__ = ["ChunkedPipeline", "ChunkStream", "convert_chunked"]
