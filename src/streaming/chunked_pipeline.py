"""Chunked conversion of large top-level block lists.

The pipeline converts the top-level blocks in fixed-size chunks and hands
out one output fragment per chunk, in input order. Production is pulled by
the consumer: each request converts chunks until the buffer holds
`max_buffered_chunks` completed chunks (or the source ends), so at most
that many unconsumed chunks are ever held in memory.

While the buffer is full the stream reports itself paused and calls the
backpressure callback with True; once consumption drops the buffer below
the limit the callback is called with False.
"""

import logging
from collections import deque
from itertools import islice
from typing import Any, Callable, Deque, Iterator, List, Mapping, Optional, Tuple

from src.conversion.engine import BlockConverter, RenderState
from src.conversion.options import ConversionOptions
from src.models.block import Block, iter_blocks
from src.models.conversion_result import Diagnostic
from src.models.errors import InvalidInputError, InvalidOptionsError, StreamConsumedError

logger = logging.getLogger(__name__)

BackpressureCallback = Callable[[bool], None]

STATE_ACTIVE = "active"
STATE_FINISHED = "finished"
STATE_CANCELLED = "cancelled"


class ChunkStream:
    """Lazily produced, ordered chunk outputs of one conversion.

    Finite and not restartable: once finished or cancelled, iterating it
    again raises StreamConsumedError.
    """

    def __init__(self, converter: BlockConverter, state: RenderState, source: Iterator[Block],
                 chunk_size: int, max_buffered_chunks: int,
                 on_backpressure: Optional[BackpressureCallback] = None):
        self._converter = converter
        self._state = state
        self._source = source
        self.chunk_size = chunk_size
        self.max_buffered_chunks = max_buffered_chunks
        self._on_backpressure = on_backpressure
        # Completed chunks, each with the diagnostics count at its end
        self._buffer: Deque[Tuple[Any, int]] = deque()
        self._emitted_diagnostics = 0
        self._status = STATE_ACTIVE
        self._source_exhausted = False
        self._paused = False
        self._chunks_produced = 0
        self._chunks_emitted = 0
        self._blocks_consumed = 0

    def __iter__(self) -> "ChunkStream":
        if self._status != STATE_ACTIVE:
            raise StreamConsumedError(self._status)
        return self

    def __next__(self) -> Any:
        if self._status != STATE_ACTIVE:
            raise StopIteration
        if not self._buffer:
            self._produce()
        if not self._buffer:
            self._status = STATE_FINISHED
            logger.info(
                f"Chunk stream finished: {self._chunks_emitted} chunk(s), "
                f"{self._blocks_consumed} block(s)"
            )
            raise StopIteration
        chunk, self._emitted_diagnostics = self._buffer.popleft()
        self._chunks_emitted += 1
        if self._paused and len(self._buffer) < self.max_buffered_chunks:
            self._set_paused(False)
        return chunk

    def _produce(self) -> None:
        """Convert chunks until the buffer is full or the source ends."""
        while len(self._buffer) < self.max_buffered_chunks and not self._source_exhausted:
            blocks = list(islice(self._source, self.chunk_size))
            if not blocks:
                self._source_exhausted = True
                break
            start = self._blocks_consumed
            fragments = [
                self._converter.render_top_level(block, start + offset, self._state)
                for offset, block in enumerate(blocks)
            ]
            self._blocks_consumed += len(blocks)
            self._buffer.append((self._converter.finalize(fragments, self._state),
                                 len(self._state.diagnostics)))
            self._chunks_produced += 1
            logger.debug(
                f"Produced chunk {self._chunks_produced} "
                f"(blocks {start}-{self._blocks_consumed - 1})"
            )
        if len(self._buffer) >= self.max_buffered_chunks and not self._paused:
            self._set_paused(True)

    def _set_paused(self, paused: bool) -> None:
        self._paused = paused
        if self._on_backpressure is not None:
            self._on_backpressure(paused)

    def cancel(self) -> None:
        """Stop the stream at the current chunk boundary.

        Buffered chunks that were not consumed yet are discarded together
        with their diagnostics, so the emitted output and the diagnostics
        cover exactly the chunks consumed so far.
        """
        if self._status != STATE_ACTIVE:
            return
        discarded = len(self._buffer)
        self._buffer.clear()
        del self._state.diagnostics[self._emitted_diagnostics:]
        self._status = STATE_CANCELLED
        logger.info(
            f"Chunk stream cancelled after {self._chunks_emitted} chunk(s); "
            f"discarded {discarded} buffered chunk(s)"
        )

    def collect(self) -> Any:
        """Consume the remaining chunks and join them."""
        chunks = list(self)
        if self._state.node_builder is not None:
            return [node for chunk in chunks for node in chunk]
        return "".join(chunks)

    @property
    def paused(self) -> bool:
        """True while the buffer is full and production is held back."""
        return self._paused

    @property
    def cancelled(self) -> bool:
        return self._status == STATE_CANCELLED

    @property
    def finished(self) -> bool:
        return self._status == STATE_FINISHED

    @property
    def buffered_chunks(self) -> int:
        return len(self._buffer)

    @property
    def chunks_emitted(self) -> int:
        return self._chunks_emitted

    @property
    def blocks_consumed(self) -> int:
        """Top-level blocks converted so far (including buffered chunks)."""
        return self._blocks_consumed

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """Diagnostics of the converted blocks (of emitted chunks only, once cancelled)."""
        return list(self._state.diagnostics)


class ChunkedPipeline:
    """Converts block lists chunk by chunk with bounded buffering."""

    def __init__(self, converter: Optional[BlockConverter] = None, options: Any = None,
                 chunk_size: Optional[int] = None, max_buffered_chunks: Optional[int] = None,
                 on_backpressure: Optional[BackpressureCallback] = None):
        """Initialize the pipeline.

        Args:
            converter: Converter used for every chunk
            options: ConversionOptions or a mapping of options
            chunk_size: Top-level blocks per chunk (defaults to the
                streaming options)
            max_buffered_chunks: Completed chunks held before pausing
                (defaults to the streaming options)
            on_backpressure: Called with True when production pauses and
                with False when it may resume

        Raises:
            InvalidOptionsError: If options or chunk settings are invalid
        """
        self.converter = converter or BlockConverter()
        self.options = ConversionOptions.coerce(options)
        self.chunk_size = _positive(chunk_size, self.options.streaming.chunk_size, "chunk_size")
        self.max_buffered_chunks = _positive(
            max_buffered_chunks, self.options.streaming.max_buffered_chunks, "max_buffered_chunks"
        )
        self.on_backpressure = on_backpressure

    def stream(self, blocks: Any) -> ChunkStream:
        """Start a chunked conversion.

        Args:
            blocks: Any iterable of blocks or block mappings (consumed
                lazily), a single block, or a `{"blocks": [...]}` mapping

        Returns:
            ChunkStream of output fragments

        Raises:
            InvalidOptionsError: If the options are invalid
            InvalidInputError: If the input is not iterable
        """
        if isinstance(blocks, (str, bytes)) or not (
            isinstance(blocks, (Block, Mapping)) or hasattr(blocks, "__iter__")
        ):
            raise InvalidInputError(blocks)
        state = self.converter.create_state(self.options)
        logger.info(
            f"Starting chunked conversion (chunk size {self.chunk_size}, "
            f"buffer {self.max_buffered_chunks})"
        )
        return ChunkStream(
            self.converter,
            state,
            iter_blocks(blocks),
            self.chunk_size,
            self.max_buffered_chunks,
            self.on_backpressure,
        )


def _positive(value: Optional[int], default: int, option: str) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidOptionsError("must be a positive integer", f"streaming.{option}")
    return value


def convert_chunked(blocks: Any, options: Any = None,
                    converter: Optional[BlockConverter] = None) -> Iterator[Any]:
    """Yield the chunk outputs of a chunked conversion."""
    yield from ChunkedPipeline(converter, options).stream(blocks)
