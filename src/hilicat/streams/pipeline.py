# hilicat/streams/pipeline.py
"""
Single producer / single consumer pipeline between a reader and a sink.

The producer thread pushes raw chunks into a bounded queue (backpressure)
and closes it with an end-of-stream marker, also after a read error. The
consumer, running in the calling thread, drains the queue in order, feeds
every chunk to the highlighter and writes the result to the sink.
"""

import queue
import threading
from typing import Iterable, Optional

from ..highlighter.processor import Highlighter
from ..settings.config import StreamDefaults
from ..utils.exceptions import HiliCatError
from ..utils.logger import get_logger

# Marker put on the queue once the producer is done
_END_OF_STREAM = object()

# Seconds between checks of the stop flag while the queue is full
_PUT_TIMEOUT = 0.1


class HighlightPipeline:
    """Streams chunks through a Highlighter into a sink."""

    def __init__(
        self,
        highlighter: Highlighter,
        sink,
        queue_size: int = StreamDefaults.QUEUE_SIZE,
    ):
        self.logger = get_logger("hilicat.streams.pipeline")
        self.highlighter = highlighter
        self.sink = sink
        self._queue: "queue.Queue" = queue.Queue(maxsize=max(1, queue_size))
        self._stop = threading.Event()
        self.error: Optional[BaseException] = None
        self.chunks_processed = 0

    def _put(self, item) -> bool:
        while not self._stop.is_set():
            try:
                self._queue.put(item, timeout=_PUT_TIMEOUT)
                return True
            except queue.Full:
                continue
        return False

    def _produce(self, chunks: Iterable[bytes]) -> None:
        try:
            for chunk in chunks:
                if not self._put(chunk):
                    return
        except Exception as e:
            if self._stop.is_set():
                self.logger.debug(f"Input producer stopped: {e}")
                return
            self.error = e
            self.logger.error(
                f"Input producer failed: {e}", exc_info=not isinstance(e, HiliCatError)
            )
        finally:
            self._put(_END_OF_STREAM)

    def _consume(self) -> bool:
        while True:
            item = self._queue.get()
            if item is _END_OF_STREAM:
                break
            output = self.highlighter.process_content(item, final=False)
            self.chunks_processed += 1
            if output and not self.sink.write(output):
                self.logger.debug("Sink closed, stopping pipeline")
                return False

        tail = self.highlighter.flush()
        if tail:
            self.sink.write(tail)
        return True

    def run(self, chunks: Iterable[bytes]) -> bool:
        """
        Process every chunk and wait for the producer to finish.

        Returns:
            True if the input was read to the end without errors.
        """
        producer = threading.Thread(
            target=self._produce,
            args=(chunks,),
            name="hilicat-reader",
            daemon=True,
        )
        producer.start()
        drained = False
        try:
            drained = self._consume()
        finally:
            self._stop.set()
        # A producer blocked on input is left behind once the sink is gone.
        if drained:
            producer.join()

        self.logger.debug(
            f"Pipeline finished after {self.chunks_processed} chunks "
            f"({self.highlighter.line_number} numbered lines)"
        )
        return self.error is None


__all__ = ["HighlightPipeline"]
