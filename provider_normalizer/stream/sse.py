"""
Server-Sent Events Decoding

Extracts data payloads from SSE framing, either from raw transport chunks or
from an already line-split stream.
"""

import codecs
from typing import AsyncIterable, AsyncIterator, Iterable, Iterator, List, Optional, Union

DONE_MARKER = "[DONE]"


class SSEDecoder:
    """
    Incremental SSE framing for transport chunks.

    Chunks may be bytes or text and may split an event, a line or a UTF-8
    sequence anywhere. Each completed event yields the newline-joined values
    of its `data:` fields; events without data are dropped.
    """

    def __init__(self) -> None:
        self._text = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""

    def feed(self, chunk: Union[bytes, str]) -> List[str]:
        """Buffer a chunk and return the data of every event it completes."""
        if not chunk:
            return []
        if isinstance(chunk, bytes):
            chunk = self._text.decode(chunk)

        # A trailing \r may be the first half of a CRLF split across chunks
        text = (self._pending + chunk).replace("\r\n", "\n")
        *events, self._pending = text.split("\n\n")
        return [data for data in map(self._event_data, events) if data is not None]

    @staticmethod
    def _event_data(event: str) -> Optional[str]:
        values = []
        for line in event.split("\n"):
            field, _, value = line.partition(":")
            if field == "data":
                values.append(value[1:] if value.startswith(" ") else value)
        return "\n".join(values) if values else None


def _data_from_line(line: str) -> Optional[str]:
    if not line.startswith("data: "):
        return None
    data = line[6:].strip()
    if not data or data == DONE_MARKER:
        return None
    return data


def iter_data_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield the payload of every non-empty `data: ` line, skipping [DONE]."""
    for line in lines:
        data = _data_from_line(line)
        if data is not None:
            yield data


async def aiter_data_lines(lines: AsyncIterable[str]) -> AsyncIterator[str]:
    """Async counterpart of iter_data_lines."""
    async for line in lines:
        data = _data_from_line(line)
        if data is not None:
            yield data
