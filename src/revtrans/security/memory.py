"""Zeroizable container for key material.

Python offers no guarantee that secret bytes vanish from memory, since
immutable ``bytes`` objects may be copied or interned. SecureBytes keeps its
own mutable copy in a ``bytearray`` and overwrites it on ``zeroize()`` so the
window in which the cipher key is readable is at least bounded by the decode.
"""

from __future__ import annotations

from types import TracebackType


class SecureBytes:
    """Mutable byte buffer that can be wiped in place.

    Example:
        >>> with SecureBytes(b"key material") as key:
        ...     len(key)
        12
    """

    __slots__ = ("_buffer",)

    def __init__(self, data: bytes | bytearray) -> None:
        self._buffer = bytearray(data)

    @property
    def data(self) -> bytes:
        """Return a ``bytes`` copy of the buffer for APIs that need one."""
        return bytes(self._buffer)

    def zeroize(self) -> None:
        """Overwrite every byte with zero and drop the contents."""
        for i in range(len(self._buffer)):
            self._buffer[i] = 0
        self._buffer.clear()

    def __len__(self) -> int:
        return len(self._buffer)

    def __enter__(self) -> SecureBytes:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.zeroize()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SecureBytes):
            return self._buffer == other._buffer
        if isinstance(other, (bytes, bytearray)):
            return self._buffer == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SecureBytes(<{len(self._buffer)} bytes>)"
