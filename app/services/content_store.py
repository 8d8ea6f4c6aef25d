"""Content-addressed blob store for evidence files."""

import hashlib
import threading


def content_hash(content: bytes) -> str:
    """SHA-256 hex digest of ``content``."""
    return hashlib.sha256(content).hexdigest()


class ContentStore:
    """In-memory store addressed by the SHA-256 of each blob.

    Putting the same bytes twice yields the same address and stores them once.
    """

    ADDRESS_PREFIX = "sha256:"

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._blobs)

    def put(self, content: bytes) -> str:
        address = f"{self.ADDRESS_PREFIX}{content_hash(content)}"
        with self._lock:
            self._blobs.setdefault(address, content)
        return address

    def get(self, address: str) -> bytes:
        """Return the blob at ``address``. Raises KeyError if absent."""
        with self._lock:
            return self._blobs[address]

    def __contains__(self, address: object) -> bool:
        return address in self._blobs
