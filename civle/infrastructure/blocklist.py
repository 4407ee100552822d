"""Name blocklist, loaded once at startup from a newline-delimited word file."""
import logging
from typing import Iterable

log = logging.getLogger("civle.blocklist")


class Blocklist:
    """Lower-cased words that may not appear anywhere in a player name."""

    def __init__(self, words: Iterable[str] = ()):
        self._words = frozenset(w.strip().lower() for w in words if w and w.strip())

    @classmethod
    def from_file(cls, path: str) -> "Blocklist":
        """Load *path*. A missing or unreadable file yields an empty blocklist."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                words = f.read().splitlines()
        except FileNotFoundError:
            log.warning("Blocklist file not found: %s (name filtering disabled)", path)
            return cls()
        except OSError as exc:
            log.error("Error reading blocklist %s: %s", path, exc)
            return cls()
        blocklist = cls(words)
        log.info("Loaded %d blocked words from %s", len(blocklist), path)
        return blocklist

    def __iter__(self):
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: str) -> bool:
        return word.lower() in self._words
