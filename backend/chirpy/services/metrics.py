"""Request hit counting for the static file server."""
import threading


class HitCounter:
    """Thread-safe counter, held on ``app.state`` rather than as a global."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._hits = 0

    def increment(self) -> int:
        with self._lock:
            self._hits += 1
            return self._hits

    def reset(self) -> None:
        with self._lock:
            self._hits = 0

    @property
    def value(self) -> int:
        with self._lock:
            return self._hits


def render_metrics_page(hits: int) -> str:
    """Admin page showing the hit count."""
    return f"""
<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
  </body>
</html>
"""
