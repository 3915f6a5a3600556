# consultoria/infrastructure/log.py
#
# Process logger for the API.
#
# Design decisions:
#   - log() is the only output channel. Request handlers run in the
#     threadpool and the link sweep runs in a worker thread, so writes are
#     serialised with a lock.
#   - The server stays up for days: elapsed time is shown as h:mm:ss since
#     process start.
#   - request_id tags every line of one form submission so they can be
#     grepped together.
from __future__ import annotations

import sys
import threading
import time

_start = time.monotonic()
_lock = threading.Lock()


def log(message: str, request_id: str | None = None) -> None:
    elapsed = int(time.monotonic() - _start)
    horas, resto = divmod(elapsed, 3600)
    minutos, segundos = divmod(resto, 60)
    prefixo = f"[aporte {horas}:{minutos:02d}:{segundos:02d}]"
    if request_id:
        prefixo = f"{prefixo} [{request_id}]"
    with _lock:
        sys.stdout.write(f"{prefixo} {message}\n")
        sys.stdout.flush()
