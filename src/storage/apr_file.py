"""JSON file output for LP APRs"""
import json
import logging
import os
import tempfile
import threading
from decimal import Decimal
from pathlib import Path
from typing import Dict, Union

from src.adapters.base import AprMap

logger = logging.getLogger(__name__)

_locks: Dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _locks_guard:
        return _locks.setdefault(path.resolve(), threading.Lock())


def _to_json_number(value: Decimal) -> Union[int, float]:
    """Emit integral values as ints (``0``) and the rest as floats (``5.21``)"""
    if not value.is_finite():
        raise ValueError(f"APR is not a finite number: {value}")
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def output_path_for(chain_id: int, output_dir: Union[str, Path]) -> Path:
    return Path(output_dir) / f"{int(chain_id)}.json"


def serialize_aprs(aprs: AprMap) -> str:
    """Pretty-print an APR map, newline-terminated."""
    payload = {address: _to_json_number(apr) for address, apr in aprs.items()}
    return json.dumps(payload, indent=2, allow_nan=False) + "\n"


def write_apr_file(path: Union[str, Path], aprs: AprMap) -> Path:
    """
    Overwrite ``path`` with the APR map.

    Writes within this process are serialized per file and every write
    replaces the file atomically, so readers never see a partial file.
    """
    path = Path(path)
    content = serialize_aprs(aprs)
    path.parent.mkdir(parents=True, exist_ok=True)

    with _lock_for(path):
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w') as f:
                f.write(content)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    logger.info("%s has been updated with %d APRs", path, len(aprs))
    return path
