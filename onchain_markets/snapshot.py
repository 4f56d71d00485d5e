"""Latest-snapshot file output. Each write replaces the previous snapshot."""

import json
import logging
import os
import tempfile
from pathlib import Path

from onchain_markets.orchestration.market_sync import SyncResult

logger = logging.getLogger(__name__)


def write_snapshot(result: SyncResult, path: str | Path) -> Path:
    """Atomically replace `path` with the JSON payload of `result`."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(result.to_dict(), fh, indent=2)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info(f"Wrote snapshot with {len(result.assets)} assets to {target}")
    return target
