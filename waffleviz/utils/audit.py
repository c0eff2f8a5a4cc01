from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


class AuditLogger:
    """Persist waffle layout artifacts for later inspection."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def persist(
        self,
        run_inputs: Dict[str, Any],
        layout: Dict[str, Any],
        png_bytes: Optional[bytes] = None,
    ) -> Path:
        run_id = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        run_dir = self.root / run_id
        run_dir.mkdir(parents=True, exist_ok=False)

        self._write_json(run_dir / "inputs.json", run_inputs)
        self._write_json(run_dir / "grid.json", layout.get("grid", {}))
        self._write_json(run_dir / "legend.json", layout.get("legend", []))
        self._write_json(run_dir / "domains.json", layout.get("domains", {}))

        if png_bytes:
            (run_dir / "chart.png").write_bytes(png_bytes)

        return run_dir

    def _write_json(self, path: Path, data: Any) -> None:
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2, default=str), encoding="utf-8")
