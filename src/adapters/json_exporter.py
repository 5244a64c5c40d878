"""JSON export of API responses.

Why JSON:
- Later pipeline steps (asset upload, notifications) read the release id and
  `upload_url` from the file instead of calling the API again.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from core.domain.models import ResponseDescriptor


def export_responses_json(*, responses: Sequence[ResponseDescriptor], output_path: Path) -> Path:
    """Write response bodies to UTF-8 JSON (a single object when there is one)."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    bodies = [
        r.body if not isinstance(r.body, (bytes, bytearray)) else None
        for r in responses
    ]
    payload = bodies[0] if len(bodies) == 1 else bodies
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
