import json
import os
from typing import Any

import aiofiles


async def write_json(data: Any, filepath: str) -> str:
    """Writes ``data`` as indented JSON, creating parent directories as needed."""
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    async with aiofiles.open(filepath, "w", encoding="utf-8") as f:
        await f.write(json.dumps(data, indent=2, ensure_ascii=False))

    return filepath
