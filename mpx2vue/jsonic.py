from __future__ import annotations

import json
from typing import Any, Optional


def dumps(obj: Any, *, indent: Optional[int] = None) -> str:
    """
    JSON-дампер для ответов CLI.
    ensure_ascii=False; завершающий перевод строки добавляет вызывающий код.
    """
    return json.dumps(obj, ensure_ascii=False, indent=indent)
