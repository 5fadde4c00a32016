import json
import os
from pathlib import Path
import tempfile
from typing import Any, Callable, Optional


def write_json(path: str | Path, data: Any) -> None:
    """
    Atomically write `data` as JSON, creating parent directories.

    Readers see either the previous file or the complete new one: the
    document goes to a temporary sibling first and is moved into place with
    os.replace.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=target.parent,
        prefix=f".{target.name}.",
        suffix=".tmp",
        delete=False,
    ) as tmp:
        try:
            json.dump(data, tmp, ensure_ascii=False, indent=2)
            tmp.flush()
            os.fsync(tmp.fileno())
        except BaseException:
            tmp.close()
            Path(tmp.name).unlink(missing_ok=True)
            raise

    os.replace(tmp.name, target)


def read_json(
    path: str | Path,
    default: Any = None,
    *,
    on_error: Optional[Callable[[Exception], None]] = None,
) -> Any:
    """
    Load a JSON file, returning `default` when it is missing or invalid.

    on_error is called with the decode error so callers can tell a corrupt
    file from an absent one.
    """
    source = Path(path)
    if not source.exists():
        return default
    try:
        return json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        if on_error:
            on_error(e)
        return default
