from __future__ import annotations

from pathlib import Path

from framer.config import settings

_OUTPUT_SUFFIXES = {".png", ".jpg", ".jpeg", ".webp", ".bmp", ".tif", ".tiff"}


def allowed_roots() -> tuple[Path, ...]:
    # dict keeps order and drops duplicates when storage_root is data/.
    roots = dict.fromkeys(Path(root).resolve() for root in ("data", settings.storage_root))
    return tuple(roots)


def _resolve_inside_roots(path_str: str, role: str) -> Path:
    if not path_str.strip():
        raise ValueError(f"{role} path is empty")
    p = Path(path_str).resolve()
    if not any(p.is_relative_to(root) for root in allowed_roots()):
        raise ValueError(f"{role} path outside storage roots: {path_str}")
    return p


def ensure_safe_input_path(path_str: str) -> str:
    """Resolve a client-supplied image path, refusing anything outside the storage roots."""
    p = _resolve_inside_roots(path_str, "input")
    if not p.is_file():
        raise FileNotFoundError(f"input image not found: {path_str}")
    return str(p)


def ensure_safe_output_path(path_str: str) -> str:
    p = _resolve_inside_roots(path_str, "output")
    if p.suffix.lower() not in _OUTPUT_SUFFIXES:
        raise ValueError(f"unsupported output format: {p.suffix or '(none)'}")
    p.parent.mkdir(parents=True, exist_ok=True)
    return str(p)
