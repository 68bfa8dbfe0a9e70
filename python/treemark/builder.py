# SPDX-License-Identifier: AGPL-3.0-only
import importlib
import importlib.util
import json
import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Optional

from .config import Config
from .ui import mount

logger = logging.getLogger(__name__)


def _import_from_root(module_ref: str, root: Path) -> Any:
    """Import a dotted module with ``root`` first on ``sys.path``.

    A cached module loaded from under ``root`` is dropped first so rebuilds
    pick up edits.
    """
    root = root.resolve()
    cached = sys.modules.get(module_ref)
    cached_file = getattr(cached, "__file__", None)
    if cached_file and Path(cached_file).resolve().is_relative_to(root):
        sys.modules.pop(module_ref, None)

    root_str = str(root)
    sys.path.insert(0, root_str)
    importlib.invalidate_caches()
    try:
        return importlib.import_module(module_ref)
    finally:
        sys.path.remove(root_str)


def load_entrypoint(entrypoint: str, root: Optional[Path] = None) -> Any:
    """Resolve ``module:attr`` where module is a dotted name or a ``.py`` path."""
    if ":" not in entrypoint:
        raise ValueError(f"Invalid entrypoint {entrypoint!r}; expected 'module:attribute'")
    module_ref, attr = entrypoint.rsplit(":", 1)

    if module_ref.endswith(".py"):
        module_path = Path(module_ref)
        if root is not None and not module_path.is_absolute():
            module_path = root / module_path
        if not module_path.exists():
            raise FileNotFoundError(f"Entrypoint module not found: {module_path}")
        spec = importlib.util.spec_from_file_location("_treemark_entry_module", module_path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Could not load spec for {module_path}")
        module = importlib.util.module_from_spec(spec)
        sys.modules["_treemark_entry_module"] = module
        spec.loader.exec_module(module)
    elif root is not None:
        module = _import_from_root(module_ref, Path(root))
    else:
        module = importlib.import_module(module_ref)

    if not hasattr(module, attr):
        raise ValueError(f"'{attr}' not found in {module_ref}")
    logger.debug("loaded entrypoint %s", entrypoint)
    return getattr(module, attr)


def render_target(target: Any, props: Optional[Mapping[str, Any]] = None, depth: int = 0) -> str:
    """Render an element, raw renderable, or component callable."""
    return mount(target, props, depth=depth)


def write_output(out_path: Path, text: str) -> int:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    data = text if text.endswith("\n") else text + "\n"
    out_path.write_text(data, encoding="utf-8")
    return len(data.encode("utf-8"))


def cmd_build(args):
    """Build the project based on treemark.toml."""
    config_path = Path(args.config) if args.config else None
    config = Config.load(config_path)

    if not args.json:
        sys.stdout.write(f"[build] Loading config from {config.path}\n")

    target = load_entrypoint(config.get_entrypoint(), root=config.root)
    markup = render_target(target, config.get_props(), depth=config.get_depth())

    out_path = Path(args.out) if getattr(args, "out", None) else config.get_output_path()
    bytes_written = write_output(out_path, markup)
    logger.info("built %s (%d bytes)", out_path, bytes_written)

    if args.json:
        result = {
            "schema": "treemark.build_result.v1",
            "ok": True,
            "outputs": {"markup": str(out_path)},
            "bytes_written": bytes_written,
        }
        sys.stdout.write(json.dumps(result, ensure_ascii=True) + "\n")
    else:
        sys.stdout.write(f"[ok] Built {out_path} ({bytes_written} bytes)\n")
    return bytes_written
