# SPDX-License-Identifier: AGPL-3.0-only
"""treemark command line entrypoint."""
import argparse
import json
import logging
import sys
from pathlib import Path

from . import builder as builder_module
from .ui import is_component

logger = logging.getLogger(__name__)

SCHEMA_REGISTRY = {
    "render": "treemark.render_result.v1",
    "demo": "treemark.demo_result.v1",
    "build": "treemark.build_result.v1",
    "error": "treemark.error.v1",
}


def _read_json_or_path(value):
    if value is None:
        return None
    if value.startswith("@"):
        return json.loads(Path(value[1:]).read_text(encoding="utf-8"))
    return json.loads(value)


def _read_props(args):
    props = _read_json_or_path(getattr(args, "props", None))
    if props is None:
        return {}
    if not isinstance(props, dict):
        raise ValueError(f"--props must be a JSON object, got {type(props).__name__}")
    return props


def _emit_markup(command, markup, args):
    out = getattr(args, "out", None) or "-"
    if out == "-":
        if args.json:
            payload = {"schema": SCHEMA_REGISTRY[command], "ok": True, "outputs": {}, "markup": markup}
            sys.stdout.write(json.dumps(payload, ensure_ascii=True) + "\n")
        else:
            sys.stdout.write(markup + "\n")
        return
    out_path = Path(out)
    bytes_written = builder_module.write_output(out_path, markup)
    if args.json:
        payload = {
            "schema": SCHEMA_REGISTRY[command],
            "ok": True,
            "outputs": {"markup": str(out_path)},
            "bytes_written": bytes_written,
        }
        sys.stdout.write(json.dumps(payload, ensure_ascii=True) + "\n")
    else:
        sys.stdout.write(f"[ok] wrote {out_path} ({bytes_written} bytes)\n")


def cmd_render(args):
    target = builder_module.load_entrypoint(args.entrypoint, root=Path.cwd())
    markup = builder_module.render_target(target, _read_props(args), depth=args.depth)
    _emit_markup("render", markup, args)


def _demo_components():
    from .ui import demo

    return {
        name: value
        for name, value in vars(demo).items()
        if is_component(value) and getattr(value, "__module__", None) == demo.__name__
    }


def cmd_demo(args):
    components = _demo_components()
    if args.list:
        names = sorted(components)
        if args.json:
            payload = {"schema": SCHEMA_REGISTRY["demo"], "ok": True, "outputs": {}, "components": names}
            sys.stdout.write(json.dumps(payload, ensure_ascii=True) + "\n")
        else:
            for name in names:
                sys.stdout.write(name + "\n")
        return
    if args.component not in components:
        choices = ", ".join(sorted(components))
        raise ValueError(f"unknown demo component: {args.component} (expected one of {choices})")
    markup = builder_module.render_target(components[args.component], _read_props(args), depth=args.depth)
    _emit_markup("demo", markup, args)


def _add_json_flag(p):
    # SUPPRESS keeps a subcommand from resetting the global --json.
    p.add_argument("--json", action="store_true", default=argparse.SUPPRESS)


def _build_parser():
    parser = argparse.ArgumentParser(prog="treemark")
    parser.add_argument("--json", action="store_true")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_render = sub.add_parser("render", help="Render a component or element to indented markup")
    p_render.add_argument("entrypoint", help="module:attr or path/to/file.py:attr")
    p_render.add_argument("--props", help="JSON object, or @path to a JSON file")
    p_render.add_argument("--depth", type=int, default=0, help="Starting indent depth")
    p_render.add_argument("--out", default="-", help="Output path or - for stdout")
    _add_json_flag(p_render)
    p_render.set_defaults(func=cmd_render)

    p_demo = sub.add_parser("demo", help="Render the bundled demo application")
    p_demo.add_argument("--component", default="App", help="Demo component name")
    p_demo.add_argument("--list", action="store_true", help="List demo components")
    p_demo.add_argument("--props", help="JSON object, or @path to a JSON file")
    p_demo.add_argument("--depth", type=int, default=0)
    p_demo.add_argument("--out", default="-")
    _add_json_flag(p_demo)
    p_demo.set_defaults(func=cmd_demo)

    # ===== Project workflow =====
    from . import watcher as watcher_module

    p_build = sub.add_parser("build", help="Build project from treemark.toml")
    p_build.add_argument("--config", help="Path to treemark.toml")
    # Allow overriding output path
    p_build.add_argument("--out", help="Output path (overrides config)")
    _add_json_flag(p_build)
    p_build.set_defaults(func=builder_module.cmd_build)

    p_watch = sub.add_parser("watch", help="Watch project for changes and rebuild")
    p_watch.add_argument("--config", help="Path to treemark.toml")
    p_watch.add_argument("--out", help="Output path (overrides config)")
    p_watch.set_defaults(func=watcher_module.cmd_watch)

    return parser


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except Exception as exc:
        logger.error("%s failed: %s", args.command, exc)
        if args.json:
            err = {
                "schema": SCHEMA_REGISTRY["error"],
                "ok": False,
                "code": "CLI_ERROR",
                "message": str(exc),
            }
            sys.stdout.write(json.dumps(err, ensure_ascii=True) + "\n")
        else:
            sys.stderr.write(f"[error] {exc}\n")
        return 3
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
