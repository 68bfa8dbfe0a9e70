# SPDX-License-Identifier: AGPL-3.0-only
import logging
import time
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .builder import cmd_build

logger = logging.getLogger(__name__)

WATCHED_SUFFIXES = {".py", ".toml", ".json"}


class BuildEventHandler(FileSystemEventHandler):
    def __init__(self, args, delay=0.5, build=cmd_build, root=None):
        self.args = args
        self.root = Path(root) if root is not None else None
        self.delay = delay
        self.build = build
        self.last_build = 0.0

    def should_rebuild(self, event):
        if event.is_directory:
            return False
        path = Path(str(event.src_path))
        if self.root is not None and path.is_relative_to(self.root):
            path = path.relative_to(self.root)
        # Ignore hidden files, caches and build artifacts
        if any(part.startswith(".") or part in {"__pycache__", "dist"} for part in path.parts):
            return False
        return path.suffix in WATCHED_SUFFIXES

    def on_modified(self, event):
        if not self.should_rebuild(event):
            return

        # Debounce
        now = time.time()
        if now - self.last_build < self.delay:
            return

        print(f"[watch] Change detected in {event.src_path}...")
        try:
            self.build(self.args)
        except Exception as e:
            logger.error("rebuild after %s failed: %s", event.src_path, e)
            print(f"[error] Build failed: {e}")

        self.last_build = now

    on_created = on_modified


def cmd_watch(args):
    """Watch project directory and trigger builds on change."""
    path = Path(args.config).parent if args.config else Path.cwd()

    print(f"[watch] Watching {path} for changes...")

    # Initial build
    try:
        cmd_build(args)
    except Exception as e:
        logger.error("initial build failed: %s", e)
        print(f"[error] Initial build failed: {e}")

    event_handler = BuildEventHandler(args, root=path)
    observer = Observer()
    observer.schedule(event_handler, str(path), recursive=True)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        observer.stop()
    observer.join()
