# SPDX-License-Identifier: AGPL-3.0-only
from pathlib import Path
from typing import Dict, Optional, Any
try:
    import tomllib
except ImportError:
    import tomli as tomllib

CONFIG_FILENAME = "treemark.toml"

# Default configuration structure
DEFAULT_CONFIG = {
    "project": {
        "entrypoint": "app.py:App",
    },
    "build": {
        "output": "dist/app.html",
        "props": {},
        "depth": 0,
    },
}

class Config:
    def __init__(self, data: Dict[str, Any], path: Path):
        self.data = data
        self.path = path
        self.root = path.parent

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """Load configuration from treemark.toml."""
        if path is None:
            path = Path.cwd() / CONFIG_FILENAME
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"No {CONFIG_FILENAME} found at {path}.")

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Failed to parse {path}: {e}")

        return cls(data, path)

    @property
    def project(self) -> Dict[str, Any]:
        return self.data.get("project", {})

    @property
    def build(self) -> Dict[str, Any]:
        return self.data.get("build", {})

    def resolve_path(self, relative_path: str) -> Path:
        return self.root / relative_path

    # Helpers for common fields
    def get_output_path(self) -> Path:
        out = self.build.get("output", DEFAULT_CONFIG["build"]["output"])
        return self.resolve_path(out)

    def get_entrypoint(self) -> str:
        return self.project.get("entrypoint", DEFAULT_CONFIG["project"]["entrypoint"])

    def get_props(self) -> Dict[str, Any]:
        props = self.build.get("props", DEFAULT_CONFIG["build"]["props"])
        if not isinstance(props, dict):
            raise ValueError(f"build.props in {self.path} must be a table, got {type(props).__name__}")
        return dict(props)

    def get_depth(self) -> int:
        depth = self.build.get("depth", DEFAULT_CONFIG["build"]["depth"])
        if not isinstance(depth, int) or isinstance(depth, bool) or depth < 0:
            raise ValueError(f"build.depth in {self.path} must be a non-negative integer")
        return depth
