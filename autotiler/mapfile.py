"""JSON map manifest: layer grids plus the ordered autotile list.

Example::

    {
      "width": 3,
      "height": 3,
      "autotiles": [{"name": "grass", "file": "grass.png"}],
      "layers": [[-1, -1, -1, -1, -1, -1, -1, -1, -1]]
    }

The order of ``autotiles`` defines the slot of each autotile.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from .autotile import Autotile
from .layer import LayerSize, check_layer
from .registry import AutotileRegistry


@dataclass
class AutotileRef:
    name: str
    file: str
    padding: int | None = None


@dataclass
class MapManifest:
    size: LayerSize
    autotiles: list[AutotileRef] = field(default_factory=list)
    layers: list[list[int]] = field(default_factory=list)

    def to_json(self) -> dict:
        refs = []
        for ref in self.autotiles:
            entry: dict = {"name": ref.name, "file": ref.file}
            if ref.padding is not None:
                entry["padding"] = ref.padding
            refs.append(entry)
        return {
            "width": self.size.width,
            "height": self.size.height,
            "autotiles": refs,
            "layers": self.layers,
        }


def parse_map_manifest(path: Path) -> MapManifest:
    """Parse and validate a map manifest file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    for key in ("width", "height", "layers"):
        if key not in data:
            raise ValueError(f"Missing '{key}' in {path}")

    size = LayerSize(int(data["width"]), int(data["height"]))

    refs: list[AutotileRef] = []
    for idx, entry in enumerate(data.get("autotiles", [])):
        if isinstance(entry, str):
            entry = {"file": entry}
        if "file" not in entry:
            raise ValueError(f"Autotile #{idx}: missing required field 'file'")
        name = entry.get("name") or Path(entry["file"]).stem
        padding = entry.get("padding")
        refs.append(
            AutotileRef(
                name=name,
                file=entry["file"],
                padding=None if padding is None else int(padding),
            )
        )

    layers: list[list[int]] = []
    for idx, raw in enumerate(data["layers"]):
        layer = [int(v) for v in raw]
        try:
            check_layer(layer, size)
        except ValueError as exc:
            raise ValueError(f"Layer #{idx}: {exc}") from exc
        layers.append(layer)

    return MapManifest(size=size, autotiles=refs, layers=layers)


def write_map_manifest(manifest: MapManifest, path: Path) -> None:
    Path(path).write_text(
        json.dumps(manifest.to_json(), indent=2) + "\n", encoding="utf-8"
    )


def load_registry(manifest: MapManifest, base_dir: Path) -> AutotileRegistry:
    """Load every autotile a manifest references, in slot order."""
    registry = AutotileRegistry()
    for ref in manifest.autotiles:
        registry.add(
            Autotile.open(base_dir / ref.file, name=ref.name, padding=ref.padding)
        )
    return registry
