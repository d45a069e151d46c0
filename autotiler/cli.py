"""Command-line entry point.

Commands:
  compile   64x96 autotile sheet -> 32x8192 strip of 256 variants
  encode    map manifest -> manifest with every autotile cell resolved
  render    encoded map manifest -> PNG of one layer
  template  write a placeholder autotile sheet

Usage:
    python -m autotiler compile grass.png -o grass_256.png --preview
    python -m autotiler encode map.json -o map_encoded.json
    python -m autotiler render map_encoded.json -o map.png
    python -m autotiler template -o placeholder.png
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .autotile import Autotile
from .layer import encode_layer, slot_of
from .mapfile import load_registry, parse_map_manifest, write_map_manifest
from .placeholder import generate_placeholder_sheet
from .preview import generate_preview
from .registry import render_layer

# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_compile(args: argparse.Namespace) -> None:
    input_path: Path = args.source
    output_path = args.output or input_path.with_name(f"{input_path.stem}_256.png")

    print(f"Compiling autotile: {input_path}")
    autotile = Autotile.open(input_path, padding=args.padding)
    print(f"  Source size: {autotile.image.width}x{autotile.image.height}")

    autotile.compile()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    autotile.surface.save(output_path)
    print(
        f"  Saved variant strip: {output_path} "
        f"({autotile.surface.width}x{autotile.surface.height})"
    )

    if args.preview:
        preview_path = output_path.with_name(f"{output_path.stem}_preview.png")
        generate_preview(autotile, scale=args.scale).save(preview_path)
        print(f"  Saved preview: {preview_path}")

    print("  Done!")


def cmd_encode(args: argparse.Namespace) -> None:
    input_path: Path = args.map
    output_path = args.output or input_path.with_name(
        f"{input_path.stem}_encoded.json"
    )

    print(f"Encoding map: {input_path}")
    manifest = parse_map_manifest(input_path)
    slot_count = len(manifest.autotiles)
    print(f"  Size: {manifest.size.width}x{manifest.size.height}")
    print(f"  Autotile slots: {slot_count}")

    for idx, layer in enumerate(manifest.layers):
        stray = {s for s in map(slot_of, layer) if s is not None and s >= slot_count}
        if stray:
            raise ValueError(
                f"Layer #{idx} references unknown autotile slots: {sorted(stray)}"
            )
        encode_layer(layer, manifest.size, slot_count)
        cells = sum(1 for v in layer if v < 0)
        print(f"  Layer #{idx}: encoded {cells} autotile cells")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    write_map_manifest(manifest, output_path)
    print(f"  Saved encoded map: {output_path}")


def cmd_render(args: argparse.Namespace) -> None:
    input_path: Path = args.map
    output_path = args.output or input_path.with_suffix(".png")

    print(f"Rendering map: {input_path}")
    manifest = parse_map_manifest(input_path)
    if not 0 <= args.layer < len(manifest.layers):
        raise IndexError(
            f"Layer #{args.layer} not found ({len(manifest.layers)} layers)"
        )

    registry = load_registry(manifest, input_path.parent)
    registry.compile_all()
    print(f"  Compiled {len(registry)} autotiles")

    image = render_layer(manifest.layers[args.layer], manifest.size, registry)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(output_path)
    print(f"  Saved render: {output_path} ({image.width}x{image.height})")


def cmd_template(args: argparse.Namespace) -> None:
    sheet = generate_placeholder_sheet(seed=args.seed)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    sheet.save(args.output)
    print(f"Saved {args.output}  ({sheet.width}x{sheet.height})")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="autotiler",
        description="Compile 256-variant autotiles and encode map layers.",
        epilog=(
            "Examples:\n"
            "  autotiler compile grass.png -o grass_256.png --preview\n"
            "  autotiler encode map.json\n"
            "  autotiler render map_encoded.json -o map.png\n"
            "  autotiler template -o placeholder.png"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = p.add_subparsers(dest="command", required=True)

    c = sub.add_parser("compile", help="Compile an autotile sheet into 256 variants")
    c.add_argument("source", type=Path, help="64x96 autotile source PNG")
    c.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output strip path (default: {source}_256.png)",
    )
    c.add_argument(
        "--padding",
        type=int,
        default=None,
        help="Padding value stored with the autotile",
    )
    c.add_argument(
        "--preview",
        action="store_true",
        help="Generate enlarged preview image",
    )
    c.add_argument(
        "--scale",
        type=int,
        default=2,
        help="Preview scale factor (default: 2)",
    )
    c.set_defaults(func=cmd_compile)

    e = sub.add_parser("encode", help="Resolve autotile cells of a map manifest")
    e.add_argument("map", type=Path, help="Map manifest (.json)")
    e.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output manifest path (default: {map}_encoded.json)",
    )
    e.set_defaults(func=cmd_encode)

    r = sub.add_parser("render", help="Render one encoded layer to PNG")
    r.add_argument("map", type=Path, help="Encoded map manifest (.json)")
    r.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output PNG path (default: {map}.png)",
    )
    r.add_argument(
        "--layer",
        type=int,
        default=0,
        help="Layer index to render (default: 0)",
    )
    r.set_defaults(func=cmd_render)

    t = sub.add_parser("template", help="Write a placeholder autotile sheet")
    t.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("autotile_template.png"),
        help="Output PNG path (default: autotile_template.png)",
    )
    t.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Seed for the speckle pattern (default: 42)",
    )
    t.set_defaults(func=cmd_template)

    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    try:
        args.func(args)
    except (FileNotFoundError, ValueError, IndexError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception as exc:
        print(f"Unexpected error in {args.command}: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
