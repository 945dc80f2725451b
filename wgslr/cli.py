"""Command-line interface for WGSL reflection."""

import argparse
import sys
from pathlib import Path

from wgslr import __version__


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="wgslr",
        description="WGSL reflection: extracts structs, entry points and bindings as JSON",
    )
    parser.add_argument("input", nargs="?", help="Input .wgsl file")
    parser.add_argument(
        "-o", "--output-dir", type=Path, default=None,
        help="Output directory (default: same as input file)",
    )
    parser.add_argument(
        "--stdout", action="store_true",
        help="Print the reflection JSON instead of writing a file",
    )
    parser.add_argument(
        "--dump-tree", action="store_true",
        help="Dump the syntax tree and exit",
    )
    parser.add_argument(
        "--version", action="version", version=f"wgslr {__version__}"
    )

    args = parser.parse_args(argv)

    if args.input is None:
        parser.print_help()
        sys.exit(0)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: file not found: {input_path}", file=sys.stderr)
        sys.exit(1)

    source = input_path.read_text(encoding="utf-8")

    # --- Tree dump mode ---
    if args.dump_tree:
        from wgslr.parser.syntax_tree import parse_wgsl
        try:
            tree = parse_wgsl(source)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        print(tree.root_node.sexp())
        return

    from wgslr.reflector import reflect
    from wgslr.codegen.reflection import generate_reflection, emit_reflection_json

    try:
        reflection = reflect(source)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    text = emit_reflection_json(
        generate_reflection(reflection, source_name=input_path.name)
    )

    if args.stdout:
        sys.stdout.write(text)
        return

    output_dir = args.output_dir or input_path.parent
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"{input_path.stem}.reflect.json"
    json_path.write_text(text, encoding="utf-8")
    print(f"Wrote {json_path}")


if __name__ == "__main__":
    main()
