"""jassdts CLI - read JASS sources, write one .d.ts file."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field

from .backend.typescript import (
    NATIVE_OVERRIDES,
    OverridesError,
    TypeMapper,
    emit_typescript,
    load_overrides,
    merge_overrides,
)
from .frontend.normalize import is_comment_line, normalize_line
from .frontend.recognize import recognize_sources
from .serialize import library_to_dict

PHASES: list[str] = [
    "normalize",
    "recognize",
]

USAGE: str = """\
jassdts [OPTIONS] INPUT [INPUT...] OUTPUT

Convert JASS type, native, global, and function declarations into a
TypeScript declaration file.

Options:
  --stop-at PHASE     Stop after phase: normalize, recognize
  --overrides FILE    JSON table of native argument type overrides
  --strict            Treat an unterminated globals block as an error
  -q, --quiet         Do not report progress on stderr
  -h, --help          Show this help message
"""


@dataclass
class Options:
    inputs: list[str] = field(default_factory=list)
    output: str = ""
    stop_at: str | None = None
    overrides_file: str | None = None
    strict: bool = False
    quiet: bool = False


def parse_args(args: list[str]) -> Options:
    """Parse command-line arguments. Exits 0 on --help and 2 on usage errors."""
    options = Options()
    positional: list[str] = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            sys.exit(0)
        elif arg == "--stop-at" or arg == "--overrides":
            if i + 1 >= len(args):
                print("error: " + arg + " requires an argument", file=sys.stderr)
                sys.exit(2)
            if arg == "--stop-at":
                options.stop_at = args[i + 1]
            else:
                options.overrides_file = args[i + 1]
            i += 2
        elif arg == "--strict":
            options.strict = True
            i += 1
        elif arg == "--quiet" or arg == "-q":
            options.quiet = True
            i += 1
        elif arg.startswith("-"):
            print("error: unknown flag '" + arg + "'", file=sys.stderr)
            sys.exit(2)
        else:
            positional.append(arg)
            i += 1
    if options.stop_at is not None and options.stop_at not in PHASES:
        print("error: unknown phase '" + options.stop_at + "'", file=sys.stderr)
        sys.exit(2)
    if len(positional) < 2:
        print("error: expected at least one input and one output", file=sys.stderr)
        print(USAGE, end="", file=sys.stderr)
        sys.exit(2)
    options.inputs = positional[:-1]
    options.output = positional[-1]
    return options


def _progress(options: Options, message: str) -> None:
    if not options.quiet:
        print(message, file=sys.stderr)


def read_sources(options: Options) -> tuple[list[tuple[str, str]], int]:
    """Read every input. Returns (sources, exit_code) where exit_code 0 means OK."""
    sources: list[tuple[str, str]] = []
    for path in options.inputs:
        _progress(options, "parsing: " + path)
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError:
            print("error: cannot open '" + path + "'", file=sys.stderr)
            return ([], 1)
        try:
            sources.append((path, raw.decode("utf-8-sig")))
        except ValueError:
            print("error: invalid utf-8 in '" + path + "'", file=sys.stderr)
            return ([], 1)
    return (sources, 0)


def write_output(output: str, path: str) -> int:
    """Write output to path. Returns 0 on success, 1 on error."""
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(output)
    except OSError:
        print("error: cannot write '" + path + "'", file=sys.stderr)
        return 1
    return 0


def build_mapper(options: Options) -> tuple[TypeMapper | None, int]:
    """Type mapper with any override file layered over the defaults."""
    if options.overrides_file is None:
        return (TypeMapper(), 0)
    try:
        extra = load_overrides(options.overrides_file)
    except OSError:
        print("error: cannot open '" + options.overrides_file + "'", file=sys.stderr)
        return (None, 1)
    except OverridesError as e:
        print("error: " + str(e), file=sys.stderr)
        return (None, 1)
    return (TypeMapper(merge_overrides(NATIVE_OVERRIDES, extra)), 0)


def normalized_lines(sources: list[tuple[str, str]]) -> str:
    """Non-empty normalized lines of every source, comment-only lines dropped."""
    out: list[str] = []
    for _, text in sources:
        for raw in text.split("\n"):
            if is_comment_line(raw):
                continue
            line = normalize_line(raw)
            if line != "":
                out.append(line + "\n")
    return "".join(out)


def run_pipeline(
    sources: list[tuple[str, str]], options: Options, mapper: TypeMapper
) -> tuple[int, str]:
    """Run recognition and emission. Returns (exit_code, output)."""
    if options.stop_at == "normalize":
        return (0, normalized_lines(sources))
    result = recognize_sources(sources)
    severity = "error: " if options.strict else "warning: "
    for err in result.errors():
        print(severity + str(err), file=sys.stderr)
    if options.strict and not result.ok():
        return (1, "")
    if result.library.is_empty():
        print("warning: no declarations recognized", file=sys.stderr)
    if options.stop_at == "recognize":
        return (0, json.dumps(library_to_dict(result.library), indent=2) + "\n")
    return (0, emit_typescript(result.library, mapper))


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    options = parse_args(argv if argv is not None else sys.argv[1:])
    mapper, err = build_mapper(options)
    if mapper is None:
        return err
    sources, err = read_sources(options)
    if err != 0:
        return err
    exit_code, output = run_pipeline(sources, options, mapper)
    if exit_code != 0:
        return exit_code
    _progress(options, "writing: " + options.output)
    return write_output(output, options.output)


if __name__ == "__main__":
    sys.exit(main())
