"""Command line interface for applying and inspecting injections."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections import defaultdict
from pathlib import Path
from typing import Any, Iterable, Sequence

from pydantic import ValidationError

from . import __version__
from .config import ProjectContext
from .errors import ManifestError
from .inject import ProcessInjectionsOptions, load_injections, process_injections
from .inject.types import InjectionDefinition, InjectionResult
from .inspection import InjectionPoint, enrich_with_manifest, scan_directory, scan_file
from .manifest import Manifest, load_manifest, record_injections, save_manifest

LOGGER = logging.getLogger(__name__)


def _parse_key_value_pairs(pairs: Iterable[str]) -> dict[str, str]:
    context: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise argparse.ArgumentTypeError(
                f"invalid key/value pair '{pair}'. Expected KEY=VALUE syntax."
            )
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise argparse.ArgumentTypeError("keys must not be empty")
        context[key] = value
    return context


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inject addon code into generated projects")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    inject_parser = subparsers.add_parser("inject", help="apply an addon's injection definitions")
    inject_parser.add_argument(
        "definitions",
        type=Path,
        help="JSON file holding a list of injections or an object with an 'injections' list",
    )
    inject_parser.add_argument("--addon", required=True, help="Addon the injections belong to")
    inject_parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        default=Path.cwd(),
        help="Project directory containing the target files",
    )
    inject_parser.add_argument(
        "-t",
        "--template-base",
        type=Path,
        help="Directory that 'template' entries are resolved against",
    )
    inject_parser.add_argument("--project-name", help="Project name exposed to templates")
    inject_parser.add_argument(
        "-c",
        "--context",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Extra values exposed to the template renderer",
    )
    inject_parser.add_argument(
        "--manifest",
        action="store_true",
        help="Record successful injections in .bakery/manifest.json",
    )

    inspect_parser = subparsers.add_parser("inspect", help="list injection points")
    inspect_parser.add_argument("path", nargs="?", type=Path, default=Path("."), help="Project or file")
    inspect_parser.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


def _load_definitions(path: Path) -> list[InjectionDefinition]:
    raw: Any = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        raw = raw.get("injections", [])
    if not isinstance(raw, list):
        raise ValueError("expected a list of injection definitions")
    return load_injections(raw)


def _build_context(args: argparse.Namespace, extra: dict[str, str]) -> dict[str, Any]:
    name = args.project_name or args.directory.resolve().name
    context = dict(ProjectContext.from_name(name or "project", addons=[args.addon]).context())
    context.update(extra)
    return context


def _report(results: Sequence[InjectionResult]) -> None:
    for result in results:
        if result.success:
            print(f"ok      {result.file} [{result.marker}] +{result.lines_added} ({result.addon})")
        else:
            print(f"FAILED  {result.file} [{result.marker}] {result.error}")


def _handle_inject(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    try:
        extra = _parse_key_value_pairs(args.context)
        definitions = _load_definitions(args.definitions)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))
    except (OSError, ValueError, ValidationError) as exc:
        parser.error(f"cannot load {args.definitions}: {exc}")

    options = ProcessInjectionsOptions(
        project_dir=args.directory,
        injections=definitions,
        addon_name=args.addon,
        context=_build_context(args, extra),
        template_base_path=args.template_base,
    )
    results = process_injections(options)
    _report(results)

    if args.manifest:
        try:
            manifest = load_manifest(args.directory) or Manifest(
                bakery_version=__version__, archetype="", addons=[args.addon]
            )
        except ManifestError as exc:
            print(str(exc), file=sys.stderr)
            return 1
        if args.addon not in manifest.addons:
            manifest = manifest.model_copy(update={"addons": [*manifest.addons, args.addon]})
        save_manifest(args.directory, record_injections(manifest, args.directory, results))

    return 0 if all(result.success for result in results) else 1


def _print_points(points: Sequence[InjectionPoint]) -> None:
    by_file: dict[str, list[InjectionPoint]] = defaultdict(list)
    for point in points:
        by_file[point.file].append(point)

    print("Injection Points\n")
    for file, file_points in by_file.items():
        print(file)
        for point in file_points:
            if point.injected_by:
                status = f"injected by {point.injected_by}"
            elif point.has_content:
                status = "has content"
            else:
                status = "empty"
            print(f"  L{point.line} {point.marker} {status}")
        print()

    filled = sum(1 for point in points if point.has_content)
    total = len(points)
    print(f"Total: {total} injection point{'' if total == 1 else 's'}")
    print(f"  {filled} with content")
    print(f"  {total - filled} empty")


def _handle_inspect(args: argparse.Namespace) -> int:
    target: Path = args.path
    if not target.exists():
        print(f"Path not found: {target.resolve()}", file=sys.stderr)
        return 1

    if target.is_file():
        points = scan_file(target)
    else:
        points = scan_directory(target)
        try:
            manifest = load_manifest(target)
        except ManifestError as exc:
            LOGGER.warning("ignoring manifest: %s", exc)
            manifest = None
        if manifest is not None:
            enrich_with_manifest(points, manifest)

    if args.json:
        print(json.dumps([point.to_dict() for point in points], indent=2))
    elif not points:
        print(f"No injection points found in {target}")
    else:
        _print_points(points)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command == "inject":
        return _handle_inject(parser, args)
    if args.command == "inspect":
        return _handle_inspect(args)
    parser.error("no command provided")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
