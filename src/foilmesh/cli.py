"""Command-line interface for foilmesh.

Builds an immutable generation request from configuration plus command-line
overrides, runs it and writes OBJ/DAT output.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .config import FoilMeshConfig, load_config
from .exceptions import FoilMeshError
from .geometry.naca import Spacing
from .io import read_dat, write_dat, write_obj
from .logging import get_logger, log_error, setup_logging
from .mesh.extrude import AnchorPolicy
from .pipeline import run_from_points, run_pipeline

log = get_logger("cli")


def _add_global_cli_options(parser: argparse.ArgumentParser) -> None:
    """Add global CLI options."""
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file (YAML)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode"
    )


def _add_extrusion_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--span", type=float, help="Extrusion span; 0 gives a flat outline mesh")
    parser.add_argument("--sections", type=int, help="Number of sections along the span")
    parser.add_argument("--twist", type=float, help="Total twist at the tip (degrees); enables twist")
    parser.add_argument("--no-twist", action="store_true", help="Disable twist")
    parser.add_argument(
        "--scale",
        type=float,
        nargs=2,
        metavar=("ROOT", "TIP"),
        help="Root and tip scale factors; enables scaling"
    )
    parser.add_argument("--aoa", type=float, help="Angle of attack applied to the mesh (degrees)")
    parser.add_argument(
        "--anchor",
        choices=[policy.value for policy in AnchorPolicy],
        help="Placement of the finished mesh"
    )
    parser.add_argument("--obj", type=Path, help="Write the mesh as OBJ")


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        description="foilmesh: NACA airfoil coordinates and extruded meshes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 2D coordinates of a NACA 2412 as DAT
  foilmesh generate 2412 --points 100 --dat naca2412.dat

  # Twisted, tapered wing panel as OBJ
  foilmesh generate 23012 --span 2 --twist -4 --scale 1 0.5 --obj wing.obj

  # Extrude an existing DAT outline
  foilmesh extrude-dat n6409.dat --resample 120 --span 1 --obj n6409.obj

  # Write a configuration template
  foilmesh config template --output foilmesh.yaml
        """
    )

    _add_global_cli_options(parser)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    generate_parser = subparsers.add_parser("generate", help="Generate a NACA airfoil and its mesh")
    generate_parser.add_argument("naca", nargs="?", help="NACA code, e.g. 2412, 23012, 641212")
    generate_parser.add_argument("--points", type=int, help="Stations per surface")
    generate_parser.add_argument(
        "--spacing",
        choices=[spacing.value for spacing in Spacing],
        help="Station spacing"
    )
    generate_parser.add_argument("--chord", type=float, help="Chord length")
    generate_parser.add_argument("--alpha", type=float, help="Angle of attack of the section (degrees)")
    generate_parser.add_argument("--closed-te", action="store_true", help="Close the trailing edge")
    generate_parser.add_argument("--dat", type=Path, help="Write the 2D coordinates as DAT")
    _add_extrusion_options(generate_parser)

    # Extrude DAT command
    dat_parser = subparsers.add_parser("extrude-dat", help="Extrude an outline read from a DAT file")
    dat_parser.add_argument("path", type=Path, help="DAT file with two-column coordinates")
    dat_parser.add_argument("--resample", type=int, help="Resample the outline to this many points")
    dat_parser.add_argument(
        "--spacing",
        choices=[spacing.value for spacing in Spacing],
        help="Spacing used when resampling"
    )
    dat_parser.add_argument("--chord", type=float, help="Chord length")
    _add_extrusion_options(dat_parser)

    # Config command
    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_parser.add_argument(
        "action",
        choices=["show", "validate", "template"],
        help="Configuration action"
    )
    config_parser.add_argument(
        "--output",
        type=Path,
        help="Output file for template"
    )

    return parser


def load_configuration(args: argparse.Namespace) -> FoilMeshConfig:
    """Load configuration and apply command-line overrides."""
    config = load_config(args.config)

    generation = {}
    for option, key in (("naca", "naca"), ("points", "points"), ("spacing", "spacing"),
                        ("chord", "chord"), ("alpha", "alpha")):
        value = getattr(args, option, None)
        if value is not None:
            generation[key] = value
    if getattr(args, "closed_te", False):
        generation["closed_trailing_edge"] = True

    extrusion = {}
    for option, key in (("span", "span"), ("sections", "sections"), ("aoa", "angle_of_attack"),
                        ("anchor", "anchor")):
        value = getattr(args, option, None)
        if value is not None:
            extrusion[key] = value
    if getattr(args, "twist", None) is not None:
        extrusion["twist_enabled"] = True
        extrusion["twist"] = args.twist
    if getattr(args, "no_twist", False):
        extrusion["twist_enabled"] = False
    if getattr(args, "scale", None):
        extrusion["scale_enabled"] = True
        extrusion["root_scale"], extrusion["tip_scale"] = args.scale

    logging_overrides = {}
    if args.verbose or args.debug:
        logging_overrides["level"] = "DEBUG" if args.debug else "INFO"

    # Re-validate so overrides get the same checks as file values
    return FoilMeshConfig(
        logging={**config.logging.model_dump(), **logging_overrides},
        generation={**config.generation.model_dump(), **generation},
        extrusion={**config.extrusion.model_dump(), **extrusion},
    )


def main_generate(args: argparse.Namespace) -> int:
    """Run generate command."""
    try:
        config = load_configuration(args)
        setup_logging(config.logging)

        request = config.to_request()
        log.info("Generating {} ({} stations, span {})", request.descriptor,
                 request.sampling.points, request.extrusion.span)
        result = run_pipeline(request)

        if args.dat:
            write_dat(result.coordinates, args.dat, header=f"NACA {request.descriptor.digits}")
        if args.obj:
            write_obj(result.mesh, args.obj)
        if not (args.dat or args.obj):
            print(f"{request.descriptor}: {len(result.outline)} outline points, "
                  f"{result.mesh.vertex_count} vertices, {result.mesh.face_count} faces")

        return 0

    except FoilMeshError as e:
        log_error(e)
        print(f"foilmesh error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        log_error(e)
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 1


def main_extrude_dat(args: argparse.Namespace) -> int:
    """Run extrude-dat command."""
    try:
        config = load_configuration(args)
        setup_logging(config.logging)

        points = read_dat(args.path)
        log.info("Read {} points from {}", len(points), args.path)
        result = run_from_points(
            points,
            extrusion=config.extrusion.to_extrusion_spec(),
            resample=args.resample,
            spacing=config.generation.spacing,
            chord=config.generation.chord,
        )

        if args.obj:
            write_obj(result.mesh, args.obj)
        else:
            print(f"{args.path.name}: {len(result.outline)} outline points, "
                  f"{result.mesh.vertex_count} vertices, {result.mesh.face_count} faces")

        return 0

    except FoilMeshError as e:
        log_error(e)
        print(f"foilmesh error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        log_error(e)
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 1


def main_config(args: argparse.Namespace) -> int:
    """Run configuration management command."""
    try:
        if args.action == "show":
            config = load_configuration(args)
            print("Current Configuration:")
            print("=" * 50)
            for section_name, section in config.model_dump(mode="json").items():
                print(f"\n{section_name.upper()}:")
                for key, value in section.items():
                    print(f"  {key}: {value}")

        elif args.action == "validate":
            config = load_configuration(args)
            config.to_request()
            print("Configuration is valid")

        elif args.action == "template":
            template_config = FoilMeshConfig()
            output_path = args.output or Path("foilmesh.yaml")
            template_config.to_yaml(output_path)
            print(f"Template configuration saved to: {output_path}")

        return 0

    except FoilMeshError as e:
        print(f"foilmesh error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 1


def _dispatch_command(args: argparse.Namespace) -> int:
    """Route parsed arguments to the corresponding command handler."""
    command_handlers = {
        "generate": main_generate,
        "extrude-dat": main_extrude_dat,
        "config": main_config,
    }

    handler = command_handlers.get(args.command)
    if handler:
        return handler(args)
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1


def _main_with_argv(argv: Optional[list] = None) -> int:
    """Main CLI execution path with optional argv override."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return _dispatch_command(args)


def main() -> int:
    """Main CLI entry point."""
    return _main_with_argv()


if __name__ == "__main__":
    sys.exit(main())
