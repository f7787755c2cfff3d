"""
Command-line interface for DC probe measurements.

Measure, validate, and inspect drawn circuits without a front end.

Usage::

    python -m cli measure circuit.json
    python -m cli measure circuit.json --format json --debug
    python -m cli validate circuit.json
    python -m cli equations circuit.json --matrix
    python -m cli batch circuits/
"""

import argparse
import glob
import json
import logging
import sys
from pathlib import Path

from controllers.file_controller import validate_circuit_data
from controllers.probe_controller import ProbeController
from models.circuit import CircuitModel

__version__ = "1.0.0"


def try_load_circuit(filepath: str) -> tuple[CircuitModel | None, str]:
    """Load and validate a circuit JSON file without exiting.

    Args:
        filepath: Path to the circuit JSON file.

    Returns:
        (model, "") on success, or (None, error_message) on failure.
    """
    path = Path(filepath)
    if not path.exists():
        return None, f"file not found: {filepath}"

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        return None, f"invalid JSON in {filepath}: {e}"

    try:
        validate_circuit_data(data)
        model = CircuitModel.from_dict(data)
    except ValueError as e:
        return None, f"invalid circuit file: {e}"

    return model, ""


def load_circuit(filepath: str) -> CircuitModel:
    """Load and validate a circuit JSON file.

    Raises:
        SystemExit: On file read or validation errors.
    """
    model, error = try_load_circuit(filepath)
    if model is None:
        print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)
    return model


def _write_output(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text + "\n")
        print(f"Results written to {output}", file=sys.stderr)
    else:
        print(text)


def cmd_measure(args: argparse.Namespace) -> int:
    """Measure the red lead voltage."""
    model = load_circuit(args.circuit)
    result = ProbeController(model).measure(debug=args.debug)

    if args.format == "json":
        text = json.dumps(result.to_dict(), indent=2)
    else:
        text = result.format()
        if args.debug and result.debug_trace:
            text += "\n" + result.debug_trace

    _write_output(text, args.output)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a circuit without measuring."""
    model = load_circuit(args.circuit)
    is_valid, errors, warnings = ProbeController(model).validate()

    if is_valid:
        print(f"Circuit is valid: {args.circuit}")
        for warning in warnings:
            print(f"  Warning: {warning}")
        return 0

    print(f"Circuit has errors: {args.circuit}", file=sys.stderr)
    for err in errors:
        print(f"  - {err}", file=sys.stderr)
    return 1


def cmd_equations(args: argparse.Namespace) -> int:
    """Print the generated equation system."""
    model = load_circuit(args.circuit)
    system = ProbeController(model).equations()

    if system is None:
        print("Leads are not connected; no equations generated.", file=sys.stderr)
        return 1

    if args.matrix:
        from simulation.matrix_form import format_matrix, matrix_rank

        print(format_matrix(system))
        print(f"rank {matrix_rank(system)} of {len(system)} equations")
    else:
        for expr in system:
            print(f"{expr} = 0")
    return 0


def cmd_batch(args: argparse.Namespace) -> int:
    """Measure multiple circuit files."""
    pattern = args.path
    path = Path(pattern)
    if path.is_dir():
        files = sorted(path.glob("*.json"))
    elif "*" in pattern or "?" in pattern:
        files = sorted(Path(p) for p in glob.glob(pattern))
    else:
        print(f"Error: {pattern} is not a directory or glob pattern", file=sys.stderr)
        return 1

    if not files:
        print(f"No .json circuit files found matching: {pattern}", file=sys.stderr)
        return 1

    results_summary = []
    any_failed = False

    for filepath in files:
        model, error = try_load_circuit(str(filepath))
        if model is None:
            results_summary.append({"file": filepath.name, "status": "LOAD_ERROR", "details": error})
            any_failed = True
            if args.fail_fast:
                break
            continue

        result = ProbeController(model).measure()
        results_summary.append({"file": filepath.name, "status": "OK", "details": result.format()})

    print(f"\n{'File':<40} {'Status':<12} {'Details'}")
    print("-" * 70)
    for entry in results_summary:
        print(f"{entry['file']:<40} {entry['status']:<12} {entry['details']}")

    total = len(results_summary)
    passed = sum(1 for e in results_summary if e["status"] == "OK")
    print(f"\n{passed}/{total} measured, {total - passed} failed")

    return 1 if any_failed else 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="dc-probe",
        description="Measure DC voltages in drawn resistor/source/wire circuits.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log analysis steps to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # measure
    measure_parser = subparsers.add_parser("measure", help="Measure the red lead voltage")
    measure_parser.add_argument("circuit", help="Path to circuit JSON file")
    measure_parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format (default: text)")
    measure_parser.add_argument("--debug", action="store_true", help="Include the generated equations")
    measure_parser.add_argument("--output", "-o", help="Write result to file instead of stdout")

    # validate
    val_parser = subparsers.add_parser("validate", help="Check circuit for problems without measuring")
    val_parser.add_argument("circuit", help="Path to circuit JSON file")

    # equations
    eq_parser = subparsers.add_parser("equations", help="Print the generated equation system")
    eq_parser.add_argument("circuit", help="Path to circuit JSON file")
    eq_parser.add_argument("--matrix", action="store_true", help="Print the augmented matrix instead")

    # batch
    batch_parser = subparsers.add_parser("batch", help="Measure multiple circuit files")
    batch_parser.add_argument("path", help="Directory or glob pattern matching circuit JSON files")
    batch_parser.add_argument("--fail-fast", action="store_true", help="Stop on first error")

    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        "measure": cmd_measure,
        "validate": cmd_validate,
        "equations": cmd_equations,
        "batch": cmd_batch,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
