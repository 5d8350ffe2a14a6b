# asmhex/cli.py
import argparse
import logging
import sys

from .models.job import BitsMode, ConversionJob
from .models.state import BatchState
from .utils.paths import output_dir_or_cwd
from .utils.settings import load_settings
from .workers.batch import BatchWorker


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="asmhex", description="Assemble .asm files with nasm and convert them to Intel HEX.")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = ap.add_subparsers(dest="command")

    conv = sub.add_parser("convert", help="Convert files without opening the window")
    conv.add_argument("files", nargs="+", help="Input .asm files, converted in the given order")
    conv.add_argument("-o", "--output", default=None, help="Output folder (default: settings, else current dir)")
    conv.add_argument("--bits", choices=[m.value for m in BitsMode], default=None, help="Word size for auto-insert")
    conv.add_argument("--no-auto-insert", action="store_true", help="Never add a [bits N] line to the sources")
    conv.add_argument("--nasm", default=None, help="Path to nasm")
    conv.add_argument("--objcopy", default=None, help="Path to objcopy")
    conv.add_argument("--timeout", type=float, default=None, help="Seconds allowed per external tool call")
    return ap


def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_convert(args, settings: dict | None = None, out=None) -> int:
    settings = dict(settings if settings is not None else load_settings(persist=False))
    out = out or sys.stdout
    if args.nasm:
        settings["nasm_path"] = args.nasm
    if args.objcopy:
        settings["objcopy_path"] = args.objcopy
    if args.timeout is not None:
        settings["tool_timeout"] = args.timeout

    bits = BitsMode.from_value(args.bits or settings.get("bits_mode", "64"))
    auto_insert = False if args.no_auto_insert else bool(settings.get("auto_insert_bits", True))
    out_dir = output_dir_or_cwd(args.output or settings.get("output_folder"))

    state = BatchState()
    worker = BatchWorker(state, settings)
    worker.set_jobs([ConversionJob.for_source(f, out_dir) for f in args.files], bits, auto_insert)
    worker.run()

    out.write(state.log_text())
    return 0 if all(r.ok for r in worker.results) else 1


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    if args.command == "convert":
        return run_convert(args)

    from .app import run_gui
    return run_gui()
