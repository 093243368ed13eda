from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .config import ConvertConfig, load_config
from .errors import Mpx2VueUserError
from .jsonic import dumps as jdumps
from .report_schema import ParseReport
from .template import annotate_to_text, convert, parse_template
from .template.parser import ParseResult
from .version import tool_version

_LOG = logging.getLogger("mpx2vue")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get("MPX2VUE_DEBUG") else logging.WARNING
    _LOG.setLevel(level)
    if not _LOG.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        _LOG.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mpx2vue",
        description="Конвертер шаблонов мини-программ (MPX) в Vue-шаблоны",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--config",
        type=Path,
        metavar="PATH",
        help="YAML-конфиг (по умолчанию ./mpx2vue.yaml, если есть)",
    )
    p.add_argument("--verbose", action="store_true", help="отладочный вывод в stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_source(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("source", help="файл шаблона или - для чтения из stdin")

    sp_parse = sub.add_parser("parse", help="JSON-отчёт: дерево, ошибки и предупреждения")
    add_source(sp_parse)
    sp_parse.add_argument("--indent", type=int, default=None, help="отступ JSON (по умолчанию компактно)")

    sp_convert = sub.add_parser("convert", help="Vue-шаблон")
    add_source(sp_convert)
    sp_convert.add_argument(
        "--strict",
        action="store_true",
        help="код возврата 1, если при разборе были ошибки",
    )

    sp_annotate = sub.add_parser("annotate", help="исходный шаблон с ref-атрибутами")
    add_source(sp_annotate)

    return p


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise Mpx2VueUserError(f"Template file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise Mpx2VueUserError(f"Failed to read template file {path}: {e}") from e


def _report_diagnostics(result: ParseResult) -> None:
    for message in result.errors:
        sys.stderr.write(f"error: {message}\n")
    for message in result.warnings:
        sys.stderr.write(f"warning: {message}\n")


def _parse(source: str, cfg: ConvertConfig) -> ParseResult:
    return parse_template(_read_source(source), max_depth=cfg.max_depth)


def main(argv: Optional[list[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        cfg = load_config(ns.config)

        if ns.cmd == "parse":
            result = _parse(ns.source, cfg)
            report = ParseReport.from_result(result)
            sys.stdout.write(jdumps(report.to_json_dict(), indent=ns.indent))
            return 0

        if ns.cmd == "convert":
            result = _parse(ns.source, cfg)
            _report_diagnostics(result)
            sys.stdout.write(convert(result.tree, cfg) + "\n")
            return 1 if ns.strict and not result.ok else 0

        if ns.cmd == "annotate":
            result = _parse(ns.source, cfg)
            _report_diagnostics(result)
            text = annotate_to_text(
                result.tree,
                attribute=cfg.ref_attribute,
                prefix=cfg.ref_prefix,
                indent_size=cfg.indent_size,
            )
            sys.stdout.write(text + "\n")
            return 0

    except Mpx2VueUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
