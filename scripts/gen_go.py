#!/usr/bin/env python3
"""
gen_go.py - Go binding generator entry point

Normalizes the declarations dumped from mosek.h and writes the Go (cgo)
wrappers.

Usage:
    python scripts/gen_go.py --header mosek.json [--overlay config.yml]
        [--urls urls.yml] [--deprecated deprecated.yml]
        [--enrich-funcs funcs.yml] [--enrich-enums enums.yml]
        [--output-dir PATH] [--dump-model model.json] [--dump-overlay config.yml]
"""

import argparse
import json
import os
import sys
from pathlib import Path

# Add scripts directory to path
script_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, script_dir)

from cgo_bindgen import BindgenError, Generator, Header, OverlayStore, normalize
from cgo_bindgen.log import configure_logging
from cgo_bindgen.overlay import load_doc_table, load_enrichment, load_overlay
from bindings import mosek


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Generate Go bindings for mosek.h')
    parser.add_argument('--header', type=Path, required=True,
                        help='JSON dump of the declarations in mosek.h')
    parser.add_argument('--overlay', type=Path, default=None,
                        help='Hand-written overlay (YAML)')
    parser.add_argument('--urls', type=Path, default=None,
                        help='Scraped function name -> doc URL table (YAML)')
    parser.add_argument('--deprecated', type=Path, default=None,
                        help='Scraped deprecated function names (YAML)')
    parser.add_argument('--enrich-funcs', type=Path, default=None,
                        help='Functions exported from the Rust bindings (YAML)')
    parser.add_argument('--enrich-enums', type=Path, default=None,
                        help='Enums exported from the Rust bindings (YAML)')
    parser.add_argument('--output-dir', type=Path, default=None,
                        help='gmsk package dir to write into (stdout if omitted)')
    parser.add_argument('--dump-model', type=Path, default=None,
                        help='Write the normalized descriptors as JSON')
    parser.add_argument('--dump-overlay', type=Path, default=None,
                        help='Write the merged overlay back as YAML')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log per-declaration details')
    return parser


def run(args: argparse.Namespace, logger) -> int:
    header = Header.load(args.header)
    store = load_overlay(args.overlay) if args.overlay else OverlayStore()
    store.docs = load_doc_table(args.urls, args.deprecated)
    store.enrichment = load_enrichment(args.enrich_funcs, args.enrich_enums)
    mosek.configure(store)

    model = normalize(header, store, mosek.PROFILE)

    if args.dump_model:
        args.dump_model.write_text(json.dumps(model.to_dict(), indent=2) + '\n', encoding='utf-8')
    if args.dump_overlay:
        store.dump(args.dump_overlay)

    Generator(model, mosek.PROFILE).write(args.output_dir)
    logger.info('number of functions: %d', len(model.functions))
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logger = configure_logging(verbose=args.verbose)
    try:
        return run(args, logger)
    except BindgenError as exc:
        logger.error('%s', exc)
        return 1


if __name__ == '__main__':
    sys.exit(main())
