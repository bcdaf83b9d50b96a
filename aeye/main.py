"""
A-Eye Edge - Main Application
On-device model bridge for the A-Eye app

Commands:
- serve        materialize + load the model, then serve the channel
- infer        run one runInference call through the channel and print the result
- materialize  copy the bundled model to writable storage only
"""

import argparse
import json
import logging
import sys

from .assets.materializer import AssetMaterializer
from .bridge import get_bridge
from .core.config import settings, setup_logging
from .core.errors import BridgeError

logger = logging.getLogger('aeye.main')


def cmd_serve(args) -> int:
    from .api.server import run_server

    if args.host:
        settings.host = args.host
    if args.port:
        settings.port = args.port

    print("=" * 60)
    print("  A-Eye Edge - On-Device Model Bridge")
    print(f"  Model: {settings.model_file_name}")
    print(f"  Channel: {settings.channel_name}")
    print(f"  URL: http://{settings.host}:{settings.port}")
    print("=" * 60)

    logger.info("Starting A-Eye Edge...")
    run_server(settings)
    return 0


def cmd_infer(args) -> int:
    try:
        bridge = get_bridge(settings)
    except BridgeError as e:
        logger.error(f"Bridge failed to start: {e.code}: {e.message}")
        print(json.dumps({"status": "error", "result": None, "error": e.to_dict()}, indent=2))
        return 1

    result = bridge.call(args.method, {"input": args.input, "shape": args.shape})
    print(json.dumps(result.model_dump(), indent=2))
    return 1 if result.status == 'error' else 0


def cmd_materialize(args) -> int:
    materializer = AssetMaterializer(
        asset_dir=settings.asset_dir,
        files_dir=settings.files_dir,
        model_file_name=settings.model_file_name
    )
    try:
        path = materializer.ensure_present()
    except BridgeError as e:
        logger.error(f"Materialization failed: {e.message}")
        return 1
    print(path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='aeye', description='A-Eye on-device model bridge')
    subparsers = parser.add_subparsers(dest='command')

    serve = subparsers.add_parser('serve', help='Serve the inference channel over local HTTP')
    serve.add_argument('--host', type=str, default=None)
    serve.add_argument('--port', type=int, default=None)
    serve.set_defaults(func=cmd_serve)

    infer = subparsers.add_parser('infer', help='Run a single inference call')
    infer.add_argument('--input', type=float, nargs='+', required=True)
    infer.add_argument('--shape', type=int, nargs='+', required=True)
    infer.add_argument('--method', type=str, default='runInference')
    infer.set_defaults(func=cmd_infer)

    materialize = subparsers.add_parser('materialize', help='Copy the bundled model to writable storage')
    materialize.set_defaults(func=cmd_materialize)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        args = parser.parse_args(['serve'])

    setup_logging(settings)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
