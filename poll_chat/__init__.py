import argparse
from dataclasses import replace

from poll_chat.config import load_settings
from poll_chat.server.server import run_server
from poll_chat.client.client import Client


def run_http_server(args: argparse.Namespace) -> None:
    settings = load_settings()
    overrides = {
        "host": args.host,
        "port": args.port,
        "sweep_interval": args.sweep_interval,
        "max_idle": args.max_idle,
        "log_level": args.log_level,
        "log_file": args.log_file,
    }
    settings = replace(
        settings, **{k: v for k, v in overrides.items() if v is not None}
    )
    run_server(settings)


def main():
    parser = argparse.ArgumentParser(description="Polling group chat")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_p = subparsers.add_parser("serve", help="Run server")
    serve_p.add_argument("--host")
    serve_p.add_argument("--port", type=int)
    serve_p.add_argument("--sweep-interval", type=float, help="seconds between sweeps")
    serve_p.add_argument("--max-idle", type=float, help="idle seconds before eviction")
    serve_p.add_argument("--log-level")
    serve_p.add_argument("--log-file", help="rotating log file path")

    connect_p = subparsers.add_parser("connect", help="Connect to server")
    connect_p.add_argument("ip_address")
    connect_p.add_argument("port")
    connect_p.add_argument("username")

    args = parser.parse_args()

    if args.command == "serve":
        run_http_server(args)
    elif args.command == "connect":
        Client(
            server=args.ip_address,
            port=int(args.port),
            username=args.username,
        ).run()


if __name__ == "__main__":
    main()
