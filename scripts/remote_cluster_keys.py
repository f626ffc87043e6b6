#!/usr/bin/env python3
"""CLI for inspecting and editing the remote cluster API keys of an Elasticsearch cluster.

Examples:
    remote_cluster_keys.py show default quickstart
    remote_cluster_keys.py set default quickstart prod abc123 --encoded-file key.txt
    remote_cluster_keys.py delete default quickstart prod
    remote_cluster_keys.py keystore default quickstart

Encoded API keys are read from a file (or stdin with ``-``), never from argv,
and are never printed.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from config.settings import get_settings
from libs.common.logging import ReconcileContext, configure_logging
from libs.k8s import ResourceClient, ResourceStoreError, create_resource_client
from libs.remote_cluster import (
    Elasticsearch,
    RemoteClusterKeysError,
    load_api_key_store,
    remote_api_keys_secret_name,
    with_remote_cluster_api_keys,
)


def _owner(args: argparse.Namespace) -> Elasticsearch:
    return Elasticsearch(name=args.es_name, namespace=args.namespace, uid=args.es_uid or "")


def _read_encoded(path: str) -> str:
    raw = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
    encoded = raw.strip()
    if not encoded:
        raise ValueError(f"No encoded API key found in {path!r}")
    return encoded


def show(client: ResourceClient, args: argparse.Namespace) -> None:
    es = _owner(args)
    store = load_api_key_store(client, es)
    print(
        json.dumps(
            {
                "secret": remote_api_keys_secret_name(es.name),
                "aliases": dict(sorted(store.aliases_view().items())),
            },
            indent=2,
        )
    )


def set_key(client: ResourceClient, args: argparse.Namespace) -> None:
    es = _owner(args)
    encoded = _read_encoded(args.encoded_file)
    store = load_api_key_store(client, es)
    store.update(args.alias, args.key_id, encoded).save(client, es, retry_attempts=args.retries)
    print(f"Stored API key {args.key_id} for alias {args.alias}")


def delete_key(client: ResourceClient, args: argparse.Namespace) -> None:
    es = _owner(args)
    store = load_api_key_store(client, es)
    if args.alias not in store:
        print(f"Alias {args.alias} not found, nothing to do")
        return
    store.delete(args.alias).save(client, es, retry_attempts=args.retries)
    print(f"Removed alias {args.alias}")


def keystore(client: ResourceClient, args: argparse.Namespace) -> None:
    extended = with_remote_cluster_api_keys(client, _owner(args))
    for source in extended.secure_settings():
        print(source.secret_name)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--backend", choices=["kubernetes", "memory"], help="Resource backend")
    parser.add_argument("--log-level", help="Override LOG_LEVEL")

    sub = parser.add_subparsers(dest="command", required=True)

    def add_target(p: argparse.ArgumentParser) -> None:
        p.add_argument("namespace")
        p.add_argument("es_name")
        p.add_argument("--es-uid", help="Elasticsearch UID, sets the Secret's owner reference")

    p_show = sub.add_parser("show", help="List aliases and their API key IDs")
    add_target(p_show)
    p_show.set_defaults(func=show)

    p_set = sub.add_parser("set", help="Record the API key of an alias")
    add_target(p_set)
    p_set.add_argument("alias")
    p_set.add_argument("key_id")
    p_set.add_argument("--encoded-file", required=True, help="File holding the encoded key, or -")
    p_set.set_defaults(func=set_key)

    p_delete = sub.add_parser("delete", help="Forget the API key of an alias")
    add_target(p_delete)
    p_delete.add_argument("alias")
    p_delete.set_defaults(func=delete_key)

    p_keystore = sub.add_parser("keystore", help="List keystore secret sources")
    add_target(p_keystore)
    p_keystore.set_defaults(func=keystore)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
        configure_logging(
            service_name=settings.service_name,
            log_level=args.log_level or settings.log_level,
            stream=sys.stderr,
        )
        args.retries = settings.store_retry_attempts

        with create_resource_client(backend=args.backend, settings=settings) as client:
            with ReconcileContext():
                args.func(client, args)
    except (ResourceStoreError, RemoteClusterKeysError, ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
