import argparse
import json
import sys
from typing import List, Optional

from endpoints import BASE_URL
from .api import list_documents, upload_document, validate_upload_source
from .client import DeviceClient
from .errors import InvalidInput, RemarkableError
from .models import Entry
from .tree import download_selection
from .utils import expand_user_path


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog='rmtui-cli')
    p.add_argument('--base-url', default=BASE_URL)
    sub = p.add_subparsers(dest='cmd', required=True)

    ls = sub.add_parser('ls')
    ls.add_argument('path', nargs='?', default='')
    ls.add_argument('--json', action='store_true')

    pull = sub.add_parser('pull')
    pull.add_argument('path')
    pull.add_argument('dest')

    push = sub.add_parser('push')
    push.add_argument('file')

    return p


def find_entry(client: DeviceClient, path: str) -> Optional[Entry]:
    """Walk display names from the root; ``None`` stands for the root itself."""
    entry: Optional[Entry] = None
    for part in [p for p in path.split('/') if p]:
        if entry is not None and not entry.is_folder:
            raise InvalidInput(f"Not a folder: {entry.name}")
        children = list_documents(client, entry.id if entry else None)
        match = next((c for c in children if c.name == part), None)
        if match is None:
            raise InvalidInput(f"No such entry: {path}")
        entry = match
    return entry


def _run(args: argparse.Namespace, client: DeviceClient) -> int:
    if args.cmd == 'ls':
        entry = find_entry(client, args.path)
        if entry is not None and not entry.is_folder:
            raise InvalidInput(f"Not a folder: {entry.name}")
        items = list_documents(client, entry.id if entry else None)
        if args.json:
            print(json.dumps([{'id': i.id, 'name': i.name, 'kind': i.kind.value} for i in items], indent=2))
        else:
            for item in items:
                print(f"{item.id}\t{item.kind.value}\t{item.name}")
        return 0

    if args.cmd == 'pull':
        entry = find_entry(client, args.path)
        if entry is None:
            raise InvalidInput("Give the name of a folder or document to pull")
        dest = expand_user_path(args.dest)
        if not dest:
            raise InvalidInput("Path cannot be empty.")
        print(download_selection(client, entry, dest))
        return 0

    if args.cmd == 'push':
        path = validate_upload_source(expand_user_path(args.file))
        upload_document(client, path)
        print('OK')
        return 0

    return 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    client = DeviceClient(base_url=args.base_url)
    try:
        return _run(args, client)
    except RemarkableError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        client.close()


if __name__ == '__main__':
    raise SystemExit(main())
