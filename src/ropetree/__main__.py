# python3 -m ropetree [text] [--replace OLD NEW] ...

import argparse
import logging
import sys

from .rope import Rope, CHUNK_SIZE


demo = "Hello, World! this is a test to try the multi node feature. this is of the rope data structure"


def main():
    parser = argparse.ArgumentParser(
        prog='ropetree',
        description='Build a rope from text, apply some edits and show the result',
    )
    parser.add_argument('text', nargs='?', default=demo)
    parser.add_argument('--chunk-size', type=int, default=CHUNK_SIZE, help="Characters per leaf")
    parser.add_argument('--insert', nargs=2, action='append', default=[], metavar=('INDEX', 'TEXT'))
    parser.add_argument('--erase', nargs=2, action='append', default=[], metavar=('START', 'LENGTH'))
    parser.add_argument('--replace-range', nargs=3, action='append', default=[], metavar=('START', 'LENGTH', 'TEXT'))
    parser.add_argument('--replace', nargs=2, action='append', default=[], metavar=('OLD', 'NEW'))
    parser.add_argument('-v', '--verbose', action='count', default=0, help="More logging (repeat for debug)")
    parser.add_argument('--log-file', help="Write log to this file instead of stderr")
    args = parser.parse_args()

    level = [logging.WARNING, logging.INFO, logging.DEBUG][min(args.verbose, 2)]
    logging.basicConfig(level=level, filename=args.log_file)

    try:
        run(args)
    except ValueError as e:
        # InvalidArgument, or an INDEX/START/LENGTH that is not an integer
        print(f"ropetree: error: {e}", file=sys.stderr)
        sys.exit(1)


def show(rope: Rope):
    rope.display()
    print(f"String Count: {len(rope)}\nNode Count: {rope.node_count()}")


def run(args: argparse.Namespace) -> Rope:
    rope = Rope(args.text, chunk_size=args.chunk_size)
    show(rope)

    for index, text in args.insert:
        rope.insert(int(index), text)
    for start, length in args.erase:
        rope.erase(int(start), int(length))
    for start, length, text in args.replace_range:
        rope.replace_range(int(start), int(length), text)
    for old, new in args.replace:
        rope.replace(old, new)

    show(rope)
    return rope


if __name__ == "__main__":
    main()
