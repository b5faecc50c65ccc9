import shlex
import sys

from rich.pretty import pprint

from lineargs import *

__prog__ = "copy"

parser = (
    ArgumentParser("Copy files into a target directory.", shell=True, fancy=True, epilog="Quote paths with spaces.")
    .define("-v", "--verbose", type="boolean", help="print every copied file")
    .define("-r", "--retries", type="number", default=3, help="attempts per file before giving up")
    .define("--mode", choices=["fast", "safe"], default="safe", help="copy strategy")
    .define("--exclude", nargs="*", metavar="GLOB", help="patterns to skip")
    .define("target", help="destination directory")
    .define("sources", nargs="+", help="files to copy")
)


if __name__ == '__main__':
    if {"-h", "--help"} & set(sys.argv[1:]):
        parser.print_help()
        sys.exit(0)
    pprint(parser.parse(shlex.join(sys.argv[1:]) or "-v backup/ notes.txt 'my report.pdf'"))
