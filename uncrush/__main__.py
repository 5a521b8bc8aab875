import argparse
import logging
import pathlib
import sys

import uncrush
from uncrush.converter import PngNormalizer

logger = logging.getLogger("uncrush")


def get_parser():
    parser = argparse.ArgumentParser("uncrush",
                                     description="Converts crushed iOS PNG files (CgBI) into standard PNG files.")
    parser.add_argument("inputs", nargs="+", metavar="INPUT", type=pathlib.Path, help="The PNG files to convert.")

    destination = parser.add_mutually_exclusive_group()
    destination.add_argument("-o", "--output", type=pathlib.Path, help="The output file, for a single input.")
    destination.add_argument("-d", "--output-dir", type=pathlib.Path,
                             help="The directory the converted files are written to, using their original names.")
    destination.add_argument("-i", "--in-place", action="store_true", help="Overwrite crushed input files.")

    parser.add_argument("-l", "--level", type=int, default=1, choices=range(0, 10), metavar="LEVEL",
                        help="The zlib compression level of the converted image data (0-9, default: 1).")
    parser.add_argument("--verify-crc", action="store_true", help="Fail on input chunks with a wrong CRC.")
    parser.add_argument("--check", action="store_true",
                        help="Only report whether the inputs are crushed, without writing anything.")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug output.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors.")

    parser.add_argument("--version", action="version", version="%(prog)s " + uncrush.__version__)
    return parser


def get_destination(args, path):
    if args.output is not None:
        return args.output
    if args.output_dir is not None:
        return args.output_dir / path.name
    return path


def convert_file(normalizer, args, path):
    result = normalizer.convert(path.read_bytes())

    if args.check:
        print("{}: {}, {}x{}".format(path, "crushed" if result.is_crushed else "not crushed",
                                     result.width, result.height))
        return result

    destination = get_destination(args, path)
    if destination == path and not result.is_crushed:
        logger.info("%s is not crushed, leaving it untouched", path)
        return result

    destination.write_bytes(result.data)
    if result.is_crushed:
        logger.info("Converted %s (%dx%d) to %s", path, result.width, result.height, destination)
    else:
        logger.info("Copied %s to %s, it is not crushed", path, destination)
    return result


def main(argv=None):
    parser = get_parser()
    args = parser.parse_args(argv)

    if not args.check and args.output is None and args.output_dir is None and not args.in_place:
        parser.error("one of the arguments -o/--output -d/--output-dir -i/--in-place is required")
    if args.output is not None and len(args.inputs) > 1:
        parser.error("-o/--output can only be used with a single input")
    if args.output_dir is not None and not args.output_dir.is_dir():
        parser.error(f"The provided path {args.output_dir} is not a directory.")

    level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    normalizer = PngNormalizer(compression_level=args.level, verify_crc=args.verify_crc)

    failed = False
    for path in args.inputs:
        try:
            convert_file(normalizer, args, path)
        except (OSError, uncrush.UncrushError) as exc:
            logger.error("Could not convert %s: %s", path, exc)
            failed = True

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
