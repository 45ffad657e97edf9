# -*- coding: utf-8 -*-

import argparse
import sys

from intel_flash import decode_flash_image, FlashError
from intel_flash.structs.flash_structs import FLASH_HEADER
from intel_flash.utils import print_error, red

fd_magic = b"\xFF" * 16 + FLASH_HEADER


def search_flash_descriptor(data):
    indexes = []
    index = 0
    while True:
        index = data.find(fd_magic, index + 1)
        if index < 0:
            break
        indexes.append(index)
    return indexes


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Parse an Intel PCH/Flash descriptor.")
    parser.add_argument('-t', "--test", action="store_true",
                        help="Only print the name of decodable files.")
    parser.add_argument('-b', "--brute", action="store_true",
                        help="Brute force search for flash descriptors")
    parser.add_argument('-q', "--quiet", action="store_true",
                        help="Only print validation issues.")
    parser.add_argument("file", help="The file to work on")
    args = parser.parse_args()

    try:
        with open(args.file, 'rb') as fh:
            input_data = fh.read()
    except Exception as e:
        print_error("Error: Cannot read file (%s) (%s)." % (args.file, str(e)))
        sys.exit(1)

    fds = []
    if args.brute:
        indexes = search_flash_descriptor(input_data)
        for i in indexes:
            fds.append(input_data[i:])
    else:
        fds.append(input_data)

    status = 0
    for descriptor in fds:
        try:
            flash, issues = decode_flash_image(descriptor)
        except FlashError as e:
            print_error("Error: Cannot decode flash (%s) (%s)." % (
                e.kind.value, e.message))
            status = 1
            continue

        if args.test:
            print(args.file)
            continue

        if not args.quiet:
            flash.showinfo()
        for issue in issues:
            print("%s %s" % (red(issue.kind.value), issue.message))

    sys.exit(status)
