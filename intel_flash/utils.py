# -*- coding: utf-8 -*-

import sys
import struct

from .structs.flash_structs import (
    FLASH_HEADER, FLASH_HEADER_PCH_OFFSET, FLASH_HEADER_ICH_OFFSET,
    FV_MAGIC, FV_MAGIC_OFFSET, FV_SEARCH_START, FV_SEARCH_ALIGN)


def blue(msg):
    '''Return the input string as console-escaped blue.'''
    return "\033[1;36m%s\033[1;m" % msg


def red(msg):
    '''Return the input string as console-escaped red.'''
    return "\033[31m%s\033[1;m" % msg


def green(msg):
    '''Return the input string as console-escaped green.'''
    return "\033[32m%s\033[1;m" % msg


def print_error(msg):
    '''Write the input string to stderr.'''
    print(msg, file=sys.stderr)


def sguid(b, big=False):
    '''RFC4122 binary GUID as string.'''
    if b is None or len(b) != 16:
        return ""
    a, b, c, d = struct.unpack("%sIHH8s" % (">" if big else "<"), b)
    d = d.hex()
    return "%08x-%04x-%04x-%s-%s" % (a, b, c, d[:4], d[4:])


def find_descriptor_signature(data):
    '''Locate the flash descriptor signature.

    PCH images reserve the first 16 bytes and carry the signature right
    after; ICH8/9/10 images start with it. The PCH location is checked first.

    Return:
        int: Offset of the descriptor map (the byte after the signature), or
            None if neither location holds the signature.
    '''
    for offset in (FLASH_HEADER_PCH_OFFSET, FLASH_HEADER_ICH_OFFSET):
        if data[offset:offset + len(FLASH_HEADER)] == FLASH_HEADER:
            return offset + len(FLASH_HEADER)
    return None


def find_firmware_volume(data, start=0):
    '''Search a blob for the first '_FVH' magic, using 8-byte alignment.

    Candidates are 'start' + 32, 40, 48, ... The magic sits 40 bytes into a
    volume header, so a magic found before 'start' + 40 cannot belong to a
    header inside the searched window and is skipped.

    Args:
        data (bytes): Blob to search.
        start (Optional[int]): Beginning of the searched window.

    Return:
        int: Offset (within 'data') of the firmware volume header, or None.
    '''
    if len(data) - start < FV_SEARCH_START:
        return None
    index = data.find(FV_MAGIC, start + FV_SEARCH_START)
    while index >= 0:
        relative = index - start
        if relative % FV_SEARCH_ALIGN == 0 and relative >= FV_MAGIC_OFFSET:
            return index - FV_MAGIC_OFFSET
        index = data.find(FV_MAGIC, index + 1)
    return None
