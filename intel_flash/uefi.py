# -*- coding: utf-8 -*-

import collections
import struct

from .base import FirmwareObject, StructuredObject
from .errors import ImageTooSmallError, TruncatedDataError
from .utils import blue, green, sguid, find_firmware_volume
from .structs.flash_structs import (
    FirmwareVolumeHeaderType, FV_HEADER_SIZE, FV_BLOCK_SIZE, FV_MIN_SIZE)


class Block(collections.namedtuple("Block", ["count", "size"])):
    '''One (count, size) entry of a firmware volume block map.'''

    @classmethod
    def from_data(cls, data, offset=0):
        return cls(*struct.unpack_from("<II", data, offset))

    @property
    def is_terminator(self):
        return self.count == 0 and self.size == 0

    def build(self):
        return struct.pack("<II", self.count, self.size)


class FirmwareVolume(FirmwareObject, StructuredObject):
    '''Describes the features and layout of the firmware volume.

    struct FIRMWARE_VOLUME_HEADER {
        UINT8:  Zeros[16]
        UCHAR:  FileSystemGUID[16]
        UINT64: Length
        UINT32: Signature (_FVH)
        UINT8:  Attribute mask
        UINT16: Header Length
        UINT16: Checksum
        UINT8:  Reserved[3]
        UINT8:  Revision
        UINT8:  Unused[3]
        [<BlockMap>]+, <BlockMap(0,0)>
    };

    The block map is a set of blocks followed by a zeroed block indicating the
    end of the map set. The zeroed block is not kept in 'blocks'.

    struct BLOCK_MAP {
        UINT32: Block count
        UINT32: Block size
    };

    The volume copies the bytes it covers, it does not keep a reference to
    the input buffer.
    '''

    structure_type = FirmwareVolumeHeaderType

    def __init__(self, data, name="volume", offset=0):
        self.name = name
        self.offset = offset
        self.attrs = None

        if len(data) < FV_MIN_SIZE:
            raise ImageTooSmallError(
                "Firmware volume too small: expected at least %d bytes, "
                "got %d" % (FV_MIN_SIZE, len(data)))

        self.parse_structure(data[:FV_HEADER_SIZE])

        # The block map must end within the declared length, when that
        # length is sane, and always within the available bytes.
        limit = len(data)
        if FV_MIN_SIZE <= self.length < limit:
            limit = self.length

        self.blocks = []
        position = FV_HEADER_SIZE
        while True:
            if position + FV_BLOCK_SIZE > limit:
                raise TruncatedDataError(
                    "Firmware volume block map not terminated within "
                    "%d bytes (%d blocks read)" % (limit, len(self.blocks)))
            block = Block.from_data(data, position)
            position += FV_BLOCK_SIZE
            if block.is_terminator:
                break
            self.blocks.append(block)

        self.consumed_size = position
        self.data = bytes(data[:max(min(self.length, len(data)), position)])
        self.attrs = {
            "length": self.length,
            "attributes": self.attributes,
            "revision": self.revision,
            "blocks": len(self.blocks),
        }

    @property
    def zeros(self):
        return bytes(self.structure.Zeros)

    @property
    def guid(self):
        return bytes(self.structure.FileSystemGuid)

    @property
    def length(self):
        return self.structure.Length

    @property
    def signature(self):
        return self.structure.Signature

    @property
    def attributes(self):
        return self.structure.AttrMask

    @property
    def header_length(self):
        return self.structure.HeaderLen

    @property
    def checksum(self):
        return self.structure.Checksum

    @property
    def revision(self):
        return self.structure.Revision

    @property
    def span(self):
        '''Bytes to skip past this volume, never less than what was read.'''
        return max(self.length, self.consumed_size)

    def build_header(self):
        '''Re-encode the fixed header, block map and terminating block.'''
        block_map = b"".join([block.build() for block in self.blocks])
        return self.build() + block_map + Block(0, 0).build()

    def showinfo(self, ts='', index=None):
        print("%s %s attr 0x%02x, rev %d, cksum 0x%x, size 0x%x (%d bytes)" % (
            blue("%sFirmware Volume:" % (ts)),
            green(sguid(self.guid)),
            self.attributes,
            self.revision,
            self.checksum,
            self.length,
            self.length
        ))
        print(blue("%s  Firmware Volume Blocks: " % (ts)), end="")
        for block in self.blocks:
            print("(%d, 0x%x)" % (block.count, block.size), end="")
        print("")


class BiosRegion(FirmwareObject):
    '''The firmware volumes found, in file order, within a BIOS region.'''

    def __init__(self, data, name="bios"):
        self.data = data
        self.name = name
        self.attrs = None
        self.volumes = []

    @property
    def objects(self):
        return self.volumes

    def process(self):
        '''Discover every firmware volume in the region.

        Each search resumes after the previous volume's declared length.
        No volume at all is a valid result. A volume whose header or block
        map cannot be decoded aborts the scan.
        '''
        view = memoryview(self.data)
        self.volumes = []
        cursor = 0
        while True:
            offset = find_firmware_volume(self.data, cursor)
            if offset is None:
                break
            volume = FirmwareVolume(
                view[offset:], name="volume-%d" % len(self.volumes),
                offset=offset)
            self.volumes.append(volume)
            cursor = offset + volume.span
        return True

    def showinfo(self, ts='', index=None):
        print("%s%s volumes %d" % (
            ts, blue("BIOS Region"), len(self.volumes)))
        for volume in self.volumes:
            volume.showinfo(ts="%s  " % ts)
