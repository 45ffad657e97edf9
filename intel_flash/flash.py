# -*- coding: utf-8 -*-

import collections

from .base import FirmwareObject, StructuredObject
from .errors import (
    ImageTooSmallError, InvalidRecordSizeError, SignatureNotFoundError)
from .uefi import BiosRegion
from .utils import blue, green, find_descriptor_signature
from .validator import Validator
from .structs.flash_structs import (
    FlashDescriptorMapType, FlashRegionSectionType, FlashMasterSectionType,
    FLASH_HEADER_PCH_OFFSET, FLASH_HEADER, FLASH_FREQUENCIES,
    FLASH_PARAMS_FIELDS, FLASH_PARAMS_SIZE,
    DESCRIPTOR_BLOCK_SIZE, REGION_BLOCK_SIZE)

# Declaration order, (name, structure field prefix)
FLASH_REGIONS = [
    ("BIOS", "Bios"),
    ("ME",   "Me"),
    ("GbE",  "Gbe"),
    ("PDR",  "Pdr"),
]


class DescriptorMap(StructuredObject):
    structure_type = FlashDescriptorMapType
    size = 16

    def __init__(self, data):
        self.parse_structure(data)


class RegionSection(StructuredObject):
    structure_type = FlashRegionSectionType
    size = 36

    def __init__(self, data):
        self.parse_structure(data)

    def region_bounds(self, name):
        '''Return the (base, limit) block indexes of a named region.'''
        prefix = dict(FLASH_REGIONS)[name]
        return (getattr(self.structure, "%sBase" % prefix),
                getattr(self.structure, "%sLimit" % prefix))

    def available_regions(self):
        '''Names of the regions with a non-zero limit, in declaration order.
        '''
        return [name for name, _ in FLASH_REGIONS
                if self.region_bounds(name)[1] != 0]


class MasterSection(StructuredObject):
    structure_type = FlashMasterSectionType
    size = 12

    def __init__(self, data):
        self.parse_structure(data)

    def permissions(self, name):
        '''Return (id, read, write) for a region master, None for PDR.'''
        prefix = dict(FLASH_REGIONS)[name]
        if not hasattr(self.structure, "%sId" % prefix):
            return None
        return (getattr(self.structure, "%sId" % prefix),
                getattr(self.structure, "%sRead" % prefix),
                getattr(self.structure, "%sWrite" % prefix))


class FlashFrequency(collections.namedtuple("FlashFrequency",
                                            ["value", "name"])):
    '''A frequency field: the raw reading and its symbolic name, if any.'''

    @classmethod
    def from_value(cls, value):
        return cls(value, FLASH_FREQUENCIES.get(value))

    @property
    def known(self):
        return self.name is not None

    def __int__(self):
        return self.value

    def __str__(self):
        if self.known:
            return self.name
        return "Unknown (%d)" % self.value


class FlashParams(object):
    '''The 4-byte, bit-packed flash component parameters.

    Fields are extracted on access using FLASH_PARAMS_FIELDS, the raw bytes
    are the only stored state.
    '''
    size = FLASH_PARAMS_SIZE

    def __init__(self, data):
        if len(data) != self.size:
            raise InvalidRecordSizeError(
                "FlashParams size mismatch: expected %d bytes, got %d" % (
                    self.size, len(data)))
        self.data = bytes(data)

    def field(self, name):
        byte, shift, width = FLASH_PARAMS_FIELDS[name]
        return (self.data[byte] >> shift) & ((1 << width) - 1)

    @property
    def first_chip_density(self):
        return self.field("FirstChipDensity")

    @property
    def second_chip_density(self):
        return self.field("SecondChipDensity")

    @property
    def read_clock_frequency(self):
        return FlashFrequency.from_value(self.field("ReadClockFrequency"))

    @property
    def fast_read_enabled(self):
        return self.field("FastReadEnabled")

    @property
    def fast_read_frequency(self):
        return FlashFrequency.from_value(self.field("FastReadFrequency"))

    @property
    def flash_write_frequency(self):
        return FlashFrequency.from_value(self.field("FlashWriteFrequency"))

    @property
    def flash_read_status_frequency(self):
        return FlashFrequency.from_value(
            self.field("FlashReadStatusFrequency"))

    @property
    def dual_output_fast_read_supported(self):
        return self.field("DualOutputFastReadSupported")

    def build(self):
        return self.data

    def showinfo(self, ts='', index=None):
        print(("%s%s densities %d/%d, read clock %s, fast read %d (%s), "
               "write %s, read status %s, dual output %d") % (
            ts, blue("Flash Params"),
            self.first_chip_density, self.second_chip_density,
            self.read_clock_frequency, self.fast_read_enabled,
            self.fast_read_frequency, self.flash_write_frequency,
            self.flash_read_status_frequency,
            self.dual_output_fast_read_supported))


class FlashRegion(FirmwareObject):
    '''A named sub-area of the flash image.

    Base and limit are 4K block indexes, the region covers
    base * 0x1000 up to (limit + 1) * 0x1000.
    '''

    def __init__(self, data, region_name, region_details):
        self.sections = []
        self.data = data
        self.attrs = region_details
        self.name = region_name

    @property
    def objects(self):
        return self.sections

    def process(self):
        if self.name == "BIOS":
            bios = BiosRegion(self.data)
            bios.process()
            self.sections.append(bios)
        return True

    def showinfo(self, ts='', index=None):
        print("%s%s type= %s, size= 0x%x (%d bytes) details[ %s ]" % (
            ts, blue("Flash Region"), green(self.name),
            len(self.data), len(self.data),
            ", ".join(["%s: %s" % (k, v) for k, v in self.attrs.items()])
        ))
        for section in self.sections:
            section.showinfo(ts="%s  " % ts)


def region_offset(base):
    return base * REGION_BLOCK_SIZE


def region_end(base, limit):
    if limit:
        return (limit + 1) * REGION_BLOCK_SIZE
    return region_offset(base)


class FlashImage(FirmwareObject):
    '''An Intel PCH/ICH flash image operating in descriptor mode.

    Construction only locates the descriptor signature; 'process' decodes
    the descriptor map, region and master sections, the flash parameters
    and the flash regions. Structural problems raise a FlashError.
    '''

    def __init__(self, data):
        self.data = bytes(data)
        self.name = "flash"
        self.attrs = None
        self.descriptor_map_start = find_descriptor_signature(self.data)
        self.valid_header = self.descriptor_map_start is not None

        self.region_start = None
        self.master_start = None
        self.component_start = None
        self.map = None
        self.region = None
        self.master = None
        self.params = None
        self.regions = []

    @property
    def objects(self):
        return self.regions

    @property
    def is_pch(self):
        '''PCH images carry the signature after 16 reserved bytes.'''
        return self.data[FLASH_HEADER_PCH_OFFSET:FLASH_HEADER_PCH_OFFSET +
                         len(FLASH_HEADER)] == FLASH_HEADER

    def _window(self, offset, size, label):
        if offset + size > len(self.data):
            raise ImageTooSmallError(
                "%s at 0x%x needs %d bytes, image is %d bytes" % (
                    label, offset, size, len(self.data)))
        return self.data[offset:offset + size]

    def process(self):
        if len(self.data) < DescriptorMap.size:
            raise ImageTooSmallError(
                "Image size too small: expected at least %d bytes, got %d" % (
                    DescriptorMap.size, len(self.data)))
        if not self.valid_header:
            raise SignatureNotFoundError()

        self.map = DescriptorMap(self._window(
            self.descriptor_map_start, DescriptorMap.size, "Descriptor map"))

        self.region_start = self.map.structure.RegionBase * \
            DESCRIPTOR_BLOCK_SIZE
        self.region = RegionSection(self._window(
            self.region_start, RegionSection.size, "Region section"))

        self.master_start = self.map.structure.MasterBase * \
            DESCRIPTOR_BLOCK_SIZE
        self.master = MasterSection(self._window(
            self.master_start, MasterSection.size, "Master section"))

        self.component_start = self.map.structure.ComponentBase * \
            DESCRIPTOR_BLOCK_SIZE
        # Optional, a component section past the end is reported by the
        # validator.
        self.params = None
        if self.component_start + FlashParams.size <= len(self.data):
            self.params = FlashParams(self.data[
                self.component_start:self.component_start + FlashParams.size])

        self.regions = []
        for name in self.region.available_regions():
            base, limit = self.region.region_bounds(name)
            details = {"base": base, "limit": limit}
            permissions = self.master.permissions(name)
            if permissions is not None:
                details["id"], details["read"], details["write"] = permissions
            flash_region = FlashRegion(
                self.data[region_offset(base):region_end(base, limit)],
                name, details)
            flash_region.process()
            self.regions.append(flash_region)
        return True

    @property
    def bios_region(self):
        '''The BiosRegion of the BIOS flash region, if one is present.'''
        for flash_region in self.regions:
            if flash_region.name == "BIOS" and flash_region.sections:
                return flash_region.sections[0]
        return None

    def validate(self):
        '''Run the default structural checks, return a list of issues.'''
        return Validator().validate(self)

    def showinfo(self, ts='', index=None):
        print(("%s%s chips %d, regions %d, masters %d, PCH straps %d, "
               "PROC straps %d, ICC entries %d") % (
            ts, blue("Flash Descriptor (Intel %s)" % (
                "PCH" if self.is_pch else "ICH")),
            self.map.structure.NumberOfFlashChips,
            self.map.structure.NumberOfRegions,
            self.map.structure.NumberOfMasters,
            self.map.structure.NumberOfPchStraps,
            self.map.structure.NumberOfProcStraps,
            self.map.structure.NumberOfIccTableEntries))
        if self.params is not None:
            self.params.showinfo(ts="%s  " % ts)
        for flash_region in self.regions:
            flash_region.showinfo(ts="%s  " % ts)
