# -*- coding: utf-8 -*-
import ctypes

FLASH_HEADER = b"\x5A\xA5\xF0\x0F"
'''Descriptor signature, at offset 16 (PCH) or offset 0 (ICH8/9/10).'''

FLASH_HEADER_PCH_OFFSET = 16
FLASH_HEADER_ICH_OFFSET = 0

FV_MAGIC = b"_FVH"
FV_MAGIC_OFFSET = 40
FV_SEARCH_START = 32
FV_SEARCH_ALIGN = 8

DESCRIPTOR_BLOCK_SIZE = 0x10
REGION_BLOCK_SIZE = 0x1000
FLASH_DESCRIPTOR_MAX_BASE = 0xE0

FV_HEADER_SIZE = 56
FV_BLOCK_SIZE = 8
FV_MIN_SIZE = FV_HEADER_SIZE + FV_BLOCK_SIZE

uint8_t = ctypes.c_ubyte
uint16_t = ctypes.c_ushort
uint32_t = ctypes.c_uint
uint64_t = ctypes.c_uint64
guid_t = uint8_t * 16

FLASH_FREQUENCIES = {
    0: "20MHz",
    1: "33MHz",
    2: "48MHz",
    4: "50MHz/30MHz",
    6: "17MHz",
}

# field: (byte index, bit offset, bit width)
FLASH_PARAMS_FIELDS = {
    "FirstChipDensity":            (0, 0, 4),
    "SecondChipDensity":           (0, 4, 4),
    "ReadClockFrequency":          (2, 1, 3),
    "FastReadEnabled":             (2, 4, 1),
    "FastReadFrequency":           (2, 5, 3),
    "FlashWriteFrequency":         (3, 0, 3),
    "FlashReadStatusFrequency":    (3, 3, 3),
    "DualOutputFastReadSupported": (3, 7, 1),
}
FLASH_PARAMS_SIZE = 4


class FlashDescriptorMapType(ctypes.LittleEndianStructure):
    _pack_ = 1
    _fields_ = [
        ("ComponentBase",       uint8_t),  #
        ("NumberOfFlashChips",  uint8_t),  #
        ("RegionBase",          uint8_t),  #
        ("NumberOfRegions",     uint8_t),  #
        ("MasterBase",          uint8_t),  #
        ("NumberOfMasters",     uint8_t),  #
        ("PchStrapsBase",       uint8_t),  #
        ("NumberOfPchStraps",   uint8_t),  #
        ("ProcStrapsBase",      uint8_t),  #
        ("NumberOfProcStraps",  uint8_t),  #
        ("IccTableBase",        uint8_t),  #
        ("NumberOfIccTableEntries", uint8_t),  #
        ("DmiTableBase",            uint8_t),  #
        ("NumberOfDmiTableEntries", uint8_t),  #
        ("ReservedZero",            uint16_t),  #
    ]


class FlashMasterSectionType(ctypes.LittleEndianStructure):
    _pack_ = 1
    _fields_ = [
        ("BiosId",    uint16_t),  #
        ("BiosRead",  uint8_t),   #
        ("BiosWrite", uint8_t),   #
        ("MeId",      uint16_t),  #
        ("MeRead",    uint8_t),   #
        ("MeWrite",   uint8_t),   #
        ("GbeId",     uint16_t),  #
        ("GbeRead",   uint8_t),   #
        ("GbeWrite",  uint8_t),   #
    ]


class FlashRegionSectionType(ctypes.LittleEndianStructure):
    _pack_ = 1
    _fields_ = [
        ("ReservedZero",        uint16_t),  #
        ("FlashBlockEraseSize", uint16_t),  #
        ("BiosBase",            uint16_t),  #
        ("BiosLimit",           uint16_t),  #
        ("MeBase",              uint16_t),  #
        ("MeLimit",             uint16_t),  #
        ("GbeBase",             uint16_t),  #
        ("GbeLimit",            uint16_t),  #
        ("PdrBase",             uint16_t),  #
        ("PdrLimit",            uint16_t),  #
        ("ReservedRegions",     uint8_t * 16),  # FLREG5 and up
    ]


class FirmwareVolumeHeaderType(ctypes.LittleEndianStructure):
    _pack_ = 1
    _fields_ = [
        ("Zeros",          uint8_t * 16),
        ("FileSystemGuid", guid_t),
        ("Length",         uint64_t),
        ("Signature",      uint32_t),  # _FVH
        ("AttrMask",       uint8_t),
        ("HeaderLen",      uint16_t),
        ("Checksum",       uint16_t),
        ("Reserved",       uint8_t * 3),
        ("Revision",       uint8_t),
        ("Unused",         uint8_t * 3),
    ]
