'''Helpers assembling synthetic flash images and firmware volumes.'''

import struct

FLASH_SIGNATURE = b"\x5A\xA5\xF0\x0F"
FFS2_GUID = bytes.fromhex("78e58c8c3d8a1c4f9935896185c32dd3")

REGION_ORDER = ["BIOS", "ME", "GbE", "PDR"]


def build_block_map(blocks, terminate=True):
    data = b"".join([struct.pack("<II", count, size)
                     for count, size in blocks])
    if terminate:
        data += struct.pack("<II", 0, 0)
    return data


def build_volume(blocks=((1, 0x100),), length=None, guid=FFS2_GUID,
                 attributes=0xff, checksum=0x1234, revision=2,
                 payload=b"", terminate=True):
    '''A firmware volume header, its block map and an 0xFF-padded body.'''
    block_map = build_block_map(blocks, terminate)
    header_length = 56 + len(block_map)
    body_length = header_length + len(payload)
    if length is None:
        length = body_length
    header = struct.pack(
        "<16s16sQ4sBHH3sB3s", b"\x00" * 16, guid, length, b"_FVH",
        attributes, header_length, checksum, b"\x00" * 3, revision,
        b"\x00" * 3)
    data = header + block_map + payload
    if length > len(data):
        data += b"\xFF" * (length - len(data))
    return data


def build_region_section(regions, erase_size=0):
    '''Region record from {name: (base, limit)}, missing names are empty.'''
    values = [0, erase_size]
    for name in REGION_ORDER:
        values.extend(regions.get(name, (0, 0)))
    return struct.pack("<10H", *values) + b"\x00" * 16


def build_master_section(bios=(0x0000, 0x0b, 0x0a), me=(0x0000, 0x0d, 0x0c),
                         gbe=(0x0118, 0x08, 0x08)):
    return struct.pack("<HBBHBBHBB", *(bios + me + gbe))


def build_descriptor_map(component_base=3, region_base=4, master_base=7,
                         counts=(1, 4, 3)):
    chips, regions, masters = counts
    return struct.pack(
        "<14BH", component_base, chips, region_base, regions,
        master_base, masters, 0x10, 18, 0x20, 1, 0, 0, 0, 0, 0)


def build_image(pch=True, size=0x3000, regions=None, bios=b"",
                params=b"\x12\x00\x12\x91", component_base=3,
                region_base=4, master_base=7, master=None):
    '''A descriptor-mode image with the BIOS region at 0x1000-0x2fff.'''
    if regions is None:
        regions = {"BIOS": (1, 2)}
    image = bytearray(b"\xFF" * size)

    if pch:
        image[0:16] = b"\xFF" * 16
        image[16:20] = FLASH_SIGNATURE
        descriptor_start = 20
    else:
        image[0:4] = FLASH_SIGNATURE
        descriptor_start = 4
    descriptor_map = build_descriptor_map(
        component_base, region_base, master_base)
    image[descriptor_start:descriptor_start + 16] = descriptor_map

    def place(offset, data):
        if offset + len(data) <= size:
            image[offset:offset + len(data)] = data

    place(component_base * 0x10, params)
    place(region_base * 0x10, build_region_section(regions))
    place(master_base * 0x10, master or build_master_section())

    if "BIOS" in regions and bios:
        place(regions["BIOS"][0] * 0x1000, bios)
    return bytes(image)
