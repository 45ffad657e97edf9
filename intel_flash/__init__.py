'''Intel flash image parser.
'''

from .errors import (
    ErrorKind, FlashError, ImageTooSmallError, SignatureNotFoundError,
    InvalidRecordSizeError, TruncatedDataError, InvalidBaseAddrError)
from .flash import (
    FlashImage, DescriptorMap, RegionSection, MasterSection, FlashParams,
    FlashFrequency, FlashRegion)
from .uefi import FirmwareVolume, BiosRegion, Block
from .utils import find_descriptor_signature, find_firmware_volume
from .validator import Validator


def decode_flash_image(data, validator=None):
    '''Decode an entire flash image and validate the result.

    The flash image must operate in descriptor mode. Structural problems
    (no signature, a record or block map that does not fit) raise a
    FlashError. Advisory problems are returned instead.

    Args:
        data (binary): The entire flash image contents.
        validator (Optional[Validator]): Checks to apply, the defaults if
            omitted.

    Return:
        tuple: The processed FlashImage and a list of FlashError issues.
    '''
    image = FlashImage(data)
    image.process()
    if validator is None:
        validator = Validator()
    return image, validator.validate(image)


__title__ = "intel_flash"
__version__ = "1.0"
__author__ = "Intel Flash Parser Developers"
__license__ = "BSD"
