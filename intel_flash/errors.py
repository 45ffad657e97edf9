# -*- coding: utf-8 -*-
'''Error kinds raised (or collected) while decoding a flash image.

Structural failures are raised as a FlashError subclass and abort decoding.
Validation issues are instances of the same classes, collected into a list
by the Validator and never raised.
'''

import enum


class ErrorKind(enum.Enum):
    IMAGE_TOO_SMALL = "ImageTooSmall"
    SIGNATURE_NOT_FOUND = "SignatureNotFound"
    INVALID_RECORD_SIZE = "InvalidRecordSize"
    TRUNCATED_DATA = "TruncatedData"
    INVALID_BASE_ADDR = "InvalidBaseAddr"


class FlashError(Exception):
    '''Base type for all flash decoding errors.'''

    kind = None
    default_message = "Flash decoding error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super(FlashError, self).__init__(self.message)

    def __eq__(self, other):
        if not isinstance(other, FlashError):
            return NotImplemented
        return (self.kind, self.message) == (other.kind, other.message)

    def __hash__(self):
        return hash((self.kind, self.message))

    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, self.message)


class ImageTooSmallError(FlashError):
    kind = ErrorKind.IMAGE_TOO_SMALL
    default_message = "Image size too small"


class SignatureNotFoundError(FlashError):
    kind = ErrorKind.SIGNATURE_NOT_FOUND
    default_message = "Flash signature not found"


class InvalidRecordSizeError(FlashError):
    kind = ErrorKind.INVALID_RECORD_SIZE
    default_message = "Invalid record size"


class TruncatedDataError(FlashError):
    kind = ErrorKind.TRUNCATED_DATA
    default_message = "Data truncated before end of structure"


class InvalidBaseAddrError(FlashError):
    '''A base address field exceeds its permitted maximum.'''
    kind = ErrorKind.INVALID_BASE_ADDR
    default_message = "Invalid base address"
