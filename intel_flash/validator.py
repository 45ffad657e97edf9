# -*- coding: utf-8 -*-
'''Advisory structural checks over a decoded FlashImage.

A check is any callable taking the image and returning a (possibly empty)
list of FlashError instances. Checks never raise for the problems they
report, the Validator concatenates their findings in registration order.
'''

from .errors import SignatureNotFoundError, InvalidBaseAddrError
from .utils import find_descriptor_signature
from .structs.flash_structs import (
    FLASH_DESCRIPTOR_MAX_BASE, FLASH_PARAMS_SIZE, REGION_BLOCK_SIZE)


def check_signature(image):
    if find_descriptor_signature(image.data) is None:
        return [SignatureNotFoundError()]
    return []


def check_descriptor_bases(image):
    if image.map is None:
        return []
    errors = []
    for field in ("ComponentBase", "RegionBase", "MasterBase"):
        value = getattr(image.map.structure, field)
        if value > FLASH_DESCRIPTOR_MAX_BASE:
            errors.append(InvalidBaseAddrError(
                "%s too large: expected at most 0x%x, got 0x%x" % (
                    field, FLASH_DESCRIPTOR_MAX_BASE, value)))
    return errors


def check_component_bounds(image):
    if image.component_start is None:
        return []
    end = image.component_start + FLASH_PARAMS_SIZE
    if end > len(image.data):
        return [InvalidBaseAddrError(
            "Component section ends at 0x%x, past the image end 0x%x" % (
                end, len(image.data)))]
    return []


def check_region_bounds(image):
    if image.region is None:
        return []
    errors = []
    for name in image.region.available_regions():
        base, limit = image.region.region_bounds(name)
        if base > limit:
            errors.append(InvalidBaseAddrError(
                "%s region base 0x%x is past its limit 0x%x" % (
                    name, base, limit)))
            continue
        end = (limit + 1) * REGION_BLOCK_SIZE
        if end > len(image.data):
            errors.append(InvalidBaseAddrError(
                "%s region ends at 0x%x, past the image end 0x%x" % (
                    name, end, len(image.data))))
    return errors


DEFAULT_CHECKS = [
    check_signature,
    check_descriptor_bases,
    check_component_bounds,
    check_region_bounds,
]


class Validator(object):

    def __init__(self, checks=None):
        if checks is None:
            checks = DEFAULT_CHECKS
        self.checks = list(checks)

    def register(self, check):
        '''Append a check; returns it so this can be used as a decorator.'''
        self.checks.append(check)
        return check

    def validate(self, image):
        errors = []
        for check in self.checks:
            errors.extend(check(image))
        return errors
