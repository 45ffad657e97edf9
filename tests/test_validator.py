import unittest

from intel_flash import (
    decode_flash_image, FlashImage, Validator, ErrorKind,
    SignatureNotFoundError, InvalidBaseAddrError)

from flash_builder import build_image


class ValidatorTest(unittest.TestCase):

    def test_clean_image(self):
        _, issues = decode_flash_image(build_image())
        self.assertEqual(issues, [])

    def test_base_too_large(self):
        data = build_image(size=0x3000, region_base=0xe1)
        flash, issues = decode_flash_image(data)
        self.assertEqual(flash.region_start, 0xe10)
        self.assertEqual(len(issues), 1)
        self.assertEqual(issues[0].kind, ErrorKind.INVALID_BASE_ADDR)
        self.assertIn("RegionBase", issues[0].message)
        self.assertEqual(flash.validate(), issues)

    def test_region_past_image_end(self):
        data = build_image(regions={"BIOS": (1, 2), "ME": (3, 0x1f)})
        _, issues = decode_flash_image(data)
        self.assertEqual(len(issues), 1)
        self.assertIsInstance(issues[0], InvalidBaseAddrError)
        self.assertIn("ME region", issues[0].message)

    def test_region_base_past_limit(self):
        data = build_image(regions={"BIOS": (2, 1)})
        flash, issues = decode_flash_image(data)
        self.assertEqual(flash.regions[0].data, b"")
        self.assertEqual(len(issues), 1)
        self.assertIn("past its limit", issues[0].message)

    def test_issues_keep_order(self):
        data = build_image(
            regions={"BIOS": (1, 0x40)}, master_base=0xe8, size=0x3000)
        _, issues = decode_flash_image(data)
        self.assertEqual(
            [issue.kind for issue in issues],
            [ErrorKind.INVALID_BASE_ADDR, ErrorKind.INVALID_BASE_ADDR])
        self.assertIn("MasterBase", issues[0].message)
        self.assertIn("BIOS region", issues[1].message)

    def test_component_past_image_end(self):
        data = build_image(size=0x200, regions={}, component_base=0x20)
        flash, issues = decode_flash_image(data)
        self.assertEqual(issues, [InvalidBaseAddrError(
            "Component section ends at 0x204, past the image end 0x200")])
        self.assertEqual(flash.validate(), issues)

    def test_unprocessed_image(self):
        image = FlashImage(b"\x00" * 0x40)
        self.assertEqual(
            Validator().validate(image), [SignatureNotFoundError()])

    def test_register(self):
        validator = Validator(checks=[])

        @validator.register
        def check_chips(image):
            if image.map.structure.NumberOfFlashChips != 2:
                return [InvalidBaseAddrError("expected two flash chips")]
            return []

        _, issues = decode_flash_image(build_image(), validator=validator)
        self.assertEqual(issues, [InvalidBaseAddrError(
            "expected two flash chips")])
        self.assertEqual(Validator().validate(
            decode_flash_image(build_image())[0]), [])


if __name__ == '__main__':
    unittest.main()
