import unittest

from intel_flash import FlashParams, FlashFrequency, InvalidRecordSizeError


class FlashParamsTest(unittest.TestCase):

    def test_fields(self):
        # densities 2/1, read clock 33MHz, fast read at 48MHz,
        # write 17MHz, read status 20MHz, dual output
        params = FlashParams(bytes([0x12, 0x00, 0x52, 0x86]))
        self.assertEqual(params.first_chip_density, 2)
        self.assertEqual(params.second_chip_density, 1)
        self.assertEqual(
            params.read_clock_frequency, FlashFrequency(1, "33MHz"))
        self.assertEqual(params.fast_read_enabled, 1)
        self.assertEqual(params.fast_read_frequency.name, "48MHz")
        self.assertEqual(params.flash_write_frequency.name, "17MHz")
        self.assertEqual(params.flash_read_status_frequency.value, 0)
        self.assertEqual(params.dual_output_fast_read_supported, 1)

    def test_unknown_frequency(self):
        params = FlashParams(bytes([0x00, 0x00, 0x06, 0x00]))
        frequency = params.read_clock_frequency
        self.assertEqual(frequency.value, 3)
        self.assertEqual(int(frequency), 3)
        self.assertIsNone(frequency.name)
        self.assertFalse(frequency.known)
        self.assertEqual(str(frequency), "Unknown (3)")

    def test_reserved_frequencies(self):
        for value in (3, 5, 7):
            frequency = FlashFrequency.from_value(value)
            self.assertEqual(frequency.value, value)
            self.assertFalse(frequency.known)
        self.assertEqual(str(FlashFrequency.from_value(4)), "50MHz/30MHz")

    def test_build(self):
        data = bytes([0xff, 0x5a, 0xa5, 0x3c])
        self.assertEqual(FlashParams(data).build(), data)

    def test_size(self):
        with self.assertRaises(InvalidRecordSizeError):
            FlashParams(b"\x00" * 3)
        with self.assertRaises(InvalidRecordSizeError):
            FlashParams(b"\x00" * 5)


if __name__ == '__main__':
    unittest.main()
