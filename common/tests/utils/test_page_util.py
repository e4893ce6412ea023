from unittest import TestCase


class Test(TestCase):

    def test_build_page(self):
        # lazy load
        from common.utils.page_util import build_page

        # normal case
        self.assertEqual(build_page([1, 2], 2, 5), {"data": [1, 2], "total_num": 5, "next_offset": 2})

        # last page case
        self.assertEqual(build_page([], None, 0), {"data": [], "total_num": 0, "next_offset": None})

    def test_normalize_limit(self):
        # lazy load
        from common.utils.page_util import normalize_limit

        # normal case
        self.assertEqual(normalize_limit(10, 20, 1000), 10)

        # None / zero / bool case
        self.assertEqual(normalize_limit(None, 20, 1000), 20)
        self.assertEqual(normalize_limit(0, 20, 1000), 20)
        self.assertEqual(normalize_limit(True, 20, 1000), 20)

        # over maximum case
        self.assertEqual(normalize_limit(5000, 20, 1000), 1000)

    def test_next_offset_of(self):
        # lazy load
        from common.utils.page_util import next_offset_of

        self.assertEqual(next_offset_of(0, 2, 5), 2)
        self.assertEqual(next_offset_of(4, 2, 5), None)
        self.assertEqual(next_offset_of(3, 2, 5), None)
