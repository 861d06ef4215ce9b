"""
Tests for the resource data model and filename derivation.
"""

import unittest

from course_downloader.models import (
    BOOK_KINDS,
    PER_VIDEO_KINDS,
    ResourceDescriptor,
    ResourceKind,
    RetrievalState,
    derive_filename,
)


class TestDeriveFilename(unittest.TestCase):
    def test_summary_with_video_ordinal(self):
        self.assertEqual(
            derive_filename(ResourceKind.SUMMARY, 3, 2), "Unit03_V02_Resumo.pdf"
        )

    def test_is_deterministic(self):
        names = {derive_filename(ResourceKind.SUMMARY, 3, 2) for _ in range(5)}
        self.assertEqual(names, {"Unit03_V02_Resumo.pdf"})

    def test_book_without_video_ordinal(self):
        self.assertEqual(
            derive_filename(ResourceKind.ORIGINAL_BOOK, 1),
            "Unit01_LivroEletronico_Original.pdf",
        )
        self.assertEqual(
            derive_filename(ResourceKind.HIGHLIGHTED_BOOK, 12),
            "Unit12_LivroEletronico_Grifado.pdf",
        )

    def test_remaining_suffixes(self):
        self.assertEqual(derive_filename(ResourceKind.SLIDE_DECK, 4, 1), "Unit04_V01_Slides.pdf")
        self.assertEqual(derive_filename(ResourceKind.MIND_MAP, 4, 10), "Unit04_V10_MapaMental.pdf")

    def test_three_digit_unit_is_not_truncated(self):
        self.assertEqual(derive_filename(ResourceKind.SUMMARY, 105, 3), "Unit105_V03_Resumo.pdf")


class TestResourceKind(unittest.TestCase):
    def test_every_kind_has_suffix_and_title(self):
        for kind in ResourceKind:
            self.assertTrue(kind.suffix.endswith(".pdf"))
            self.assertTrue(kind.display_title)

    def test_book_and_video_kinds_partition_the_enum(self):
        self.assertEqual(BOOK_KINDS | PER_VIDEO_KINDS, set(ResourceKind))
        self.assertFalse(BOOK_KINDS & PER_VIDEO_KINDS)

    def test_is_per_video(self):
        self.assertTrue(ResourceKind.MIND_MAP.is_per_video)
        self.assertFalse(ResourceKind.ORIGINAL_BOOK.is_per_video)

    def test_parse_by_value_and_name(self):
        self.assertIs(ResourceKind.parse("slide_deck"), ResourceKind.SLIDE_DECK)
        self.assertIs(ResourceKind.parse(" MIND_MAP "), ResourceKind.MIND_MAP)

    def test_parse_unknown(self):
        with self.assertRaises(ValueError):
            ResourceKind.parse("video")


class TestResourceDescriptor(unittest.TestCase):
    def test_defaults_to_pending(self):
        d = ResourceDescriptor(ResourceKind.SUMMARY, "https://x/r", "Summary", 2, 1)
        self.assertIs(d.state, RetrievalState.PENDING)
        self.assertFalse(d.downloaded)
        self.assertFalse(d.failed)
        self.assertEqual(d.filename, "Unit02_V01_Resumo.pdf")

    def test_book_rejects_video_ordinal(self):
        with self.assertRaises(ValueError):
            ResourceDescriptor(ResourceKind.ORIGINAL_BOOK, "https://x/b", "Book", 1, 1)

    def test_unit_index_must_be_positive(self):
        with self.assertRaises(ValueError):
            ResourceDescriptor(ResourceKind.ORIGINAL_BOOK, "https://x/b", "Book", 0)

    def test_sub_index_must_be_positive(self):
        with self.assertRaises(ValueError):
            ResourceDescriptor(ResourceKind.SUMMARY, "https://x/r", "Summary", 1, 0)

    def test_equality_is_identity(self):
        a = ResourceDescriptor(ResourceKind.SUMMARY, "https://x/r", "Summary", 1, 1)
        b = ResourceDescriptor(ResourceKind.SUMMARY, "https://x/r", "Summary", 1, 1)
        self.assertNotEqual(a, b)
        self.assertEqual(a, a)

    def test_to_dict(self):
        d = ResourceDescriptor(ResourceKind.HIGHLIGHTED_BOOK, "https://x/g", "Book", 5)
        d.state = RetrievalState.DOWNLOADED
        self.assertEqual(d.to_dict(), {
            "kind": "highlighted_book",
            "url": "https://x/g",
            "title": "Book",
            "unit": 5,
            "video": None,
            "filename": "Unit05_LivroEletronico_Grifado.pdf",
            "state": "downloaded",
        })


if __name__ == "__main__":
    unittest.main()
