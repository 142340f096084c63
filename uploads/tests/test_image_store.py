from __future__ import annotations

import shutil
import tempfile

from django.core.files.storage import FileSystemStorage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase

from uploads.services import ImageStore


class ImageStoreTests(SimpleTestCase):
    def setUp(self):
        self.root = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.root, ignore_errors=True)
        self.storage = FileSystemStorage(location=self.root)
        self.store = ImageStore(storage=self.storage)

    def test_store_places_file_under_prefix_with_random_name(self):
        ref = self.store.store(SimpleUploadedFile("Photo.JPG", b"img"), "public/projects/photos/")
        self.assertTrue(ref.startswith("public/projects/photos/"))
        self.assertTrue(ref.endswith(".jpg"))
        self.assertNotIn("Photo", ref)
        self.assertTrue(self.storage.exists(ref))

    def test_two_uploads_with_same_name_do_not_collide(self):
        a = self.store.store(SimpleUploadedFile("a.png", b"1"), "x")
        b = self.store.store(SimpleUploadedFile("a.png", b"2"), "x")
        self.assertNotEqual(a, b)

    def test_delete_existing(self):
        ref = self.store.store(SimpleUploadedFile("a.png", b"1"), "x")
        self.assertTrue(self.store.delete(ref))
        self.assertFalse(self.storage.exists(ref))

    def test_delete_missing_or_empty_returns_false(self):
        self.assertFalse(self.store.delete(""))
        self.assertFalse(self.store.delete(None))
        with self.assertLogs("marketplace.uploads", level="WARNING"):
            self.assertFalse(self.store.delete("x/nope.png"))
