# -*- coding: utf-8 -*-
# uploads/services.py
# Purpose:
# Binary store for user uploaded images (project photos, avatars).
# References are storage-relative names, e.g.
#   public/projects/photos/<uuid>.jpg

from __future__ import annotations

import logging
import os
from typing import Optional
from uuid import uuid4

from django.core.files.base import File
from django.core.files.storage import Storage, default_storage


logger = logging.getLogger("marketplace.uploads")


def _safe_name(filename: str) -> str:
    ext = os.path.splitext(filename or "")[1].lower()
    return f"{uuid4().hex}{ext}"


class ImageStore:
    def __init__(self, storage: Optional[Storage] = None):
        self._storage = storage

    @property
    def storage(self) -> Storage:
        return self._storage or default_storage

    def store(self, upload: File, path_prefix: str) -> str:
        """
        Persist `upload` under `path_prefix` and return its reference.
        """
        name = f"{path_prefix.rstrip('/')}/{_safe_name(getattr(upload, 'name', ''))}"
        reference = self.storage.save(name, upload)
        logger.debug("Stored image %s", reference)
        return reference

    def delete(self, reference: Optional[str]) -> bool:
        if not reference:
            return False
        if not self.storage.exists(reference):
            logger.warning("Image %s is already gone from storage", reference)
            return False
        self.storage.delete(reference)
        logger.debug("Deleted image %s", reference)
        return True
