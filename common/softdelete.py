# -*- coding: utf-8 -*-
# common/softdelete.py
# Purpose:
# Soft-delete rows by stamping deleted_at. Default managers hide trashed
# rows; `all_objects` sees everything (uniqueness checks, owner flows).

from __future__ import annotations

from django.db import models
from django.utils import timezone


class SoftDeleteQuerySet(models.QuerySet):
    def delete(self):
        return self.update(deleted_at=timezone.now())

    def hard_delete(self):
        return super().delete()

    def restore(self) -> int:
        return self.update(deleted_at=None)

    def alive(self):
        return self.filter(deleted_at__isnull=True)

    def trashed(self):
        return self.filter(deleted_at__isnull=False)


class SoftDeleteManagerMixin:
    """
    Manager half of soft deletes.
    `with_trashed=True` disables the deleted_at filter.
    """

    _queryset_class = SoftDeleteQuerySet

    def __init__(self, *args, with_trashed: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        self.with_trashed = with_trashed

    def get_queryset(self):
        qs = super().get_queryset()
        if self.with_trashed:
            return qs
        return qs.filter(deleted_at__isnull=True)


class SoftDeleteManager(SoftDeleteManagerMixin, models.Manager):
    pass


class SoftDeleteModel(models.Model):
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = SoftDeleteManager()
    all_objects = SoftDeleteManager(with_trashed=True)

    class Meta:
        abstract = True

    @property
    def is_trashed(self) -> bool:
        return self.deleted_at is not None

    def delete(self, using=None, keep_parents=False):
        self.deleted_at = timezone.now()
        self.save(using=using, update_fields=["deleted_at"])
        return 1, {self._meta.label: 1}

    def hard_delete(self, using=None, keep_parents=False):
        return super().delete(using=using, keep_parents=keep_parents)

    def restore(self) -> None:
        self.deleted_at = None
        self.save(update_fields=["deleted_at"])
