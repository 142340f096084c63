# -*- coding: utf-8 -*-
# projects/signals.py
# Purpose:
# Domain events for published projects. Senders dispatch them from
# transaction.on_commit, so receivers never see rolled-back writes.

from __future__ import annotations

import logging

from django.dispatch import Signal, receiver


logger = logging.getLogger("marketplace.projects")

# kwargs: project
project_created = Signal()
project_updated = Signal()


@receiver(project_created)
def log_project_created(sender, project, **kwargs) -> None:
    logger.info("Project published: %s (%s)", project.pk, project.slug)


@receiver(project_updated)
def log_project_updated(sender, project, **kwargs) -> None:
    logger.info("Published project updated: %s (%s)", project.pk, project.slug)
