# -*- coding: utf-8 -*-
# projects/goals.py
# Purpose:
# Project goals as a small-integer set. The comma-joined text form only
# exists in the `Project.goal` column.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator

from django.db import models

from common.coerce import as_int


class Goal(models.IntegerChoices):
    INVESTMENT = 1, "Looking for investment"
    PARTNERSHIP = 2, "Looking for partners"
    TEAM = 3, "Has open roles"


@dataclass(frozen=True)
class GoalSet:
    ids: FrozenSet[int] = field(default_factory=frozenset)

    @classmethod
    def from_iterable(cls, values: Iterable) -> "GoalSet":
        ids = set()
        for value in values or ():
            goal_id = as_int(value)
            if goal_id is not None and goal_id > 0:
                ids.add(goal_id)
        return cls(frozenset(ids))

    @classmethod
    def parse(cls, text: str) -> "GoalSet":
        """Decode the stored form ("1,3"). Junk tokens are dropped."""
        return cls.from_iterable((text or "").split(","))

    def encode(self) -> str:
        return ",".join(str(goal_id) for goal_id in sorted(self.ids))

    def with_goal(self, goal_id: int) -> "GoalSet":
        return GoalSet(self.ids | {int(goal_id)})

    def without_goal(self, goal_id: int) -> "GoalSet":
        return GoalSet(self.ids - {int(goal_id)})

    def __contains__(self, goal_id) -> bool:
        return as_int(goal_id) in self.ids

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self.ids))

    def __len__(self) -> int:
        return len(self.ids)
